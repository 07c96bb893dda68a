"""Profile refresh from the server."""

import logging

from infrastructure.http.lampy_api_client import ApiError, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases import auth_flow
from use_cases.flow_result import FlowResult, proceed, retry
from use_cases.session_models import UserProfile

log = logging.getLogger(__name__)

PROFILE_ENDPOINT = "/users/profile"


def load_profile(client: LampyApiClient, store: SQLiteSessionRepository) -> FlowResult:
    """Fetches the profile and refreshes the user record kept on the device."""
    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token

    try:
        body = client.get(PROFILE_ENDPOINT, token)
    except ApiError as e:
        log.error(f"Profile fetch error: {e.message}")
        return retry(e.message or "Failed to load your profile. Please try again.")

    if not isinstance(body, dict):
        return retry("Failed to load your profile. Please try again.")

    store.update_user(body)
    return proceed("counsellors", data=UserProfile.from_api(body))
