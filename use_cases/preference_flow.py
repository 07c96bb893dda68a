"""Consultation preference selection."""

import logging
from typing import List, Sequence, Tuple

from infrastructure.http.lampy_api_client import ApiError, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases import auth_flow
from use_cases.flow_result import FlowResult, proceed, retry
from use_cases.session_models import CONSULTATION_TOPICS, MAX_PREFERENCES

log = logging.getLogger(__name__)

PREFERENCES_ENDPOINT = "/users/preferences"
NEXT_SCREEN = "counsellors"
SKIP_PREFERENCES = ["General Consultation"]

SELECTION_LIMIT_MESSAGE = f"You can only choose up to {MAX_PREFERENCES} options."


def toggle(selected: Sequence[str], topic: str) -> Tuple[List[str], str]:
    """
    Returns the new selection and a message (empty when the toggle was applied).
    The input sequence is never mutated.
    """
    current = list(selected)
    if topic not in CONSULTATION_TOPICS:
        return current, f"Unknown topic: {topic}"
    if topic in current:
        return [item for item in current if item != topic], ""
    if len(current) < MAX_PREFERENCES:
        return current + [topic], ""
    return current, SELECTION_LIMIT_MESSAGE


def selection_counter(selected: Sequence[str]) -> str:
    return f"You've chosen {len(selected)} out of {MAX_PREFERENCES} options."


def save_preferences(
    client: LampyApiClient,
    store: SQLiteSessionRepository,
    selected: Sequence[str],
) -> FlowResult:
    if not selected:
        return retry("Please select at least one area you'd like to discuss with a counselor.")
    if len(selected) > MAX_PREFERENCES:
        return retry(SELECTION_LIMIT_MESSAGE)

    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token

    try:
        client.post(PREFERENCES_ENDPOINT, {"preferences": list(selected)}, token)
    except ApiError as e:
        log.error(f"Preferences save error: {e.message}")
        return retry(e.message or "Failed to save preferences. Please try again.")

    return proceed(
        NEXT_SCREEN,
        message=(
            f"We've saved your consultation preferences: {', '.join(selected)}. "
            "Now let's find the best counselors for you!"
        ),
    )


def skip_preferences(client: LampyApiClient, store: SQLiteSessionRepository) -> FlowResult:
    token = store.get_token()
    try:
        client.post(PREFERENCES_ENDPOINT, {"preferences": list(SKIP_PREFERENCES)}, token)
    except ApiError as e:
        log.warning(f"Skip preferences error: {e.message}")
    return proceed(NEXT_SCREEN)
