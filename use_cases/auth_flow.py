"""Authentication gate and logout orchestration (application layer)."""

import logging
from typing import Optional, Union

from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases.flow_result import FlowResult, redirect_to_entry

log = logging.getLogger(__name__)


def require_token(store: SQLiteSessionRepository) -> Union[str, FlowResult]:
    """Return the stored session token, or a REDIRECT result when there is none."""
    token: Optional[str] = store.get_token()
    if not token:
        log.info("No session token on device, redirecting to entry screen")
        return redirect_to_entry()
    return token


def logout(store: SQLiteSessionRepository) -> FlowResult:
    if not store.clear():
        log.warning("Session store could not be cleared during logout")
    return redirect_to_entry(message="You have been logged out.")
