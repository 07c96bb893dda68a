"""Counsellor browsing, booking and booked-session management."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from infrastructure.http.lampy_api_client import ApiError, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases import auth_flow
from use_cases.flow_result import FlowResult, proceed, retry
from use_cases.session_models import BookedSession, BookingRequest, Counsellor

log = logging.getLogger(__name__)

SCREEN = "counsellors"
BOOK_ENDPOINT = "/sessions/book"
MY_SESSIONS_ENDPOINT = "/sessions"

SESSION_HOUR = 10
SESSION_DURATION_MINUTES = 60
SESSION_NOTES = "Initial consultation session"
# Backend accepts UTC with a literal Z suffix only.
SESSION_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

LOAD_FAILED_MESSAGE = "Failed to load counsellors. Please try again."


@dataclass(frozen=True)
class CounsellorSource:
    name: str
    endpoint: str


# Tried in order until one returns a list; later sources are only hit when earlier ones fail.
COUNSELLOR_SOURCES: Tuple[CounsellorSource, ...] = (
    CounsellorSource(name="recommended", endpoint="/counsellors/recommended"),
    CounsellorSource(name="all", endpoint="/counsellors"),
)


def load_counsellors(
    client: LampyApiClient,
    store: SQLiteSessionRepository,
    sources: Sequence[CounsellorSource] = COUNSELLOR_SOURCES,
) -> FlowResult:
    """PROCEED carries `data={"source": name, "counsellors": [Counsellor, ...]}`."""
    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token

    for source in sources:
        try:
            body = client.get(source.endpoint, token)
        except ApiError as e:
            log.info(f"Counsellor source '{source.name}' failed: {e.message}")
            continue
        if not isinstance(body, list):
            log.warning(f"Counsellor source '{source.name}' returned {type(body).__name__}, expected list")
            continue
        try:
            counsellors = [Counsellor.from_api(item) for item in body]
        except (KeyError, TypeError, ValueError) as e:
            log.warning(f"Counsellor source '{source.name}' returned malformed items: {e}")
            continue
        return proceed(SCREEN, message=found_message(counsellors), data={"source": source.name, "counsellors": counsellors})

    log.error("All counsellor sources failed")
    return retry(LOAD_FAILED_MESSAGE)


def found_message(counsellors: Sequence[Counsellor]) -> str:
    if not counsellors:
        return "No counsellors found"
    return f"Found {len(counsellors)} counsellors based on your preferences"


def get_counsellor(client: LampyApiClient, store: SQLiteSessionRepository, counsellor_id: int) -> FlowResult:
    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token
    try:
        body = client.get(f"/counsellors/{counsellor_id}", token)
        counsellor = Counsellor.from_api(body)
    except ApiError as e:
        log.error(f"Fetch counsellor {counsellor_id} error: {e.message}")
        return retry(e.message or "Failed to load counsellor. Please try again.")
    except (KeyError, TypeError, ValueError) as e:
        log.error(f"Malformed counsellor {counsellor_id}: {e}")
        return retry("Failed to load counsellor. Please try again.")
    return proceed(SCREEN, data=counsellor)


def describe_counsellor(counsellor: Counsellor) -> str:
    specialties = ", ".join(counsellor.specialties) or "General counseling"
    return (
        f"Role: {counsellor.role}\n"
        f"Experience: {counsellor.experience}\n"
        f"Qualification: {counsellor.qualification}\n"
        f"Rating: {counsellor.rating} ({counsellor.total_ratings} ratings)\n"
        f"Specialties: {specialties}\n\n"
        f"Session starting at {counsellor.price}"
    )


def short_specialties(counsellor: Counsellor, limit: int = 2) -> str:
    text = ", ".join(counsellor.specialties[:limit])
    if len(counsellor.specialties) > limit:
        text += "..."
    return text


def counsellors_frame(counsellors: Sequence[Counsellor]) -> pd.DataFrame:
    """Comparison table, best rated first."""
    columns = ["Name", "Role", "Experience", "Qualification", "Rating", "Ratings", "Specialties", "Price"]
    if not counsellors:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame([
        {
            "Name": c.name,
            "Role": c.role,
            "Experience": c.experience,
            "Qualification": c.qualification,
            "Rating": c.rating,
            "Ratings": c.total_ratings,
            "Specialties": ", ".join(c.specialties),
            "Price": c.price,
        }
        for c in counsellors
    ], columns=columns)
    return df.sort_values(["Rating", "Ratings"], ascending=False).reset_index(drop=True)


def next_session_start(now: Optional[datetime] = None) -> datetime:
    """Tomorrow at 10:00 in the local time zone of `now` (or of this host)."""
    reference = now or datetime.now().astimezone()
    if reference.tzinfo is None:
        reference = reference.astimezone()
    return (reference + timedelta(days=1)).replace(hour=SESSION_HOUR, minute=0, second=0, microsecond=0)


def build_booking_request(counsellor_id: int, now: Optional[datetime] = None) -> BookingRequest:
    """Placeholder policy: tomorrow at 10:00 local time, 60 minutes, sent as UTC."""
    start = next_session_start(now)
    return BookingRequest(
        counsellor_id=counsellor_id,
        session_date=start.astimezone(timezone.utc).strftime(SESSION_DATE_FORMAT),
        duration=SESSION_DURATION_MINUTES,
        notes=SESSION_NOTES,
    )


def book_session(
    client: LampyApiClient,
    store: SQLiteSessionRepository,
    counsellor: Counsellor,
    now: Optional[datetime] = None,
) -> FlowResult:
    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token

    reference = now or datetime.now().astimezone()
    starts_at = next_session_start(reference)
    request = build_booking_request(counsellor.id, reference)
    try:
        response = client.post(BOOK_ENDPOINT, request.to_payload(), token)
    except ApiError as e:
        log.error(f"Book session error: {e.message}")
        return retry(e.message or "Failed to book session. Please try again.")

    log.info(f"Session booked with counsellor id={counsellor.id} for {request.session_date}")
    return proceed(
        SCREEN,
        message=(
            f"Your session with {counsellor.name} has been booked for "
            f"{starts_at.strftime('%d.%m.%Y')} at {starts_at.strftime('%H:%M')}. "
            "You will receive a confirmation shortly."
        ),
        data=response,
    )


def list_my_sessions(client: LampyApiClient, store: SQLiteSessionRepository) -> FlowResult:
    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token
    try:
        body = client.get(MY_SESSIONS_ENDPOINT, token)
    except ApiError as e:
        log.error(f"Fetch sessions error: {e.message}")
        return retry(e.message or "Failed to load your sessions. Please try again.")
    if not isinstance(body, list):
        return retry("Failed to load your sessions. Please try again.")

    sessions: List[BookedSession] = []
    for item in body:
        try:
            sessions.append(BookedSession.from_api(item))
        except (KeyError, TypeError, ValueError) as e:
            log.warning(f"Skipping malformed session entry: {e}")
    return proceed(SCREEN, data=sessions)


def cancel_session(client: LampyApiClient, store: SQLiteSessionRepository, session: BookedSession) -> FlowResult:
    if not session.is_cancellable:
        return retry(f"A {session.status} session cannot be cancelled.")

    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token
    try:
        client.put(f"{MY_SESSIONS_ENDPOINT}/{session.id}/cancel", token=token)
    except ApiError as e:
        log.error(f"Cancel session {session.id} error: {e.message}")
        return retry(e.message or "Failed to cancel session. Please try again.")
    return proceed(SCREEN, message="Session cancelled successfully")
