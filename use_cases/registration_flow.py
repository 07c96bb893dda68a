"""Account creation and login orchestration."""

import logging
import re
from typing import Optional

from infrastructure.http.lampy_api_client import ApiError, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases.flow_result import FlowResult, proceed, retry
from use_cases.session_models import Session

log = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

REGISTER_ENDPOINT = "/auth/register"
LOGIN_ENDPOINT = "/auth/login"

DUPLICATE_ACCOUNT_MESSAGE = (
    "An account with this email already exists. Please use a different email or try logging in."
)
REGISTRATION_FAILED_MESSAGE = "Registration failed. Please try again."
LOGIN_FAILED_MESSAGE = "Login failed. Please try again."


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_registration(name: str, email: str, password: str) -> str:
    """Returns the first validation message, or an empty string when the form is valid."""
    if not name.strip():
        return "Please enter your name"
    if not email.strip():
        return "Please enter your email"
    if not password.strip():
        return "Please enter a password"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if not EMAIL_RE.match(email.strip()):
        return "Please enter a valid email address"
    return ""


def _persist_session(store: SQLiteSessionRepository, response) -> Optional[Session]:
    if not isinstance(response, dict) or not response.get("token") or not response.get("user"):
        return None
    session = Session(token=response["token"], user=response["user"])
    store.save(session.token, session.user)
    return session


def register(
    client: LampyApiClient,
    store: SQLiteSessionRepository,
    name: str,
    email: str,
    password: str,
) -> FlowResult:
    error = validate_registration(name, email, password)
    if error:
        return retry(error)

    try:
        response = client.post(REGISTER_ENDPOINT, {
            "name": name.strip(),
            "email": normalize_email(email),
            "password": password,
        })
    except ApiError as e:
        log.error(f"Registration error: {e.message}")
        if "already exists" in e.message:
            return retry(DUPLICATE_ACCOUNT_MESSAGE)
        return retry(e.message or REGISTRATION_FAILED_MESSAGE)

    session = _persist_session(store, response)
    if session is None:
        log.error("Registration response did not include token and user")
        return retry(REGISTRATION_FAILED_MESSAGE)

    log.info(f"Account created for user id={session.user.get('id')}")
    return proceed(
        "location",
        message="Your account has been created successfully. Welcome to LAMPY!",
        data=session,
    )


def login(
    client: LampyApiClient,
    store: SQLiteSessionRepository,
    email: str,
    password: str,
) -> FlowResult:
    if not email.strip():
        return retry("Please enter your email")
    if not password:
        return retry("Please enter your password")
    if not EMAIL_RE.match(email.strip()):
        return retry("Please enter a valid email address")

    try:
        response = client.post(LOGIN_ENDPOINT, {
            "email": normalize_email(email),
            "password": password,
        })
    except ApiError as e:
        log.error(f"Login error: {e.message}")
        return retry(e.message or LOGIN_FAILED_MESSAGE)

    session = _persist_session(store, response)
    if session is None:
        log.error("Login response did not include token and user")
        return retry(LOGIN_FAILED_MESSAGE)

    return proceed("counsellors", message=f"Welcome back, {session.user.get('name', '')}!", data=session)
