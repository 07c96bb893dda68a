from infrastructure.http.lampy_api_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from infrastructure.device.location_provider import DEFAULT_IP_GEO_URL, DEFAULT_NOMINATIM_URL, IpLocationProvider
import os
import streamlit as st

SESSION_DB = "lampy_session.db"


def get_secret(key):
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    return value or os.getenv(key)


_api_client = None
_session_store = None


def get_api_client() -> LampyApiClient:
    global _api_client
    base_url = get_secret("LAMPY_API_URL") or DEFAULT_BASE_URL
    if _api_client is None or _api_client.base_url != base_url.rstrip("/"):
        timeout = float(get_secret("LAMPY_API_TIMEOUT") or DEFAULT_TIMEOUT)
        _api_client = LampyApiClient(base_url, timeout=timeout)
    return _api_client


def get_session_store() -> SQLiteSessionRepository:
    global _session_store
    db_path = get_secret("LAMPY_SESSION_DB") or SESSION_DB
    if _session_store is None or _session_store.db_path != db_path:
        _session_store = SQLiteSessionRepository(db_path)
    return _session_store


def get_location_provider(consent_given: bool) -> IpLocationProvider:
    return IpLocationProvider(
        consent_given,
        ip_geo_url=get_secret("IP_GEO_URL") or DEFAULT_IP_GEO_URL,
        nominatim_url=get_secret("NOMINATIM_URL") or DEFAULT_NOMINATIM_URL,
    )


def is_logged_in() -> bool:
    return bool(get_session_store().get_token())


def current_user():
    return get_session_store().get_user()
