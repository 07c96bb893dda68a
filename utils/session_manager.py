import streamlit as st
import auth
from use_cases import auth_flow
from use_cases.flow_result import ENTRY_SCREEN, FlowResult
from use_cases.session_models import UploadForm
from use_cases.upload_flow import UploadKind

"""
SESSION STATE CONTRACT

Per-browser-tab UI state. The auth token itself lives in the persistent
session store (auth.get_session_store()), never in st.session_state.

screen: str
    current onboarding/booking screen
    default: "welcome", or "counsellors" when a token is already stored
    owner: session_manager

flash: tuple[str, str] | None
    (level, message) shown once on the next render
    default: None
    owner: views

upload_forms: dict[str, UploadForm]
    selected photo + uploading flag per upload kind
    default: one empty UploadForm per UploadKind
    owner: views/upload_view

selected_preferences: list[str]
    default: []
    owner: views/preferences_view

detected_location: str
    default: ""
    owner: views/location_view

location_permission: str | None
    "granted" / "denied" after the consent prompt
    default: None
    owner: views/location_view

counsellors: list | None
    last loaded counsellor list
    default: None
    owner: views/counsellor_view

my_sessions: list | None
    booked sessions, loaded on demand
    default: None
    owner: views/counsellor_view
"""


def init_session_state():
    if "screen" not in st.session_state:
        st.session_state.screen = "counsellors" if auth.is_logged_in() else ENTRY_SCREEN
    if "flash" not in st.session_state:
        st.session_state.flash = None
    if "upload_forms" not in st.session_state:
        st.session_state.upload_forms = {kind.value: UploadForm() for kind in UploadKind}
    if "selected_preferences" not in st.session_state:
        st.session_state.selected_preferences = []
    if "detected_location" not in st.session_state:
        st.session_state.detected_location = ""
    if "location_permission" not in st.session_state:
        st.session_state.location_permission = None
    if "counsellors" not in st.session_state:
        st.session_state.counsellors = None
    if "my_sessions" not in st.session_state:
        st.session_state.my_sessions = None


def go_to(screen):
    st.session_state.screen = screen
    st.rerun()


def run_action(busy_label, fn, *args, **kwargs) -> FlowResult:
    """Runs one controller call behind a spinner."""
    with st.spinner(busy_label):
        return fn(*args, **kwargs)


def flash(level, message):
    st.session_state.flash = (level, message) if message else None


def apply_result(result: FlowResult, success_level="success"):
    """Translate a controller decision into navigation and a one-shot message."""
    if result.status == "PROCEED":
        flash(success_level, result.message)
        if result.next_screen and result.next_screen != st.session_state.screen:
            go_to(result.next_screen)
        st.rerun()
    elif result.status == "REDIRECT":
        flash("warning", result.message)
        go_to(result.next_screen or ENTRY_SCREEN)
    else:
        flash("error", result.message)
        st.rerun()


def render_flash():
    pending = st.session_state.get("flash")
    if not pending:
        return
    level, message = pending
    getattr(st, level, st.info)(message)
    st.session_state.flash = None


def logout():
    result = auth_flow.logout(auth.get_session_store())
    for key in ("upload_forms", "selected_preferences", "detected_location", "location_permission", "counsellors", "my_sessions"):
        st.session_state.pop(key, None)
    init_session_state()
    apply_result(result)
