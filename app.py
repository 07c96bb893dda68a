import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from use_cases.upload_flow import UploadKind
from utils import session_manager
from views import counsellor_view, location_view, login_view, preferences_view, upload_view

# --- PAGE SETUP ---
st.set_page_config(page_title="LAMPY", page_icon="🌙", layout="centered")

ui.setup_style()
session_manager.init_session_state()

AUTHENTICATED_SCREENS = {
    "location": location_view.render_location_screen,
    "photo_upload": lambda: upload_view.render_upload_screen(UploadKind.PROFILE_PHOTO),
    "photo_verification": lambda: upload_view.render_upload_screen(UploadKind.POSE_VERIFICATION),
    "age_verification": lambda: upload_view.render_upload_screen(UploadKind.ID_DOCUMENT),
    "preferences": preferences_view.render_preferences_screen,
    "counsellors": counsellor_view.render_counsellor_screen,
}

screen = st.session_state.screen
ui.render_progress(screen)
session_manager.render_flash()

render = AUTHENTICATED_SCREENS.get(screen)
if render is None:
    login_view.render_auth_screen()
else:
    render()
