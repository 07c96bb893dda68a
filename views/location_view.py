import streamlit as st
import auth
from use_cases import location_flow
from utils import session_manager


def render_location_screen():
    st.title("📍 Your location")
    st.write(
        "LAMPY uses your location to find the best counselors near you "
        "and provide personalized recommendations."
    )

    client = auth.get_api_client()
    store = auth.get_session_store()

    current = st.session_state.detected_location
    st.info(current or "Location not detected")

    permission = st.session_state.location_permission
    if permission != "granted":
        if st.button("Allow location access", type="primary"):
            _detect(consent_given=True)
        if permission is None and st.button("Don't allow"):
            _detect(consent_given=False)
        if permission == "denied":
            st.caption(location_flow.PERMISSION_DENIED_MESSAGE)
            if st.button("Continue without location"):
                st.session_state.detected_location = location_flow.LOCATION_NOT_PROVIDED
                st.rerun()
    elif st.button("🔄 Detect again"):
        _detect(consent_given=True)

    if st.button("CONTINUE", type="primary", disabled=not current):
        result = session_manager.run_action(
            "Saving your location...",
            location_flow.submit_location, client, store, current,
        )
        session_manager.apply_result(result)

    with st.expander("Skip this step"):
        st.caption("Skipping location will limit our ability to recommend counselors near you.")
        if st.button("Skip anyway"):
            result = location_flow.skip_location(client, store)
            session_manager.apply_result(result, success_level="info")


def _detect(consent_given):
    provider = auth.get_location_provider(consent_given)
    result = session_manager.run_action(
        "Detecting location...",
        location_flow.detect_location, provider,
    )
    data = result.data or {}
    st.session_state.location_permission = data.get("permission")
    if data.get("location"):
        st.session_state.detected_location = data["location"]
    if result.status != "PROCEED":
        session_manager.flash("warning", result.message)
    st.rerun()
