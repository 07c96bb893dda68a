import streamlit as st
import auth
import ui
from use_cases import counsellor_flow, profile_flow
from utils import session_manager

PLACEHOLDER_AVATAR = "https://cdn-icons-png.flaticon.com/512/3135/3135715.png"


def _load(client, store):
    result = session_manager.run_action(
        "Loading counsellors...",
        counsellor_flow.load_counsellors, client, store,
    )
    if result.status == "PROCEED":
        st.session_state.counsellors = result.data["counsellors"]
        return result
    if result.status == "RETRY":
        # Keep an empty list so the failed load is not retried on every rerun.
        st.session_state.counsellors = []
    session_manager.apply_result(result)
    return result


def _render_card(client, store, counsellor):
    with st.container(border=True):
        c_img, c_body = st.columns([1, 4])
        c_img.image(counsellor.image_url or PLACEHOLDER_AVATAR, width=80)
        c_body.markdown(f"**{counsellor.name}**  \n{counsellor.role}")
        c_body.caption(f"{counsellor.experience} | {counsellor.qualification}")
        c_body.write(f"⭐ {counsellor.rating} ({counsellor.total_ratings} ratings)")
        if counsellor.specialties:
            c_body.caption(f"Specialties: {counsellor_flow.short_specialties(counsellor)}")

        action = f"book_{counsellor.id}"
        b1, b2 = st.columns(2)
        if b1.button("Book Session", key=action, type="primary"):
            result = session_manager.run_action(
                f"Booking a session with {counsellor.name}...",
                counsellor_flow.book_session, client, store, counsellor,
            )
            session_manager.apply_result(result)
        with b2.popover("View Profile"):
            st.markdown(f"### {counsellor.name}")
            st.text(counsellor_flow.describe_counsellor(counsellor))


def _render_my_sessions(client, store):
    if st.button("Load my sessions" if st.session_state.get("my_sessions") is None else "Reload", key="my_sessions_btn"):
        result = counsellor_flow.list_my_sessions(client, store)
        if result.status != "PROCEED":
            st.caption(result.message)
            return
        st.session_state.my_sessions = result.data

    sessions = st.session_state.get("my_sessions")
    if sessions is None:
        return
    if not sessions:
        st.caption("No sessions booked yet.")
        return
    for booked in sessions:
        who = booked.counsellor.name if booked.counsellor else f"Counsellor #{booked.counsellor_id}"
        st.write(f"**{who}** · {booked.session_date[:16].replace('T', ' ')} · {booked.duration} min · {booked.status}")
        if booked.is_cancellable and st.button("Cancel", key=f"cancel_{booked.id}"):
            st.session_state.my_sessions = None
            session_manager.apply_result(counsellor_flow.cancel_session(client, store, booked))


def _render_sidebar(client, store):
    with st.sidebar:
        user = auth.current_user() or {}
        st.markdown(f"### 👤 {user.get('name', 'Your account')}")
        if st.button("Refresh profile"):
            result = profile_flow.load_profile(client, store)
            if result.status == "PROCEED":
                profile = result.data
                st.caption(profile.email)
                st.caption(f"📍 {profile.location or 'Location not provided'}")
                st.caption(ui.verification_badges(profile))
            else:
                session_manager.apply_result(result)

        with st.expander("📅 My sessions"):
            _render_my_sessions(client, store)

        st.divider()
        if st.button("Logout", key="logout_btn", type="secondary"):
            session_manager.logout()


def render_counsellor_screen():
    client = auth.get_api_client()
    store = auth.get_session_store()

    _render_sidebar(client, store)

    st.title("🧑‍⚕️ Counsellors")
    if st.session_state.counsellors is None:
        _load(client, store)

    counsellors = st.session_state.counsellors or []
    c_head, c_refresh = st.columns([5, 1])
    c_head.caption(counsellor_flow.found_message(counsellors))
    if c_refresh.button("🔄", help="Refresh list"):
        _load(client, store)
        st.rerun()

    tab_cards, tab_compare = st.tabs(["Browse", "Compare"])
    with tab_cards:
        if not counsellors:
            st.info("No counsellors available right now. Try refreshing later.")
        for counsellor in counsellors:
            _render_card(client, store, counsellor)
    with tab_compare:
        st.dataframe(counsellor_flow.counsellors_frame(counsellors), use_container_width=True, hide_index=True)
