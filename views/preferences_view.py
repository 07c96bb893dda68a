import streamlit as st
import auth
from use_cases import preference_flow
from use_cases.session_models import CONSULTATION_TOPICS
from utils import session_manager


def render_preferences_screen():
    st.title("💬 What would you like to talk about?")
    st.write(
        "To help us better understand your needs and provide the best support, please share the reasons "
        "you wish to meet a counselor and the topics you would like to discuss."
    )

    selected = st.session_state.selected_preferences
    st.info(preference_flow.selection_counter(selected))

    cols = st.columns(2)
    for idx, topic in enumerate(CONSULTATION_TOPICS):
        is_selected = topic in selected
        label = f"{topic} ✓" if is_selected else topic
        if cols[idx % 2].button(
            label,
            key=f"topic_{idx}",
            type="primary" if is_selected else "secondary",
            use_container_width=True,
        ):
            new_selection, message = preference_flow.toggle(selected, topic)
            st.session_state.selected_preferences = new_selection
            if message:
                session_manager.flash("warning", message)
            st.rerun()

    client = auth.get_api_client()
    store = auth.get_session_store()

    if st.button("FIND MY COUNSELORS", type="primary"):
        result = session_manager.run_action(
            "Saving your preferences...",
            preference_flow.save_preferences, client, store, selected,
        )
        session_manager.apply_result(result)

    with st.expander("Skip this step"):
        st.caption("Skipping will show you all available counselors instead of personalized recommendations.")
        if st.button("Skip anyway"):
            session_manager.apply_result(preference_flow.skip_preferences(client, store), success_level="info")
