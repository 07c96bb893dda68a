import streamlit as st
import auth
from use_cases import registration_flow
from utils import session_manager


def render_auth_screen():
    st.title("🌙 Welcome to LAMPY")
    st.caption("Talk to verified counsellors, on your terms.")
    tab_login, tab_register = st.tabs(["Log in", "Create account"])

    client = auth.get_api_client()
    store = auth.get_session_store()

    with tab_login:
        with st.form("login_form", clear_on_submit=False):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("LOG IN")
            if submitted:
                result = session_manager.run_action(
                    "Logging in...",
                    registration_flow.login, client, store, email, password,
                )
                session_manager.apply_result(result)

    with tab_register:
        with st.form("register_form", clear_on_submit=False):
            name = st.text_input("Full name *", placeholder="Enter your full name")
            email = st.text_input("Email *", placeholder="Enter your email address")
            password = st.text_input(
                "Password *", type="password",
                placeholder=f"Create a password (min {registration_flow.MIN_PASSWORD_LENGTH} characters)",
            )
            submitted = st.form_submit_button("SIGN UP")
            if submitted:
                result = session_manager.run_action(
                    "Please wait while we create your account...",
                    registration_flow.register, client, store, name, email, password,
                )
                session_manager.apply_result(result)
