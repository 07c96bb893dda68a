import pytest
from unittest.mock import patch, MagicMock
import streamlit as st
from use_cases.flow_result import proceed, redirect_to_entry, retry
from use_cases.session_models import UploadForm
from utils import session_manager


@pytest.fixture(autouse=True)
def fresh_state():
    st.session_state.clear()
    yield
    st.session_state.clear()


@patch('auth.is_logged_in', return_value=False)
def test_init_session_state(mock_logged_in):
    session_manager.init_session_state()
    assert st.session_state.screen == "welcome"
    assert st.session_state.flash is None
    assert st.session_state.selected_preferences == []
    assert set(st.session_state.upload_forms) == {"profile_photo", "pose_verification", "id_document"}
    assert isinstance(st.session_state.upload_forms["id_document"], UploadForm)


@patch('auth.is_logged_in', return_value=True)
def test_init_session_state_resumes_stored_session(mock_logged_in):
    session_manager.init_session_state()
    assert st.session_state.screen == "counsellors"


@patch('streamlit.spinner')
def test_run_action_shows_spinner_and_returns_result(mock_spinner):
    result = session_manager.run_action("Saving...", retry, "Please try again")

    mock_spinner.assert_called_once_with("Saving...")
    assert result.status == "RETRY"
    assert result.message == "Please try again"


@patch('streamlit.spinner')
def test_run_action_propagates_errors(mock_spinner):
    def action():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        session_manager.run_action("Saving...", action)


@patch('streamlit.rerun')
@patch('auth.is_logged_in', return_value=False)
def test_apply_result_proceed_navigates(mock_logged_in, mock_rerun):
    session_manager.init_session_state()
    session_manager.apply_result(proceed("location", message="Account created"))

    assert st.session_state.screen == "location"
    assert st.session_state.flash == ("success", "Account created")
    mock_rerun.assert_called()


@patch('streamlit.rerun')
@patch('auth.is_logged_in', return_value=True)
def test_apply_result_retry_stays(mock_logged_in, mock_rerun):
    session_manager.init_session_state()
    session_manager.apply_result(retry("Please select at least one option"))

    assert st.session_state.screen == "counsellors"
    assert st.session_state.flash == ("error", "Please select at least one option")


@patch('streamlit.rerun')
@patch('auth.is_logged_in', return_value=True)
def test_apply_result_redirect_goes_to_entry(mock_logged_in, mock_rerun):
    session_manager.init_session_state()
    session_manager.apply_result(redirect_to_entry())

    assert st.session_state.screen == "welcome"
    assert st.session_state.flash[0] == "warning"


@patch('streamlit.rerun')
@patch('auth.get_session_store')
@patch('auth.is_logged_in', return_value=False)
def test_logout(mock_logged_in, mock_get_store, mock_rerun):
    store = MagicMock()
    store.clear.return_value = True
    mock_get_store.return_value = store
    st.session_state.screen = "counsellors"
    st.session_state.selected_preferences = ["Career Guidance"]
    st.session_state.counsellors = ["x"]

    session_manager.logout()

    store.clear.assert_called_once()
    mock_rerun.assert_called()
    assert st.session_state.screen == "welcome"
    assert st.session_state.selected_preferences == []
    assert st.session_state.counsellors is None


def test_flash_empty_message_clears():
    session_manager.flash("success", "")
    assert st.session_state.flash is None
