from unittest.mock import MagicMock

from infrastructure.http.lampy_api_client import ApiError
from use_cases import auth_flow, profile_flow
from use_cases.flow_result import AUTH_REQUIRED_MESSAGE, ENTRY_SCREEN


def _store(token="tok"):
    store = MagicMock()
    store.get_token.return_value = token
    return store


def test_require_token_returns_token():
    assert auth_flow.require_token(_store()) == "tok"


def test_require_token_redirects_when_missing():
    for missing in (None, ""):
        result = auth_flow.require_token(_store(missing))
        assert result.status == "REDIRECT"
        assert result.next_screen == ENTRY_SCREEN
        assert result.message == AUTH_REQUIRED_MESSAGE


def test_logout_clears_store():
    store = _store()
    store.clear.return_value = True

    result = auth_flow.logout(store)

    store.clear.assert_called_once()
    assert result.status == "REDIRECT"
    assert result.next_screen == ENTRY_SCREEN


def test_logout_still_redirects_when_clear_fails():
    store = _store()
    store.clear.return_value = False

    assert auth_flow.logout(store).status == "REDIRECT"


def test_load_profile_refreshes_stored_user():
    client = MagicMock()
    client.get.return_value = {
        "id": 4,
        "name": "Asha",
        "email": "asha@example.com",
        "location": "Pune",
        "consultation_preferences": ["Stress Management"],
        "photo_verified": True,
    }
    store = _store()

    result = profile_flow.load_profile(client, store)

    assert result.status == "PROCEED"
    assert result.data.consultation_preferences == ("Stress Management",)
    assert result.data.photo_verified is True
    assert result.data.age_verified is False
    store.update_user.assert_called_once_with(client.get.return_value)
    client.get.assert_called_once_with("/users/profile", "tok")


def test_load_profile_server_error():
    client = MagicMock()
    client.get.side_effect = ApiError("User not found", 404)
    store = _store()

    result = profile_flow.load_profile(client, store)

    assert result.status == "RETRY"
    store.update_user.assert_not_called()


def test_load_profile_without_token():
    client = MagicMock()

    assert profile_flow.load_profile(client, _store(None)).status == "REDIRECT"
    client.get.assert_not_called()
