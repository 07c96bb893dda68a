from unittest.mock import MagicMock

import pytest

from infrastructure.http.lampy_api_client import ApiError
from use_cases import preference_flow
from use_cases.session_models import CONSULTATION_TOPICS


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store():
    store = MagicMock()
    store.get_token.return_value = "tok"
    return store


def test_toggle_adds_and_removes():
    selected, message = preference_flow.toggle([], "Career Guidance")
    assert selected == ["Career Guidance"]
    assert message == ""

    selected, message = preference_flow.toggle(selected, "Career Guidance")
    assert selected == []
    assert message == ""


def test_toggle_fourth_item_is_rejected_without_mutation():
    current = list(CONSULTATION_TOPICS[:3])
    snapshot = list(current)

    selected, message = preference_flow.toggle(current, CONSULTATION_TOPICS[3])

    assert selected == snapshot
    assert current == snapshot
    assert message == "You can only choose up to 3 options."


def test_toggle_never_exceeds_limit():
    selected = []
    for topic in CONSULTATION_TOPICS * 2:
        selected, _ = preference_flow.toggle(selected, topic)
        assert len(selected) <= 3


def test_toggle_unknown_topic_is_rejected():
    selected, message = preference_flow.toggle(["Grief or Loss"], "Astrology")

    assert selected == ["Grief or Loss"]
    assert "Unknown topic" in message


def test_selection_counter():
    assert preference_flow.selection_counter(["Grief or Loss"]) == "You've chosen 1 out of 3 options."


def test_save_requires_selection(client, store):
    result = preference_flow.save_preferences(client, store, [])

    assert result.status == "RETRY"
    client.post.assert_not_called()


def test_save_posts_preferences(client, store):
    result = preference_flow.save_preferences(client, store, ["Stress Management", "Personal Growth"])

    assert result.status == "PROCEED"
    assert result.next_screen == "counsellors"
    assert "Stress Management, Personal Growth" in result.message
    client.post.assert_called_once_with(
        "/users/preferences", {"preferences": ["Stress Management", "Personal Growth"]}, "tok"
    )


def test_save_without_token_redirects(client, store):
    store.get_token.return_value = None

    result = preference_flow.save_preferences(client, store, ["Stress Management"])

    assert result.status == "REDIRECT"
    client.post.assert_not_called()


def test_save_server_error(client, store):
    client.post.side_effect = ApiError("Failed to update preferences", 500)

    result = preference_flow.save_preferences(client, store, ["Stress Management"])

    assert result.status == "RETRY"
    assert result.message == "Failed to update preferences"


def test_skip_submits_general_consultation_and_advances_on_failure(client, store):
    client.post.side_effect = ApiError("Request failed", 500)

    result = preference_flow.skip_preferences(client, store)

    assert result.status == "PROCEED"
    assert result.next_screen == "counsellors"
    client.post.assert_called_once_with("/users/preferences", {"preferences": ["General Consultation"]}, "tok")
