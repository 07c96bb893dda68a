import sqlite3
from unittest.mock import patch

import pytest

from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository


@pytest.fixture
def store(tmp_path):
    return SQLiteSessionRepository(str(tmp_path / "session.db"))


def test_empty_store_reads_as_absent(store):
    assert store.get_token() is None
    assert store.get_user() is None


def test_save_then_read(store):
    assert store.save("tok-1", {"id": 3, "name": "Asha", "email": "asha@example.com"}) is True

    assert store.get_token() == "tok-1"
    assert store.get_user() == {"id": 3, "name": "Asha", "email": "asha@example.com"}


def test_save_replaces_previous_session(store):
    store.save("old", {"id": 1})
    store.save("new", {"id": 2})

    assert store.get_token() == "new"
    assert store.get_user() == {"id": 2}


def test_session_survives_new_repository_instance(tmp_path):
    path = str(tmp_path / "session.db")
    SQLiteSessionRepository(path).save("persisted", {"id": 9})

    assert SQLiteSessionRepository(path).get_token() == "persisted"


def test_clear_removes_token_and_user(store):
    store.save("tok", {"id": 1})

    assert store.clear() is True
    assert store.get_token() is None
    assert store.get_user() is None


def test_update_user_keeps_token(store):
    store.save("tok", {"id": 1, "location": ""})
    store.update_user({"id": 1, "location": "Pune, Maharashtra, India"})

    assert store.get_token() == "tok"
    assert store.get_user()["location"] == "Pune, Maharashtra, India"


def test_unserializable_user_is_not_saved(store):
    assert store.save("tok", {"bad": object()}) is False
    assert store.get_token() is None


def test_storage_failures_do_not_raise(store):
    with patch("sqlite3.connect", side_effect=sqlite3.OperationalError("disk I/O error")):
        assert store.get_token() is None
        assert store.get_user() is None
        assert store.save("tok", {"id": 1}) is False
        assert store.clear() is False


def test_corrupt_user_record_reads_as_absent(store):
    store.save("tok", {"id": 1})
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("UPDATE kv_store SET value = '{not json' WHERE key = 'userData'")
        conn.commit()

    assert store.get_user() is None
    assert store.get_token() == "tok"
