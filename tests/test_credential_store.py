"""Tests for the console's persisted session."""

import pytest

from task_manager.console.session import CredentialStore, Session
from task_manager.schemas.user import UserRead

pytestmark = pytest.mark.unit


def test_save_then_load(tmp_path):
    store = CredentialStore(tmp_path / "nested" / "credentials.json")
    session = Session(token="abc.def.ghi", user=UserRead(id=1, name="Alice", email="alice@example.com"))

    store.save(session)

    assert store.load() == session
    assert store.load().authorization == "Bearer abc.def.ghi"


def test_load_without_file(tmp_path):
    assert CredentialStore(tmp_path / "missing.json").load() is None


@pytest.mark.parametrize("content", ["not json", "[]", '{"user": null}'])
def test_load_unreadable_file(tmp_path, content):
    path = tmp_path / "credentials.json"
    path.write_text(content, encoding="utf-8")
    assert CredentialStore(path).load() is None


def test_clear(tmp_path):
    store = CredentialStore(tmp_path / "credentials.json")
    store.save(Session(token="abc"))

    store.clear()
    store.clear()

    assert store.load() is None
    assert not store.path.exists()
