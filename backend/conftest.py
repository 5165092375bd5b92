"""Shared fixtures for the Users API tests."""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from repositories import PersistenceError
from store import RecordStore


class RecordingMirror:
    """In-process mirror that records calls and can be told to fail."""

    kind = "recording"

    def __init__(self, users=None):
        self.docs = {u.id: u for u in (users or [])}
        self.fail_on = set()
        self.calls = []
        self.closed = False

    def _check(self, action):
        self.calls.append(action)
        if action in self.fail_on:
            raise PersistenceError(f"{action} refused")

    def fetch_all(self):
        self._check("fetch_all")
        return list(self.docs.values())

    def insert(self, user):
        self._check("insert")
        self.docs[user.id] = user

    def update(self, user):
        self._check("update")
        self.docs[user.id] = user

    def delete_by_id(self, user_id):
        self._check("delete")
        return self.docs.pop(user_id, None) is not None

    def close(self):
        self.closed = True


@pytest.fixture
def settings(monkeypatch):
    for var in ("USERS_MIRROR", "MIRROR_UPDATES", "ALLOWED_ORIGIN", "PORT", "MIRROR_STARTUP_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    return Settings()


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def mirror():
    return RecordingMirror()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def mirrored_client(settings, mirror):
    with TestClient(create_app(settings, mirror=mirror)) as c:
        yield c
