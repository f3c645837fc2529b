import itertools
import os

# Cheap hashes for the whole run; must be set before auth builds its CryptContext
os.environ.setdefault("EARTHLINK_BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from config import settings
from database import get_db, init_db
from main import app

_emails = itertools.count(1)

TINY_IMAGE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


def image_of_size(approx_bytes: int) -> str:
    """A data URI whose estimated decoded size is ``approx_bytes``."""
    return "data:image/png;base64," + "A" * (approx_bytes * 4 // 3)


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point every test at its own SQLite file."""
    monkeypatch.setattr(settings, "database_path", str(tmp_path / "earthlink-test.sqlite3"))
    init_db()
    yield settings.database_path


@pytest.fixture
def db():
    def _query(sql, params=()):
        with get_db() as conn:
            return [dict(row) for row in conn.execute(sql, params).fetchall()]
    return _query


@pytest.fixture
def make_client():
    """Each client has its own cookie jar, so each one is a separate browser."""
    clients = []

    def _make():
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def signup(make_client):
    def _signup(name="Ada Lovelace", email=None, password="secret123"):
        member = make_client()
        email = email or f"member{next(_emails)}@example.com"
        response = member.post("/auth/signup", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        return member, response.json()["user"]
    return _signup


@pytest.fixture
def create_post():
    def _create(member, body="Hello Earth", **extra):
        response = member.post("/posts", json={"body": body, **extra})
        assert response.status_code == 201, response.text
        return response.json()["post"]
    return _create


@pytest.fixture
def create_event():
    def _create(member, title="Beach cleanup", event_time="2030-05-01T09:00:00Z", **extra):
        response = member.post("/events", json={"title": title, "eventTime": event_time, **extra})
        assert response.status_code == 201, response.text
        return response.json()["event"]
    return _create


@pytest.fixture
def create_group():
    def _create(member, name="River Keepers", **extra):
        response = member.post("/groups", json={"name": name, **extra})
        assert response.status_code == 201, response.text
        return response.json()["group"]
    return _create
