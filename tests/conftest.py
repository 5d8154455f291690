import os
import tempfile

# Point the app at a throwaway database before anything imports it.
_tmpdir = tempfile.mkdtemp(prefix="matchday-tests-")
os.environ["MATCHDAY_DB_PATH"] = os.path.join(_tmpdir, "test.db")
os.environ["MATCHDAY_TEST_MODE"] = "1"
os.environ["MATCHDAY_MANAGER_USERNAME"] = "boss"
os.environ["MATCHDAY_MANAGER_PASSWORD"] = "secret"
os.environ["MATCHDAY_SEED_DEMO"] = "0"
os.environ.setdefault("MATCHDAY_LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from matchday_backend.core.database import sync_engine
from matchday_backend.main import app

MANAGER = ("boss", "secret")


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(sync_engine)
    SQLModel.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def session():
    with Session(sync_engine) as s:
        yield s


@pytest.fixture
def client():
    # Entering the context runs startup (tables + manager account)
    with TestClient(app) as c:
        yield c


def login(client, username, password):
    """Returns Authorization headers; drops the cookie so requests stay explicit."""
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def manager_headers(client):
    return login(client, *MANAGER)


@pytest.fixture
def make_player(client, manager_headers):
    def _make(name, **extra):
        response = client.post("/players", json={"name": name, **extra}, headers=manager_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_account(client, manager_headers):
    """Creates a login bound to a player and returns its auth headers."""
    def _make(player_id, username=None, role="player"):
        username = username or f"user{player_id}"
        response = client.post(
            "/auth/register",
            json={"username": username, "password": "pw", "role": role, "player_id": player_id},
            headers=manager_headers,
        )
        assert response.status_code == 201, response.text
        return login(client, username, "pw")
    return _make


@pytest.fixture
def make_game(client, manager_headers):
    def _make(stats, date="2024-05-01", **extra):
        response = client.post(
            "/games", json={"date": date, "stats": stats, **extra}, headers=manager_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _make
