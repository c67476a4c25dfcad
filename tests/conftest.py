import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PEPPER", "test-pepper")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session

import Auth.models  # noqa: F401
import Records.models  # noqa: F401
from Auth.database import get_session, make_engine
from Auth.sessions import SessionStore, get_session_store
from main import app

PASSWORD = "hunter22"


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sessions(clock):
    return SessionStore(clock=clock)


@pytest.fixture
def client(engine, sessions):
    def _session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_session_store] = lambda: sessions
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    def _signup(email="kofi@police.gov.gh", role="personnel", password=PASSWORD, **extra):
        body = {"firstName": "Kofi", "lastName": "Mensah", "email": email,
                "password": password, "role": role, **extra}
        return client.post("/api/auth/signup", json=body)
    return _signup


@pytest.fixture
def login_as(client, signup):
    """Sign up (if needed) and log in; returns the Authorization headers."""
    def _login(email="kofi@police.gov.gh", role="personnel"):
        signup(email=email, role=role)
        res = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['sessionId']}"}
    return _login


@pytest.fixture
def auth_headers(login_as):
    return login_as()
