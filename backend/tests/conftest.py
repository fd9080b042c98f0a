"""Pytest fixtures: a throwaway SQLite file per test, foreign keys enforced."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from hwtube.database import Base, enable_sqlite_foreign_keys, get_db
from hwtube.main import app

# Import all models so they register with Base.metadata
from hwtube.models.user import User                            # noqa: F401
from hwtube.models.network import Network, NetworkMembership   # noqa: F401
from hwtube.models.invitation import NetworkInvitation         # noqa: F401
from hwtube.models.application import NetworkApplication       # noqa: F401
from hwtube.models.video import Video                          # noqa: F401


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'hwtube.db'}", connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session for direct service calls and assertions."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create records via the API, return the response JSON
# ---------------------------------------------------------------------------
def auth(user: dict) -> dict:
    """Headers identifying ``user`` as the caller."""
    return {"X-User-Id": user["user_id"]}


def create_test_user(client: TestClient, name: str = "Test User", email: str | None = None) -> dict:
    """POST /api/users and return the created user."""
    resp = client.post("/api/users", json={
        "display_name": name,
        "email": email or f"{name.lower().replace(' ', '.')}@example.com",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_network(client: TestClient, owner: dict, name: str = "Test Network", themes=None) -> dict:
    """POST /api/networks as ``owner`` and return the created network."""
    resp = client.post("/api/networks", json={
        "name": name,
        "themes": themes or ["tech"],
    }, headers=auth(owner))
    assert resp.status_code == 200, resp.text
    return resp.json()


def create_test_video(client: TestClient, uploader: dict, title: str = "Hello World") -> dict:
    resp = client.post("/api/videos", json={
        "title": title,
        "filename": f"{title.lower().replace(' ', '-')}.mp4",
    }, headers=auth(uploader))
    assert resp.status_code == 201, resp.text
    return resp.json()
