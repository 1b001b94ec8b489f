"""Shared fixtures: an in-memory SQLite database wired into the FastAPI app."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.models.base import Base
from infrastructure.models.document_orm import DocumentORM  # noqa: F401
from infrastructure.models.document_share_orm import DocumentShareORM  # noqa: F401
from infrastructure.models.user_orm import UserORM  # noqa: F401
from main import app
from utils.dependencies import get_db


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_app(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


@pytest.fixture
def register(client):
    """Register a user and return the headers that authenticate as them."""

    def _register(email: str, name: str = "") -> dict:
        headers = {"X-User-Email": email}
        response = client.post("/users", json={"name": name}, headers=headers)
        assert response.status_code == 201, response.text
        return headers

    return _register


@pytest.fixture
def alice(register):
    return register("alice@example.com", "Alice")


@pytest.fixture
def bob(register):
    return register("bob@example.com", "Bob")


@pytest.fixture
def carol(register):
    return register("carol@example.com", "Carol")


@pytest.fixture
def alice_document(client, alice):
    response = client.post(
        "/documents", json={"title": "Notes", "content": "hello"}, headers=alice
    )
    assert response.status_code == 201, response.text
    return response.json()
