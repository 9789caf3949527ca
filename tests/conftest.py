#!/usr/bin/env python
"""
pytest configuration file

This file contains shared fixtures for all tests.
"""

import os

# Must be set before formspace.settings is imported
os.environ.setdefault("FORMSPACE_ENVIRONMENT", "test")
os.environ.setdefault("FORMSPACE_REDIS_TYPE", "fake")
os.environ.setdefault("FORMSPACE_DEBUG", "false")

import fakeredis
import pytest
from sqlalchemy.orm import Session, sessionmaker

from formspace.components.workspace import bootstrap_workspace, create_form, save_form_elements
from formspace.components.workspace.models import ElementInput
from formspace.db.database import build_engine
from formspace.db.models import Base, User
from formspace.db.redis_cache import RedisCache, set_redis_cache
from formspace.repositories import user_repository


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite engine with all tables."""
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create an in-memory SQLite database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_redis_client():
    """
    Create a fakeredis client for unit tests.

    This provides an in-memory Redis implementation that allows
    unit tests to run without a real Redis server.
    """
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield client
    client.close()


@pytest.fixture(autouse=True)
def redis_cache(fake_redis_client) -> RedisCache:
    """Process-wide user cache backed by a per-test fakeredis server."""
    cache = RedisCache(client=fake_redis_client)
    set_redis_cache(cache)
    yield cache
    set_redis_cache(None)


@pytest.fixture
def make_user(db_session: Session):
    """Factory for committed users that already own a workspace.

    Skips bcrypt so that tests which do not log in stay fast.
    """

    def _make_user(username: str = "alice", email: str | None = None) -> User:
        user = user_repository.create_user(
            db_session,
            username=username,
            email=email or f"{username}@example.com",
            hashed_password="not-a-bcrypt-hash",
        )
        bootstrap_workspace(db_session, user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def owner(make_user) -> User:
    return make_user("owner")


@pytest.fixture
def survey_form(db_session: Session, owner: User):
    """A top-level form with a required Text, an optional Number and an Image.

    Returns:
        (form, {client_id: element store id})
    """
    form = create_form(db_session, owner.id, owner.workspace_id, "Survey")
    saved = save_form_elements(
        db_session,
        form.id,
        [
            ElementInput(id="name", type="Text", label="Name", required=True),
            ElementInput(id="age", type="Number", label="Age"),
            ElementInput(id="logo", type="Image", link="https://cdn.example.com/logo.png"),
        ],
    )
    return saved, {element.clientId: element.id for element in saved.elements}
