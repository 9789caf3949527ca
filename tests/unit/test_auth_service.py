"""Tests for authentication and user profile services."""

from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from formspace.db.models import Workspace
from formspace.db.redis_cache import RedisCache, RedisKeyPrefix
from formspace.errors import ConflictError, InvalidInputError, UnauthorizedError
from formspace.services import auth_service, user_service


@pytest.fixture
def registered(db_session: Session):
    return auth_service.register_user(db_session, "Ada", "Ada@Example.com", "secret123")


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = auth_service.get_password_hash("secret123")
        assert hashed != "secret123"
        assert auth_service.verify_password("secret123", hashed)
        assert not auth_service.verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not auth_service.verify_password("secret123", "not-a-bcrypt-hash")


class TestTokens:
    def test_round_trip_subject(self):
        token = auth_service.create_access_token({"sub": "user_1"})
        assert auth_service.verify_token(token) == "user_1"

    def test_expired_token_rejected(self):
        token = auth_service.create_access_token({"sub": "user_1"}, expires_delta=timedelta(seconds=-1))
        assert auth_service.verify_token(token) is None

    def test_garbage_token_rejected(self):
        assert auth_service.verify_token("not.a.jwt") is None


class TestRegisterAndLogin:
    def test_register_bootstraps_owned_workspace(self, db_session: Session, registered):
        workspace = db_session.get(Workspace, registered.workspace_id)
        assert workspace is not None
        assert workspace.created_by == registered.id
        assert registered.email == "ada@example.com"
        assert registered.theme.value == "dark"

    def test_duplicate_email_conflicts(self, db_session: Session, registered):
        with pytest.raises(ConflictError):
            auth_service.register_user(db_session, "Other", "ada@example.com", "secret123")

    def test_login_returns_token_for_user(self, db_session: Session, registered):
        token, profile = auth_service.login(db_session, "ada@example.com", "secret123")
        assert profile.id == registered.id
        assert auth_service.verify_token(token) == registered.id

    def test_bad_credentials_share_one_message(self, db_session: Session, registered):
        with pytest.raises(UnauthorizedError) as wrong_password:
            auth_service.login(db_session, "ada@example.com", "nope")
        with pytest.raises(UnauthorizedError) as unknown_email:
            auth_service.login(db_session, "nobody@example.com", "secret123")
        assert wrong_password.value.message == unknown_email.value.message


class TestProfileCache:
    def test_cache_hit_and_ttl(self, db_session: Session, registered, redis_cache: RedisCache):
        key = RedisKeyPrefix.user_key(registered.id)
        assert redis_cache.get(key)["email"] == "ada@example.com"
        assert 0 < redis_cache.ttl(key) <= 900

        assert auth_service.get_user_from_cache(db_session, registered.id).id == registered.id

    def test_cache_miss_reads_database_and_refills(self, db_session: Session, registered, redis_cache: RedisCache):
        key = RedisKeyPrefix.user_key(registered.id)
        redis_cache.delete(key)

        profile = auth_service.get_user_from_cache(db_session, registered.id)

        assert profile.username == "Ada"
        assert redis_cache.get(key) is not None

    def test_unknown_user(self, db_session: Session):
        assert auth_service.get_user_from_cache(db_session, "user_missing") is None


class TestUserService:
    def test_update_profile_invalidates_cache(self, db_session: Session, registered, redis_cache: RedisCache):
        updated = user_service.update_profile(db_session, registered.id, username="Countess")

        assert updated.username == "Countess"
        assert redis_cache.get(RedisKeyPrefix.user_key(registered.id)) is None
        assert auth_service.get_user_from_cache(db_session, registered.id).username == "Countess"

    def test_update_email_clash(self, db_session: Session, registered, make_user):
        make_user("bob")
        with pytest.raises(ConflictError):
            user_service.update_profile(db_session, registered.id, email="bob@example.com")

    def test_update_theme(self, db_session: Session, registered):
        assert user_service.update_theme(db_session, registered.id, "light").theme.value == "light"
        assert user_service.get_user_details(db_session, registered.id).theme.value == "light"

    def test_unknown_theme(self, db_session: Session, registered):
        with pytest.raises(InvalidInputError):
            user_service.update_theme(db_session, registered.id, "sepia")
