"""Authentication service for JWT token management and password hashing."""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formspace.components.workspace.service import bootstrap_workspace
from formspace.db.database import unit_of_work
from formspace.db.models import User
from formspace.db.redis_cache import RedisKeyPrefix, get_redis_cache
from formspace.errors import ConflictError, UnauthorizedError
from formspace.models.auth_schemas import UserResponse
from formspace.repositories import user_repository
from formspace.settings import settings
from formspace.utils import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create JWT access token.

    Args:
        data: Payload data to encode (must include 'sub' claim with user ID)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str | None:
    """Verify JWT token and return user ID.

    Returns:
        User ID if token is valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        user_id: str | None = payload.get("sub")
        if user_id is None:
            return None
        return user_id
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def get_password_hash(password: str) -> str:
    """Hash password using bcrypt."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against a bcrypt hash.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


def to_profile(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def cache_profile(profile: UserResponse) -> None:
    """Write a profile to the user cache."""
    get_redis_cache().set(
        RedisKeyPrefix.user_key(profile.id),
        profile.model_dump(mode="json"),
        expire_seconds=settings.user_cache_ttl_seconds,
    )


def invalidate_profile(user_id: str) -> None:
    get_redis_cache().delete(RedisKeyPrefix.user_key(user_id))


def register_user(db: Session, username: str, email: str, password: str) -> UserResponse:
    """Create a user together with their owned workspace.

    Both rows are written in one transaction.

    Raises:
        ConflictError: Email already registered
    """
    if user_repository.get_by_email(db, email) is not None:
        raise ConflictError("Email already registered")

    hashed_password = get_password_hash(password)
    try:
        with unit_of_work(db):
            user = user_repository.create_user(db, username=username, email=email, hashed_password=hashed_password)
            bootstrap_workspace(db, user)
    except IntegrityError as e:
        raise ConflictError("Email already registered") from e

    profile = to_profile(user)
    cache_profile(profile)
    logger.info(f"New user registered: {profile.email}")
    return profile


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate user by email and password.

    Returns:
        User object if authentication successful, None otherwise
    """
    user = user_repository.get_by_email(db, email)
    if not user or not user.hashed_password:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def login(db: Session, email: str, password: str) -> tuple[str, UserResponse]:
    """Check credentials and issue an access token.

    Returns:
        (access token, profile)

    Raises:
        UnauthorizedError: Unknown email or wrong password (same message for both)
    """
    user = authenticate_user(db, email, password)
    if user is None:
        logger.warning(f"Failed login for {email}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    profile = to_profile(user)
    cache_profile(profile)
    access_token = create_access_token(data={"sub": user.id})
    logger.info(f"User logged in: {profile.email}")
    return access_token, profile


def get_user_from_cache(db: Session, user_id: str) -> UserResponse | None:
    """Get a user profile from the Redis cache, falling back to the database.

    Returns:
        The profile, or None if the user does not exist
    """
    cached = get_redis_cache().get(RedisKeyPrefix.user_key(user_id))
    if cached:
        try:
            return UserResponse.model_validate(cached)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cached profile for {user_id}: {e}")

    user = user_repository.get_by_id(db, user_id)
    if user is None:
        return None

    profile = to_profile(user)
    cache_profile(profile)
    return profile
