"""User profile service.

Reads and updates of the signed-in user's own profile. Every write drops
the cached profile so the next read comes from the database.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formspace.components.workspace.models import Theme
from formspace.db.database import unit_of_work
from formspace.db.models import User
from formspace.errors import ConflictError, InvalidInputError, NotFoundError
from formspace.models.auth_schemas import UserResponse
from formspace.repositories import user_repository
from formspace.services.auth_service import invalidate_profile, to_profile
from formspace.utils import get_logger, get_timestamp_ms

logger = get_logger(__name__)


def _get_user(db: Session, user_id: str) -> User:
    user = user_repository.get_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_details(db: Session, user_id: str) -> UserResponse:
    """Profile of a user, read from the database."""
    return to_profile(_get_user(db, user_id))


def update_profile(
    db: Session,
    user_id: str,
    username: str | None = None,
    email: str | None = None,
) -> UserResponse:
    """Change username and/or email.

    Raises:
        NotFoundError: User missing
        ConflictError: Email belongs to another user
    """
    changes: dict = {}
    if username is not None:
        changes["username"] = username
    if email is not None:
        owner = user_repository.get_by_email(db, email)
        if owner is not None and owner.id != user_id:
            raise ConflictError("Email already in use")
        changes["email"] = email.strip().lower()

    try:
        with unit_of_work(db):
            user = _get_user(db, user_id)
            if changes:
                changes["updated_at"] = get_timestamp_ms()
                user_repository.update(db, user, changes)
    except IntegrityError as e:
        raise ConflictError("Email already in use") from e

    invalidate_profile(user_id)
    logger.info(f"Updated profile of {user_id}: {sorted(changes)}")
    return to_profile(user)


def update_theme(db: Session, user_id: str, theme: Theme | str) -> UserResponse:
    """Set the user's display theme."""
    try:
        theme = Theme(theme)
    except ValueError as e:
        raise InvalidInputError(f"Unknown theme: {theme}") from e

    with unit_of_work(db):
        user = _get_user(db, user_id)
        user_repository.update(db, user, {"theme": theme.value, "updated_at": get_timestamp_ms()})

    invalidate_profile(user_id)
    logger.info(f"Theme of {user_id} set to {theme.value}")
    return to_profile(user)
