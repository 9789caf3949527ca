"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from formspace.db.models import User
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms


class UserRepository(BaseRepository[User]):
    """Repository for User entity operations."""

    def __init__(self):
        super().__init__(User)

    def get_by_email(self, db: Session, email: str) -> User | None:
        """Get user by email (case-insensitive match on the stored, lowercased value).

        Args:
            db: Database session
            email: User email

        Returns:
            User or None if not found
        """
        stmt = select(User).where(User.email == email.strip().lower())
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def create_user(
        self,
        db: Session,
        username: str,
        email: str,
        hashed_password: str,
    ) -> User:
        """Create a new user without a workspace.

        Args:
            db: Database session
            username: Display name
            email: Login email (stored lowercased)
            hashed_password: Opaque credential hash

        Returns:
            Created user
        """
        now = get_timestamp_ms()
        user_data = {
            "id": generate_id("user"),
            "username": username,
            "email": email.strip().lower(),
            "hashed_password": hashed_password,
            "theme": "dark",
            "created_at": now,
            "updated_at": now,
        }
        return self.create(db, user_data)


# Singleton instance
user_repository = UserRepository()
