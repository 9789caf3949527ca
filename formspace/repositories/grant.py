"""Shared workspace grant repository for database operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from formspace.db.models import SharedWorkspaceGrant
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms


class GrantRepository(BaseRepository[SharedWorkspaceGrant]):
    """Repository for SharedWorkspaceGrant entity operations."""

    def __init__(self):
        super().__init__(SharedWorkspaceGrant)

    def get_for(self, db: Session, user_id: str, workspace_id: str) -> SharedWorkspaceGrant | None:
        """Get the grant held by ``user_id`` on ``workspace_id``, if any."""
        stmt = select(SharedWorkspaceGrant).where(
            SharedWorkspaceGrant.user_id == user_id,
            SharedWorkspaceGrant.workspace_id == workspace_id,
        )
        return db.execute(stmt).scalar_one_or_none()

    def get_by_user(self, db: Session, user_id: str) -> list[SharedWorkspaceGrant]:
        """Grants held by a user, oldest first."""
        stmt = (
            select(SharedWorkspaceGrant)
            .where(SharedWorkspaceGrant.user_id == user_id)
            .order_by(SharedWorkspaceGrant.created_at.asc())
        )
        return list(db.execute(stmt).scalars().all())

    def get_by_workspace(self, db: Session, workspace_id: str) -> list[SharedWorkspaceGrant]:
        """Grants issued on a workspace, oldest first."""
        stmt = (
            select(SharedWorkspaceGrant)
            .where(SharedWorkspaceGrant.workspace_id == workspace_id)
            .order_by(SharedWorkspaceGrant.created_at.asc())
        )
        return list(db.execute(stmt).scalars().all())

    def create_grant(
        self,
        db: Session,
        user_id: str,
        workspace_id: str,
        access_level: str,
    ) -> SharedWorkspaceGrant:
        """Create a grant. The (user, workspace) unique constraint rejects duplicates."""
        grant_data = {
            "id": generate_id("grant"),
            "user_id": user_id,
            "workspace_id": workspace_id,
            "access_level": access_level,
            "created_at": get_timestamp_ms(),
        }
        return self.create(db, grant_data)


# Singleton instance
grant_repository = GrantRepository()
