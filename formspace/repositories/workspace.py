"""Workspace repository for database operations."""

from sqlalchemy.orm import Session

from formspace.db.models import Workspace
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms


class WorkspaceRepository(BaseRepository[Workspace]):
    """Repository for Workspace entity operations."""

    def __init__(self):
        super().__init__(Workspace)

    def create_workspace(self, db: Session, created_by: str, name: str) -> Workspace:
        """Create an empty workspace owned by ``created_by``."""
        now = get_timestamp_ms()
        workspace_data = {
            "id": generate_id("ws"),
            "created_by": created_by,
            "name": name,
            "folder_ids": [],
            "form_ids": [],
            "created_at": now,
            "updated_at": now,
        }
        return self.create(db, workspace_data)


# Singleton instance
workspace_repository = WorkspaceRepository()
