"""Folder repository for database operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from formspace.db.models import Folder
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms


class FolderRepository(BaseRepository[Folder]):
    """Repository for Folder entity operations."""

    def __init__(self):
        super().__init__(Folder)

    def get_by_workspace(self, db: Session, workspace_id: str) -> list[Folder]:
        """Folders of a workspace, oldest first."""
        stmt = select(Folder).where(Folder.workspace_id == workspace_id).order_by(Folder.created_at.asc())
        return list(db.execute(stmt).scalars().all())

    def create_folder(self, db: Session, workspace_id: str, created_by: str, name: str) -> Folder:
        """Create an empty folder row. Callers also list it on the workspace."""
        now = get_timestamp_ms()
        folder_data = {
            "id": generate_id("folder"),
            "workspace_id": workspace_id,
            "created_by": created_by,
            "name": name,
            "form_ids": [],
            "created_at": now,
            "updated_at": now,
        }
        return self.create(db, folder_data)


# Singleton instance
folder_repository = FolderRepository()
