"""Form repository for database operations."""

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from formspace.db.models import Form
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms

COUNTER_FIELDS = ("view_count", "start_count", "completed_count")


class FormRepository(BaseRepository[Form]):
    """Repository for Form entity operations."""

    def __init__(self):
        super().__init__(Form)

    def get_by_container(
        self,
        db: Session,
        workspace_id: str,
        folder_id: str | None = None,
    ) -> list[Form]:
        """Forms of a workspace that sit in ``folder_id`` (top-level when None).

        Args:
            db: Database session
            workspace_id: Workspace ID
            folder_id: Folder ID, or None for forms outside any folder

        Returns:
            List of forms, oldest first
        """
        folder_clause = Form.folder_id.is_(None) if folder_id is None else Form.folder_id == folder_id
        stmt = (
            select(Form)
            .where(Form.workspace_id == workspace_id, folder_clause)
            .order_by(Form.created_at.asc())
        )
        return list(db.execute(stmt).scalars().all())

    def create_form(
        self,
        db: Session,
        workspace_id: str,
        created_by: str,
        name: str,
        folder_id: str | None = None,
    ) -> Form:
        """Create an empty form row. Callers also list it on its container."""
        now = get_timestamp_ms()
        form_data = {
            "id": generate_id("form"),
            "workspace_id": workspace_id,
            "folder_id": folder_id,
            "created_by": created_by,
            "name": name,
            "element_ids": [],
            "view_count": 0,
            "start_count": 0,
            "completed_count": 0,
            "created_at": now,
            "updated_at": now,
        }
        return self.create(db, form_data)

    def increment_counter(self, db: Session, form_id: str, field: str) -> None:
        """Atomically add one to a form counter (``UPDATE ... SET c = c + 1``).

        Args:
            db: Database session
            form_id: Form ID
            field: One of view_count, start_count, completed_count
        """
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unknown form counter: {field}")
        column = getattr(Form, field)
        stmt = update(Form).where(Form.id == form_id).values({column: column + 1})
        db.execute(stmt, execution_options={"synchronize_session": False})
        form = db.get(Form, form_id)
        if form is not None:
            db.expire(form, [field])


# Singleton instance
form_repository = FormRepository()
