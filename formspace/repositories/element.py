"""Element repository for database operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from formspace.db.models import Element
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms


class ElementRepository(BaseRepository[Element]):
    """Repository for Element entity operations."""

    def __init__(self):
        super().__init__(Element)

    def get_by_client_id(self, db: Session, form_id: str, client_id: str) -> Element | None:
        """Get a form's element by its client-assigned stable id."""
        stmt = select(Element).where(Element.form_id == form_id, Element.client_id == client_id)
        return db.execute(stmt).scalar_one_or_none()

    def create_element(self, db: Session, form_id: str, client_id: str, fields: dict) -> Element:
        """Create an element for ``form_id`` from already-normalized fields."""
        now = get_timestamp_ms()
        element_data = {
            "id": generate_id("el"),
            "form_id": form_id,
            "client_id": client_id,
            "created_at": now,
            "updated_at": now,
            **fields,
        }
        return self.create(db, element_data)


# Singleton instance
element_repository = ElementRepository()
