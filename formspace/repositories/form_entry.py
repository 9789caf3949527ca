"""Respondent session, entry and response repositories."""

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from formspace.db.models import FormEntry, FormResponse, FormSession
from formspace.repositories.base import BaseRepository
from formspace.utils import generate_id, get_timestamp_ms


class FormSessionRepository(BaseRepository[FormSession]):
    """Repository for issued respondent sessions."""

    def __init__(self):
        super().__init__(FormSession)

    def create_session(self, db: Session, session_id: str, form_id: str) -> FormSession:
        """Insert a session row. A duplicate ``session_id`` raises IntegrityError on flush."""
        return self.create(
            db,
            {
                "session_id": session_id,
                "form_id": form_id,
                "issued_at": get_timestamp_ms(),
            },
        )


class FormEntryRepository(BaseRepository[FormEntry]):
    """Repository for FormEntry and its embedded FormResponse rows."""

    def __init__(self):
        super().__init__(FormEntry)

    def get_by_session(self, db: Session, form_id: str, session_id: str) -> FormEntry | None:
        """Get the entry recorded by ``session_id`` for ``form_id``."""
        stmt = select(FormEntry).where(FormEntry.form_id == form_id, FormEntry.session_id == session_id)
        return db.execute(stmt).scalar_one_or_none()

    def get_by_form(self, db: Session, form_id: str) -> list[FormEntry]:
        """All entries of a form with their responses, oldest first."""
        stmt = (
            select(FormEntry)
            .where(FormEntry.form_id == form_id)
            .options(selectinload(FormEntry.responses))
            .order_by(FormEntry.created_at.asc())
        )
        return list(db.execute(stmt).scalars().all())

    def create_entry(self, db: Session, form_id: str, session_id: str) -> FormEntry:
        """Insert an empty entry. A second entry for the same session raises IntegrityError on flush."""
        now = get_timestamp_ms()
        return self.create(
            db,
            {
                "id": generate_id("entry"),
                "form_id": form_id,
                "session_id": session_id,
                "is_completed": False,
                "created_at": now,
                "updated_at": now,
            },
        )

    def upsert_response(self, db: Session, entry: FormEntry, element_id: str, value: str | None) -> FormResponse:
        """Overwrite the entry's answer to ``element_id`` in place, or append a new one.

        Returns:
            The live response for the element
        """
        now = get_timestamp_ms()
        for response in entry.responses:
            if response.element_id == element_id:
                response.value = value
                response.updated_at = now
                entry.updated_at = now
                db.flush()
                return response

        response = FormResponse(
            id=generate_id("resp"),
            element_id=element_id,
            value=value,
            position=len(entry.responses),
            created_at=now,
            updated_at=now,
        )
        entry.responses.append(response)
        entry.updated_at = now
        db.flush()
        return response

    def mark_completed(self, db: Session, entry_id: str) -> bool:
        """Flip ``is_completed`` from false to true.

        The update is conditional on the entry still being open, so only one
        caller can ever win.

        Returns:
            True if this call completed the entry, False if it was already completed
        """
        now = get_timestamp_ms()
        stmt = (
            update(FormEntry)
            .where(FormEntry.id == entry_id, FormEntry.is_completed == False)  # noqa: E712
            .values(is_completed=True, completed_at=now, updated_at=now)
        )
        result = db.execute(stmt, execution_options={"synchronize_session": False})
        entry = db.get(FormEntry, entry_id)
        if entry is not None:
            db.expire(entry, ["is_completed", "completed_at", "updated_at"])
        return result.rowcount == 1


# Singleton instances
form_session_repository = FormSessionRepository()
form_entry_repository = FormEntryRepository()
