"""Generic repository for a single SQLAlchemy model.

Writes are flushed, never committed: the calling service decides where the
transaction ends (see ``formspace.db.database.unit_of_work``).
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from formspace.db.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Primary-key lookups and flush-only writes for ``model``."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    def get_by_id(self, db: Session, id: str) -> ModelType | None:
        return db.get(self.model, id)

    def get_for_update(self, db: Session, id: str) -> ModelType | None:
        """Like get_by_id, but the row stays locked until the transaction ends."""
        return db.get(self.model, id, with_for_update=True)

    def get_many(self, db: Session, ids: list[str]) -> list[ModelType]:
        """Fetch rows by id in one query.

        Rows come back in the order of ``ids``; unknown ids are skipped.
        Only for models whose primary key column is ``id``.
        """
        if not ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(ids))
        found = {row.id: row for row in db.execute(stmt).scalars()}
        return [found[row_id] for row_id in ids if row_id in found]

    def create(self, db: Session, obj_in: dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(self, db: Session, db_obj: ModelType, obj_in: dict[str, Any]) -> ModelType:
        """Set the given columns on ``db_obj`` and flush.

        Keys that are not attributes of the model are ignored. JSON list
        columns must be passed as new lists so the change is detected.
        """
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.flush()
        return db_obj

    def delete(self, db: Session, id: str) -> bool:
        """Delete by primary key. Returns False if there was no such row."""
        obj = db.get(self.model, id)
        if obj is None:
            return False
        db.delete(obj)
        db.flush()
        return True

    def exists(self, db: Session, id: str) -> bool:
        return db.get(self.model, id) is not None
