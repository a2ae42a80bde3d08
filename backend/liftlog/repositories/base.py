# liftlog/repositories/base.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Generic, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy import delete, select

T = TypeVar("T")  # SQLAlchemy model type

def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)

class BaseRepository(Generic[T]):
    """
    Whole-collection repository: rows carry a `position` column and the
    collection is replaced wholesale on save. `child_models` lists dependent
    tables, deepest first, so clearing never trips a foreign key.
    """
    model: type
    child_models: tuple[type, ...] = ()

    def __init__(self, db: Session):
        self.db = db

    def list_rows(self) -> list[T]:
        stmt = select(self.model).order_by(self.model.position.asc())
        return list(self.db.execute(stmt).scalars().all())

    def clear(self) -> None:
        for m in (*self.child_models, self.model):
            self.db.execute(delete(m))
        self.db.expunge_all()
