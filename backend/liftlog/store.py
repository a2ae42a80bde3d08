"""Save/load collaborator for session history and routines."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from liftlog.db import Base, get_engine, make_session_factory
from liftlog.repositories.routine_repo import RoutineRepository
from liftlog.repositories.session_repo import SessionRepository
from liftlog.schemas.routine import Routine
from liftlog.schemas.workout import WorkoutSession
from liftlog.settings import Settings

logger = logging.getLogger(__name__)

@dataclass(slots=True)
class Snapshot:
    history: list[WorkoutSession] = field(default_factory=list)   # most recent first
    routines: list[Routine] = field(default_factory=list)         # creation order

class WorkoutStore(Protocol):
    def load(self) -> Snapshot: ...
    def save(self, snapshot: Snapshot) -> None: ...
    def ping(self) -> None: ...

class MemoryStore:
    """Keeps the last saved snapshot for the lifetime of the process."""

    def __init__(self, snapshot: Snapshot | None = None):
        self._snapshot = snapshot or Snapshot()

    def load(self) -> Snapshot:
        return Snapshot(
            history=[s.model_copy(deep=True) for s in self._snapshot.history],
            routines=[r.model_copy(deep=True) for r in self._snapshot.routines],
        )

    def save(self, snapshot: Snapshot) -> None:
        self._snapshot = Snapshot(
            history=[s.model_copy(deep=True) for s in snapshot.history],
            routines=[r.model_copy(deep=True) for r in snapshot.routines],
        )

    def ping(self) -> None:
        return None

class SqlStore:
    """Persists the whole snapshot through SQLAlchemy, replacing the stored copy on each save."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def create_schema(self) -> None:
        # Alembic owns the schema in deployments; this is for SQLite/dev setups
        Base.metadata.create_all(self.session_factory.kw["bind"])

    def load(self) -> Snapshot:
        with self.session_factory() as db:
            snap = Snapshot(
                history=SessionRepository(db).list_all(),
                routines=RoutineRepository(db).list_all(),
            )
        logger.info("loaded %d sessions and %d routines", len(snap.history), len(snap.routines))
        return snap

    def save(self, snapshot: Snapshot) -> None:
        with self.session_factory() as db:
            try:
                SessionRepository(db).replace_all(snapshot.history)
                RoutineRepository(db).replace_all(snapshot.routines)
                db.commit()
            except Exception:
                db.rollback()
                raise

    def ping(self) -> None:
        with self.session_factory() as db:
            db.execute(text("SELECT 1"))

def build_store(settings: Settings) -> WorkoutStore:
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "sql":
        store = SqlStore(make_session_factory(get_engine()))
        if settings.DATABASE_URL.startswith("sqlite"):
            store.create_schema()
        return store
    raise ValueError(f"unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
