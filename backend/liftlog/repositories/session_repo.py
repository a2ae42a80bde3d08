from __future__ import annotations
from typing import Sequence

from liftlog.models import ExerciseRecord, SessionRecord, SetRecord
from liftlog.repositories.base import BaseRepository, as_utc
from liftlog.schemas.workout import ExerciseLog, WorkoutSession, WorkoutSet

class SessionRepository(BaseRepository[SessionRecord]):
    model = SessionRecord
    child_models = (SetRecord, ExerciseRecord)

    # READS
    def list_all(self) -> list[WorkoutSession]:
        """Finished sessions, most recent first."""
        return [self._to_schema(row) for row in self.list_rows()]

    # WRITES
    def replace_all(self, sessions: Sequence[WorkoutSession]) -> None:
        self.clear()
        for pos, sess in enumerate(sessions):
            self.db.add(self._to_row(sess, pos))
        self.db.flush()

    @staticmethod
    def _to_row(sess: WorkoutSession, position: int) -> SessionRecord:
        return SessionRecord(
            id=sess.id,
            position=position,
            name=sess.name,
            started_at=sess.start_time,
            ended_at=sess.end_time,
            routine_id=sess.routine_id,
            exercises=[
                ExerciseRecord(
                    id=ex.id,
                    position=i,
                    name=ex.name,
                    sets=[
                        SetRecord(
                            id=s.id, position=j, reps=s.reps, weight=s.weight,
                            unit=s.unit.value, completed=s.completed,
                        )
                        for j, s in enumerate(ex.sets)
                    ],
                )
                for i, ex in enumerate(sess.exercises)
            ],
        )

    @staticmethod
    def _to_schema(row: SessionRecord) -> WorkoutSession:
        return WorkoutSession(
            id=row.id,
            name=row.name,
            start_time=as_utc(row.started_at),
            end_time=as_utc(row.ended_at),
            routine_id=row.routine_id,
            exercises=[
                ExerciseLog(
                    id=ex.id,
                    name=ex.name,
                    sets=[
                        WorkoutSet(id=s.id, reps=s.reps, weight=s.weight, unit=s.unit, completed=s.completed)
                        for s in ex.sets
                    ],
                )
                for ex in row.exercises
            ],
        )
