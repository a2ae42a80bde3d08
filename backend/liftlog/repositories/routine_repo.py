from __future__ import annotations
from typing import Sequence

from liftlog.models import RoutineExerciseRecord, RoutineRecord
from liftlog.repositories.base import BaseRepository, as_utc
from liftlog.schemas.routine import Routine, RoutineExercise

class RoutineRepository(BaseRepository[RoutineRecord]):
    model = RoutineRecord
    child_models = (RoutineExerciseRecord,)

    def list_all(self) -> list[Routine]:
        """Routines in creation order."""
        return [
            Routine(
                id=row.id,
                name=row.name,
                last_performed=as_utc(row.last_performed),
                exercises=[
                    RoutineExercise(id=e.id, name=e.name, sets=e.sets, reps=e.reps, measure=e.measure)
                    for e in row.exercises
                ],
            )
            for row in self.list_rows()
        ]

    def replace_all(self, routines: Sequence[Routine]) -> None:
        self.clear()
        for pos, r in enumerate(routines):
            self.db.add(
                RoutineRecord(
                    id=r.id,
                    position=pos,
                    name=r.name,
                    last_performed=r.last_performed,
                    exercises=[
                        RoutineExerciseRecord(
                            id=e.id, position=i, name=e.name, sets=e.sets, reps=e.reps, measure=e.measure.value,
                        )
                        for i, e in enumerate(r.exercises)
                    ],
                )
            )
        self.db.flush()
