"""In-progress workout: timer, pause/resume and set editing until it is finished."""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable

from liftlog.errors import EmptyWorkoutError, NotFoundError, WorkoutFinalizedError
from liftlog.schemas.common import WeightUnit
from liftlog.schemas.workout import (
    ActiveWorkoutRead,
    ExerciseLog,
    SetUpdate,
    WorkoutSession,
    WorkoutSet,
    WorkoutStatus,
)

DEFAULT_REPS = 10
DEFAULT_WEIGHT = 20.0

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def format_elapsed(seconds: int) -> str:
    mins, secs = divmod(max(seconds, 0), 60)
    return f"{mins}:{secs:02d}"

class ActiveWorkout:
    """
    Owns the draft session while it is Active or Paused.

    Elapsed time is measured with a monotonic clock and only accrues while
    the workout is active. Once `finish` succeeds the workout is Finalized
    and every mutator raises WorkoutFinalizedError.
    """

    def __init__(self, session: WorkoutSession, *, clock: Callable[[], float] = time.monotonic):
        self.session = session
        self.status = WorkoutStatus.active
        self._clock = clock
        self._accumulated = 0.0
        self._resumed_at: float | None = clock()

    # ----- timer -----

    @property
    def elapsed_seconds(self) -> int:
        running = self._clock() - self._resumed_at if self._resumed_at is not None else 0.0
        return int(self._accumulated + running)

    def pause(self) -> None:
        self._check_open()
        if self.status is WorkoutStatus.paused:
            return
        self._accumulated += self._clock() - self._resumed_at
        self._resumed_at = None
        self.status = WorkoutStatus.paused

    def resume(self) -> None:
        self._check_open()
        if self.status is WorkoutStatus.active:
            return
        self._resumed_at = self._clock()
        self.status = WorkoutStatus.active

    # ----- editing -----

    def rename(self, name: str) -> None:
        self._check_open()
        self.session.name = name

    def add_exercise(
        self,
        name: str,
        *,
        weight: float = DEFAULT_WEIGHT,
        reps: int = DEFAULT_REPS,
        unit: WeightUnit = WeightUnit.kg,
    ) -> ExerciseLog:
        """Manual entry: a new exercise with one not-yet-completed set."""
        self._check_open()
        log = ExerciseLog(name=name, sets=[WorkoutSet(reps=reps, weight=weight, unit=unit)])
        self.session.exercises = [*self.session.exercises, log]
        return log

    def merge(self, logs: list[ExerciseLog]) -> None:
        self._check_open()
        self.session.exercises = [*self.session.exercises, *logs]

    def remove_exercise(self, exercise_id: str) -> None:
        self._check_open()
        ex = self._exercise(exercise_id)
        self.session.exercises = [e for e in self.session.exercises if e is not ex]

    def add_set(self, exercise_id: str) -> WorkoutSet:
        """Append a set that repeats the previous one, or the defaults for an empty exercise."""
        self._check_open()
        ex = self._exercise(exercise_id)
        prev = ex.sets[-1] if ex.sets else None
        new = WorkoutSet(
            reps=prev.reps if prev else DEFAULT_REPS,
            weight=prev.weight if prev else DEFAULT_WEIGHT,
            unit=prev.unit if prev else WeightUnit.kg,
        )
        ex.sets = [*ex.sets, new]
        return new

    def update_set(self, exercise_id: str, set_id: str, changes: SetUpdate) -> WorkoutSet:
        self._check_open()
        s = self._set(exercise_id, set_id)
        # validate the merged values before touching the live set
        updated = WorkoutSet.model_validate({**s.model_dump(), **changes.model_dump(exclude_none=True)})
        for field in ("reps", "weight", "unit", "completed"):
            setattr(s, field, getattr(updated, field))
        return s

    def toggle_set(self, exercise_id: str, set_id: str) -> WorkoutSet:
        self._check_open()
        s = self._set(exercise_id, set_id)
        s.completed = not s.completed
        return s

    def remove_set(self, exercise_id: str, set_id: str) -> None:
        self._check_open()
        ex = self._exercise(exercise_id)
        target = self._set(exercise_id, set_id)
        ex.sets = [s for s in ex.sets if s is not target]

    # ----- lifecycle -----

    def finish(self, *, now: datetime | None = None) -> WorkoutSession:
        """Finalize and return an independent copy of the session for history."""
        finished = self.finished_copy(now=now)
        self.close(finished)
        return finished.model_copy(deep=True)

    def finished_copy(self, *, now: datetime | None = None) -> WorkoutSession:
        """The session as it would be recorded if finished at `now`; the workout stays open."""
        self._check_open()
        if not self.session.exercises:
            raise EmptyWorkoutError()
        end = now or utcnow()
        finished = self.session.model_copy(deep=True)
        finished.end_time = max(end, finished.start_time)
        return finished

    def close(self, finished: WorkoutSession) -> None:
        self._check_open()
        self.pause()
        self.session = finished
        self.status = WorkoutStatus.finalized

    def snapshot(self) -> ActiveWorkoutRead:
        elapsed = self.elapsed_seconds
        return ActiveWorkoutRead(
            status=self.status,
            elapsed_seconds=elapsed,
            elapsed_label=format_elapsed(elapsed),
            session=self.session.model_copy(deep=True),
        )

    # ----- helpers -----

    def _check_open(self) -> None:
        if self.status is WorkoutStatus.finalized:
            raise WorkoutFinalizedError()

    def _exercise(self, exercise_id: str) -> ExerciseLog:
        for ex in self.session.exercises:
            if ex.id == exercise_id:
                return ex
        raise NotFoundError("exercise", exercise_id)

    def _set(self, exercise_id: str, set_id: str) -> WorkoutSet:
        for s in self._exercise(exercise_id).sets:
            if s.id == set_id:
                return s
        raise NotFoundError("set", set_id)
