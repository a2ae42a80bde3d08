"""
Application state shared by every view.

AppState is the only owner of the session history, the routine list and the
workout in progress. Reads hand out copies; writes go through the command
methods below and are persisted through the store.
"""
from __future__ import annotations

import asyncio
import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable

from fastapi.concurrency import run_in_threadpool

from liftlog.errors import (
    CommandInFlightError,
    NoActiveWorkoutError,
    NotFoundError,
    WorkoutActiveError,
)
from liftlog.schemas.common import WeightUnit
from liftlog.schemas.routine import Routine, RoutineCreate
from liftlog.schemas.stats import DashboardStats
from liftlog.schemas.workout import (
    ActiveWorkoutRead,
    ExerciseLog,
    SetUpdate,
    WorkoutSession,
    WorkoutSet,
    WorkoutStatus,
)
from liftlog.services import aggregator, routines as routine_service
from liftlog.services.interpreter import CommandInterpreter
from liftlog.services.workout_logger import ActiveWorkout
from liftlog.store import Snapshot, WorkoutStore

logger = logging.getLogger(__name__)

class AppState:
    def __init__(
        self,
        store: WorkoutStore,
        *,
        default_workout_name: str = "Evening Workout",
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.default_workout_name = default_workout_name
        self._now = now
        self._clock = clock
        self._lock = threading.RLock()
        self._command_lock = asyncio.Lock()
        snap = store.load()
        self._history: list[WorkoutSession] = snap.history
        self._routines: list[Routine] = snap.routines
        self._active: ActiveWorkout | None = None

    # ----- queries -----

    def history(self, *, limit: int | None = None, offset: int = 0) -> list[WorkoutSession]:
        with self._lock:
            end = None if limit is None else offset + limit
            return [s.model_copy(deep=True) for s in self._history[offset:end]]

    def get_session(self, session_id: str) -> WorkoutSession:
        with self._lock:
            for s in self._history:
                if s.id == session_id:
                    return s.model_copy(deep=True)
        raise NotFoundError("session", session_id)

    def routines(self) -> list[Routine]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._routines]

    def get_routine(self, routine_id: str) -> Routine:
        with self._lock:
            return self._find_routine(routine_id).model_copy(deep=True)

    def active(self) -> ActiveWorkoutRead | None:
        with self._lock:
            return self._active.snapshot() if self._active else None

    def dashboard(self) -> DashboardStats:
        with self._lock:
            return aggregator.summarize(self._history)

    # ----- workout lifecycle -----

    def start_workout(self, name: str | None = None) -> ActiveWorkoutRead:
        with self._lock:
            self._ensure_idle()
            session = WorkoutSession(name=name or self.default_workout_name, start_time=self._now())
            self._active = ActiveWorkout(session, clock=self._clock)
            logger.info("started workout %s (%s)", session.id, session.name)
            return self._active.snapshot()

    def start_routine(self, routine_id: str) -> ActiveWorkoutRead:
        with self._lock:
            self._ensure_idle()
            routine = self._find_routine(routine_id)
            session = routine_service.instantiate_routine(routine, now=self._now())
            self._active = ActiveWorkout(session, clock=self._clock)
            logger.info("started routine %s as workout %s", routine.name, session.id)
            return self._active.snapshot()

    def discard_workout(self) -> None:
        with self._lock:
            self._require_active()
            logger.info("discarded workout %s", self._active.session.id)
            self._active = None

    def finish_workout(self) -> WorkoutSession:
        """Move the active workout into history; rejected when it has no exercises."""
        with self._lock:
            active = self._require_active()
            finished = active.finished_copy(now=self._now())
            routines = self._routines
            if finished.routine_id:
                routines = self._mark_performed(finished.routine_id, finished.end_time)
            # the workout stays active if the store rejects the write
            self._commit([finished, *self._history], routines)
            active.close(finished)
            self._active = None
            logger.info("finished workout %s with %d exercises", finished.id, len(finished.exercises))
            return finished.model_copy(deep=True)

    # ----- workout edits -----

    def pause_workout(self) -> ActiveWorkoutRead:
        return self._edit(lambda w: w.pause())

    def resume_workout(self) -> ActiveWorkoutRead:
        return self._edit(lambda w: w.resume())

    def rename_workout(self, name: str) -> ActiveWorkoutRead:
        return self._edit(lambda w: w.rename(name))

    def add_exercise(self, name: str, *, weight: float, reps: int, unit: WeightUnit) -> ExerciseLog:
        return self._edit(lambda w: w.add_exercise(name, weight=weight, reps=reps, unit=unit), copy=True)

    def remove_exercise(self, exercise_id: str) -> ActiveWorkoutRead:
        return self._edit(lambda w: w.remove_exercise(exercise_id))

    def add_set(self, exercise_id: str) -> WorkoutSet:
        return self._edit(lambda w: w.add_set(exercise_id), copy=True)

    def update_set(self, exercise_id: str, set_id: str, changes: SetUpdate) -> WorkoutSet:
        return self._edit(lambda w: w.update_set(exercise_id, set_id, changes), copy=True)

    def toggle_set(self, exercise_id: str, set_id: str) -> WorkoutSet:
        return self._edit(lambda w: w.toggle_set(exercise_id, set_id), copy=True)

    def remove_set(self, exercise_id: str, set_id: str) -> ActiveWorkoutRead:
        return self._edit(lambda w: w.remove_set(exercise_id, set_id))

    async def apply_command(self, interpreter: CommandInterpreter, utterance: str) -> list[ExerciseLog]:
        """
        Interpret `utterance` and append the result to the active workout.

        Only one interpretation may be outstanding; a second call is refused
        instead of queued. If the workout is finished or discarded while the
        service is answering, the response is dropped.
        """
        if self._command_lock.locked():
            raise CommandInFlightError()
        async with self._command_lock:
            # self._lock blocks, so it is only taken off the event loop
            workout_id = await run_in_threadpool(self._active_workout_id)
            logs = await interpreter.interpret(utterance)
            if not logs:
                return []
            return await run_in_threadpool(self._merge_parsed, workout_id, logs)

    # ----- routines -----

    def add_routine(self, payload: RoutineCreate) -> Routine:
        with self._lock:
            routine = routine_service.build_routine(payload)
            self._commit(self._history, [*self._routines, routine])
            return routine.model_copy(deep=True)

    def delete_routine(self, routine_id: str) -> None:
        with self._lock:
            routine = self._find_routine(routine_id)
            self._commit(self._history, [r for r in self._routines if r is not routine])

    def load_presets(self) -> list[Routine]:
        """Add the preset routines that are not present yet; returns the ones added."""
        with self._lock:
            added = routine_service.load_presets(self._routines)
            if added:
                self._commit(self._history, [*self._routines, *added])
            return [r.model_copy(deep=True) for r in added]

    def seed_sample_data(self) -> None:
        """Populate an empty state with a sample routine and a past workout."""
        with self._lock:
            if self._history or self._routines:
                return
            routines = [routine_service.copy_routine(r) for r in routine_service.SAMPLE_ROUTINES]
            started = self._now().replace(microsecond=0)
            sample = WorkoutSession(
                name="Push Day",
                start_time=started - timedelta(days=2),
                exercises=[
                    ExerciseLog(
                        name="Bench Press",
                        sets=[WorkoutSet(reps=8, weight=100, unit=WeightUnit.kg, completed=True)],
                    )
                ],
            )
            self._commit([sample], routines)

    # ----- helpers -----

    def _active_workout_id(self) -> str:
        with self._lock:
            return self._require_active().session.id

    def _merge_parsed(self, workout_id: str, logs: list[ExerciseLog]) -> list[ExerciseLog]:
        with self._lock:
            active = self._active
            if active is None or active.session.id != workout_id or active.status is WorkoutStatus.finalized:
                logger.warning("dropping parsed exercises for workout %s; it is no longer active", workout_id)
                return []
            active.merge(logs)
            logger.info("added %d parsed exercises to workout %s", len(logs), workout_id)
            return [log.model_copy(deep=True) for log in logs]

    def _edit(self, fn, *, copy: bool = False):
        with self._lock:
            active = self._require_active()
            result = fn(active)
            if copy:
                return result.model_copy(deep=True)
            return active.snapshot()

    def _require_active(self) -> ActiveWorkout:
        if self._active is None:
            raise NoActiveWorkoutError()
        return self._active

    def _ensure_idle(self) -> None:
        if self._active is not None:
            raise WorkoutActiveError()

    def _find_routine(self, routine_id: str) -> Routine:
        for r in self._routines:
            if r.id == routine_id:
                return r
        raise NotFoundError("routine", routine_id)

    def _mark_performed(self, routine_id: str, when: datetime) -> list[Routine]:
        # Routines are replaced rather than edited in place
        return [
            r.model_copy(update={"last_performed": when}, deep=True) if r.id == routine_id else r
            for r in self._routines
        ]

    def _commit(self, history: list[WorkoutSession], routines: list[Routine]) -> None:
        """Persist the new lists, then adopt them; nothing changes in memory if the save raises."""
        self.store.save(Snapshot(history=history, routines=routines))
        self._history = history
        self._routines = routines
