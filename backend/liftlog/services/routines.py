from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable

from liftlog.schemas.common import WeightUnit, new_id
from liftlog.schemas.routine import MeasureType, Routine, RoutineCreate, RoutineExercise
from liftlog.schemas.workout import ExerciseLog, WorkoutSession, WorkoutSet

def _routine(name: str, *exercises: tuple) -> Routine:
    return Routine(
        name=name,
        exercises=[
            RoutineExercise(name=n, sets=s, reps=r, measure=m[0] if m else MeasureType.reps)
            for n, s, r, *m in exercises
        ],
    )

# Push / Pull / Legs split offered as a one-click import
PRESET_ROUTINES: tuple[Routine, ...] = (
    _routine(
        "Push Day (PPL)",
        ("Bench Press", 4, 8),
        ("Overhead Press", 3, 10),
        ("Incline Dumbbell Press", 3, 10),
        ("Tricep Pushdowns", 3, 12),
        ("Lateral Raises", 4, 15),
    ),
    _routine(
        "Pull Day (PPL)",
        ("Deadlift", 3, 5),
        ("Pull Ups", 3, 8),
        ("Barbell Rows", 4, 10),
        ("Face Pulls", 3, 15),
        ("Bicep Curls", 3, 12),
    ),
    _routine(
        "Leg Day (PPL)",
        ("Squat", 4, 6),
        ("Romanian Deadlift", 3, 10),
        ("Leg Press", 3, 12),
        ("Leg Curls", 3, 12),
        ("Calf Raises", 4, 15),
    ),
)

SAMPLE_ROUTINES: tuple[Routine, ...] = (
    _routine(
        "Morning Cardio & Abs",
        ("Crunch", 3, 20),
        ("Plank", 3, 60, MeasureType.seconds),
    ),
)

def copy_routine(routine: Routine) -> Routine:
    """Deep copy with fresh ids for the routine and each of its exercises."""
    return Routine(
        name=routine.name,
        last_performed=routine.last_performed,
        exercises=[
            RoutineExercise(name=e.name, sets=e.sets, reps=e.reps, measure=e.measure)
            for e in routine.exercises
        ],
    )

def build_routine(payload: RoutineCreate) -> Routine:
    return Routine(
        name=payload.name,
        exercises=[RoutineExercise(**e.model_dump()) for e in payload.exercises],
    )

def load_presets(existing: Iterable[Routine]) -> list[Routine]:
    """Routines to add so every preset is present once; matched by name."""
    taken = {r.name for r in existing}
    added: list[Routine] = []
    for preset in PRESET_ROUTINES:
        if preset.name in taken:
            continue
        added.append(copy_routine(preset))
        taken.add(preset.name)
    return added

def instantiate_routine(routine: Routine, *, now: datetime | None = None) -> WorkoutSession:
    """
    Fresh session skeleton for a routine: one log per planned exercise and
    `sets` empty-progress sets at the planned reps. Nothing is shared with
    the routine, so editing the session never touches the template.
    """
    return WorkoutSession(
        id=new_id(),
        name=routine.name,
        start_time=now or datetime.now(timezone.utc),
        routine_id=routine.id,
        exercises=[
            ExerciseLog(
                name=ex.name,
                sets=[
                    WorkoutSet(reps=ex.reps, weight=0, unit=WeightUnit.kg, completed=False)
                    for _ in range(ex.sets)
                ],
            )
            for ex in routine.exercises
        ],
    )
