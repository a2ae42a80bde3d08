"""Dashboard metrics derived from the finished-session history."""
from __future__ import annotations
from typing import Sequence

from liftlog.schemas.stats import DashboardStats, SessionSummary, VolumePoint
from liftlog.schemas.workout import WorkoutSession

CHART_WINDOW = 7
RECENT_WINDOW = 5

def session_volume(session: WorkoutSession) -> float:
    """Sum of weight x reps over every set, completed or not."""
    return sum(s.weight * s.reps for ex in session.exercises for s in ex.sets)

def summarize(history: Sequence[WorkoutSession]) -> DashboardStats:
    """
    `history` is most-recent-first. The volume series comes back oldest-first
    so it can be charted left to right; the newest bar is flagged `latest`.
    """
    window = list(history[:CHART_WINDOW])
    series = [
        VolumePoint(
            label=s.start_time.strftime("%a"),
            date=s.start_time.date(),
            volume=session_volume(s),
        )
        for s in reversed(window)
    ]
    if series:
        series[-1].latest = True

    recent = [
        SessionSummary(
            id=s.id,
            name=s.name,
            date=s.start_time.date(),
            exercise_count=len(s.exercises),
            set_count=s.set_count,
            volume=session_volume(s),
        )
        for s in history[:RECENT_WINDOW]
    ]

    return DashboardStats(
        total_workouts=len(history),
        last_workout=history[0].start_time.date() if history else None,
        volume_series=series,
        recent=recent,
    )
