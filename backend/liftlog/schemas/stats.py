from datetime import date
from pydantic import BaseModel

class VolumePoint(BaseModel):
    label: str          # short weekday, e.g. "Mon"
    date: date
    volume: float
    latest: bool = False

class SessionSummary(BaseModel):
    id: str
    name: str
    date: date
    exercise_count: int
    set_count: int
    volume: float

class DashboardStats(BaseModel):
    total_workouts: int
    last_workout: date | None    # None when there is no history yet
    volume_series: list[VolumePoint]
    recent: list[SessionSummary]
