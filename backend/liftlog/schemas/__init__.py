from liftlog.schemas.common import WeightUnit, new_id, coerce_unit
from liftlog.schemas.workout import WorkoutSet, ExerciseLog, WorkoutSession, WorkoutStatus
from liftlog.schemas.routine import MeasureType, Routine, RoutineExercise
from liftlog.schemas.stats import DashboardStats, SessionSummary, VolumePoint
