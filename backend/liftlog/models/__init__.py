from liftlog.models.session import SessionRecord
from liftlog.models.exercise_log import ExerciseRecord
from liftlog.models.exercise_set import SetRecord
from liftlog.models.routine import RoutineRecord, RoutineExerciseRecord

__all__ = ["SessionRecord", "ExerciseRecord", "SetRecord", "RoutineRecord", "RoutineExerciseRecord"]
