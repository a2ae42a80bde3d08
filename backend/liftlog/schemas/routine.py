from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from liftlog.schemas.common import NameStr, PosInt, new_id

class MeasureType(str, Enum):
    """What RoutineExercise.reps counts: repetitions, or seconds for holds like a plank."""
    reps = "reps"
    seconds = "seconds"

class RoutineExercise(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    name: NameStr
    sets: PosInt
    reps: PosInt
    measure: MeasureType = MeasureType.reps

class Routine(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    name: NameStr
    exercises: list[RoutineExercise] = Field(default_factory=list)
    last_performed: datetime | None = None

class RoutineExerciseCreate(BaseModel):
    name: NameStr
    sets: PosInt = 3
    reps: PosInt = 10
    measure: MeasureType = MeasureType.reps

class RoutineCreate(BaseModel):
    name: NameStr
    exercises: list[RoutineExerciseCreate] = Field(min_length=1)
