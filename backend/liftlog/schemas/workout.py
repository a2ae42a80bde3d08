from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator

from liftlog.schemas.common import NameStr, NonNegFloat, NonNegInt, WeightUnit, new_id

class WorkoutSet(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    reps: NonNegInt
    weight: NonNegFloat
    unit: WeightUnit = WeightUnit.kg
    completed: bool = False

    @property
    def volume(self) -> float:
        return self.weight * self.reps

class ExerciseLog(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    name: NameStr
    # Performed order; duplicates allowed
    sets: list[WorkoutSet] = Field(default_factory=list)

class WorkoutSession(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    name: NameStr
    start_time: datetime
    end_time: datetime | None = None
    exercises: list[ExerciseLog] = Field(default_factory=list)
    routine_id: str | None = None

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time cannot be before start_time")
        return self

    @property
    def set_count(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

# ----- request / response payloads -----

class WorkoutStatus(str, Enum):
    active = "active"
    paused = "paused"
    finalized = "finalized"

class WorkoutStart(BaseModel):
    name: NameStr | None = None

class WorkoutRename(BaseModel):
    name: NameStr

class ExerciseCreate(BaseModel):
    name: NameStr
    weight: NonNegFloat = 20
    reps: NonNegInt = 10
    unit: WeightUnit = WeightUnit.kg

class SetUpdate(BaseModel):
    reps: NonNegInt | None = None
    weight: NonNegFloat | None = None
    unit: WeightUnit | None = None
    completed: bool | None = None

class ActiveWorkoutRead(BaseModel):
    status: WorkoutStatus
    elapsed_seconds: int
    elapsed_label: str
    session: WorkoutSession
