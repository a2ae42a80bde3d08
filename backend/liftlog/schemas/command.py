from enum import Enum
from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints, field_validator

from liftlog.schemas.common import NameStr, NonNegFloat, NonNegInt, WeightUnit, coerce_unit
from liftlog.schemas.workout import ExerciseLog

# Transcripts are short; reject blank ones before calling the service
CommandText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]

class CommandSource(str, Enum):
    voice = "voice"
    text = "text"

class CommandRequest(BaseModel):
    text: CommandText
    source: CommandSource = CommandSource.text

class CommandResult(BaseModel):
    applied: bool
    exercises: list[ExerciseLog] = Field(default_factory=list)

# ----- inference service response -----

class ParsedSet(BaseModel):
    reps: NonNegInt
    weight: NonNegFloat
    unit: WeightUnit = WeightUnit.kg

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, v):
        return coerce_unit(v)

class ParsedExercise(BaseModel):
    name: NameStr
    sets: list[ParsedSet]

class ParseResult(BaseModel):
    exercises: list[ParsedExercise]
