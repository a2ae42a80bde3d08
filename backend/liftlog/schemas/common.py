import uuid
from enum import Enum
from typing import Annotated
from pydantic import Field, StringConstraints

# Names: trimmed, non-empty, up to 120 chars
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
NonNegInt = Annotated[int, Field(ge=0)]
PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0, allow_inf_nan=False)]

def new_id() -> str:
    """Random 128-bit identifier, unique for all practical purposes."""
    return uuid.uuid4().hex

class WeightUnit(str, Enum):
    kg = "kg"
    lbs = "lbs"

_UNIT_ALIASES = {
    "kg": WeightUnit.kg,
    "kgs": WeightUnit.kg,
    "kilo": WeightUnit.kg,
    "kilos": WeightUnit.kg,
    "kilogram": WeightUnit.kg,
    "kilograms": WeightUnit.kg,
    "lb": WeightUnit.lbs,
    "lbs": WeightUnit.lbs,
    "pound": WeightUnit.lbs,
    "pounds": WeightUnit.lbs,
}

def coerce_unit(raw: object) -> WeightUnit:
    """Map a free-form unit string to a WeightUnit, falling back to kilograms."""
    if isinstance(raw, WeightUnit):
        return raw
    if not isinstance(raw, str):
        return WeightUnit.kg
    return _UNIT_ALIASES.get(raw.strip().lower().rstrip("."), WeightUnit.kg)
