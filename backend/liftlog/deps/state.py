# liftlog/deps/state.py
from functools import lru_cache

from fastapi import HTTPException, status

from liftlog.errors import (
    CommandInFlightError,
    EmptyWorkoutError,
    LiftLogError,
    NoActiveWorkoutError,
    NotFoundError,
    WorkoutActiveError,
    WorkoutFinalizedError,
)
from liftlog.services.interpreter import CommandInterpreter
from liftlog.settings import get_settings
from liftlog.state import AppState
from liftlog.store import build_store

@lru_cache
def get_state() -> AppState:
    s = get_settings()
    state = AppState(build_store(s), default_workout_name=s.DEFAULT_WORKOUT_NAME)
    if s.SEED_SAMPLE_DATA:
        state.seed_sample_data()
    return state

@lru_cache
def get_interpreter() -> CommandInterpreter:
    return CommandInterpreter.from_settings(get_settings())

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NoActiveWorkoutError, status.HTTP_404_NOT_FOUND),
    (WorkoutActiveError, status.HTTP_409_CONFLICT),
    (WorkoutFinalizedError, status.HTTP_409_CONFLICT),
    (CommandInFlightError, status.HTTP_409_CONFLICT),
    (EmptyWorkoutError, status.HTTP_400_BAD_REQUEST),
)

def http_error(exc: LiftLogError) -> HTTPException:
    """Translate a domain error into the HTTPException the routers raise."""
    for cls, code in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
