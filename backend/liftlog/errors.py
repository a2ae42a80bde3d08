"""Domain errors raised by the workout state and mapped to HTTP by the routers."""


class LiftLogError(Exception):
    """Base class for expected, recoverable domain failures."""


class NotFoundError(LiftLogError, LookupError):
    def __init__(self, kind: str, ident: str):
        super().__init__(f"{kind} not found: {ident}")
        self.kind = kind
        self.ident = ident


class NoActiveWorkoutError(LiftLogError):
    def __init__(self):
        super().__init__("no workout in progress")


class WorkoutActiveError(LiftLogError):
    def __init__(self):
        super().__init__("a workout is already in progress")


class WorkoutFinalizedError(LiftLogError):
    def __init__(self):
        super().__init__("workout already finished")


class EmptyWorkoutError(LiftLogError, ValueError):
    def __init__(self):
        super().__init__("cannot finish a workout with no exercises")


class CommandInFlightError(LiftLogError):
    def __init__(self):
        super().__init__("a command is already being interpreted")


class InferenceError(LiftLogError):
    """The inference service could not produce a response."""
