import logging

from fastapi import APIRouter, Depends, HTTPException, status
from liftlog.deps.state import get_interpreter, get_state, http_error
from liftlog.errors import LiftLogError
from liftlog.schemas.command import CommandRequest, CommandResult
from liftlog.schemas.workout import (
    ActiveWorkoutRead,
    ExerciseCreate,
    ExerciseLog,
    SetUpdate,
    WorkoutRename,
    WorkoutSession,
    WorkoutSet,
    WorkoutStart,
)
from liftlog.services.interpreter import CommandInterpreter
from liftlog.state import AppState

log = logging.getLogger(__name__)

router = APIRouter(prefix="/workout", tags=["workout"])

@router.get("", response_model=ActiveWorkoutRead)
def get_workout(state: AppState = Depends(get_state)):
    current = state.active()
    if current is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="no workout in progress")
    return current

@router.post("", response_model=ActiveWorkoutRead, status_code=status.HTTP_201_CREATED)
def start_workout(payload: WorkoutStart | None = None, state: AppState = Depends(get_state)):
    try:
        return state.start_workout(payload.name if payload else None)
    except LiftLogError as e:
        raise http_error(e)

@router.patch("", response_model=ActiveWorkoutRead)
def rename_workout(payload: WorkoutRename, state: AppState = Depends(get_state)):
    try:
        return state.rename_workout(payload.name)
    except LiftLogError as e:
        raise http_error(e)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def discard_workout(state: AppState = Depends(get_state)):
    try:
        state.discard_workout()
    except LiftLogError as e:
        raise http_error(e)

@router.post("/pause", response_model=ActiveWorkoutRead)
def pause_workout(state: AppState = Depends(get_state)):
    try:
        return state.pause_workout()
    except LiftLogError as e:
        raise http_error(e)

@router.post("/resume", response_model=ActiveWorkoutRead)
def resume_workout(state: AppState = Depends(get_state)):
    try:
        return state.resume_workout()
    except LiftLogError as e:
        raise http_error(e)

@router.post("/finish", response_model=WorkoutSession)
def finish_workout(state: AppState = Depends(get_state)):
    try:
        return state.finish_workout()
    except LiftLogError as e:
        raise http_error(e)

@router.post("/command", response_model=CommandResult)
async def interpret_command(
    payload: CommandRequest,
    state: AppState = Depends(get_state),
    interpreter: CommandInterpreter = Depends(get_interpreter),
):
    """Parse a voice transcript or typed command and append the exercises it describes."""
    try:
        added = await state.apply_command(interpreter, payload.text)
    except LiftLogError as e:
        raise http_error(e)
    log.info("command from %s added %d exercises", payload.source.value, len(added))
    return CommandResult(applied=bool(added), exercises=added)

@router.post("/exercises", response_model=ExerciseLog, status_code=status.HTTP_201_CREATED)
def add_exercise(payload: ExerciseCreate, state: AppState = Depends(get_state)):
    try:
        return state.add_exercise(payload.name, weight=payload.weight, reps=payload.reps, unit=payload.unit)
    except LiftLogError as e:
        raise http_error(e)

@router.delete("/exercises/{exercise_id}", response_model=ActiveWorkoutRead)
def remove_exercise(exercise_id: str, state: AppState = Depends(get_state)):
    try:
        return state.remove_exercise(exercise_id)
    except LiftLogError as e:
        raise http_error(e)

@router.post("/exercises/{exercise_id}/sets", response_model=WorkoutSet, status_code=status.HTTP_201_CREATED)
def add_set(exercise_id: str, state: AppState = Depends(get_state)):
    try:
        return state.add_set(exercise_id)
    except LiftLogError as e:
        raise http_error(e)

@router.patch("/exercises/{exercise_id}/sets/{set_id}", response_model=WorkoutSet)
def update_set(exercise_id: str, set_id: str, payload: SetUpdate, state: AppState = Depends(get_state)):
    try:
        return state.update_set(exercise_id, set_id, payload)
    except LiftLogError as e:
        raise http_error(e)

@router.post("/exercises/{exercise_id}/sets/{set_id}/toggle", response_model=WorkoutSet)
def toggle_set(exercise_id: str, set_id: str, state: AppState = Depends(get_state)):
    try:
        return state.toggle_set(exercise_id, set_id)
    except LiftLogError as e:
        raise http_error(e)

@router.delete("/exercises/{exercise_id}/sets/{set_id}", response_model=ActiveWorkoutRead)
def remove_set(exercise_id: str, set_id: str, state: AppState = Depends(get_state)):
    try:
        return state.remove_set(exercise_id, set_id)
    except LiftLogError as e:
        raise http_error(e)
