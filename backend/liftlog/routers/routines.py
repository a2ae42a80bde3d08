from fastapi import APIRouter, Depends, status
from liftlog.deps.state import get_state, http_error
from liftlog.errors import LiftLogError
from liftlog.schemas.routine import Routine, RoutineCreate
from liftlog.schemas.workout import ActiveWorkoutRead
from liftlog.state import AppState

router = APIRouter(prefix="/routines", tags=["routines"])

@router.get("", response_model=list[Routine])
def list_routines(state: AppState = Depends(get_state)):
    return state.routines()

@router.post("", response_model=Routine, status_code=status.HTTP_201_CREATED)
def create_routine(payload: RoutineCreate, state: AppState = Depends(get_state)):
    return state.add_routine(payload)

@router.post("/presets", response_model=list[Routine])
def load_presets(state: AppState = Depends(get_state)):
    """Add the Push/Pull/Legs presets; already-present names are skipped."""
    return state.load_presets()

@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_routine(routine_id: str, state: AppState = Depends(get_state)):
    try:
        state.delete_routine(routine_id)
    except LiftLogError as e:
        raise http_error(e)

@router.post("/{routine_id}/start", response_model=ActiveWorkoutRead, status_code=status.HTTP_201_CREATED)
def start_routine(routine_id: str, state: AppState = Depends(get_state)):
    try:
        return state.start_routine(routine_id)
    except LiftLogError as e:
        raise http_error(e)
