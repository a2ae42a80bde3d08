from fastapi import APIRouter, Depends, Query
from liftlog.deps.state import get_state, http_error
from liftlog.errors import NotFoundError
from liftlog.schemas.workout import WorkoutSession
from liftlog.state import AppState

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.get("", response_model=list[WorkoutSession])
def list_sessions(
    state: AppState = Depends(get_state),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    # most recent first
    return state.history(limit=limit, offset=offset)

@router.get("/{session_id}", response_model=WorkoutSession)
def get_session(session_id: str, state: AppState = Depends(get_state)):
    try:
        return state.get_session(session_id)
    except NotFoundError as e:
        raise http_error(e)
