from fastapi import APIRouter, Depends
from liftlog.deps.state import get_state
from liftlog.schemas.stats import DashboardStats
from liftlog.state import AppState

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("", response_model=DashboardStats)
def dashboard(state: AppState = Depends(get_state)):
    return state.dashboard()
