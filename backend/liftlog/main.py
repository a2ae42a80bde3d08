# liftlog/main.py
import time
import logging
import uuid
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from liftlog.deps.state import get_state
from liftlog.routers.dashboard import router as dashboard_router
from liftlog.routers.routines import router as routines_router
from liftlog.routers.sessions import router as sessions_router
from liftlog.routers.workout import router as workout_router
from liftlog.settings import get_settings
from liftlog.state import AppState

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("uvicorn")

app = FastAPI(
    title="LiftLog API",
    openapi_tags=[
        {"name": "workout", "description": "Workout in progress, manual and voice/text entry"},
        {"name": "sessions", "description": "Finished workout history"},
        {"name": "routines", "description": "Reusable routine templates"},
        {"name": "dashboard", "description": "History metrics"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "LiftLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz(state: AppState = Depends(get_state)):
    # Quick store sanity check
    try:
        state.store.ping()
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(workout_router)
app.include_router(sessions_router)
app.include_router(routines_router)
app.include_router(dashboard_router)
