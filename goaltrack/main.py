import logging
import sys

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from goaltrack import __version__
from goaltrack.db.base import get_db
from goaltrack.core.config import settings
from goaltrack.routers import sessions as sessions_router
from goaltrack.routers import streaks as streaks_router
from goaltrack.core.errors import (
    GoaltrackException,
    goaltrack_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

# --- Logging: stdout only, gunicorn/uvicorn capture it ---
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Goaltrack API",
    description=(
        "**Work sessions → daily goals, weekly goals and streaks**\n\n"
        "Every session write or delete recomputes that date's daily goal, "
        "its Monday–Sunday weekly goal, and the user's streak in one transaction.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(GoaltrackException, goaltrack_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(sessions_router.router)
app.include_router(streaks_router.router)

logger.info("Goaltrack %s starting (env=%s)", __version__, settings.APP_ENV)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception:
        logger.warning("Health check: database unreachable", exc_info=True)
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
