"""
Work sessions router.

GET    /users/{user_id}/sessions                 — list (optional date range)
GET    /users/{user_id}/sessions/date/{day}      — session for one date
POST   /users/{user_id}/sessions                 — create or overwrite by date
PUT    /users/{user_id}/sessions/{session_id}    — update by id
DELETE /users/{user_id}/sessions/{session_id}    — delete by id

Every mutation runs the aggregation pipeline in the same transaction.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from goaltrack.core.errors import SessionNotFoundError
from goaltrack.db.base import get_db
from goaltrack.models.work_session import WorkSession
from goaltrack.routers.streaks import daily_to_response, streak_to_response, weekly_to_response
from goaltrack.schemas.common import ErrorResponse
from goaltrack.schemas.sessions import (
    SessionDeleteResponse,
    SessionRequest,
    SessionResponse,
    SessionSaveResponse,
    SessionUpdateRequest,
)
from goaltrack.services import session_store
from goaltrack.services.pipeline import (
    PipelineResult,
    SessionInput,
    remove_session,
    save_session,
    update_session,
)
from goaltrack.services.users import get_user

router = APIRouter(prefix="/users/{user_id}/sessions", tags=["sessions"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _session_to_response(s: WorkSession) -> SessionResponse:
    return SessionResponse(
        id=s.id,
        day=str(s.day),
        start_time=s.start_time.isoformat() if s.start_time else None,
        end_time=s.end_time.isoformat() if s.end_time else None,
        duration_minutes=s.duration_minutes,
        description=s.description,
        category=s.category,
        created_at=s.created_at.isoformat() if s.created_at else "",
        updated_at=s.updated_at.isoformat() if s.updated_at else "",
    )


def _save_response(message: str, s: WorkSession, result: PipelineResult) -> SessionSaveResponse:
    return SessionSaveResponse(
        message=message,
        session=_session_to_response(s),
        daily_goal=daily_to_response(result.daily),
        weekly_goal=weekly_to_response(result.weekly),
        streak=streak_to_response(result.streak),
    )


def _to_input(payload: SessionUpdateRequest, day: Optional[date] = None) -> SessionInput:
    return SessionInput(
        day=day,
        duration_minutes=payload.duration_minutes,
        start_time=payload.start_time,
        end_time=payload.end_time,
        description=payload.description,
        category=payload.category,
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[SessionResponse],
    summary="List a user's sessions, newest first",
)
def list_sessions(
    user_id: int,
    start_date: Optional[date] = Query(default=None, description="Inclusive range start."),
    end_date: Optional[date] = Query(default=None, description="Inclusive range end."),
    db: Session = Depends(get_db),
):
    """The range is applied only when both `start_date` and `end_date` are given."""
    get_user(db, user_id)
    items = session_store.list_sessions(db, user_id, start_date, end_date)
    return [_session_to_response(s) for s in items]


@router.get(
    "/date/{day}",
    response_model=SessionResponse,
    summary="Session for a specific date",
    responses={404: {"description": "No session on that date."}},
)
def get_session_for_date(user_id: int, day: date, db: Session = Depends(get_db)):
    get_user(db, user_id)
    s = session_store.get_session_by_date(db, user_id, day)
    if s is None:
        raise SessionNotFoundError(day=day)
    return _session_to_response(s)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=SessionSaveResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create or overwrite the session for a date",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown user."},
        422: {"model": ErrorResponse, "description": "Missing date or non-positive duration."},
        503: {"model": ErrorResponse, "description": "Store failure; nothing was applied."},
    },
)
def create_session(user_id: int, payload: SessionRequest, db: Session = Depends(get_db)):
    """
    Save the session for `day` (one per user per date: a second POST for the
    same date overwrites the first), then recompute that date's daily goal,
    its week's weekly goal, and the user's streak.
    """
    s, result = save_session(db, user_id, _to_input(payload, payload.day))
    return _save_response("Session saved successfully", s, result)


@router.put(
    "/{session_id}",
    response_model=SessionSaveResponse,
    summary="Update a session by id",
    responses={404: {"description": "Unknown user or session."}},
)
def edit_session(
    user_id: int,
    session_id: int,
    payload: SessionUpdateRequest,
    db: Session = Depends(get_db),
):
    s, result = update_session(db, user_id, session_id, _to_input(payload))
    return _save_response("Session updated successfully", s, result)


@router.delete(
    "/{session_id}",
    response_model=SessionDeleteResponse,
    summary="Delete a session by id",
    responses={404: {"description": "Unknown user or session."}},
)
def delete_session(user_id: int, session_id: int, db: Session = Depends(get_db)):
    """
    Delete the session and rerun the pipeline for its date with zero minutes.
    The daily goal row is kept with actual_hours reset to 0.
    """
    result = remove_session(db, user_id, session_id)
    return SessionDeleteResponse(
        message="Session deleted successfully",
        daily_goal=daily_to_response(result.daily),
        weekly_goal=weekly_to_response(result.weekly),
        streak=streak_to_response(result.streak),
    )
