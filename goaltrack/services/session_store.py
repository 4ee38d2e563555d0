"""
Session Store — the reads and writes the core needs from work_sessions.

Public API
----------
upsert_session(db, user_id, day, ...)        -> WorkSession   (flush only)
delete_session(db, session)                  -> date          (flush only)
get_session_by_id(db, user_id, session_id)   -> WorkSession | None
get_session_by_date(db, user_id, day)        -> WorkSession | None
list_sessions(db, user_id, start, end)       -> list[WorkSession]
sum_duration_minutes(db, user_id, start, end) -> int
"""
from __future__ import annotations

from datetime import date, time
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from goaltrack.models.work_session import WorkSession, DEFAULT_CATEGORY


def get_session_by_id(db: Session, user_id: int, session_id: int) -> Optional[WorkSession]:
    return (
        db.query(WorkSession)
        .filter(WorkSession.id == session_id, WorkSession.user_id == user_id)
        .first()
    )


def get_session_by_date(db: Session, user_id: int, day: date) -> Optional[WorkSession]:
    return (
        db.query(WorkSession)
        .filter(WorkSession.user_id == user_id, WorkSession.day == day)
        .first()
    )


def list_sessions(
    db: Session,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[WorkSession]:
    """Sessions newest first; the range only applies when both ends are given."""
    q = db.query(WorkSession).filter(WorkSession.user_id == user_id)
    if start_date is not None and end_date is not None:
        q = q.filter(WorkSession.day.between(start_date, end_date))
    return q.order_by(WorkSession.day.desc(), WorkSession.created_at.desc()).all()


def sum_duration_minutes(db: Session, user_id: int, start_date: date, end_date: date) -> int:
    """Total minutes for the user's sessions in [start_date, end_date] inclusive."""
    total = (
        db.query(func.coalesce(func.sum(WorkSession.duration_minutes), 0))
        .filter(
            WorkSession.user_id == user_id,
            WorkSession.day.between(start_date, end_date),
        )
        .scalar()
    )
    return int(total or 0)


def upsert_session(
    db: Session,
    user_id: int,
    day: date,
    duration_minutes: int,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
) -> WorkSession:
    """Insert the session for (user_id, day) or overwrite every field of the existing one."""
    session = get_session_by_date(db, user_id, day)
    if session is None:
        session = WorkSession(user_id=user_id, day=day)
        db.add(session)

    session.start_time = start_time
    session.end_time = end_time
    session.duration_minutes = duration_minutes
    session.description = description
    session.category = category or DEFAULT_CATEGORY
    db.flush()
    return session


def delete_session(db: Session, session: WorkSession) -> date:
    """Remove the session and return the date it covered."""
    day = session.day
    db.delete(session)
    db.flush()
    return day
