"""
Streak Updater — advance or reset the user's StreakRecord.

Transition table (gap = day - last_goal_met_date, in calendar days)
-------------------------------------------------------------------
  goal not met             → current = 0              (last date kept)
  goal met, no last date   → current = 1, last = day
  goal met, gap == 1       → current += 1, last = day
  goal met, gap == 0       → unchanged                (same-day rewrite)
  goal met, gap > 1 or < 0 → current = 1, last = day
Then longest = max(longest, current).

The comparison is only ever against the stored last_goal_met_date. Editing
or deleting an earlier date does not rebuild the streak from history.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from goaltrack.models.streak import StreakRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakState:
    current_streak: int
    longest_streak: int
    last_goal_met_date: Optional[date]


def next_streak_state(state: StreakState, day: date, goal_met: bool) -> StreakState:
    """Pure transition; see the module docstring for the table."""
    current = state.current_streak
    last = state.last_goal_met_date

    if not goal_met:
        current = 0
    elif last is None:
        current, last = 1, day
    else:
        gap = (day - last).days
        if gap == 1:
            current, last = current + 1, day
        elif gap != 0:
            current, last = 1, day

    return StreakState(
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        last_goal_met_date=last,
    )


def _select_streak(db: Session, user_id: int, lock: bool) -> Optional[StreakRecord]:
    q = db.query(StreakRecord).filter(StreakRecord.user_id == user_id)
    if lock:
        q = q.with_for_update()
    return q.first()


def lock_streak(db: Session, user_id: int) -> StreakRecord:
    """
    Return the user's StreakRecord under a row lock, creating a zeroed one
    if it is missing. Taken first in every pipeline run so concurrent runs
    for the same user serialize on this row.
    """
    row = _select_streak(db, user_id, lock=True)
    if row is not None:
        return row

    logger.warning("No streak record for user %s; creating zero state", user_id)
    try:
        with db.begin_nested():
            row = StreakRecord(
                user_id=user_id,
                current_streak=0,
                longest_streak=0,
                last_goal_met_date=None,
            )
            db.add(row)
    except IntegrityError:
        # Another transaction created it first
        row = _select_streak(db, user_id, lock=True)
        if row is None:
            raise
    return row


def apply_streak(db: Session, user_id: int, day: date, goal_met: bool) -> StreakRecord:
    row = lock_streak(db, user_id)
    new = next_streak_state(
        StreakState(
            current_streak=row.current_streak,
            longest_streak=row.longest_streak,
            last_goal_met_date=row.last_goal_met_date,
        ),
        day,
        goal_met,
    )
    row.current_streak = new.current_streak
    row.longest_streak = new.longest_streak
    row.last_goal_met_date = new.last_goal_met_date
    db.flush()
    return row
