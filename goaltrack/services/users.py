"""
User profile access for the aggregation core.

The core only reads the two goal settings. create_user exists so a user
and its StreakRecord always come into being in the same transaction.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from sqlalchemy.orm import Session

from goaltrack.core.config import settings
from goaltrack.core.errors import UserNotFoundError
from goaltrack.models.streak import StreakRecord
from goaltrack.models.user import User


def create_user(
    db: Session,
    email: str,
    name: str,
    daily_goal_hours: Optional[Union[Decimal, float]] = None,
    weekly_goal_hours: Optional[Union[Decimal, float]] = None,
) -> User:
    if daily_goal_hours is None:
        daily_goal_hours = settings.DEFAULT_DAILY_GOAL_HOURS
    if weekly_goal_hours is None:
        weekly_goal_hours = settings.DEFAULT_WEEKLY_GOAL_HOURS

    user = User(
        email=email,
        name=name,
        daily_goal_hours=Decimal(str(daily_goal_hours)),
        weekly_goal_hours=Decimal(str(weekly_goal_hours)),
    )
    db.add(user)
    db.flush()  # get user.id
    db.add(StreakRecord(user_id=user.id, current_streak=0, longest_streak=0))
    db.commit()
    db.refresh(user)
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def get_daily_goal_hours(db: Session, user_id: int) -> Decimal:
    return get_user(db, user_id).daily_goal_hours


def get_weekly_goal_hours(db: Session, user_id: int) -> Decimal:
    return get_user(db, user_id).weekly_goal_hours
