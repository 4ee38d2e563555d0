"""
DailyGoal — goal-met status for one user on one calendar date.

Written only by the Daily Aggregator. goal_hours is the user's daily goal
at the time the row was created and is never refreshed afterwards.
Rows outlive their session: a delete resets actual_hours to 0.
"""
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import (
    Integer, Boolean, Numeric, DateTime, Date, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from goaltrack.db.base import Base


class DailyGoal(Base):
    __tablename__ = "daily_goals"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_goal_user_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    goal_hours: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    actual_hours: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("0.00")
    )
    goal_met: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
