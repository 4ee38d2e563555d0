"""
WeeklyGoal — goal-met status for one user over a Monday..Sunday week.

Recomputed in full from work_sessions on every trigger. Same
creation-time snapshot rule for goal_hours as DailyGoal.
"""
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import (
    Integer, Boolean, Numeric, DateTime, Date, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from goaltrack.db.base import Base


class WeeklyGoal(Base):
    __tablename__ = "weekly_goals"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_weekly_goal_user_week"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_start: Mapped[date] = mapped_column(
        Date, nullable=False, index=True, comment="Monday of the week"
    )
    week_end: Mapped[date] = mapped_column(
        Date, nullable=False, comment="Sunday of the week"
    )
    goal_hours: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    actual_hours: Mapped[Decimal] = mapped_column(
        Numeric(6, 2), nullable=False, default=Decimal("0.00")
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
