"""
StreakRecord — one row per user, keyed by user_id.

Invariant: longest_streak >= current_streak >= 0.
The row is also the per-user lock taken by the aggregation pipeline.
"""
from datetime import datetime, date
from sqlalchemy import Integer, DateTime, Date, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from goaltrack.db.base import Base


class StreakRecord(Base):
    __tablename__ = "streaks"
    __table_args__ = (
        CheckConstraint("current_streak >= 0", name="ck_streak_current_non_negative"),
        CheckConstraint("longest_streak >= current_streak", name="ck_streak_longest_ge_current"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_goal_met_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<StreakRecord user_id={self.user_id} current={self.current_streak} "
            f"longest={self.longest_streak} last={self.last_goal_met_date}>"
        )
