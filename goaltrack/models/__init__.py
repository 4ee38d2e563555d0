from .user import User
from .work_session import WorkSession
from .daily_goal import DailyGoal
from .weekly_goal import WeeklyGoal
from .streak import StreakRecord

__all__ = [
    "User",
    "WorkSession",
    "DailyGoal",
    "WeeklyGoal",
    "StreakRecord",
]
