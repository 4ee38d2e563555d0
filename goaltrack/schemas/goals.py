"""
Derived-state schemas.

GET /users/{user_id}/streak               → StreakResponse
GET /users/{user_id}/streak/daily-goals   → list[DailyGoalResponse]
GET /users/{user_id}/streak/weekly-goals  → list[WeeklyGoalResponse]
GET /users/{user_id}/streak/stats         → StreakStatsResponse
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class StreakResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int = Field(description="Consecutive goal-met days ending at last_goal_met_date.")
    longest_streak: int = Field(description="Highest current_streak ever reached.")
    last_goal_met_date: Optional[str] = Field(
        default=None, description="Most recent date recorded as goal-met."
    )


class DailyGoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: str
    goal_hours: float = Field(description="Daily goal when this row was first written.")
    actual_hours: float
    goal_met: bool


class WeeklyGoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week_start: str = Field(description="Monday of the week.")
    week_end: str = Field(description="Sunday of the week.")
    goal_hours: float = Field(description="Weekly goal when this row was first written.")
    actual_hours: float
    goal_met: bool


class StatsStreak(BaseModel):
    current: int
    longest: int
    last_goal_met_date: Optional[str] = None


class StatsPeriod(BaseModel):
    days: int
    start_date: str
    end_date: str


class StatsDaily(BaseModel):
    total_days: int
    days_goal_met: int
    success_rate: float = Field(description="Percentage of days with goal met.")
    total_hours: float
    average_hours_per_day: float


class StatsWeekly(BaseModel):
    total_weeks: int
    weeks_goal_met: int
    success_rate: float = Field(description="Percentage of weeks with goal met.")


class StreakStatsResponse(BaseModel):
    streak: StatsStreak
    period: StatsPeriod
    daily: StatsDaily
    weekly: StatsWeekly
