"""
Work session request / response schemas.

POST /users/{user_id}/sessions               → SessionRequest → SessionSaveResponse
PUT  /users/{user_id}/sessions/{session_id}  → SessionUpdateRequest → SessionSaveResponse
GET  /users/{user_id}/sessions               → list[SessionResponse]
"""
from __future__ import annotations

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from goaltrack.schemas.goals import DailyGoalResponse, StreakResponse, WeeklyGoalResponse


class SessionUpdateRequest(BaseModel):
    """Fields of a work session. Duration comes from duration_minutes or start/end."""

    start_time: Optional[time] = Field(
        default=None,
        description="Time of day the session started (HH:MM[:SS]).",
        examples=["09:00"],
    )
    end_time: Optional[time] = Field(
        default=None,
        description="Time of day the session ended. Must be after start_time.",
        examples=["11:30"],
    )
    duration_minutes: Optional[int] = Field(
        default=None,
        description="Explicit length in minutes (at most 1440). When positive, start/end are ignored.",
        examples=[150],
    )
    description: Optional[str] = Field(
        default=None,
        max_length=10_000,
        description="Free-text notes.",
    )
    category: Optional[str] = Field(
        default=None,
        max_length=64,
        description='Session category. Defaults to "study".',
        examples=["study"],
    )

    @field_validator("description", "category", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class SessionRequest(SessionUpdateRequest):
    """A session for one calendar date; overwrites any existing session that day."""

    day: Optional[date] = Field(
        default=None,
        description="ISO date the session belongs to. Required.",
        examples=["2026-02-20"],
    )


class SessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day: str = Field(description="ISO date of the session.")
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: int
    description: Optional[str] = None
    category: str
    created_at: str
    updated_at: str


class SessionSaveResponse(BaseModel):
    """Saved session plus the rollups the pipeline produced for its date."""
    message: str
    session: SessionResponse
    daily_goal: DailyGoalResponse
    weekly_goal: WeeklyGoalResponse
    streak: StreakResponse


class SessionDeleteResponse(BaseModel):
    message: str
    daily_goal: DailyGoalResponse
    weekly_goal: WeeklyGoalResponse
    streak: StreakResponse
