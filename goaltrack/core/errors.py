"""
Custom exception hierarchy for Goaltrack.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

Families
--------
  InputError     — rejected before any store write (422)
  NotFoundError  — unknown user / session (404)
  StoreError     — persistence failure, pipeline aborted (503)
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class GoaltrackException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InputError(GoaltrackException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INPUT_ERROR"


class MissingDateError(InputError):
    code = "MISSING_DATE"

    def __init__(self):
        super().__init__(message="Date is required.")


class InvalidDurationError(InputError):
    code = "INVALID_DURATION"

    def __init__(self, minutes: int | None):
        if minutes is None:
            message = "Provide duration_minutes or both start_time and end_time."
        else:
            message = f"Duration must be between 1 and 1440 minutes. Got {minutes}."
        super().__init__(message=message, details={"minutes": minutes})


class NotFoundError(GoaltrackException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: int):
        super().__init__(
            message=f"User {user_id} not found.",
            details={"user_id": user_id},
        )


class SessionNotFoundError(NotFoundError):
    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: int | None = None, day: date | None = None):
        details: dict[str, Any] = {}
        if session_id is not None:
            details["session_id"] = session_id
        if day is not None:
            details["day"] = str(day)
        super().__init__(message="Session not found.", details=details)


class StoreError(GoaltrackException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_ERROR"

    def __init__(self, message: str, step: str | None = None):
        super().__init__(
            message=message,
            details={"step": step} if step else {},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def goaltrack_exception_handler(request: Request, exc: GoaltrackException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
