"""
Tests for error handling: the exception classes and the structured
`{code, message, details}` envelope.
"""
import pytest
from datetime import date

from goaltrack.core.errors import (
    GoaltrackException,
    InputError,
    InvalidDurationError,
    MissingDateError,
    NotFoundError,
    SessionNotFoundError,
    StoreError,
    UserNotFoundError,
)


class TestExceptionClasses:
    def test_missing_date(self):
        err = MissingDateError()
        assert isinstance(err, InputError)
        assert err.http_status == 422
        assert err.code == "MISSING_DATE"
        assert "details" not in err.to_dict()

    def test_invalid_duration_with_value(self):
        err = InvalidDurationError(-60)
        assert err.http_status == 422
        assert err.code == "INVALID_DURATION"
        assert "-60" in err.message
        assert err.to_dict()["details"]["minutes"] == -60

    def test_invalid_duration_without_value(self):
        err = InvalidDurationError(None)
        assert "start_time" in err.message

    def test_user_not_found(self):
        err = UserNotFoundError(7)
        assert isinstance(err, NotFoundError)
        assert err.http_status == 404
        assert err.code == "USER_NOT_FOUND"
        assert err.details == {"user_id": 7}

    def test_session_not_found_by_date(self):
        err = SessionNotFoundError(day=date(2026, 2, 20))
        assert err.code == "SESSION_NOT_FOUND"
        assert err.details == {"day": "2026-02-20"}

    def test_session_not_found_by_id(self):
        err = SessionNotFoundError(session_id=3)
        assert err.details == {"session_id": 3}

    def test_store_error(self):
        err = StoreError("Store failure during weekly.", step="weekly")
        assert err.http_status == 503
        assert err.code == "STORE_ERROR"
        assert err.to_dict()["details"] == {"step": "weekly"}

    @pytest.mark.parametrize(
        "err",
        [MissingDateError(), UserNotFoundError(1), StoreError("x")],
    )
    def test_all_share_base(self, err):
        assert isinstance(err, GoaltrackException)
        d = err.to_dict()
        assert set(d) >= {"code", "message"}


class TestErrorEnvelope:
    def test_not_found_envelope(self, client):
        r = client.get("/users/555555/streak")
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "USER_NOT_FOUND"
        assert body["message"] == "User 555555 not found."
        assert body["details"] == {"user_id": 555555}

    def test_validation_envelope_lists_fields(self, client, make_user):
        user = make_user()
        r = client.post(
            f"/users/{user.id}/sessions",
            json={"day": "2026-05-04", "duration_minutes": "lots"},
        )
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = [e["field"] for e in body["details"]["errors"]]
        assert "duration_minutes" in fields
