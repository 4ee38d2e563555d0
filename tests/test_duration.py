"""
Unit tests for the Duration Resolver (no DB).
"""
import pytest
from datetime import time, timedelta, timezone

from goaltrack.core.errors import InvalidDurationError
from goaltrack.services.duration import (
    MAX_SESSION_MINUTES,
    require_positive_minutes,
    resolve_minutes,
)


class TestResolveMinutes:
    def test_explicit_minutes_win(self):
        assert resolve_minutes(45) == 45

    def test_explicit_minutes_ignore_inconsistent_times(self):
        assert resolve_minutes(30, time(9, 0), time(17, 0)) == 30

    def test_explicit_minutes_ignore_reversed_times(self):
        assert resolve_minutes(30, time(17, 0), time(9, 0)) == 30

    def test_start_end_difference(self):
        assert resolve_minutes(None, time(9, 0), time(11, 30)) == 150

    def test_zero_explicit_falls_back_to_times(self):
        assert resolve_minutes(0, time(8, 0), time(9, 0)) == 60

    def test_seconds_round_half_up(self):
        assert resolve_minutes(None, time(9, 0, 0), time(9, 0, 30)) == 1
        assert resolve_minutes(None, time(9, 0, 0), time(9, 0, 29)) == 0

    def test_end_before_start_is_negative(self):
        assert resolve_minutes(None, time(11, 0), time(10, 0)) == -60

    def test_equal_times_is_zero(self):
        assert resolve_minutes(None, time(10, 0), time(10, 0)) == 0

    def test_no_data_returns_none(self):
        assert resolve_minutes() is None
        assert resolve_minutes(None, time(9, 0), None) is None
        assert resolve_minutes(-5) is None

    def test_utc_offsets_are_ignored(self):
        cest = timezone(timedelta(hours=2))
        assert resolve_minutes(None, time(9, 0, tzinfo=cest), time(11, 0, tzinfo=timezone.utc)) == 120

    def test_mixed_aware_and_naive_times(self):
        assert resolve_minutes(None, time(9, 0, tzinfo=timezone.utc), time(11, 0)) == 120
        assert resolve_minutes(None, time(9, 0), time(8, 0, tzinfo=timezone.utc)) == -60


class TestRequirePositiveMinutes:
    def test_positive_passes(self):
        assert require_positive_minutes(1) == 1

    @pytest.mark.parametrize("value", [None, 0, -10])
    def test_rejected(self, value):
        with pytest.raises(InvalidDurationError):
            require_positive_minutes(value)

    def test_full_day_passes(self):
        assert require_positive_minutes(MAX_SESSION_MINUTES) == 1440

    def test_longer_than_a_day_rejected(self):
        with pytest.raises(InvalidDurationError) as excinfo:
            require_positive_minutes(MAX_SESSION_MINUTES + 1)
        assert excinfo.value.details == {"minutes": 1441}
