"""
Tests for the Daily and Weekly Aggregators (service layer, db fixture).

Covered:
  - goal-met threshold is inclusive
  - apply_daily is idempotent and goal_hours is a creation-time snapshot
  - week_bounds anchors on Monday; Sunday belongs to the preceding Monday
  - weekly totals cover Monday..Sunday inclusive and nothing outside it
"""
from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from goaltrack.models.daily_goal import DailyGoal
from goaltrack.services.daily_goal import apply_daily, minutes_to_hours
from goaltrack.services.session_store import sum_duration_minutes, upsert_session
from goaltrack.services.weekly_goal import apply_weekly, week_bounds

# 2026-02-16 is a Monday
_MONDAY = date(2026, 2, 16)
_SUNDAY = date(2026, 2, 22)


class TestDailyAggregator:
    def test_goal_met_when_hours_reach_goal(self, db, make_user):
        user = make_user(daily_goal_hours=2)
        row = apply_daily(db, user.id, _MONDAY, 120, user.daily_goal_hours)
        assert row.goal_met is True
        assert row.actual_hours == Decimal("2.00")
        assert row.goal_hours == Decimal("2.00")

    def test_goal_not_met_below_goal(self, db, make_user):
        user = make_user(daily_goal_hours=2)
        row = apply_daily(db, user.id, _MONDAY, 119, user.daily_goal_hours)
        assert row.goal_met is False

    def test_zero_goal_is_always_met(self, db, make_user):
        user = make_user(daily_goal_hours=0)
        row = apply_daily(db, user.id, _MONDAY, 0, user.daily_goal_hours)
        assert row.goal_met is True

    def test_idempotent(self, db, make_user):
        user = make_user(daily_goal_hours=2)
        first = apply_daily(db, user.id, _MONDAY, 150, 2)
        snapshot = (first.id, first.goal_hours, first.actual_hours, first.goal_met)
        second = apply_daily(db, user.id, _MONDAY, 150, 2)
        assert (second.id, second.goal_hours, second.actual_hours, second.goal_met) == snapshot
        count = (
            db.query(DailyGoal)
            .filter(DailyGoal.user_id == user.id, DailyGoal.day == _MONDAY)
            .count()
        )
        assert count == 1

    def test_goal_hours_frozen_on_update(self, db, make_user):
        user = make_user(daily_goal_hours=2)
        apply_daily(db, user.id, _MONDAY, 150, 2)
        row = apply_daily(db, user.id, _MONDAY, 150, 3)
        assert row.goal_hours == Decimal("2.00")
        # goal_met is evaluated against the goal passed in on this call
        assert row.goal_met is False

    def test_update_to_zero_keeps_row(self, db, make_user):
        user = make_user(daily_goal_hours=2)
        apply_daily(db, user.id, _MONDAY, 150, 2)
        row = apply_daily(db, user.id, _MONDAY, 0, 2)
        assert row.actual_hours == Decimal("0.00")
        assert row.goal_met is False

    def test_unrounded_hours_drive_goal_met(self, db, make_user):
        # 119 min = 1.98333h, stored as 1.98; goal 1.99 must not be met
        user = make_user(daily_goal_hours=Decimal("1.99"))
        row = apply_daily(db, user.id, _MONDAY, 119, user.daily_goal_hours)
        assert minutes_to_hours(119) < Decimal("1.99")
        assert row.goal_met is False


class TestWeekBounds:
    @pytest.mark.parametrize("offset", range(7))
    def test_every_day_maps_to_same_monday(self, offset):
        assert week_bounds(_MONDAY + timedelta(days=offset)) == (_MONDAY, _SUNDAY)

    def test_sunday_belongs_to_preceding_monday(self):
        assert week_bounds(_SUNDAY)[0] == _MONDAY

    def test_next_monday_starts_new_week(self):
        nxt = _SUNDAY + timedelta(days=1)
        assert week_bounds(nxt) == (nxt, nxt + timedelta(days=6))


class TestWeeklyAggregator:
    def _seed(self, db, user_id):
        upsert_session(db, user_id, _MONDAY - timedelta(days=1), 300)   # previous Sunday
        upsert_session(db, user_id, _MONDAY, 60)                         # first day
        upsert_session(db, user_id, _SUNDAY, 120)                        # last day
        upsert_session(db, user_id, _SUNDAY + timedelta(days=1), 600)   # next Monday

    def test_sum_covers_week_inclusive(self, db, make_user):
        user = make_user()
        self._seed(db, user.id)
        assert sum_duration_minutes(db, user.id, _MONDAY, _SUNDAY) == 180

    def test_weekly_total_and_goal(self, db, make_user):
        user = make_user(weekly_goal_hours=3)
        self._seed(db, user.id)
        row = apply_weekly(db, user.id, date(2026, 2, 18), user.weekly_goal_hours)
        assert row.week_start == _MONDAY
        assert row.week_end == _SUNDAY
        assert row.actual_hours == Decimal("3.00")
        assert row.goal_met is True

    def test_weekly_goal_not_met(self, db, make_user):
        user = make_user(weekly_goal_hours=10)
        self._seed(db, user.id)
        row = apply_weekly(db, user.id, _SUNDAY, user.weekly_goal_hours)
        assert row.goal_met is False

    def test_recomputed_in_full_and_goal_frozen(self, db, make_user):
        user = make_user(weekly_goal_hours=3)
        upsert_session(db, user.id, _MONDAY, 60)
        first = apply_weekly(db, user.id, _MONDAY, 3)
        assert first.actual_hours == Decimal("1.00")

        upsert_session(db, user.id, _MONDAY, 240)  # overwrite the same day
        second = apply_weekly(db, user.id, _MONDAY, 5)
        assert second.id == first.id
        assert second.actual_hours == Decimal("4.00")
        assert second.goal_hours == Decimal("3.00")
        assert second.goal_met is False

    def test_empty_week_is_zero(self, db, make_user):
        user = make_user()
        row = apply_weekly(db, user.id, _MONDAY, 10)
        assert row.actual_hours == Decimal("0.00")
        assert row.goal_met is False

    def test_other_users_sessions_excluded(self, db, make_user):
        a, b = make_user(), make_user()
        upsert_session(db, a.id, _MONDAY, 60)
        upsert_session(db, b.id, _MONDAY, 600)
        assert sum_duration_minutes(db, a.id, _MONDAY, _SUNDAY) == 60
