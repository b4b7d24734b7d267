"""
Tests for the due-date display and edit helpers in display.py.
"""
import pytest
import sys
import os
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from display import editable_datetime, format_due_label, is_overdue, priority_color

# Wednesday
NOW = datetime(2025, 6, 18, 14, 0, tzinfo=config.TIMEZONE)


class TestDueLabel:

    def test_none(self):
        assert format_due_label(None, NOW) is None

    def test_phrase_unchanged(self):
        assert format_due_label("Next week", NOW) == "Next week"

    def test_today(self):
        assert format_due_label("2025-06-18T23:59:59+05:30", NOW) == "11:59 PM, Today"

    def test_tomorrow(self):
        assert format_due_label("2025-06-19T09:05:00+05:30", NOW) == "9:05 AM, Tomorrow"

    def test_same_year(self):
        assert format_due_label("2025-06-20T14:00:00+05:30", NOW) == "2:00 PM, 20 June"

    def test_other_year(self):
        assert format_due_label("2026-01-05T12:00:00+05:30", NOW) == "12:00 PM, 5 January 2026"


class TestOverdue:

    def test_past_day_is_overdue(self):
        assert is_overdue("2025-06-17T10:00:00+05:30", NOW)

    def test_earlier_today_is_not_overdue(self):
        assert not is_overdue("2025-06-18T09:00:00+05:30", NOW)

    def test_future_is_not_overdue(self):
        assert not is_overdue("2025-06-19T09:00:00+05:30", NOW)

    def test_phrase_is_never_overdue(self):
        assert not is_overdue("Monday", NOW)


class TestEditableDatetime:

    def test_tonight(self):
        assert editable_datetime("Tonight", NOW) == "2025-06-18T20:00"

    def test_tomorrow(self):
        assert editable_datetime("tomorrow", NOW) == "2025-06-19T09:00"

    def test_weekday_later_this_week(self):
        assert editable_datetime("Friday", NOW) == "2025-06-20T09:00"

    def test_same_weekday_moves_a_week(self):
        assert editable_datetime("Wednesday", NOW) == "2025-06-25T09:00"

    def test_timestamp(self):
        assert editable_datetime("2025-07-01T15:30:00+05:30", NOW) == "2025-07-01T15:30"

    @pytest.mark.parametrize("due", [None, "", "Next week", "Soon"])
    def test_no_calendar_meaning(self, due):
        assert editable_datetime(due, NOW) is None


class TestPriorityColor:

    def test_known(self):
        assert priority_color("P1").startswith("bg-red-100")

    def test_unknown(self):
        assert priority_color("P9") == priority_color("P4")
