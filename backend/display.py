"""
Helpers for showing and editing due dates in the task list.

These follow the task card and edit form conventions (8 PM for "tonight",
9 AM for "tomorrow" and weekdays) and are kept separate from the storage
canonicalization in dates.py, which never turns phrases into dates.

No route serves these; they are a library for clients rendering the task
list (the web UI, or any consumer of /parse results).
"""
from datetime import datetime, timedelta, tzinfo
from typing import Optional

import config
from dates import ISO_TIMESTAMP_PREFIX

WEEKDAY_INDEX = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

PRIORITY_COLORS = {
    "P1": "bg-red-100 text-red-800 border-red-200",
    "P2": "bg-orange-100 text-orange-800 border-orange-200",
    "P3": "bg-blue-100 text-blue-800 border-blue-200",
    "P4": "bg-gray-100 text-gray-800 border-gray-200",
}
DEFAULT_PRIORITY_COLOR = "bg-gray-100 text-gray-800 border-gray-200"


def _parse_timestamp(due: Optional[str], tz: tzinfo) -> Optional[datetime]:
    if not due or not ISO_TIMESTAMP_PREFIX.match(due):
        return None
    try:
        parsed = datetime.fromisoformat(due)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.minute:02d} {'AM' if moment.hour < 12 else 'PM'}"


def format_due_label(due: Optional[str], now: datetime, tz: tzinfo = config.TIMEZONE) -> Optional[str]:
    """Label for a due date: phrases as-is, timestamps as '3:00 PM, Tomorrow' or '3:00 PM, 20 June'."""
    if not due:
        return None
    moment = _parse_timestamp(due, tz)
    if moment is None:
        return due

    today = now.astimezone(tz).date()
    if moment.date() == today:
        return f"{_clock(moment)}, Today"
    if moment.date() == today + timedelta(days=1):
        return f"{_clock(moment)}, Tomorrow"
    if moment.year == today.year:
        return f"{_clock(moment)}, {moment.day} {moment:%B}"
    return f"{_clock(moment)}, {moment.day} {moment:%B %Y}"


def is_overdue(due: Optional[str], now: datetime, tz: tzinfo = config.TIMEZONE) -> bool:
    moment = _parse_timestamp(due, tz)
    if moment is None:
        return False
    current = now.astimezone(tz)
    return moment < current and moment.date() != current.date()


def editable_datetime(due: Optional[str], now: datetime, tz: tzinfo = config.TIMEZONE) -> Optional[str]:
    """
    Value for a YYYY-MM-DDTHH:MM input field.

    Returns None for phrases that have no obvious calendar meaning
    ("next week", "soon"), leaving the field empty for the user to fill in.
    """
    if not due:
        return None

    moment = _parse_timestamp(due, tz)
    if moment is not None:
        return moment.strftime("%Y-%m-%dT%H:%M")

    today = now.astimezone(tz).replace(hour=0, minute=0, second=0, microsecond=0)
    phrase = due.strip().lower()

    if phrase == "tonight":
        moment = today.replace(hour=20)
    elif phrase == "tomorrow":
        moment = (today + timedelta(days=1)).replace(hour=9)
    elif phrase in WEEKDAY_INDEX:
        days_ahead = (WEEKDAY_INDEX[phrase] - today.weekday()) % 7 or 7
        moment = (today + timedelta(days=days_ahead)).replace(hour=9)
    else:
        return None
    return moment.strftime("%Y-%m-%dT%H:%M")


def priority_color(priority: str) -> str:
    return PRIORITY_COLORS.get(priority, DEFAULT_PRIORITY_COLOR)
