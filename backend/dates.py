"""
Due-date normalization.

The completion model hands back a due date in one of three shapes: a weekday
name ("wednesday"), a vague phrase ("next week") or an ISO-like timestamp.
Phrases are kept as phrases; timestamps get their year reconciled against the
source text and a single reference instant, and are stamped with the fixed
timezone offset.
"""
import logging
import re
from datetime import datetime, tzinfo
from typing import Iterable, Optional

import config
from models import TaskRecord

logger = logging.getLogger(__name__)

WEEKDAYS = frozenset({
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
})

VAGUE_PHRASES = frozenset({
    "tonight",
    "next week",
    "soon",
    "this evening",
    "this afternoon",
    "this week",
})

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

TIME_PATTERNS = (
    re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:am|pm)\b", re.IGNORECASE),
    re.compile(r"\b(?:at|by)\s+\d{1,2}(?::\d{2})?\b", re.IGNORECASE),
)

DATE_PATTERNS = (
    # "June 20", "Jun 20th"
    re.compile(rf"\b{_MONTH}\s+\d{{1,2}}(?:st|nd|rd|th)?\b", re.IGNORECASE),
    # "20th June"
    re.compile(rf"\b\d{{1,2}}(?:st|nd|rd|th)?\s+{_MONTH}\b", re.IGNORECASE),
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b"),
)

ISO_TIMESTAMP_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


class InvalidDate(ValueError):
    """Raised when a timestamp candidate cannot be read as a calendar date."""


# Lexical classifiers

def is_vague_phrase(text: str) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in VAGUE_PHRASES)


def is_weekday(text: str) -> bool:
    return text.strip().lower() in WEEKDAYS


def has_explicit_time(text: str) -> bool:
    return any(pattern.search(text) for pattern in TIME_PATTERNS)


def has_explicit_date(text: str) -> bool:
    return any(pattern.search(text) for pattern in DATE_PATTERNS)


def capitalize_phrase(text: str) -> str:
    """Lowercase the phrase, then uppercase only its first character."""
    lowered = text.lower()
    return lowered[:1].upper() + lowered[1:]


# Timestamp resolution

def _with_year(moment: datetime, year: int) -> datetime:
    """Move a datetime into another year, clamping Feb 29 to Feb 28."""
    try:
        return moment.replace(year=year)
    except ValueError:
        return moment.replace(year=year, day=28)


def format_timestamp(moment: datetime, tz: tzinfo = config.TIMEZONE) -> str:
    local = moment.astimezone(tz)
    offset = local.strftime("%z")
    return f"{local.strftime('%Y-%m-%dT%H:%M:%S')}{offset[:3]}:{offset[3:]}"


def resolve_timestamp(
    candidate: str,
    source_text: str,
    reference: datetime,
    tz: tzinfo = config.TIMEZONE,
) -> str:
    """
    Turn an ISO-like candidate into a canonical timestamp in the fixed timezone.

    A year typed literally in source_text is trusted as-is, even when it lies
    in the past. Otherwise the reference year is used, and the result is pushed
    one year forward if it would land before the reference instant, unless the
    text talks about "today". Time of day is never altered.
    """
    try:
        parsed = datetime.fromisoformat(candidate)
    except (TypeError, ValueError) as e:
        raise InvalidDate(f"Invalid date format received: {candidate!r}") from e

    # The year as written in the candidate, before any offset conversion
    explicit_year = str(parsed.year) in source_text

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    else:
        parsed = parsed.astimezone(tz)

    now = reference.astimezone(tz)

    if not explicit_year:
        original = parsed
        parsed = _with_year(original, now.year)
        if parsed < now and "today" not in source_text.lower():
            parsed = _with_year(original, now.year + 1)

    return format_timestamp(parsed, tz)


# Per-record normalization

def normalize_due_date(
    due_date: Optional[str],
    source_text: str,
    reference: datetime,
    tz: tzinfo = config.TIMEZONE,
) -> Optional[str]:
    if due_date is None:
        return None

    # Phrases are classified before any parse is attempted
    if is_weekday(due_date) or is_vague_phrase(due_date):
        return capitalize_phrase(due_date.strip())

    if ISO_TIMESTAMP_PREFIX.match(due_date):
        try:
            return resolve_timestamp(due_date, source_text, reference, tz)
        except InvalidDate as e:
            logger.warning("%s", e)
            return None

    if not due_date.strip():
        return None
    return capitalize_phrase(due_date.strip())


def normalize_task(
    task: TaskRecord,
    source_text: str,
    reference: datetime,
    tz: tzinfo = config.TIMEZONE,
) -> TaskRecord:
    """Return a copy of task with its due date in canonical form."""
    due_date = normalize_due_date(task.due_date, source_text, reference, tz)
    if due_date == task.due_date:
        return task
    return task.model_copy(update={"due_date": due_date})


def normalize_tasks(
    tasks: Iterable[TaskRecord],
    source_text: str,
    reference: datetime,
    tz: tzinfo = config.TIMEZONE,
) -> list[TaskRecord]:
    return [normalize_task(task, source_text, reference, tz) for task in tasks]
