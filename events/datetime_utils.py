# events/datetime_utils.py
"""
Centralized date handling for the scheduler.

Events are plain calendar dates (no time, no timezone); the grid inside
an event is naive local hours. Everything date-related goes through here.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Union

from django.utils import timezone

# An event covers exactly one week, both ends inclusive
EVENT_SPAN_DAYS = 7


def today() -> date:
    """Single source of truth for "today"."""
    return timezone.localdate()


def parse_date_input(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Normalize an incoming date to date-only.

    Accepts date objects, datetimes and ISO 8601 strings with or without
    a time part ("2024-01-01", "2024-01-01T00:00:00.000Z").
    Returns None if the value cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    return (end - start).days


def week_end_for(start: date) -> date:
    """End date of an event starting on `start`."""
    return start + timedelta(days=EVENT_SPAN_DAYS - 1)


def is_event_upcoming(event) -> bool:
    """Check if event hasn't started yet."""
    return event.start_date > today()


def is_event_past(event) -> bool:
    """Check if event has ended."""
    return event.end_date < today()


def event_phase(event) -> str:
    if is_event_upcoming(event):
        return "upcoming"
    if is_event_past(event):
        return "past"
    return "ongoing"
