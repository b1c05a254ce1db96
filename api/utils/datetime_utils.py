"""
Datetime utilities for ClientBook.
"""
from datetime import date, datetime, timezone
from typing import Optional


def make_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware (UTC if naive).

    Args:
        dt: A datetime object that may or may not have timezone info

    Returns:
        The same datetime with UTC timezone if it was naive,
        or the original timezone-aware datetime, or None if input was None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_date(value) -> Optional[date]:
    """Parse an ISO date ("YYYY-MM-DD") or pass through date objects."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Handle full timestamps like "2000-08-07T00:00:00+00:00"
    if "T" in value:
        return datetime.fromisoformat(value).date()
    return date.fromisoformat(value)


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO datetime string into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return make_aware(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return make_aware(datetime.fromisoformat(value.replace("Z", "+00:00")))


def _birthday_in_year(birthday: date, year: int) -> date:
    """Birthday for the given year; 29 Feb falls back to 28 Feb in non-leap years."""
    try:
        return birthday.replace(year=year)
    except ValueError:
        return date(year, 2, 28)


def next_birthday(birthday: date, today: date) -> date:
    """Next occurrence of the birthday on or after today."""
    candidate = _birthday_in_year(birthday, today.year)
    if candidate < today:
        candidate = _birthday_in_year(birthday, today.year + 1)
    return candidate


def days_until_birthday(birthday: date, today: date) -> int:
    """Days from today until the next birthday (0 if it is today)."""
    return (next_birthday(birthday, today) - today).days
