"""Calendar-day helpers; day keys are ``YYYY-MM-DD`` strings in local time."""

import re
from datetime import date, timedelta

_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_date_key(day: date) -> str:
    return day.isoformat()


def parse_date_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key, raising ``ValueError`` for anything else."""
    if not isinstance(key, str) or not _DATE_KEY_RE.match(key):
        raise ValueError(f"Date must use the YYYY-MM-DD format: {key!r}")
    return date.fromisoformat(key)


def validate_date_key(key: str) -> tuple[bool, str | None]:
    """Return ``(is_valid, message)`` for a day key."""
    try:
        parse_date_key(key)
    except ValueError as e:
        return False, str(e)
    return True, None


def days_between(start: str, end: str) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (parse_date_key(end) - parse_date_key(start)).days


def recent_days(end: date, count: int) -> list[date]:
    """The ``count`` days ending at ``end``, oldest first."""
    return [end - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
