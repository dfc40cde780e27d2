#!/usr/bin/env python3
"""
Instant coercion shared by the facade and every provider.

An instant is a ``datetime.datetime``. Callers may hand the facade dates,
datetimes, ISO strings, title strings ("October 15, 2023") or epoch seconds;
``to_instant`` normalizes all of them or raises ``InvalidInstantError``.
"""
import math
import re
from datetime import date, datetime
from typing import Optional

from datefallback.errors import InvalidInstantError


MONTHS_LONG = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

MONTHS_SHORT = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

TITLE_PATTERN = re.compile(r'([A-Za-z]+)\s+([0-9]{1,2}),\s+([0-9]{4})')


def parse_title_text(text: str) -> Optional[datetime]:
    """
    Parse "Month D, YYYY" into a datetime at midnight.

    Month names are matched case-insensitively against the English long
    names. Returns None when the text does not match or the day does not
    exist in that month.
    """
    match = TITLE_PATTERN.fullmatch(text.strip())
    if not match:
        return None

    month_name, day, year = match.groups()
    lowered = [name.lower() for name in MONTHS_LONG]
    if month_name.lower() not in lowered:
        return None

    try:
        return datetime(int(year), lowered.index(month_name.lower()) + 1, int(day))
    except ValueError:
        return None


def to_instant(value: object) -> datetime:
    """
    Coerce a date-like value into a datetime.

    Args:
        value: datetime, date, ISO-8601 string, title string, or epoch
            seconds (int/float)

    Returns:
        datetime (naive unless the input carried a time zone)

    Raises:
        InvalidInstantError: value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    # bool is an int subclass but never a timestamp
    if isinstance(value, bool):
        raise InvalidInstantError(f"Not a date: {value!r}")

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidInstantError(f"Not a finite timestamp: {value!r}")
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidInstantError(f"Timestamp out of range: {value!r}") from e

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidInstantError("Empty date string")

        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass

        parsed = parse_title_text(text)
        if parsed is not None:
            return parsed

        raise InvalidInstantError(f"Unrecognized date string: {value!r}")

    raise InvalidInstantError(f"Unsupported date type: {type(value).__name__}")


def is_instant(value: object) -> bool:
    """Return True if ``to_instant`` accepts the value."""
    try:
        to_instant(value)
    except InvalidInstantError:
        return False
    return True
