#!/usr/bin/env python3
"""
Daily note UID codec (``MM-DD-YYYY``).

Parsing is two-phase. The structural check accepts any day from 1 to 31.
The date is then built with rollover arithmetic ("February 30" becomes
"March 2") and the components are compared with the input. The comparison
is what rejects days that do not exist in the given month.
"""
import re
from datetime import datetime, timedelta
from typing import Optional


UID_PATTERN = re.compile(r'([0-9]{2})-([0-9]{2})-([0-9]{4})')

MIN_YEAR = 1900
MAX_YEAR = 3000


def construct_with_rollover(year: int, month: int, day: int) -> datetime:
    """Build a date where day overflow rolls into the following month."""
    return datetime(year, month, 1) + timedelta(days=day - 1)


def parse_uid(uid: object) -> Optional[datetime]:
    """
    Parse a daily note UID into a datetime at local midnight.

    Args:
        uid: Candidate string, e.g. "10-15-2023"

    Returns:
        datetime, or None if uid is not a valid UID
    """
    if not isinstance(uid, str) or not uid:
        return None

    match = UID_PATTERN.fullmatch(uid)
    if not match:
        return None

    month, day, year = (int(part) for part in match.groups())

    if month < 1 or month > 12:
        return None
    if day < 1 or day > 31:
        return None
    if year < MIN_YEAR or year > MAX_YEAR:
        return None

    candidate = construct_with_rollover(year, month, day)

    if (candidate.year, candidate.month, candidate.day) != (year, month, day):
        return None
    return candidate


def is_daily_note_uid(uid: object) -> bool:
    return parse_uid(uid) is not None
