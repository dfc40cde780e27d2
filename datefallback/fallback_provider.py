#!/usr/bin/env python3
"""
Pure fallback provider.

Zero-dependency formatting built from integer fields and month-name tables.
This provider is always available and its initialization cannot fail, which
is what guarantees the runtime always has an active provider.

The module-level helpers are shared by other providers and by the facade
for the formats that do not vary between backends (display, compact).
"""

from datetime import datetime
from typing import Optional

from datefallback.base_provider import DateProvider, InitResult, ProviderKind
from datefallback.instants import MONTHS_LONG, MONTHS_SHORT


def title_text(instant: datetime) -> str:
    """Title form, e.g. "October 15, 2023" (day not zero-padded)."""
    return f"{MONTHS_LONG[instant.month - 1]} {instant.day}, {instant.year}"


def uid_text(instant: datetime) -> str:
    """Daily note UID form, e.g. "10-15-2023"."""
    return f"{instant.month:02d}-{instant.day:02d}-{instant.year:04d}"


def clock_text(instant: datetime) -> str:
    """12-hour clock with lowercase suffix, e.g. "3:45pm", "12:05am"."""
    hours = instant.hour
    suffix = "pm" if hours >= 12 else "am"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{instant.minute:02d}{suffix}"


def display_text(instant: datetime, title: Optional[str] = None) -> str:
    """Title plus clock, e.g. "October 15, 2023 3:45pm"."""
    return f"{title or title_text(instant)} {clock_text(instant)}"


def compact_text(instant: datetime) -> str:
    """Short form, e.g. "Oct 15, 23"."""
    return f"{MONTHS_SHORT[instant.month - 1]} {instant.day}, {instant.year % 100:02d}"


class PureFallbackProvider(DateProvider):
    """Always-available provider with no dependencies."""

    name = "fallback"
    kind = ProviderKind.PURE_FALLBACK
    default_priority = 4
    guaranteed = True

    def is_available(self) -> bool:
        return True

    def initialize(self) -> InitResult:
        return InitResult.ok()

    def format_date(self, instant: datetime) -> str:
        return title_text(instant)

    def format_uid(self, instant: datetime) -> str:
        return uid_text(instant)
