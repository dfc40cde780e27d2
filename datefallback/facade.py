#!/usr/bin/env python3
"""
Unified date facade.

The only interface callers use. Every operation delegates to the runtime's
active provider, read fresh on each call, and never raises. A fault
anywhere in coercion or formatting is recorded as a ``FACADE_ERROR`` event
and turned into a sentinel:

- format-style operations return "Invalid Date"
- parse-style operations return None
- predicates return False
- range operations return an empty list

Usage:
    from datefallback.facade import get_facade

    dates = get_facade()
    dates.format_date("2023-10-15")        # "October 15, 2023"
    dates.format_uid("2023-10-15")         # "10-15-2023"
    dates.get_day_with_offset(1, "2023-10-15").uid   # "10-16-2023"
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, TypeVar

from datefallback import uid as uid_codec
from datefallback.events import EventKind
from datefallback.fallback_provider import compact_text, display_text, title_text
from datefallback.instants import is_instant, parse_title_text, to_instant
from datefallback.runtime import FallbackRuntime, get_runtime


INVALID_DATE = "Invalid Date"
UNKNOWN_TIMESTAMP = "(unknown date)"
INVALID_TIMESTAMP = "(invalid date)"
TIMESTAMP_ERROR = "(error formatting date)"

DEFAULT_LOCALE_TAG = "en-US"

T = TypeVar("T")


@dataclass(frozen=True)
class DayInfo:
    """A day addressed relative to a base date."""
    uid: str
    title: str
    instant: datetime
    timestamp: float

    def as_dict(self) -> dict:
        return {
            "uid": self.uid,
            "title": self.title,
            "instant": self.instant.isoformat(),
            "timestamp": self.timestamp,
        }


class DateFacade:
    """
    Stable date API over whichever provider the runtime selected.

    Args:
        runtime: FallbackRuntime to read the active provider from
            (process-wide default when None)
    """

    def __init__(self, runtime: Optional[FallbackRuntime] = None):
        self.runtime = runtime or get_runtime()

    @property
    def provider(self):
        return self.runtime.active.provider

    def _guard(self, operation: str, sentinel: T, call: Callable[[], T], value: object = None) -> T:
        try:
            return call()
        except Exception as e:
            provider_name = self._safe_provider_name()
            self.runtime.events.record(
                EventKind.FACADE_ERROR,
                operation=operation,
                strategy=provider_name,
                error=f"{type(e).__name__}: {e}",
            )
            self.runtime.logger.warning(
                "Date facade operation failed",
                operation=operation,
                strategy=provider_name,
                value=repr(value),
                error=str(e),
            )
            return sentinel

    def _safe_provider_name(self) -> Optional[str]:
        try:
            return self.runtime.active.name
        except Exception:
            return None

    # Formatting

    def format_date(self, value: object) -> str:
        """Title form, e.g. "October 15, 2023"."""
        return self._guard("format_date", INVALID_DATE,
                           lambda: self.provider.format_date(to_instant(value)), value)

    def format_title(self, value: object) -> str:
        return self.format_date(value)

    def format_uid(self, value: object) -> str:
        """Daily note UID form, e.g. "10-15-2023"."""
        return self._guard("format_uid", INVALID_DATE,
                           lambda: self.provider.format_uid(to_instant(value)), value)

    def format_us_date(self, value: object) -> str:
        return self.format_uid(value)

    def format_display(self, value: object) -> str:
        """Title with 12-hour clock, e.g. "October 15, 2023 3:45pm"."""
        def call() -> str:
            instant = to_instant(value)
            return display_text(instant, self.provider.format_date(instant))
        return self._guard("format_display", INVALID_DATE, call, value)

    def format_compact(self, value: object) -> str:
        """Short form, e.g. "Oct 15, 23"."""
        return self._guard("format_compact", INVALID_DATE,
                           lambda: compact_text(to_instant(value)), value)

    def format_locale(self, value: object, locale_tag: str = DEFAULT_LOCALE_TAG) -> str:
        """
        Long date for a locale.

        Falls back to the English title if the provider cannot format for
        the locale; returns "Invalid Date" only when the value itself is not
        a date.
        """
        instant = self._guard("format_locale", None, lambda: to_instant(value), value)
        if instant is None:
            return INVALID_DATE

        return self._guard(
            "format_locale",
            title_text(instant),
            lambda: self.provider.format_locale(instant, locale_tag or DEFAULT_LOCALE_TAG),
            value,
        )

    def format_timestamp(self, value: object) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNKNOWN_TIMESTAMP

        instant = self._guard("format_timestamp", None, lambda: to_instant(value), value)
        if instant is None:
            return INVALID_TIMESTAMP

        result = self.format_display(instant)
        return TIMESTAMP_ERROR if result == INVALID_DATE else result

    # Parsing and validation

    def parse_uid(self, value: object) -> Optional[datetime]:
        return self._guard("parse_uid", None, lambda: uid_codec.parse_uid(value), value)

    def parse_title(self, value: object) -> Optional[datetime]:
        """Parse "October 15, 2023" (or an ISO date) into a datetime."""
        def call() -> Optional[datetime]:
            if not isinstance(value, str) or not value.strip():
                return None
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError:
                return parse_title_text(value)
        return self._guard("parse_title", None, call, value)

    def is_daily_note_uid(self, value: object) -> bool:
        return self.parse_uid(value) is not None

    def is_valid_date(self, value: object) -> bool:
        return self._guard("is_valid_date", False, lambda: is_instant(value), value)

    # Day arithmetic

    def get_today(self) -> datetime:
        return self._guard("get_today", datetime.now(), lambda: self.provider.now())

    def get_day_with_offset(self, offset: int = 0, base: object = None) -> Optional[DayInfo]:
        """
        Day ``offset`` days away from base (today when None).

        Returns:
            DayInfo, or None if base is not a date
        """
        def call() -> DayInfo:
            start = self.provider.now() if base is None else to_instant(base)
            target = start + timedelta(days=int(offset))
            return DayInfo(
                uid=self.provider.format_uid(target),
                title=self.provider.format_date(target),
                instant=target,
                timestamp=target.timestamp(),
            )
        return self._guard("get_day_with_offset", None, call, base)

    def get_date_range(self, start_offset: int, end_offset: int,
                       base: object = None) -> list[DayInfo]:
        """Days from start_offset to end_offset inclusive around base."""
        def call() -> list[DayInfo]:
            anchor = self.provider.now() if base is None else to_instant(base)
            days = []
            for offset in range(int(start_offset), int(end_offset) + 1):
                day = self.get_day_with_offset(offset, anchor)
                if day is not None:
                    days.append(day)
            return days
        return self._guard("get_date_range", [], call, base)


_facade: Optional[DateFacade] = None


def get_facade() -> DateFacade:
    """Facade over the process-wide runtime (lazy initialized)."""
    global _facade
    if _facade is None or _facade.runtime is not get_runtime():
        _facade = DateFacade(get_runtime())
    return _facade
