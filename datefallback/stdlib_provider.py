#!/usr/bin/env python3
"""
Standard library provider.

Uses ``datetime.strftime`` for month names and ``zoneinfo`` for an optional
configured time zone. strftime month names follow the process C locale, so
initialization refuses to activate when they are not English; titles are
record keys and must not change with the host locale.
"""

from datetime import datetime
from typing import Optional

from datefallback.base_provider import DateProvider, InitResult, ProviderKind, module_available


SMOKE_DATE = datetime(2023, 10, 15)


class StandardLibraryProvider(DateProvider):
    """strftime/zoneinfo provider."""

    name = "stdlib"
    kind = ProviderKind.STANDARD_LIBRARY
    default_priority = 3

    def __init__(self, timezone_name: Optional[str] = None, priority: Optional[int] = None):
        super().__init__(priority)
        self.timezone_name = timezone_name
        self._zone = None

    def is_available(self) -> bool:
        return module_available("zoneinfo")

    def initialize(self) -> InitResult:
        zone = None
        try:
            if self.timezone_name:
                from zoneinfo import ZoneInfo

                zone = ZoneInfo(self.timezone_name)
            month = SMOKE_DATE.strftime("%B")
        except Exception as e:
            return InitResult.failure(f"{type(e).__name__}: {e}")

        if month != "October":
            return InitResult.failure(f"strftime month names are not English (got {month!r})")

        self._zone = zone
        return InitResult.ok(zone)

    def _local(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            return instant
        if self._zone is not None:
            return instant.astimezone(self._zone)
        return instant.astimezone()

    def format_date(self, instant: datetime) -> str:
        local = self._local(instant)
        return f"{local.strftime('%B')} {local.day}, {local.year}"

    def format_uid(self, instant: datetime) -> str:
        local = self._local(instant)
        return f"{local.strftime('%m-%d')}-{local.year:04d}"

    def now(self) -> datetime:
        if self._zone is not None:
            return datetime.now(self._zone)
        return datetime.now().astimezone()
