#!/usr/bin/env python3
"""
Third-party provider backed by tzlocal.

tzlocal resolves the host's configured time zone (TZ variable,
/etc/localtime, the Windows registry). Formatting uses the pure helpers
after converting aware instants into that zone, so output reflects local
wall-clock time even when callers pass UTC datetimes.
"""

from datetime import datetime
from typing import Optional

from datefallback.base_provider import DateProvider, InitResult, ProviderKind, module_available
from datefallback.fallback_provider import title_text, uid_text


class TzlocalProvider(DateProvider):
    """Local-zone provider using tzlocal."""

    name = "tzlocal"
    kind = ProviderKind.THIRD_PARTY
    default_priority = 2

    def __init__(self, priority: Optional[int] = None):
        super().__init__(priority)
        self._zone = None

    def is_available(self) -> bool:
        return module_available("tzlocal")

    def initialize(self) -> InitResult:
        try:
            from tzlocal import get_localzone

            zone = get_localzone()
            # Resolving the offset exercises the zone data, not just the name
            datetime.now(zone).utcoffset()
        except Exception as e:
            return InitResult.failure(f"{type(e).__name__}: {e}")

        self._zone = zone
        return InitResult.ok(zone)

    def _local(self, instant: datetime) -> datetime:
        if instant.tzinfo is not None and self._zone is not None:
            return instant.astimezone(self._zone)
        return instant

    def format_date(self, instant: datetime) -> str:
        return title_text(self._local(instant))

    def format_uid(self, instant: datetime) -> str:
        return uid_text(self._local(instant))

    def now(self) -> datetime:
        if self._zone is None:
            return datetime.now()
        return datetime.now(self._zone)
