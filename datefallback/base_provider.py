#!/usr/bin/env python3
"""
Base provider class for date capability strategies.

Implements the Strategy pattern for interchangeable date/time providers.
Each provider wraps one backend (Babel, tzlocal, the standard library, or
pure arithmetic) behind the same small interface, so the runtime can probe
them in turn and the facade can delegate without knowing which is active.

The set of provider kinds is closed: every concrete provider declares one
``ProviderKind`` and at least one provider in a registry must be
``guaranteed`` (always available, initialization cannot fail).
"""

import importlib.util
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ProviderKind(Enum):
    """Closed set of provider variants."""
    NATIVE = "native"
    THIRD_PARTY = "third_party"
    STANDARD_LIBRARY = "standard_library"
    PURE_FALLBACK = "pure_fallback"


@dataclass(frozen=True)
class InitResult:
    """
    Explicit outcome of ``DateProvider.initialize()``.

    Initializers return this instead of raising, so one provider's failure
    never interrupts probing of the others.
    """
    succeeded: bool
    handle: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, handle: Any = None) -> "InitResult":
        return cls(succeeded=True, handle=handle)

    @classmethod
    def failure(cls, error: str) -> "InitResult":
        return cls(succeeded=False, error=error or "initialization failed")


class DateProvider(ABC):
    """
    Abstract base class for date capability providers.

    Subclasses set ``name``, ``kind`` and ``default_priority`` as class
    attributes. Name, kind and priority are read-only once constructed.
    """

    name: str = ""
    kind: ProviderKind = ProviderKind.PURE_FALLBACK
    default_priority: int = 100
    guaranteed: bool = False

    def __init__(self, priority: Optional[int] = None):
        self._priority = self.default_priority if priority is None else int(priority)

    @property
    def priority(self) -> int:
        return self._priority

    @abstractmethod
    def is_available(self) -> bool:
        """
        Report whether the backend is present in this environment.

        Must be fast and free of side effects: inspect presence only, never
        import heavy modules or touch data files.

        Returns:
            True if ``initialize()`` is worth attempting

        Raises:
            Never
        """

    @abstractmethod
    def initialize(self) -> InitResult:
        """
        Prepare the backend for use.

        May load data or resolve system settings. Failures are reported
        through ``InitResult.failure`` rather than raised.
        """

    @abstractmethod
    def format_date(self, instant: datetime) -> str:
        """Format as a title, e.g. "October 15, 2023"."""

    @abstractmethod
    def format_uid(self, instant: datetime) -> str:
        """Format as a daily note UID, e.g. "10-15-2023"."""

    def format_locale(self, instant: datetime, locale_tag: str) -> str:
        """
        Format a long date for a locale.

        Providers without locale data ignore the tag and return the English
        title.
        """
        return self.format_date(instant)

    def now(self) -> datetime:
        """Current local time as seen by this provider."""
        return datetime.now()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"


def module_available(module_name: str) -> bool:
    """
    Check whether a top-level module can be imported, without importing it.

    Returns:
        True if an import spec is found; False otherwise (never raises)
    """
    try:
        return importlib.util.find_spec(module_name) is not None
    except (ImportError, ValueError):
        return False
