#!/usr/bin/env python3
"""
CLDR provider backed by Babel.

Preferred provider: full CLDR locale data, so ``format_locale`` produces
real localized output. Initialization registers the supplemental data in
the ``Cldr`` global that locale-aware consumers read, resolves the
configured locale (en_US when Babel does not know it) and smoke-formats a
known date. Registration and formatting can fail in a stripped environment
(Babel missing, locale data files absent, a foreign ``Cldr`` object without
a working ``load``).
"""

from datetime import date, datetime
from typing import MutableMapping, Optional

from datefallback.base_provider import DateProvider, InitResult, ProviderKind, module_available
from datefallback.cldr_data import CLDR_GLOBAL_NAME, SUPPLEMENTAL_DATA, CldrRegistry
from datefallback.shim import CompatibilitySurface


TITLE_PATTERN = "MMMM d, y"
UID_PATTERN = "MM-dd-yyyy"
# Titles and UIDs are stable record keys, so they are always rendered in en_US
KEY_LOCALE = "en_US"

SMOKE_DATE = date(2023, 10, 15)
SMOKE_EXPECTED = "October 15, 2023"


def parse_locale_tag(locale_tag: str):
    """Parse a BCP 47 style tag ("en-US" or "en_US") into a babel Locale."""
    from babel import Locale

    return Locale.parse(str(locale_tag).replace("_", "-"), sep="-")


class CldrProvider(DateProvider):
    """Babel/CLDR-backed provider."""

    name = "cldr"
    kind = ProviderKind.NATIVE
    default_priority = 1

    def __init__(self, namespace: MutableMapping[str, object],
                 locale_tag: str = "en-US", priority: Optional[int] = None):
        super().__init__(priority)
        self.namespace = namespace
        self.locale_tag = locale_tag

    def is_available(self) -> bool:
        return module_available("babel")

    def initialize(self) -> InitResult:
        try:
            registry = self._ensure_registry()
            registry.load(SUPPLEMENTAL_DATA)

            from babel.dates import format_date

            locale = self._resolve_locale()
            sample = format_date(SMOKE_DATE, TITLE_PATTERN, locale=KEY_LOCALE)
        except Exception as e:
            return InitResult.failure(f"{type(e).__name__}: {e}")

        if sample != SMOKE_EXPECTED:
            return InitResult.failure(
                f"CLDR smoke format mismatch: expected {SMOKE_EXPECTED!r}, got {sample!r}"
            )

        return InitResult.ok(locale)

    def _resolve_locale(self):
        """Configured locale, or the key locale when Babel has no data for it."""
        from babel import UnknownLocaleError

        try:
            return parse_locale_tag(self.locale_tag)
        except (UnknownLocaleError, ValueError):
            return parse_locale_tag(KEY_LOCALE)

    def _ensure_registry(self):
        """
        Return the ``Cldr`` global, installing a CldrRegistry if absent.

        Raises:
            TypeError: an existing global has no callable ``load``, or only
                the shim's inert stand-in for it
        """
        registry = self.namespace.get(CLDR_GLOBAL_NAME)
        if registry is None:
            registry = CldrRegistry(locale=self.locale_tag.replace("_", "-").split("-")[0])
            self.namespace[CLDR_GLOBAL_NAME] = registry

        shimmed = isinstance(registry, CompatibilitySurface) and registry.is_shimmed("load")
        if shimmed or not callable(getattr(registry, "load", None)):
            raise TypeError(f"{CLDR_GLOBAL_NAME}.load is not a function")

        return registry

    def format_date(self, instant: datetime) -> str:
        from babel.dates import format_date

        return format_date(instant, TITLE_PATTERN, locale=KEY_LOCALE)

    def format_uid(self, instant: datetime) -> str:
        from babel.dates import format_date

        return format_date(instant, UID_PATTERN, locale=KEY_LOCALE)

    def format_locale(self, instant: datetime, locale_tag: str) -> str:
        from babel.dates import format_date

        return format_date(instant, format="long", locale=parse_locale_tag(locale_tag))
