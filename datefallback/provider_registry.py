#!/usr/bin/env python3
"""
Provider registry - the ordered set of candidate date providers.

Registration order is probing order; priority decides selection. The
registry validates its contract once at construction: provider names are
unique and at least one provider is guaranteed (always available,
initialization cannot fail). Violations raise ``RegistryError``, the only
fatal error in the package.
"""

from typing import Iterable, MutableMapping, Optional

from datefallback.base_provider import DateProvider
from datefallback.cldr_provider import CldrProvider
from datefallback.errors import RegistryError
from datefallback.fallback_provider import PureFallbackProvider
from datefallback.stdlib_provider import StandardLibraryProvider
from datefallback.tzlocal_provider import TzlocalProvider


class ProviderRegistry:
    """Immutable, validated sequence of providers."""

    def __init__(self, providers: Iterable[DateProvider]):
        self._providers = tuple(providers)
        self._validate()

    def _validate(self) -> None:
        seen: set[str] = set()
        for provider in self._providers:
            if not provider.name:
                raise RegistryError(f"Provider {provider!r} has no name")
            if provider.name in seen:
                raise RegistryError(f"Duplicate provider name: {provider.name!r}")
            seen.add(provider.name)

        if not any(p.guaranteed for p in self._providers):
            raise RegistryError(
                "Registry has no guaranteed fallback provider; "
                "register a provider whose is_available() is always True"
            )

    @property
    def providers(self) -> tuple[DateProvider, ...]:
        return self._providers

    @property
    def names(self) -> list[str]:
        return [p.name for p in self._providers]

    @property
    def fallback(self) -> DateProvider:
        """First registered guaranteed provider."""
        return next(p for p in self._providers if p.guaranteed)

    def get(self, name: str) -> Optional[DateProvider]:
        for provider in self._providers:
            if provider.name == name:
                return provider
        return None

    def index_of(self, name: str) -> int:
        """Registration index, used as the selection tie-break."""
        return self.names.index(name)

    def __iter__(self):
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


def build_default_registry(config=None,
                           namespace: Optional[MutableMapping[str, object]] = None) -> ProviderRegistry:
    """
    Build the standard provider set from configuration.

    Args:
        config: FallbackConfig (defaults used when None)
        namespace: Mapping holding the ``Cldr`` global for the CLDR provider

    Returns:
        ProviderRegistry with cldr, tzlocal, stdlib and fallback providers,
        minus any disabled in config. The fallback cannot be disabled.
    """
    if config is None:
        from datefallback.config import FallbackConfig
        config = FallbackConfig.from_dict({})

    if namespace is None:
        namespace = {}

    priorities = config.get_priorities()
    disabled = set(config.get_disabled_providers())

    candidates = [
        CldrProvider(namespace, locale_tag=config.get_locale(),
                     priority=priorities.get(CldrProvider.name)),
        TzlocalProvider(priority=priorities.get(TzlocalProvider.name)),
        StandardLibraryProvider(timezone_name=config.get_timezone(),
                                priority=priorities.get(StandardLibraryProvider.name)),
        PureFallbackProvider(priority=priorities.get(PureFallbackProvider.name)),
    ]

    return ProviderRegistry(
        p for p in candidates if p.guaranteed or p.name not in disabled
    )
