#!/usr/bin/env python3
"""
Diagnostics surface.

Read-only views over a runtime for tests, the CLI ``doctor`` command and
bug reports:

- ``detect_environment``: which backends are present
- ``snapshot``: runtime state, probe results, active provider, events
- ``sample_all_strategies``: format a sample date with each usable provider
- ``benchmark``: time repeated formatting per provider

Nothing here is a stable API contract; it is purely observational.
"""
import platform
import sys
import time
from datetime import datetime
from typing import MutableMapping, Optional

from datefallback.base_provider import module_available
from datefallback.cldr_data import CLDR_GLOBAL_NAME
from datefallback.provider_registry import ProviderRegistry
from datefallback.runtime import FallbackRuntime
from datefallback.shim import CompatibilitySurface


SAMPLE_DATE = datetime(2023, 10, 15)


def detect_environment(namespace: Optional[MutableMapping[str, object]] = None) -> dict:
    """Presence flags for every backend plus interpreter details."""
    namespace = namespace if namespace is not None else {}
    cldr = namespace.get(CLDR_GLOBAL_NAME)
    return {
        "has_babel": module_available("babel"),
        "has_tzlocal": module_available("tzlocal"),
        "has_zoneinfo": module_available("zoneinfo"),
        "has_cldr_global": cldr is not None,
        "cldr_global_shimmed": isinstance(cldr, CompatibilitySurface),
        "python_version": platform.python_version(),
        "platform": sys.platform,
    }


def snapshot(runtime: FallbackRuntime) -> dict:
    """
    Describe a runtime without changing it.

    Does not trigger initialization; an unprobed runtime reports
    ``active: None``.
    """
    active = runtime.selected
    return {
        "state": runtime.state.value,
        "passes": runtime.passes,
        "active": active.name if active else None,
        "degraded": active.degraded if active else None,
        "providers": [
            {
                "name": p.name,
                "kind": p.kind.value,
                "priority": p.priority,
                "guaranteed": p.guaranteed,
            }
            for p in runtime.registry
        ],
        "probe_results": [r.as_dict() for r in runtime.probe_results],
        "shim": runtime.shim_result.as_dict() if runtime.shim_result else None,
        "environment": detect_environment(runtime.namespace),
        "events": runtime.events.snapshot(),
    }


def sample_all_strategies(registry: ProviderRegistry, sample: datetime = SAMPLE_DATE) -> dict:
    """
    Format ``sample`` with every available provider that initializes.

    Returns:
        {name: {"success": bool, "title"/"uid" or "error": ...}}
    """
    results = {}
    for provider in registry:
        try:
            if not provider.is_available():
                results[provider.name] = {"success": False, "error": "unavailable"}
                continue
            outcome = provider.initialize()
            if not outcome.succeeded:
                results[provider.name] = {"success": False, "error": outcome.error}
                continue
            results[provider.name] = {
                "success": True,
                "title": provider.format_date(sample),
                "uid": provider.format_uid(sample),
            }
        except Exception as e:
            results[provider.name] = {"success": False, "error": f"{type(e).__name__}: {e}"}
    return results


def benchmark(registry: ProviderRegistry, iterations: int = 1000,
              sample: Optional[datetime] = None) -> dict[str, float]:
    """
    Milliseconds spent formatting ``iterations`` titles per provider.

    Providers that are unavailable or fail to initialize are omitted.
    """
    sample = sample or datetime.now()
    timings = {}
    for provider in registry:
        try:
            if not provider.is_available() or not provider.initialize().succeeded:
                continue
            start = time.perf_counter()
            for _ in range(iterations):
                provider.format_date(sample)
            timings[provider.name] = (time.perf_counter() - start) * 1000.0
        except Exception:
            continue
    return timings
