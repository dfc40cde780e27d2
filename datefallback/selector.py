#!/usr/bin/env python3
"""
Strategy selector.

Picks the active provider from probe results: among providers that
initialized successfully, the lowest priority wins, ties going to the one
registered first. When only guaranteed providers succeeded (or nothing did),
the registry's fallback is selected and the run is flagged as degraded.

Selection is a pure function of its inputs, so re-probing an unchanged
environment always lands on the same provider.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from datefallback.base_provider import DateProvider
from datefallback.events import EventKind, EventLog
from datefallback.probe import ProbeResult
from datefallback.provider_registry import ProviderRegistry


@dataclass(frozen=True)
class ActiveProvider:
    """The provider the facade delegates to, plus how it was chosen."""
    provider: DateProvider
    degraded: bool = False
    probe_result: Optional[ProbeResult] = None

    @property
    def name(self) -> str:
        return self.provider.name

    @property
    def handle(self) -> object:
        return self.probe_result.handle if self.probe_result else None


def select(results: Sequence[ProbeResult], registry: ProviderRegistry,
           events: Optional[EventLog] = None, logger=None) -> ActiveProvider:
    """
    Choose the active provider.

    Args:
        results: Probe results (any order)
        registry: Registry the results were produced from
        events: Event log for the selection/degraded event
        logger: Optional JsonLogger

    Returns:
        ActiveProvider; never None
    """
    candidates = []
    for result in results:
        if not result.succeeded:
            continue
        provider = registry.get(result.strategy_name)
        if provider is None:
            continue
        candidates.append((provider.priority, registry.index_of(provider.name), provider, result))

    # The guaranteed fallback always succeeds; it alone does not count as capability
    if any(not c[2].guaranteed for c in candidates):
        _, _, provider, result = min(candidates, key=lambda c: (c[0], c[1]))
        active = ActiveProvider(provider, degraded=False, probe_result=result)
        if events is not None:
            events.record(EventKind.SELECTED, strategy=provider.name, priority=provider.priority,
                          candidates=len(candidates))
        if logger:
            logger.info("Date provider selected", strategy=provider.name, priority=provider.priority)
        return active

    fallback = registry.fallback
    fallback_result = next((r for r in results if r.strategy_name == fallback.name), None)
    active = ActiveProvider(fallback, degraded=True, probe_result=fallback_result)

    if events is not None:
        events.record(
            EventKind.DEGRADED,
            strategy=fallback.name,
            failed=[r.strategy_name for r in results if not r.succeeded],
        )
    if logger:
        logger.error(
            "No date provider initialized; using zero-dependency fallback",
            strategy=fallback.name,
            failed={r.strategy_name: r.error for r in results if not r.succeeded},
        )
    return active
