#!/usr/bin/env python3
"""
Probe runner.

Probes every provider in registration order: availability check first, then
initialization inside a failure boundary. Each probe yields one
``ProbeResult`` and emits start/result events; a failing provider never
stops the remaining ones from being probed.

Probing order is exploratory only. Which provider wins is decided later by
the selector, by priority.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional

from datefallback.base_provider import DateProvider, InitResult
from datefallback.events import EventKind, EventLog


UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ProbeResult:
    strategy_name: str
    succeeded: bool
    error: Optional[str] = None
    elapsed_ms: float = 0.0
    handle: object = None

    def as_dict(self) -> dict:
        return {
            "strategy": self.strategy_name,
            "succeeded": self.succeeded,
            "error": self.error,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }


def probe_provider(provider: DateProvider, events: EventLog, logger=None) -> ProbeResult:
    """
    Probe a single provider.

    Returns:
        ProbeResult; never raises
    """
    events.record(EventKind.PROBE_START, strategy=provider.name)
    start = time.perf_counter()

    try:
        available = bool(provider.is_available())
    except Exception as e:
        # Contract says is_available() never raises; treat a breach as unavailable
        available = False
        if logger:
            logger.warning("Provider availability check raised", strategy=provider.name, error=str(e))

    if not available:
        result = ProbeResult(provider.name, False, UNAVAILABLE, _since(start))
        if logger:
            logger.debug("Provider unavailable", strategy=provider.name)
    else:
        try:
            outcome = provider.initialize()
            if not isinstance(outcome, InitResult):
                outcome = InitResult.failure(
                    f"initialize() returned {type(outcome).__name__}, expected InitResult"
                )
        except Exception as e:
            outcome = InitResult.failure(str(e) or type(e).__name__)

        result = ProbeResult(
            provider.name,
            outcome.succeeded,
            outcome.error,
            _since(start),
            outcome.handle,
        )
        if logger and not result.succeeded:
            logger.warning("Provider initialization failed", strategy=provider.name, error=result.error)

    events.record(
        EventKind.PROBE_RESULT,
        strategy=result.strategy_name,
        success=result.succeeded,
        error=result.error,
        elapsed_ms=round(result.elapsed_ms, 3),
    )
    return result


def run_probes(providers: Iterable[DateProvider], events: EventLog,
               logger=None, parallel: bool = False) -> list[ProbeResult]:
    """
    Probe every provider.

    Args:
        providers: Providers in registration order
        events: Event log receiving one start and one result event per probe
        logger: Optional JsonLogger
        parallel: Probe concurrently on a thread pool

    Returns:
        One ProbeResult per provider, in registration order regardless of
        completion order
    """
    providers = list(providers)

    if not parallel or len(providers) < 2:
        return [probe_provider(p, events, logger) for p in providers]

    with ThreadPoolExecutor(max_workers=len(providers), thread_name_prefix="date-probe") as pool:
        futures = [pool.submit(probe_provider, p, events, logger) for p in providers]
        return [f.result() for f in futures]


def _since(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0
