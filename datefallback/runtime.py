#!/usr/bin/env python3
"""
Process-wide date runtime.

Holds everything the initialization pass produces: the provider registry,
the event log, the namespace where the ``Cldr`` global lives, the probe
results and the active provider. Facades receive a runtime explicitly; the
module-level default (``get_runtime``) exists for callers that do not manage
one themselves.

State machine::

    UNPROBED -> PROBING -> SELECTED
                   ^           |
                   +-----------+   reprobe()

The runtime is written during initialization and only read afterwards
(single writer, many readers).
"""
from enum import Enum
from typing import MutableMapping, Optional

from datefallback.config import FallbackConfig
from datefallback.events import EventKind, EventLog
from datefallback.logger import JsonLogger, get_logger
from datefallback.probe import ProbeResult, run_probes
from datefallback.provider_registry import ProviderRegistry, build_default_registry
from datefallback.selector import ActiveProvider, select
from datefallback.shim import ShimResult, ensure_shim


class RuntimeState(Enum):
    UNPROBED = "unprobed"
    PROBING = "probing"
    SELECTED = "selected"


class FallbackRuntime:
    """
    Owner of the active date provider.

    Args:
        config: FallbackConfig (defaults when None)
        registry: Provider registry (built from config when None)
        namespace: Global scope stand-in shared with locale-aware consumers
        logger: JsonLogger (built from config when None)
        events: EventLog (built from config when None)
    """

    def __init__(self, config: Optional[FallbackConfig] = None,
                 registry: Optional[ProviderRegistry] = None,
                 namespace: Optional[MutableMapping[str, object]] = None,
                 logger: Optional[JsonLogger] = None,
                 events: Optional[EventLog] = None):
        self.config = config or FallbackConfig.from_dict({})
        self.namespace = {} if namespace is None else namespace
        self.logger = logger or get_logger(self.config.get_logging_config(),
                                           base_context={"component": "datefallback"})
        self.events = events or EventLog(
            enabled=self.config.is_monitoring_enabled(),
            logger=self.logger if self.config.echo_events() else None,
        )
        self.registry = registry or build_default_registry(self.config, self.namespace)

        self.state = RuntimeState.UNPROBED
        self.probe_results: list[ProbeResult] = []
        self.shim_result: Optional[ShimResult] = None
        self.passes = 0
        self._active: Optional[ActiveProvider] = None

    @property
    def active(self) -> ActiveProvider:
        """Active provider, running the initialization pass on first access."""
        if self._active is None:
            return self.initialize()
        return self._active

    @property
    def selected(self) -> Optional[ActiveProvider]:
        """Active provider if a pass has run, without triggering one."""
        return self._active

    @property
    def is_degraded(self) -> bool:
        return self.active.degraded

    def initialize(self) -> ActiveProvider:
        """
        Run the initialization pass once.

        Subsequent calls return the already selected provider; use
        ``reprobe()`` to probe again.
        """
        if self.state is RuntimeState.SELECTED and self._active is not None:
            return self._active
        return self._run_pass()

    def reprobe(self) -> ActiveProvider:
        """Probe every provider again and reselect."""
        self.events.record(EventKind.REPROBE, previous=self._active.name if self._active else None)
        return self._run_pass()

    def _run_pass(self) -> ActiveProvider:
        self.state = RuntimeState.PROBING
        self.events.record(EventKind.INIT_START, strategies=self.registry.names)

        results = run_probes(
            self.registry.providers,
            self.events,
            logger=self.logger,
            parallel=self.config.is_parallel_probing(),
        )
        active = select(results, self.registry, self.events, self.logger)

        if self.config.is_shim_enabled():
            self.shim_result = ensure_shim(
                self.namespace,
                self.config.get_shim_global_name(),
                self.config.get_shim_operations(),
                events=self.events,
                logger=self.logger,
            )

        self.probe_results = results
        self._active = active
        self.state = RuntimeState.SELECTED
        self.passes += 1

        successful = [r.strategy_name for r in results if r.succeeded]
        self.events.record(
            EventKind.INIT_COMPLETE,
            results={r.strategy_name: r.succeeded for r in results},
            successful=len(successful),
            active=active.name,
            degraded=active.degraded,
            total_ms=round(self.events.elapsed_ms(), 3),
        )
        return active


_runtime: Optional[FallbackRuntime] = None


def get_runtime() -> FallbackRuntime:
    """Get the process-wide runtime (lazy initialized from config files)."""
    global _runtime
    if _runtime is None:
        _runtime = FallbackRuntime(FallbackConfig())
    return _runtime


def configure_runtime(config: Optional[FallbackConfig] = None, **kwargs) -> FallbackRuntime:
    """Replace the process-wide runtime."""
    global _runtime
    _runtime = FallbackRuntime(config, **kwargs)
    return _runtime
