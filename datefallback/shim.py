#!/usr/bin/env python3
"""
Compatibility shim installer.

Locale-aware consumers call a global object (``Cldr``) unconditionally. When
no provider installed a working one, the first call would raise and take
unrelated functionality down with it. ``ensure_shim`` guarantees the
expected operations exist:

- If the global already exposes every required operation as callable, it
  is left exactly as it is.
- Otherwise a ``CompatibilitySurface`` is installed under the same name. The
  surface resolves each operation at call time, returning the original
  object's implementation when it is present and callable, else an inert
  stand-in. The original object is never mutated.

The stand-ins do not make the capability work. ``load`` echoes its input and
``get`` returns an empty mapping, which is enough for callers not to crash.
"""
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, MutableMapping, Optional

from datefallback.events import EventKind, EventLog


def _echo(data=None, *args, **kwargs):
    return data


def _empty(*args, **kwargs) -> dict:
    return {}


def _noop(*args, **kwargs) -> None:
    return None


INERT_OPERATIONS: dict[str, Callable] = {
    "load": _echo,
    "get": _empty,
    "main": _empty,
    "supplemental": _empty,
}


def missing_operations(target: object, required: Iterable[str]) -> list[str]:
    """Required operations the target lacks or exposes as non-callable."""
    if target is None:
        return sorted(required)
    return sorted(op for op in required if not callable(getattr(target, op, None)))


class CompatibilitySurface:
    """
    Lookup layer standing in for a global that is absent or incomplete.

    Attribute access resolves per call: the wrapped object's callable if it
    has one now, otherwise the inert implementation.
    """

    def __init__(self, name: str, target: object, shims: Mapping[str, Callable],
                 events: Optional[EventLog] = None):
        self._name = name
        self._target = target
        self._shims = dict(shims)
        self._events = events

    @property
    def target(self) -> object:
        return self._target

    @property
    def operations(self) -> tuple[str, ...]:
        return tuple(sorted(self._shims))

    def is_shimmed(self, operation: str) -> bool:
        """True if the operation currently resolves to the inert stand-in."""
        return operation in self._shims and not callable(getattr(self._target, operation, None))

    def resolve(self, operation: str) -> Callable:
        real = getattr(self._target, operation, None) if self._target is not None else None
        if callable(real):
            return real

        shim = self._shims.get(operation)
        if shim is None:
            raise AttributeError(f"{self._name!r} has no operation {operation!r}")

        if self._events is not None:
            events = self._events
            name = self._name

            def recorded(*args, **kwargs):
                events.record(EventKind.SHIM_USED, global_name=name, operation=operation)
                return shim(*args, **kwargs)

            return recorded
        return shim

    def __getattr__(self, operation: str):
        if operation.startswith("_"):
            raise AttributeError(operation)
        return self.resolve(operation)

    def __repr__(self) -> str:
        return f"CompatibilitySurface({self._name!r}, target={self._target!r})"


@dataclass(frozen=True)
class ShimResult:
    global_name: str
    installed: bool
    shimmed_operations: tuple[str, ...]
    surface: object

    def as_dict(self) -> dict:
        return {
            "global_name": self.global_name,
            "installed": self.installed,
            "shimmed_operations": list(self.shimmed_operations),
        }


def ensure_shim(namespace: MutableMapping[str, object], expected_global_name: str,
                required_operations: Iterable[str],
                events: Optional[EventLog] = None, logger=None,
                implementations: Optional[Mapping[str, Callable]] = None) -> ShimResult:
    """
    Make sure ``namespace[expected_global_name]`` exposes every required operation.

    Args:
        namespace: Mapping standing in for the host's global scope
        expected_global_name: Name consumers look up (e.g. "Cldr")
        required_operations: Operation names consumers call
        events: Optional event log
        logger: Optional JsonLogger
        implementations: Inert implementations by operation name; operations
            not listed here or in INERT_OPERATIONS become no-ops

    Returns:
        ShimResult describing what, if anything, was installed
    """
    required = set(required_operations)
    current = namespace.get(expected_global_name)

    if isinstance(current, CompatibilitySurface):
        # Installed at most once; rebuilt only when new operations are required
        if required <= set(current.operations):
            return _skipped(expected_global_name, current, events, reason="already-installed")
        required |= set(current.operations)
        current = current.target

    missing = missing_operations(current, required)
    if not missing:
        return _skipped(expected_global_name, current, events, reason="complete")

    inert = dict(INERT_OPERATIONS)
    if implementations:
        inert.update(implementations)
    shims = {op: inert.get(op, _noop) for op in required}

    surface = CompatibilitySurface(expected_global_name, current, shims, events)
    namespace[expected_global_name] = surface

    if events is not None:
        events.record(EventKind.SHIM_INSTALLED, global_name=expected_global_name,
                      operations=missing, wrapped=current is not None)
    if logger:
        logger.info("Compatibility shim installed", global_name=expected_global_name,
                    operations=missing)

    return ShimResult(expected_global_name, True, tuple(missing), surface)


def _skipped(name: str, current: object, events: Optional[EventLog], reason: str) -> ShimResult:
    if events is not None:
        events.record(EventKind.SHIM_SKIPPED, global_name=name, reason=reason)
    return ShimResult(name, False, (), current)
