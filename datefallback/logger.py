#!/usr/bin/env python3
"""
Structured JSON logging for the date fallback runtime.

One JSON object per line: timestamp, level, message, then bound context and
per-call fields. Destinations come from the ``logging`` config section:

    logging:
      level: warning             # debug | info | warning | error
      destinations: [stderr, file]
      file: ~/.cache/datefallback/datefallback.log
      max_bytes: 1048576         # file rotates to .1 past this size

Handlers are fail-open. A broken destination never interrupts probing or
formatting.
"""
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO


LEVELS = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40,
}

DEFAULT_LEVEL = "error"
DEFAULT_LOG_FILE = Path.home() / ".cache" / "datefallback" / "datefallback.log"
DEFAULT_MAX_BYTES = 1024 * 1024


def resolve_level(name: object) -> int:
    """Numeric level for a level name; unknown names mean error."""
    return LEVELS.get(str(name).lower(), LEVELS[DEFAULT_LEVEL])


def encode_record(record: dict) -> str:
    return json.dumps(record, default=str) + "\n"


class Handler:
    """Destination for encoded log records."""

    def emit(self, record: dict) -> None:
        raise NotImplementedError


class StreamHandler(Handler):
    """
    Writes records to a text stream.

    Without an explicit stream the target is looked up on every emit, so
    records follow ``sys.stdout``/``sys.stderr`` when those are swapped.
    """

    stream_name = "stdout"

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or getattr(sys, self.stream_name)

    def emit(self, record: dict) -> None:
        try:
            self.stream.write(encode_record(record))
            self.stream.flush()
        except Exception:
            pass


class StdoutHandler(StreamHandler):
    stream_name = "stdout"


class StderrHandler(StreamHandler):
    stream_name = "stderr"


class FileHandler(Handler):
    """Appends records to a file, rotating it once to ``<name>.1`` when full."""

    def __init__(self, path: Path, max_bytes: int = DEFAULT_MAX_BYTES):
        self.path = Path(path).expanduser()
        self.max_bytes = max_bytes
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass

    def _rotate_if_full(self) -> None:
        if self.max_bytes <= 0 or not self.path.exists():
            return
        if self.path.stat().st_size >= self.max_bytes:
            self.path.replace(self.path.with_name(self.path.name + ".1"))

    def emit(self, record: dict) -> None:
        try:
            self._rotate_if_full()
            with self.path.open("a", encoding="utf-8") as f:
                f.write(encode_record(record))
        except Exception:
            pass


class JsonLogger:
    """
    Leveled logger fanning records out to handlers.

    Args:
        level: Minimum level name to emit
        handlers: Destinations (none means records are dropped)
        context: Fields added to every record
    """

    def __init__(
        self,
        level: str = DEFAULT_LEVEL,
        handlers: Optional[Iterable[Handler]] = None,
        context: Optional[dict] = None,
    ) -> None:
        self.level_name = str(level).lower()
        self.level = resolve_level(self.level_name)
        self.handlers = list(handlers or [])
        self.context = dict(context or {})

    def bind(self, **context: object) -> "JsonLogger":
        """Child logger sharing handlers, with extra context (None values skipped)."""
        merged = dict(self.context)
        merged.update({k: v for k, v in context.items() if v is not None})
        return JsonLogger(self.level_name, self.handlers, merged)

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS.get(level, 0) >= self.level

    def log(self, level: str, message: str, **fields: object) -> None:
        if not self.is_enabled_for(level):
            return

        record = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": level,
            "message": message,
            **self.context,
        }
        record.update((k, v) for k, v in fields.items() if v is not None)

        for handler in self.handlers:
            try:
                handler.emit(record)
            except Exception:
                pass

    def debug(self, message: str, **fields: object) -> None:
        self.log("debug", message, **fields)

    def info(self, message: str, **fields: object) -> None:
        self.log("info", message, **fields)

    def warning(self, message: str, **fields: object) -> None:
        self.log("warning", message, **fields)

    def error(self, message: str, **fields: object) -> None:
        self.log("error", message, **fields)


def _file_handler(logging_config: dict) -> Handler:
    return FileHandler(
        Path(logging_config.get("file") or DEFAULT_LOG_FILE),
        max_bytes=int(logging_config.get("max_bytes", DEFAULT_MAX_BYTES)),
    )


HANDLER_FACTORIES: dict[str, Callable[[dict], Handler]] = {
    "stdout": lambda cfg: StdoutHandler(),
    "stderr": lambda cfg: StderrHandler(),
    "file": _file_handler,
}


def build_handlers(logging_config: dict) -> list[Handler]:
    """Handlers for each known destination; unknown names are ignored."""
    destinations = logging_config.get("destinations", ["file"])
    if destinations is None:
        destinations = []
    elif isinstance(destinations, str):
        destinations = [destinations]

    handlers: list[Handler] = []
    for destination in destinations:
        factory = HANDLER_FACTORIES.get(str(destination or "").strip().lower())
        if factory is None:
            continue
        try:
            handlers.append(factory(logging_config))
        except (TypeError, ValueError):
            continue
    return handlers


def get_logger(logging_config: Optional[dict] = None, base_context: Optional[dict] = None) -> JsonLogger:
    """
    Create a configured JsonLogger instance.

    Args:
        logging_config: ``logging`` config section (level, destinations, file, max_bytes)
        base_context: Default context fields to include in every record

    Returns:
        JsonLogger instance with configured handlers
    """
    cfg = logging_config or {}
    return JsonLogger(cfg.get("level", DEFAULT_LEVEL), build_handlers(cfg), base_context)

