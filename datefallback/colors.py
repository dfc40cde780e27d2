#!/usr/bin/env python3
"""
Terminal colors for the datefallback CLI.

Semantic helpers wrap text in ANSI codes only when the output stream can
show them. Honors NO_COLOR, FORCE_COLOR and TERM=dumb.

Usage:
    from datefallback.colors import success, error, warning, header, dim

    print(header("Active provider"))
    print(success("✅ cldr"))
    print(dim("probed in 0.4ms"))
"""
import os
import sys
from typing import Optional, TextIO


RESET = '\033[0m'
BOLD = '\033[1m'
GRAY = '\033[90m'
BLUE = '\033[34m'
CYAN = '\033[36m'
BRIGHT_RED = '\033[91m'
BRIGHT_GREEN = '\033[92m'
BRIGHT_YELLOW = '\033[93m'
BRIGHT_CYAN = '\033[96m'


def stream_supports_color(stream: Optional[TextIO] = None, environ: Optional[dict] = None) -> bool:
    """
    Decide whether colors should be emitted.

    Order: NO_COLOR disables, FORCE_COLOR enables, then the stream must be
    a TTY on a terminal other than "dumb".
    """
    stream = stream or sys.stdout
    environ = os.environ if environ is None else environ

    if environ.get('NO_COLOR'):
        return False
    if environ.get('FORCE_COLOR'):
        return True
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    return environ.get('TERM', '') != 'dumb'


# None means "not decided yet"; tests reset it with set_colors_enabled(None)
_enabled: Optional[bool] = None


def colors_enabled() -> bool:
    global _enabled
    if _enabled is None:
        _enabled = stream_supports_color()
    return _enabled


def set_colors_enabled(value: Optional[bool]) -> None:
    """Force colors on/off, or pass None to detect again on next use."""
    global _enabled
    _enabled = value


def paint(text: str, code: str) -> str:
    if not colors_enabled():
        return text
    return f"{code}{text}{RESET}"


def success(text: str) -> str:
    return paint(text, BRIGHT_GREEN)


def error(text: str) -> str:
    return paint(text, BRIGHT_RED)


def warning(text: str) -> str:
    return paint(text, BRIGHT_YELLOW)


def info(text: str) -> str:
    return paint(text, BRIGHT_CYAN)


def header(text: str) -> str:
    return paint(text, f"{BOLD}{BLUE}")


def hint(text: str) -> str:
    return paint(text, CYAN)


def dim(text: str) -> str:
    return paint(text, GRAY)


def bold(text: str) -> str:
    return paint(text, BOLD)


def outcome(succeeded: bool, text: str) -> str:
    """Prefix text with a pass/fail mark in the matching color."""
    if succeeded:
        return success(f"✅ {text}")
    return error(f"❌ {text}")
