#!/usr/bin/env python3
"""
CLDR data registry exposed to locale-aware code as the ``Cldr`` global.

Locale-aware consumers expect a global object with two operations:

- ``load(data)`` merges a CLDR JSON fragment into the registry
- ``get(path)`` reads a subtree by slash-separated (or list) path

``CldrRegistry`` is the working implementation installed by the CLDR
provider. When it cannot be installed, ``shim.ensure_shim`` puts an inert
surface with the same two operations in its place.
"""
import copy
from typing import Sequence, Union


CLDR_GLOBAL_NAME = "Cldr"
CLDR_OPERATIONS = ("load", "get")

# Supplemental data the date formatter relies on: week start, minimal days
# of the first week and preferred hour cycle for the locales we ship.
SUPPLEMENTAL_DATA = {
    "supplemental": {
        "version": {
            "_unicodeVersion": "15.1.0",
            "_cldrVersion": "45",
        },
        "likelySubtags": {
            "en": "en-Latn-US",
            "ja": "ja-Jpan-JP",
            "es": "es-Latn-ES",
            "fr": "fr-Latn-FR",
            "de": "de-Latn-DE",
        },
        "weekData": {
            "firstDay": {"001": "mon", "US": "sun", "JP": "sun", "GB": "mon"},
            "minDays": {"001": 1, "US": 1, "JP": 1, "GB": 4},
        },
        "timeData": {
            "001": {"_preferred": "H"},
            "US": {"_preferred": "h"},
        },
    }
}

PathLike = Union[str, Sequence[str]]


def split_path(path: PathLike) -> list[str]:
    """Normalize "a/b/c" or ["a", "b/c"] into ["a", "b", "c"]."""
    if isinstance(path, str):
        parts = [path]
    else:
        parts = list(path)

    segments: list[str] = []
    for part in parts:
        segments.extend(s for s in str(part).split("/") if s)
    return segments


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


class CldrRegistry:
    """In-memory CLDR JSON store with the ``load``/``get`` surface."""

    def __init__(self, locale: str = "en"):
        self.locale = locale
        self._data: dict = {}

    def load(self, data: dict) -> dict:
        """
        Merge a CLDR JSON fragment into the registry.

        Args:
            data: Mapping such as ``{"supplemental": {...}}``

        Returns:
            The data passed in, unchanged

        Raises:
            TypeError: data is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"Cldr.load expects a mapping, got {type(data).__name__}")
        _merge(self._data, data)
        return data

    def get(self, path: PathLike) -> object:
        """Return the subtree at path, or an empty mapping if absent."""
        node = self._data
        for segment in split_path(path):
            if not isinstance(node, dict) or segment not in node:
                return {}
            node = node[segment]
        return copy.deepcopy(node) if isinstance(node, dict) else node

    def main(self, path: PathLike) -> dict:
        return self.get(["main", self.locale] + split_path(path))

    def supplemental(self, path: PathLike) -> dict:
        return self.get(["supplemental"] + split_path(path))
