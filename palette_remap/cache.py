"""Memoising colour cache shared by the transform workers."""

from __future__ import annotations

import threading
from collections.abc import Mapping

from palette_remap.color_utils import Color

RGBKey = tuple[int, int, int]


class ColorCache:
    """Source RGB -> nearest palette colour, built during one transform.

    Reads are plain dict lookups and need no lock.  Inserts go through
    :meth:`insert_if_absent` under a lock, and the first writer wins.
    Two workers that miss on the same key compute the same nearest
    colour, so it never matters which of them stored it.
    """

    def __init__(self, entries: Mapping[RGBKey, Color] | None = None) -> None:
        self._entries: dict[RGBKey, Color] = {}
        self._lock = threading.Lock()
        if entries:
            self.seed(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: RGBKey) -> Color | None:
        return self._entries.get(key)

    def insert_if_absent(self, key: RGBKey, value: Color) -> Color:
        """Store *value* unless *key* is already cached; return the stored value."""
        with self._lock:
            return self._entries.setdefault(key, value)

    def seed(self, entries: Mapping[RGBKey, Color]) -> None:
        for key, value in entries.items():
            self.insert_if_absent(tuple(key[:3]), Color(*value))
