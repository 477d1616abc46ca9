"""Colour values, the RGB distance metric, and hex conversion."""

from __future__ import annotations

import math
import re
from typing import NamedTuple

import numpy as np

from palette_remap.errors import PaletteParseError

_HEX_RE = re.compile(r"#[0-9a-fA-F]{6}")


class Color(NamedTuple):
    """An 8-bit RGBA colour. Alpha never takes part in matching."""

    r: int
    g: int
    b: int
    a: int = 255

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


def distance(a: Color, b: Color) -> float:
    """Euclidean distance between the RGB channels of *a* and *b*."""
    dr = abs(a[0] - b[0])
    dg = abs(a[1] - b[1])
    db = abs(a[2] - b[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def palette_to_array(palette: list[Color]) -> np.ndarray:
    """Stack the RGB channels of *palette* into an (N, 3) int64 array."""
    return np.array([c[:3] for c in palette], dtype=np.int64).reshape(-1, 3)


def squared_distances(color: tuple[int, ...], palette: np.ndarray) -> np.ndarray:
    """Squared RGB distance from *color* to every row of an (N, 3) palette.

    Integer arithmetic keeps equal distances exactly equal, so ties are
    decided by position alone.
    """
    diff = palette - np.asarray(color[:3], dtype=np.int64)
    return np.sum(diff * diff, axis=1)


def color_to_hex(color: Color | tuple[int, ...]) -> str:
    """RGB(A) colour to lowercase ``#rrggbb``; alpha is dropped."""
    return f"#{color[0]:02x}{color[1]:02x}{color[2]:02x}"


def hex_to_color(value: object) -> Color:
    """Parse ``#rrggbb`` into an opaque :class:`Color`.

    Raises:
        PaletteParseError: *value* is not a ``#`` followed by six hex digits.
    """
    if not isinstance(value, str) or not _HEX_RE.fullmatch(value):
        msg = f"Invalid colour {value!r}: expected '#rrggbb'"
        raise PaletteParseError(msg)
    num = int(value[1:], 16)
    return Color((num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF)
