"""Nearest-colour search against a fixed palette."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from palette_remap.color_utils import Color, palette_to_array, squared_distances
from palette_remap.errors import InvalidPaletteError


def validate_palette(palette: Sequence[Color]) -> None:
    """Raise :class:`InvalidPaletteError` if *palette* has no colours."""
    if len(palette) == 0:
        msg = "Palette is empty: at least one colour is required"
        raise InvalidPaletteError(msg)


class Matcher:
    """Linear-scan matcher over a palette prepared once per run.

    Every call compares the colour against all palette entries.  The
    first entry reaching the minimum distance wins, so equidistant
    entries resolve to the earliest one in the palette.
    """

    def __init__(self, palette: Sequence[Color]) -> None:
        validate_palette(palette)
        self.palette = [Color(*c) for c in palette]
        self._array = palette_to_array(self.palette)

    def __len__(self) -> int:
        return len(self.palette)

    def nearest_index(self, color: tuple[int, ...]) -> int:
        # argmin returns the first occurrence of the minimum
        return int(np.argmin(squared_distances(color, self._array)))

    def nearest(self, color: tuple[int, ...]) -> Color:
        return self.palette[self.nearest_index(color)]


def nearest_index(color: tuple[int, ...], palette: Sequence[Color]) -> int:
    """Index of the palette entry closest to *color*."""
    return Matcher(palette).nearest_index(color)


def nearest(color: tuple[int, ...], palette: Sequence[Color]) -> Color:
    """Palette entry closest to *color* by Euclidean RGB distance.

    Raises:
        InvalidPaletteError: *palette* is empty.
    """
    return Matcher(palette).nearest(color)
