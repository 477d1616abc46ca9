"""Row-major pixel grids and the threaded row loader."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

import numpy as np
from PIL import Image

from palette_remap.color_utils import Color

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Row chunks queued per worker
_CHUNKS_PER_WORKER = 4

# Pillow modes holding integer greyscale wider than 8 bits
_WIDE_GREY_MODES = frozenset({"I", "I;16", "I;16L", "I;16B", "I;16N"})


def default_workers() -> int:
    """Pool size derived from the available CPUs."""
    n = os.cpu_count() or 4
    return max(1, min(32, n))


def split_rows(height: int, workers: int) -> list[range]:
    """Partition ``range(height)`` into contiguous, non-overlapping chunks."""
    if height <= 0:
        return []
    step = max(1, -(-height // (max(1, workers) * _CHUNKS_PER_WORKER)))
    return [range(s, min(height, s + step)) for s in range(0, height, step)]


def map_row_chunks(
    height: int,
    fn: Callable[[range], T],
    workers: int | None = None,
) -> list[T]:
    """Run *fn* over row chunks on a bounded thread pool.

    Blocks until every chunk has finished and returns the results in row
    order.  The first exception raised by a worker propagates.
    """
    workers = workers or default_workers()
    chunks = split_rows(height, workers)
    if workers == 1 or len(chunks) <= 1:
        return [fn(rows) for rows in chunks]
    with ThreadPoolExecutor(max_workers=workers) as ex:
        return list(ex.map(fn, chunks))


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """Immutable (H, W, 4) uint8 RGBA pixels in row-major order."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 4:
            msg = f"Pixel grid must have shape (H, W, 4), got {arr.shape}"
            raise ValueError(msg)
        if arr.flags.writeable:
            arr = arr.copy()
            arr.flags.writeable = False
        object.__setattr__(self, "pixels", arr)

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelGrid:
        """Build a grid from (H, W, 3) RGB or (H, W, 4) RGBA data."""
        arr = np.asarray(array, dtype=np.uint8)
        if arr.ndim == 3 and arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(arr)

    @classmethod
    def from_colors(cls, rows: Sequence[Sequence[tuple[int, ...]]]) -> PixelGrid:
        """Build a grid from rows of colours (RGB tuples get full alpha)."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        if any(len(r) != width for r in rows):
            msg = "All rows of a pixel grid must have the same length"
            raise ValueError(msg)
        flat = [tuple(Color(*c)) for r in rows for c in r]
        arr = np.array(flat, dtype=np.uint8).reshape(height, width, 4)
        return cls(arr)

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def pixel(self, x: int, y: int) -> Color:
        return Color(*(int(v) for v in self.pixels[y, x]))

    def colors(self) -> Iterator[Color]:
        for row in self.pixels.tolist():
            for px in row:
                yield Color(*px)

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))


def load_pixel_grid(image: Image.Image, workers: int | None = None) -> PixelGrid:
    """Extract every pixel of a decoded image into a :class:`PixelGrid`.

    Integer greyscale (16-bit PNGs decode as ``I;16`` or ``I``) is scaled
    down to 8 bits by keeping the high byte; Pillow's own conversion
    would clip it at 255.  Each worker fills its own rows of the grid
    buffer, and all rows are joined before the grid is returned.
    """
    width, height = image.size
    out = np.empty((height, width, 4), dtype=np.uint8)

    if image.mode in _WIDE_GREY_MODES:
        wide = np.asarray(image).astype(np.int64).reshape(height, width)

        def fill_rows(rows: Iterable[int]) -> None:
            for y in rows:
                grey = (np.clip(wide[y], 0, 0xFFFF) >> 8).astype(np.uint8)
                out[y, :, :3] = grey[:, np.newaxis]
                out[y, :, 3] = 255
    else:
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        src = np.asarray(rgba, dtype=np.uint8).reshape(height, width, 4)

        # already 8-bit RGBA: rows are plain copies into the grid buffer
        def fill_rows(rows: Iterable[int]) -> None:
            for y in rows:
                out[y] = src[y]

    map_row_chunks(height, fill_rows, workers)
    out.flags.writeable = False
    logger.debug("Loaded %dx%d pixel grid from mode %s", width, height, image.mode)
    return PixelGrid(out)
