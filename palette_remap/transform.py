"""Recolour a pixel grid onto a palette using a shared colour cache."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

import numpy as np

from palette_remap.cache import ColorCache
from palette_remap.color_utils import Color
from palette_remap.errors import EmptyImageError
from palette_remap.grid import PixelGrid, default_workers, map_row_chunks
from palette_remap.matcher import Matcher

logger = logging.getLogger(__name__)


def transform(
    grid: PixelGrid,
    palette: Sequence[Color],
    *,
    cache: ColorCache | None = None,
    workers: int | None = None,
) -> PixelGrid:
    """Replace every pixel with its nearest palette colour.

    Rows are processed on a bounded thread pool.  Each worker owns its
    rows of the output buffer, so only the cache is shared.  The source
    alpha of every pixel is kept.

    Args:
        grid:    Source pixels.
        palette: Candidate colours (order decides ties).
        cache:   Cache to share between workers; a fresh one if omitted.
        workers: Pool size (``None`` = one per CPU).

    Returns:
        A new grid with the same dimensions as *grid*.

    Raises:
        InvalidPaletteError: *palette* is empty.
        EmptyImageError:     *grid* has no rows or zero-width rows.
    """
    matcher = Matcher(palette)
    if grid.height == 0 or grid.width == 0:
        msg = f"Cannot convert an empty image ({grid.width}x{grid.height})"
        raise EmptyImageError(msg)

    if cache is None:
        cache = ColorCache()
    workers = workers or default_workers()
    src = grid.pixels
    out = np.empty_like(src)

    def convert_rows(rows: range) -> None:
        for y in rows:
            dst = out[y]
            for x, (r, g, b, a) in enumerate(src[y].tolist()):
                key = (r, g, b)
                match = cache.get(key)
                if match is None:
                    # No lock while matching; racing workers compute equal values.
                    match = cache.insert_if_absent(key, matcher.nearest(key))
                dst[x] = (match.r, match.g, match.b, a)

    logger.info(
        "Converting %dx%d pixels onto %d colours (%d workers) ...",
        grid.width, grid.height, len(matcher), workers,
    )
    t0 = time.perf_counter()
    map_row_chunks(grid.height, convert_rows, workers)
    logger.info(
        "Conversion done  (%.1f s, %d distinct colours cached)",
        time.perf_counter() - t0, len(cache),
    )
    out.flags.writeable = False
    return PixelGrid(out)
