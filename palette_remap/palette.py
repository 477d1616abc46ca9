"""Frequency palettes: rank an image's distinct colours by pixel count."""

from __future__ import annotations

import enum
import logging
from collections import Counter

from palette_remap.color_utils import color_to_hex
from palette_remap.errors import EmptyImageError
from palette_remap.grid import PixelGrid, map_row_chunks

logger = logging.getLogger(__name__)

# Number of colours written by ``generate`` unless told otherwise
PALETTE_SIZE = 21


class Order(enum.Enum):
    """Ranking direction for a frequency palette."""

    ASCENDING = "min"  # least-used colours first
    DESCENDING = "max"  # most-used colours first


def count_colors(
    grid: PixelGrid, workers: int | None = None,
) -> Counter[tuple[int, int, int]]:
    """Tally every RGB colour in *grid*.

    Each worker counts its own rows; the partial tallies are merged in
    row order, so the key order of the result is first-seen row-major
    order.
    """
    src = grid.pixels

    def count_rows(rows: range) -> Counter[tuple[int, int, int]]:
        tally: Counter[tuple[int, int, int]] = Counter()
        for y in rows:
            tally.update((r, g, b) for r, g, b, _ in src[y].tolist())
        return tally

    table: Counter[tuple[int, int, int]] = Counter()
    for part in map_row_chunks(grid.height, count_rows, workers):
        table.update(part)
    return table


def rank_colors(
    table: Counter[tuple[int, int, int]],
    order: Order,
    limit: int = PALETTE_SIZE,
) -> list[tuple[int, int, int]]:
    """The first *limit* colours of *table* sorted by count.

    ``sorted`` is stable (also with ``reverse=True``), so equal counts
    keep the table's first-seen order in both directions.
    """
    ranked = sorted(
        table.items(),
        key=lambda item: item[1],
        reverse=order is Order.DESCENDING,
    )
    return [color for color, _ in ranked[: max(0, limit)]]


def generate_palette(
    grid: PixelGrid,
    order: Order = Order.DESCENDING,
    limit: int = PALETTE_SIZE,
    workers: int | None = None,
) -> list[str]:
    """Build a palette from the most or least frequent colours of *grid*.

    Args:
        grid:    Source pixels.
        order:   :attr:`Order.DESCENDING` for most-used first,
            :attr:`Order.ASCENDING` for least-used first.
        limit:   Maximum palette size; fewer colours are returned when the
            image has fewer distinct colours.
        workers: Pool size for the tally (``None`` = one per CPU).

    Returns:
        Lowercase ``#rrggbb`` strings, alpha dropped.

    Raises:
        EmptyImageError: *grid* has no pixels.
    """
    if grid.is_empty:
        msg = f"Cannot build a palette from an empty image ({grid.width}x{grid.height})"
        raise EmptyImageError(msg)

    table = count_colors(grid, workers)
    colors = rank_colors(table, order, limit)
    logger.info(
        "Palette: %d of %d distinct colours (%s)",
        len(colors), len(table), order.name.lower(),
    )
    return [color_to_hex(c) for c in colors]
