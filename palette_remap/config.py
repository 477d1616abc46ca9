"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RemapConfig:
    """All tuneable parameters for a convert or generate run.

    Attributes:
        workers:        Size of the row worker pool (None = derived from CPU count).
        palette_size:   Maximum number of colours written by ``generate``.
        output_format:  Pillow encoder used for converted images.
        input_formats:  Pillow decoders tried when sniffing input images.
        palette_field:  Name of the colour array in palette JSON files.
    """

    # Concurrency
    workers: int | None = None

    # Palette generation
    palette_size: int = 21

    # Image I/O
    output_format: str = "JPEG"
    input_formats: tuple[str, ...] = ("PNG", "JPEG")

    # Palette files
    palette_field: str = "Colors"
