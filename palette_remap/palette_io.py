"""Palette files: a JSON object holding ``#rrggbb`` strings."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from palette_remap.color_utils import Color, color_to_hex, hex_to_color
from palette_remap.config import RemapConfig
from palette_remap.errors import FileOpenError, PaletteParseError
from palette_remap.image_io import atomic_write

_DEFAULTS = RemapConfig()


def parse_palette(text: str | bytes, field: str = _DEFAULTS.palette_field) -> list[Color]:
    """Parse palette JSON such as ``{"Colors": ["#ff0000", "#00ff00"]}``.

    Raises:
        PaletteParseError: Invalid JSON, a missing or non-list *field*, or
            a malformed colour entry.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        msg = f"Palette is not valid JSON: {exc}"
        raise PaletteParseError(msg) from exc

    if not isinstance(data, dict) or field not in data:
        msg = f"Palette must be a JSON object with a '{field}' array"
        raise PaletteParseError(msg)
    entries = data[field]
    if not isinstance(entries, list):
        msg = f"Palette field '{field}' must be an array, got {type(entries).__name__}"
        raise PaletteParseError(msg)

    return [hex_to_color(entry) for entry in entries]


def dump_palette(
    colors: Iterable[Color | tuple[int, ...] | str],
    field: str = _DEFAULTS.palette_field,
) -> str:
    """Serialise colours (or ready-made hex strings) to palette JSON."""
    parsed = [hex_to_color(c) if isinstance(c, str) else c for c in colors]
    return json.dumps({field: [color_to_hex(c) for c in parsed]}, indent=2) + "\n"


def load_palette(path: str | Path, field: str = _DEFAULTS.palette_field) -> list[Color]:
    """Read a palette file.

    Raises:
        FileOpenError:     *path* is missing or unreadable.
        PaletteParseError: The contents are malformed.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Could not open palette {path}: {exc}"
        raise FileOpenError(msg) from exc

    try:
        return parse_palette(raw, field)
    except PaletteParseError as exc:
        msg = f"Could not parse palette {path}: {exc}"
        raise PaletteParseError(msg) from exc


def save_palette(
    path: str | Path,
    colors: Iterable[Color | tuple[int, ...] | str],
    field: str = _DEFAULTS.palette_field,
) -> None:
    """Write a palette file atomically.

    Raises:
        FileWriteError: The file could not be written.
    """
    text = dump_palette(colors, field)
    with atomic_write(path) as fh:
        fh.write(text.encode("utf-8"))
