"""Exception hierarchy shared by the engine and the I/O helpers."""

from __future__ import annotations


class RemapError(Exception):
    """Base class for every failure surfaced to the command line."""


class FileOpenError(RemapError):
    """An input path is missing or unreadable."""


class ImageDecodeError(RemapError):
    """The input is not a decodable PNG or JPEG image."""


class PaletteParseError(RemapError, ValueError):
    """The palette file is not valid JSON or holds a malformed colour."""


class InvalidPaletteError(RemapError, ValueError):
    """An empty palette was supplied for matching."""


class EmptyImageError(RemapError, ValueError):
    """The pixel grid has no rows or zero-width rows."""


class ImageEncodeError(RemapError):
    """The output image could not be encoded."""


class FileWriteError(RemapError):
    """An output file could not be written."""
