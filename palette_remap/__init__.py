"""
Palette Remap
=============

Recolour images onto a fixed palette, or derive a palette from an image.
Two operations:

- **convert** - every pixel becomes its nearest palette colour
  (Euclidean RGB, first palette entry wins ties)
- **generate** - the most or least frequent colours of an image
"""

__version__ = "1.0.0"

from palette_remap.cache import ColorCache
from palette_remap.color_utils import Color, color_to_hex, distance, hex_to_color
from palette_remap.config import RemapConfig
from palette_remap.errors import (
    EmptyImageError,
    FileOpenError,
    FileWriteError,
    ImageDecodeError,
    ImageEncodeError,
    InvalidPaletteError,
    PaletteParseError,
    RemapError,
)
from palette_remap.grid import PixelGrid, load_pixel_grid
from palette_remap.image_io import load_image, save_image
from palette_remap.matcher import Matcher, nearest
from palette_remap.palette import PALETTE_SIZE, Order, generate_palette
from palette_remap.palette_io import load_palette, save_palette
from palette_remap.transform import transform

__all__ = [
    "PALETTE_SIZE",
    "Color",
    "ColorCache",
    "EmptyImageError",
    "FileOpenError",
    "FileWriteError",
    "ImageDecodeError",
    "ImageEncodeError",
    "InvalidPaletteError",
    "Matcher",
    "Order",
    "PaletteParseError",
    "PixelGrid",
    "RemapConfig",
    "RemapError",
    "color_to_hex",
    "distance",
    "generate_palette",
    "hex_to_color",
    "load_image",
    "load_palette",
    "load_pixel_grid",
    "nearest",
    "save_image",
    "save_palette",
    "transform",
]
