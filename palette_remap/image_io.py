"""Image loading and atomic JPEG saving."""

from __future__ import annotations

import io
import os
import shutil
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from PIL import Image, UnidentifiedImageError

from palette_remap.config import RemapConfig
from palette_remap.errors import (
    FileOpenError,
    FileWriteError,
    ImageDecodeError,
    ImageEncodeError,
)
from palette_remap.grid import PixelGrid

_DEFAULTS = RemapConfig()


def _new_file_mode() -> int:
    """Mode a fresh file would get under the current umask."""
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


@contextmanager
def atomic_write(path: str | Path) -> Iterator[IO[bytes]]:
    """Write *path* through a temporary sibling file renamed on success.

    If the body raises, the temporary file is removed and *path* is left
    untouched.

    Raises:
        FileWriteError: The temporary file cannot be created, written or
            renamed into place.
    """
    path = Path(path)
    try:
        tmp = tempfile.NamedTemporaryFile(
            mode="wb", delete=False, dir=path.parent,
            prefix=f".{path.name}.", suffix=".tmp",
        )
    except OSError as exc:
        msg = f"Cannot create file {path}: {exc}"
        raise FileWriteError(msg) from exc

    tmp_path = Path(tmp.name)
    try:
        with tmp:
            yield tmp
        if path.exists():
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, _new_file_mode())
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        msg = f"Cannot write file {path}: {exc}"
        raise FileWriteError(msg) from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def load_image(
    path: str | Path,
    formats: Sequence[str] = _DEFAULTS.input_formats,
) -> Image.Image:
    """Open and fully decode a PNG or JPEG image.

    The format is sniffed from the file contents, not the extension.

    Raises:
        FileOpenError:    *path* is missing or unreadable.
        ImageDecodeError: The file is not a decodable image of *formats*.
    """
    path = Path(path)
    try:
        fh = path.open("rb")
    except OSError as exc:
        msg = f"Could not open image {path}: {exc}"
        raise FileOpenError(msg) from exc

    with fh:
        try:
            img = Image.open(fh, formats=list(formats))
            img.load()
        except (
            UnidentifiedImageError, Image.DecompressionBombError,
            OSError, SyntaxError, ValueError,
        ) as exc:
            msg = f"Failed to decode image {path}: {exc}"
            raise ImageDecodeError(msg) from exc
    return img


def encode_image(grid: PixelGrid, fmt: str = _DEFAULTS.output_format) -> bytes:
    """Encode *grid* with Pillow's default settings for *fmt*.

    JPEG has no alpha channel, so alpha is dropped for it.
    """
    img = grid.to_image()
    if fmt.upper() in ("JPEG", "JPG"):
        img = img.convert("RGB")
    buf = io.BytesIO()
    try:
        img.save(buf, format=fmt)
    except (OSError, ValueError, KeyError) as exc:
        msg = f"Failed to encode {grid.width}x{grid.height} image as {fmt}: {exc}"
        raise ImageEncodeError(msg) from exc
    return buf.getvalue()


def save_image(
    path: str | Path, grid: PixelGrid, fmt: str = _DEFAULTS.output_format,
) -> None:
    """Encode *grid* (JPEG by default) and write it atomically to *path*.

    Raises:
        ImageEncodeError: Encoding failed; nothing is written.
        FileWriteError:   The file could not be written.
    """
    data = encode_image(grid, fmt)
    with atomic_write(path) as fh:
        fh.write(data)
