"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from palette_remap.config import RemapConfig
from palette_remap.errors import RemapError
from palette_remap.grid import load_pixel_grid
from palette_remap.image_io import load_image, save_image
from palette_remap.matcher import validate_palette
from palette_remap.palette import Order, generate_palette
from palette_remap.palette_io import load_palette, save_palette
from palette_remap.transform import transform

app = typer.Typer(
    name="palette-remap",
    help="Recolour images onto a fixed palette, or derive a palette from an image.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _fail(exc: RemapError) -> typer.Exit:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    return typer.Exit(1)


# Defaults come from RemapConfig - single source of truth
_DEFAULTS = RemapConfig()


# -- convert command ---------------------------------------------------

@app.command()
def convert(
    palette_file: Path = typer.Argument(..., help="JSON palette to map onto"),
    image_file: Path = typer.Argument(..., help="PNG or JPEG source image"),
    output: Path = typer.Argument(..., help="Where to save the JPEG result"),
    workers: int | None = typer.Option(
        _DEFAULTS.workers, "--workers", "-w", min=1,
        help="Row worker threads (default: one per CPU)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Replace every pixel of IMAGE_FILE with its nearest PALETTE_FILE colour."""
    _setup_logging(verbose)
    logger = logging.getLogger("palette_remap")
    t_total = time.perf_counter()

    try:
        palette = load_palette(palette_file, _DEFAULTS.palette_field)
        validate_palette(palette)
        logger.info("Palette: %d colours from %s", len(palette), palette_file)

        image = load_image(image_file, _DEFAULTS.input_formats)
        grid = load_pixel_grid(image, workers)
        logger.info("Source: %dx%d = %d pixels", grid.width, grid.height, grid.size)

        result = transform(grid, palette, workers=workers)
        save_image(output, result, _DEFAULTS.output_format)
    except RemapError as exc:
        raise _fail(exc) from exc

    elapsed = time.perf_counter() - t_total
    console.print(
        f"[green]✓[/green] Saved to {escape(str(output))}  "
        f"[dim]{grid.width}x{grid.height}  colours={len(palette)}"
        f"  time={elapsed:.1f}s[/dim]"
    )


# -- generate command --------------------------------------------------

@app.command()
def generate(
    palette_file: Path = typer.Argument(..., help="Where to save the JSON palette"),
    image_file: Path = typer.Argument(..., help="PNG or JPEG source image"),
    order: Order = typer.Argument(
        ..., help="'max' = most-used colours first, 'min' = least-used first",
    ),
    count: int = typer.Option(
        _DEFAULTS.palette_size, "--count", "-n", min=1,
        help="Maximum number of palette colours",
    ),
    workers: int | None = typer.Option(
        _DEFAULTS.workers, "--workers", "-w", min=1,
        help="Row worker threads (default: one per CPU)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Write the most or least frequent colours of IMAGE_FILE to PALETTE_FILE."""
    _setup_logging(verbose)

    try:
        image = load_image(image_file, _DEFAULTS.input_formats)
        grid = load_pixel_grid(image, workers)
        colors = generate_palette(grid, order, limit=count, workers=workers)
        save_palette(palette_file, colors, _DEFAULTS.palette_field)
    except RemapError as exc:
        raise _fail(exc) from exc

    console.print(
        f"[green]✓[/green] Saved {len(colors)} colours to {escape(str(palette_file))}"
    )


if __name__ == "__main__":
    app()
