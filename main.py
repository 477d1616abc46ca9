#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py convert palette.json photo.png photo_remapped.jpg
    python main.py generate palette.json photo.png max

Or run the package module directly:

    python -m palette_remap.cli --help
"""

from palette_remap.cli import app

if __name__ == "__main__":
    app()
