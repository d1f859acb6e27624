from __future__ import annotations

import re

from sidle.datatypes import Resolution

__all__ = [
    "IMAGE_EXTENSION",
    "INVALID_NAME_PATTERN",
    "image_filename",
    "resolution_dirname",
]

IMAGE_EXTENSION = ".tga"

INVALID_NAME_PATTERN = re.compile(r"[/\\\x00]")


def resolution_dirname(resolution: Resolution) -> str:
    """Return the directory name holding every image at *resolution*."""

    return f"res{resolution.width}x{resolution.height}"


def image_filename(name: str) -> str:
    """Return the canonical raster filename for image *name*."""

    return f"{name}{IMAGE_EXTENSION}"
