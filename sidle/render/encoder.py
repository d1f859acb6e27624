"""TGA output for rendered canvases."""

from __future__ import annotations

import logging
import struct
from pathlib import Path

from PIL import Image

from sidle.datatypes import RawImage
from sidle.render.errors import EncoderError

__all__ = ["MAX_TGA_DIMENSION", "write_tga"]

logger = logging.getLogger(__name__)

MAX_TGA_DIMENSION = 0xFFFF

_TGA_TRUECOLOR = 2
_TGA_TRUECOLOR_RLE = 10
# 8 alpha bits, bottom-left origin.
_TGA_DESCRIPTOR = 0x08


def _empty_tga_header(image: RawImage, rle: bool) -> bytes:
    image_type = _TGA_TRUECOLOR_RLE if rle else _TGA_TRUECOLOR
    return struct.pack(
        "<BBBHHBHHHHBB",
        0,
        0,
        image_type,
        0,
        0,
        0,
        0,
        0,
        image.width,
        image.height,
        8 * image.channels,
        _TGA_DESCRIPTOR,
    )


def write_tga(image: RawImage, path: Path, *, rle: bool = True) -> Path:
    """
    Write *image* to *path* as a 32-bit RGBA TGA file.

    Pillow cannot encode a zero-area image, so a degenerate canvas is written
    as a bare header that declares the zero dimension.

    Parameters:
        image (RawImage): Finished canvas; only read.
        path (Path): Destination file; overwritten if it exists.
        rle (bool): Run-length encode the pixel data.

    Returns:
        Path: The written path.

    Raises:
        EncoderError: If the image is too large for TGA or the file cannot be written.
    """

    if image.width > MAX_TGA_DIMENSION or image.height > MAX_TGA_DIMENSION:
        raise EncoderError(
            f"{path}: {image.width}x{image.height} exceeds the TGA limit of {MAX_TGA_DIMENSION} pixels per side"
        )
    try:
        if image.width == 0 or image.height == 0:
            logger.debug("Writing empty %dx%d image to %s", image.width, image.height, path)
            path.write_bytes(_empty_tga_header(image, rle))
        else:
            pil_image = Image.fromarray(image.pixels)
            pil_image.save(path, format="TGA", compression="tga_rle" if rle else None)
    except OSError as exc:
        raise EncoderError(f"could not write {path}: {exc}") from exc
    return path
