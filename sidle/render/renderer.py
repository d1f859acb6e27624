"""Turn one ``ImageSpec`` into pixels at one ``Resolution``."""

from __future__ import annotations

import logging
import math

import numpy as np

from sidle.datatypes import CHANNELS, Element, ImageSpec, RawImage, Rectangle, Resolution, UInt8Array
from sidle.exceptions import UnsupportedElementType
from sidle.render.compositor import composite_rectangle, fill
from sidle.render.encoder import MAX_TGA_DIMENSION
from sidle.render.errors import CanvasSizeError
from sidle.render.geometry import round_half_away

__all__ = ["canvas_size", "draw_element", "render_image"]

logger = logging.getLogger(__name__)


def canvas_size(spec: ImageSpec, resolution: Resolution) -> tuple[int, int]:
    """
    Return the pixel ``(width, height)`` of *spec* rendered at *resolution*.

    Negative scales clamp to zero. The size is checked before any pixels are
    allocated, so dry runs reject the same canvases a real run would.

    Raises:
        CanvasSizeError: If a scaled side overflows to infinity or exceeds
            ``MAX_TGA_DIMENSION``.
    """

    scaled_width = spec.width * resolution.width
    scaled_height = spec.height * resolution.height
    if not (math.isfinite(scaled_width) and math.isfinite(scaled_height)):
        raise CanvasSizeError(f"{spec.name} at {resolution.label}: canvas size is not finite")
    width = max(0, round_half_away(scaled_width))
    height = max(0, round_half_away(scaled_height))
    if width > MAX_TGA_DIMENSION or height > MAX_TGA_DIMENSION:
        raise CanvasSizeError(
            f"{spec.name} at {resolution.label}: {width}x{height} exceeds the TGA limit "
            f"of {MAX_TGA_DIMENSION} pixels per side"
        )
    return width, height


def draw_element(canvas: UInt8Array, element: Element) -> None:
    """Dispatch *element* to the routine that draws its variant."""

    if isinstance(element, Rectangle):
        composite_rectangle(canvas, element)
    else:
        raise UnsupportedElementType(type(element).__name__)


def render_image(spec: ImageSpec, resolution: Resolution) -> RawImage:
    """
    Render *spec* at *resolution*.

    A fresh canvas is allocated, filled with the background and then every
    element is drawn in declaration order, later elements covering earlier
    ones. A zero-area canvas is valid and yields an empty image.

    Raises:
        CanvasSizeError: If the canvas cannot be represented (see ``canvas_size``).
        UnsupportedElementType: If an element is not a known variant.
    """

    width, height = canvas_size(spec, resolution)
    canvas: UInt8Array = np.zeros((height, width, CHANNELS), dtype=np.uint8)
    fill(canvas, spec.background)
    for element in spec.elements:
        draw_element(canvas, element)
    logger.debug(
        "Rendered %s at %s -> %dx%d (%d elements)",
        spec.name,
        resolution.label,
        width,
        height,
        len(spec.elements),
    )
    return RawImage(width=width, height=height, pixels=canvas)
