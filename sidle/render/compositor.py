from __future__ import annotations

import logging

from sidle.datatypes import Colour, Rectangle, UInt8Array
from sidle.render.geometry import pixel_span

__all__ = ["composite_rectangle", "fill"]

logger = logging.getLogger(__name__)


def fill(canvas: UInt8Array, colour: Colour) -> None:
    """Overwrite every pixel of *canvas* with *colour*."""

    canvas[...] = colour.as_tuple()


def composite_rectangle(canvas: UInt8Array, rect: Rectangle) -> None:
    """
    Paint *rect* onto *canvas* in place.

    Bounds are derived from the canvas shape and clipped to it, so geometry
    of any magnitude or sign is accepted. Pixels are replaced, not blended;
    a translucent colour overwrites the alpha channel as well.
    """

    height, width = canvas.shape[:2]
    start_x, end_x = pixel_span(rect.x, rect.width, width)
    start_y, end_y = pixel_span(rect.y, rect.height, height)
    if start_x >= end_x or start_y >= end_y:
        logger.debug("Rectangle %s lies outside the %dx%d canvas; skipped", rect, width, height)
        return
    canvas[start_y:end_y, start_x:end_x] = rect.colour.as_tuple()
