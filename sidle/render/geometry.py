"""Fractional-to-pixel conversion helpers."""

from __future__ import annotations

import math

__all__ = ["pixel_span", "round_half_away"]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (C ``round``).

    Python's built-in ``round`` rounds ties to even, which shifts pixel
    boundaries for values such as ``0.5 * 5``.
    """

    magnitude = math.floor(abs(value) + 0.5)
    return int(math.copysign(magnitude, value))


def pixel_span(offset: float, length: float, extent: int) -> tuple[int, int]:
    """
    Convert a relative ``offset``/``length`` pair into a pixel range on an axis.

    The start is ``round(offset * extent)`` and the end is the start plus
    ``round(length * extent)``, capped at ``extent``. The start is clamped to
    zero only after the end has been computed, so a negative offset shortens
    the visible span instead of shifting it.

    Returns:
        tuple[int, int]: ``(start, end)`` with ``0 <= start`` and
            ``end <= extent``. The span is empty when ``start >= end``.
    """

    scaled_offset = offset * extent
    scaled_length = length * extent
    if not (math.isfinite(scaled_offset) and math.isfinite(scaled_length)):
        return 0, 0
    start = round_half_away(scaled_offset)
    end = min(start + round_half_away(scaled_length), extent)
    return max(start, 0), end
