"""Hex colour string parsing."""

from __future__ import annotations

import string

from .datatypes import Colour
from .exceptions import InvalidColour

__all__ = ["parse_colour"]

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_colour(text: str) -> Colour:
    """
    Parse a ``#RGB``, ``#RGBA``, ``#RRGGBB`` or ``#RRGGBBAA`` string.

    The leading ``#`` is optional and digits are case-insensitive. Short
    forms duplicate each digit (``f`` -> ``0xff``); forms without an alpha
    channel are fully opaque.

    Raises:
        InvalidColour: If the text holds a non-hex character or has a digit
            count other than 3, 4, 6 or 8.
    """

    if not isinstance(text, str):
        raise InvalidColour(text)
    digits = text[1:] if text.startswith("#") else text
    if not digits or not _HEX_DIGITS.issuperset(digits):
        raise InvalidColour(text)

    if len(digits) in (3, 4):
        channels = [int(digit, 16) * 0x11 for digit in digits]
    elif len(digits) in (6, 8):
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    else:
        raise InvalidColour(text)
    return Colour(*channels)
