"""Exception hierarchy for manifest loading and validation."""

from __future__ import annotations

__all__ = [
    "InvalidColour",
    "ManifestError",
    "ManifestParseError",
    "ManifestReadError",
    "ManifestSchemaError",
    "UnsupportedElementType",
]


class ManifestError(ValueError):
    """Base class for all manifest related failures."""


class ManifestReadError(ManifestError):
    """Raised when the manifest file cannot be opened or decoded."""


class ManifestParseError(ManifestError):
    """Raised when the manifest text is not a valid document."""


class ManifestSchemaError(ManifestError):
    """Raised when a field is missing or has the wrong type or value.

    ``field`` is the dotted path of the offending value, e.g.
    ``images[0].elements[1].colour``; it is empty when the error is raised
    outside the loader.
    """

    def __init__(self, field: str, problem: str) -> None:
        self.field = field
        self.problem = problem
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.problem}"
        return self.problem


class InvalidColour(ManifestSchemaError):
    """Raised when a colour string is not 3, 4, 6 or 8 hex digits."""

    def __init__(self, text: object, field: str = "") -> None:
        self.text = text
        super().__init__(field, f"invalid colour {text!r}")


class UnsupportedElementType(ManifestSchemaError):
    """Raised for an element tag or element object that cannot be drawn."""

    def __init__(self, element_type: object, field: str = "") -> None:
        self.element_type = element_type
        super().__init__(field, f"unsupported element type {element_type!r}")
