from __future__ import annotations

__all__ = ["CanvasSizeError", "EncoderError", "OutputDirectoryError", "RenderError"]


class RenderError(RuntimeError):
    """Base class for failures while producing output files."""


class OutputDirectoryError(RenderError):
    """Raised when an output directory cannot be created or is not a directory."""


class EncoderError(RenderError):
    """Raised when a rendered image cannot be written to disk."""


class CanvasSizeError(RenderError):
    """Raised before allocation when a canvas is not finite or too large to encode."""
