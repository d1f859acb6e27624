"""Canvas rendering, compositing and TGA output."""

from __future__ import annotations

from . import compositor, encoder, errors, geometry, naming, renderer

__all__ = ["compositor", "encoder", "errors", "geometry", "naming", "renderer"]
