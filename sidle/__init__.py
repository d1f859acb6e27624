"""Render declarative image manifests into TGA assets at several resolutions."""

from __future__ import annotations

from .colour import parse_colour
from .datatypes import Colour, ImageSpec, Manifest, RawImage, Rectangle, RenderSettings, Resolution
from .manifest_loader import load_manifest, parse_manifest
from .render.renderer import render_image

__version__ = "0.1.0"

__all__ = [
    "Colour",
    "ImageSpec",
    "Manifest",
    "RawImage",
    "Rectangle",
    "RenderSettings",
    "Resolution",
    "load_manifest",
    "parse_colour",
    "parse_manifest",
    "render_image",
]
