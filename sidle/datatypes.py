"""Immutable data model for image manifests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Optional, Tuple, Union

import numpy as np
import numpy.typing as npt

UInt8Array = npt.NDArray[np.uint8]

CHANNELS = 4


@dataclass(frozen=True)
class Colour:
    """8-bit RGBA colour. Alpha defaults to fully opaque."""

    r: int
    g: int
    b: int
    a: int = 0xFF

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}{:02x}".format(*self.as_tuple())


@dataclass(frozen=True)
class Resolution:
    """One physical pixel scale at which every image is rendered."""

    width: int
    height: int

    @property
    def label(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle layer in coordinates relative to the canvas.

    Attributes:
        x: Left edge as a fraction of canvas width.
        y: Top edge as a fraction of canvas height.
        width: Width as a fraction of canvas width.
        height: Height as a fraction of canvas height.
        colour: Fill colour; replaces whatever is underneath.
    """

    x: float
    y: float
    width: float
    height: float
    colour: Colour

    tag: ClassVar[str] = "rectangle"


# Union of every drawable layer type. New variants are added here, in the
# loader registry and in the renderer dispatch.
Element = Union[Rectangle]


@dataclass(frozen=True)
class ImageSpec:
    """A named image: relative size, background and ordered layers."""

    name: str
    width: float
    height: float
    background: Colour
    elements: Tuple[Element, ...] = ()


@dataclass(frozen=True)
class Manifest:
    """Root document: where to write, at which resolutions, which images."""

    output_path: Path
    resolutions: Tuple[Resolution, ...]
    images: Tuple[ImageSpec, ...]
    source: Optional[Path] = None


@dataclass(frozen=True)
class RawImage:
    """A finished canvas handed to the encoder.

    ``pixels`` has shape ``(height, width, 4)``, row-major with a top-left
    origin.
    """

    width: int
    height: int
    pixels: UInt8Array = field(repr=False, compare=False)
    channels: int = CHANNELS


@dataclass(frozen=True)
class RenderSettings:
    """Run-wide encoder and driver switches."""

    rle: bool = True
    dry_run: bool = False


@dataclass(frozen=True)
class RenderedFile:
    """One (image, resolution) output produced by a run."""

    image: str
    resolution: Resolution
    path: Path
    width: int
    height: int
