"""Manifest loader that parses and validates user-provided JSON or TOML."""

from __future__ import annotations

import json
import math
import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Tuple

from .colour import parse_colour
from .datatypes import Colour, Element, ImageSpec, Manifest, Rectangle, Resolution
from .exceptions import (
    InvalidColour,
    ManifestError,
    ManifestParseError,
    ManifestReadError,
    ManifestSchemaError,
    UnsupportedElementType,
)
from .render.naming import INVALID_NAME_PATTERN

__all__ = [
    "ELEMENT_PARSERS",
    "InvalidColour",
    "ManifestError",
    "ManifestParseError",
    "ManifestReadError",
    "ManifestSchemaError",
    "UnsupportedElementType",
    "load_manifest",
    "parse_manifest",
]

TOML_SUFFIXES = frozenset({".toml"})


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _require(mapping: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in mapping:
        raise ManifestSchemaError(f"{path}.{key}" if path else key, "required field is missing")
    return mapping[key]


def _object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ManifestSchemaError(path or "<root>", f"must be an object, not {_type_name(value)}")
    return value


def _array(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise ManifestSchemaError(path, f"must be an array, not {_type_name(value)}")
    return value


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ManifestSchemaError(path, f"must be a string, not {_type_name(value)}")
    return value


def _number(value: Any, path: str) -> float:
    """Return a finite float; booleans are rejected even though they are ints."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ManifestSchemaError(path, f"must be a number, not {_type_name(value)}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ManifestSchemaError(path, "must be a finite number") from exc
    if not math.isfinite(number):
        raise ManifestSchemaError(path, "must be a finite number")
    return number


def _positive_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ManifestSchemaError(path, f"must be an integer, not {_type_name(value)}")
    if value <= 0:
        raise ManifestSchemaError(path, "must be > 0")
    return value


def _colour(value: Any, path: str) -> Colour:
    text = _string(value, path)
    try:
        return parse_colour(text)
    except InvalidColour as exc:
        raise InvalidColour(text, path) from exc


def _image_name(value: Any, path: str) -> str:
    name = _string(value, path)
    if not name:
        raise ManifestSchemaError(path, "must not be empty")
    if name in {".", ".."} or INVALID_NAME_PATTERN.search(name):
        raise ManifestSchemaError(path, f"{name!r} is not a valid file name")
    return name


def _parse_resolution(raw: Any, path: str) -> Resolution:
    pair = _array(raw, path)
    if len(pair) != 2:
        raise ManifestSchemaError(path, f"must be a [width, height] pair, not {len(pair)} items")
    return Resolution(
        width=_positive_int(pair[0], f"{path}[0]"),
        height=_positive_int(pair[1], f"{path}[1]"),
    )


def _parse_rectangle(raw: Dict[str, Any], path: str) -> Rectangle:
    return Rectangle(
        x=_number(_require(raw, "x", path), f"{path}.x"),
        y=_number(_require(raw, "y", path), f"{path}.y"),
        width=_number(_require(raw, "width", path), f"{path}.width"),
        height=_number(_require(raw, "height", path), f"{path}.height"),
        colour=_colour(_require(raw, "colour", path), f"{path}.colour"),
    )


ElementParser = Callable[[Dict[str, Any], str], Element]

ELEMENT_PARSERS: Mapping[str, ElementParser] = {
    Rectangle.tag: _parse_rectangle,
}


def _parse_element(raw: Any, path: str) -> Element:
    element = _object(raw, path)
    element_type = _string(_require(element, "type", path), f"{path}.type")
    parser = ELEMENT_PARSERS.get(element_type)
    if parser is None:
        raise UnsupportedElementType(element_type, f"{path}.type")
    return parser(element, path)


def _parse_image(raw: Any, path: str) -> ImageSpec:
    image = _object(raw, path)
    name = _image_name(_require(image, "name", path), f"{path}.name")
    width = _number(_require(image, "width", path), f"{path}.width")
    height = _number(_require(image, "height", path), f"{path}.height")
    background = _colour(_require(image, "background", path), f"{path}.background")
    elements = _array(_require(image, "elements", path), f"{path}.elements")
    return ImageSpec(
        name=name,
        width=width,
        height=height,
        background=background,
        elements=tuple(
            _parse_element(element, f"{path}.elements[{index}]")
            for index, element in enumerate(elements)
        ),
    )


def parse_manifest(raw: Any, source: Path | None = None) -> Manifest:
    """
    Validate an already-decoded document and build a ``Manifest``.

    Parameters:
        raw (Any): Decoded JSON/TOML tree.
        source (Path | None): File the tree came from, kept for reporting.

    Returns:
        Manifest: Immutable manifest with every colour and element parsed.

    Raises:
        ManifestSchemaError: If a required field is missing or has the wrong
            type or value. ``InvalidColour`` and ``UnsupportedElementType``
            are raised for bad colours and unknown element tags.
    """

    root = _object(raw, "")
    output_path = _string(_require(root, "outputPath", ""), "outputPath")
    if not output_path:
        raise ManifestSchemaError("outputPath", "must not be empty")
    resolutions: Tuple[Resolution, ...] = tuple(
        _parse_resolution(item, f"resolutions[{index}]")
        for index, item in enumerate(_array(_require(root, "resolutions", ""), "resolutions"))
    )
    images: Tuple[ImageSpec, ...] = tuple(
        _parse_image(item, f"images[{index}]")
        for index, item in enumerate(_array(_require(root, "images", ""), "images"))
    )
    return Manifest(
        output_path=Path(os.path.normpath(output_path)),
        resolutions=resolutions,
        images=images,
        source=source,
    )


def _decode(text: str, path: Path) -> Any:
    if path.suffix.lower() in TOML_SUFFIXES:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestParseError(f"Failed to parse TOML: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(f"Failed to parse JSON: {exc}") from exc


def load_manifest(path: str | os.PathLike[str]) -> Manifest:
    """
    Load and validate a manifest from a JSON file (or TOML for ``*.toml``).

    The file is read as UTF-8; a leading byte order mark is accepted.

    Raises:
        ManifestReadError: If the file cannot be opened or is not UTF-8.
        ManifestParseError: If the text is not a valid document.
        ManifestSchemaError: If the document does not describe a manifest.
    """

    manifest_path = Path(path)
    try:
        raw_bytes = manifest_path.read_bytes()
    except OSError as exc:
        raise ManifestReadError(f"could not open {manifest_path}: {exc.strerror or exc}") from exc
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        text = raw_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestReadError(f"{manifest_path} must be UTF-8 encoded") from exc
    return parse_manifest(_decode(text, manifest_path), source=manifest_path)
