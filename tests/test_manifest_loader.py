from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

import pytest

from sidle.datatypes import Colour, Rectangle, Resolution
from sidle.manifest_loader import (
    ELEMENT_PARSERS,
    InvalidColour,
    ManifestParseError,
    ManifestReadError,
    ManifestSchemaError,
    UnsupportedElementType,
    load_manifest,
    parse_manifest,
)


def _with(base: Dict[str, Any], dotted: str, value: Any) -> Dict[str, Any]:
    """Return a deep copy of *base* with the value at *dotted* replaced (or removed for ``...``)."""

    document = copy.deepcopy(base)
    node: Any = document
    parts = dotted.split(".")
    for part in parts[:-1]:
        node = node[int(part)] if isinstance(node, list) else node[part]
    last = parts[-1]
    key: Any = int(last) if isinstance(node, list) else last
    if value is ...:
        del node[key]
    else:
        node[key] = value
    return document


def test_load_manifest_builds_immutable_model(write_manifest, base_manifest, output_dir: Path) -> None:
    path = write_manifest(base_manifest)
    manifest = load_manifest(path)

    assert manifest.source == path
    assert manifest.output_path == output_dir
    assert manifest.resolutions == (Resolution(100, 100),)
    (image,) = manifest.images
    assert image.name == "icon"
    assert (image.width, image.height) == (1.0, 1.0)
    assert image.background == Colour(0, 0, 0)
    assert image.elements == (Rectangle(0.0, 0.0, 1.0, 1.0, Colour(255, 255, 255)),)
    with pytest.raises(AttributeError):
        manifest.images = ()  # type: ignore[misc]


def test_load_manifest_accepts_utf8_bom(write_manifest, base_manifest, tmp_path: Path) -> None:
    path = write_manifest(base_manifest)
    path.write_bytes(b"\xef\xbb\xbf" + path.read_bytes())
    assert load_manifest(path).images[0].name == "icon"


def test_load_manifest_reads_toml(write_manifest, tmp_path: Path) -> None:
    path = write_manifest(
        f"""
outputPath = "{(tmp_path / 'assets').as_posix()}"
resolutions = [[64, 32], [128, 64]]

[[images]]
name = "bar"
width = 1.0
height = 0.5
background = "#0000"
elements = [
  {{ type = "rectangle", x = 0.0, y = 0.0, width = 0.5, height = 1.0, colour = "#f00" }},
]
""",
        name="manifest.toml",
    )
    manifest = load_manifest(path)
    assert manifest.resolutions == (Resolution(64, 32), Resolution(128, 64))
    assert manifest.images[0].background == Colour(0, 0, 0, 0)
    assert manifest.images[0].elements[0].colour == Colour(255, 0, 0)


def test_load_manifest_normalises_output_path(write_manifest, base_manifest) -> None:
    base_manifest["outputPath"] = "build/./icons/../assets/"
    manifest = load_manifest(write_manifest(base_manifest))
    assert manifest.output_path == Path("build/assets")


def test_load_manifest_missing_file_is_read_error(tmp_path: Path) -> None:
    with pytest.raises(ManifestReadError, match="could not open"):
        load_manifest(tmp_path / "absent.json")


def test_load_manifest_directory_is_read_error(tmp_path: Path) -> None:
    with pytest.raises(ManifestReadError):
        load_manifest(tmp_path)


def test_load_manifest_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes('{"outputPath": "caf\xe9"}'.encode("latin-1"))
    with pytest.raises(ManifestReadError, match="UTF-8"):
        load_manifest(path)


@pytest.mark.parametrize(
    ("text", "name"),
    [("{not json", "manifest.json"), ("outputPath = ", "manifest.toml"), ("", "manifest.json")],
)
def test_load_manifest_syntax_errors_are_parse_errors(write_manifest, text: str, name: str) -> None:
    with pytest.raises(ManifestParseError):
        load_manifest(write_manifest(text, name=name))


@pytest.mark.parametrize(
    ("dotted", "value", "field"),
    [
        ("outputPath", ..., "outputPath"),
        ("outputPath", 5, "outputPath"),
        ("outputPath", "", "outputPath"),
        ("resolutions", ..., "resolutions"),
        ("resolutions", {"w": 1}, "resolutions"),
        ("resolutions.0", [100], "resolutions[0]"),
        ("resolutions.0", [100, 100, 3], "resolutions[0]"),
        ("resolutions.0", [100, 0], "resolutions[0][1]"),
        ("resolutions.0", [100.5, 10], "resolutions[0][0]"),
        ("resolutions.0", [True, 10], "resolutions[0][0]"),
        ("images", ..., "images"),
        ("images.0", "icon", "images[0]"),
        ("images.0.name", ..., "images[0].name"),
        ("images.0.name", "", "images[0].name"),
        ("images.0.name", "sub/icon", "images[0].name"),
        ("images.0.name", "..", "images[0].name"),
        ("images.0.width", "wide", "images[0].width"),
        ("images.0.height", None, "images[0].height"),
        ("images.0.height", False, "images[0].height"),
        ("images.0.background", ..., "images[0].background"),
        ("images.0.elements", ..., "images[0].elements"),
        ("images.0.elements", {}, "images[0].elements"),
        ("images.0.elements.0", 3, "images[0].elements[0]"),
        ("images.0.elements.0.type", ..., "images[0].elements[0].type"),
        ("images.0.elements.0.x", ..., "images[0].elements[0].x"),
        ("images.0.elements.0.height", "1", "images[0].elements[0].height"),
        ("images.0.elements.0.colour", ..., "images[0].elements[0].colour"),
    ],
)
def test_parse_manifest_reports_field_path(base_manifest, dotted: str, value: Any, field: str) -> None:
    with pytest.raises(ManifestSchemaError) as excinfo:
        parse_manifest(_with(base_manifest, dotted, value))
    assert excinfo.value.field == field
    assert str(excinfo.value).startswith(f"{field}: ")


def test_parse_manifest_rejects_non_object_root() -> None:
    with pytest.raises(ManifestSchemaError, match="must be an object"):
        parse_manifest([1, 2, 3])


def test_parse_manifest_rejects_non_finite_numbers(base_manifest) -> None:
    with pytest.raises(ManifestSchemaError, match="finite"):
        parse_manifest(_with(base_manifest, "images.0.width", float("inf")))
    with pytest.raises(ManifestSchemaError, match="finite"):
        parse_manifest(_with(base_manifest, "images.0.elements.0.x", 10**400))


def test_parse_manifest_invalid_colour_carries_path(base_manifest) -> None:
    with pytest.raises(InvalidColour) as excinfo:
        parse_manifest(_with(base_manifest, "images.0.elements.0.colour", "#12"))
    assert excinfo.value.field == "images[0].elements[0].colour"
    assert "invalid colour '#12'" in str(excinfo.value)


def test_parse_manifest_rejects_unknown_element_type(base_manifest) -> None:
    with pytest.raises(UnsupportedElementType) as excinfo:
        parse_manifest(_with(base_manifest, "images.0.elements.0.type", "circle"))
    assert excinfo.value.field == "images[0].elements[0].type"
    assert excinfo.value.element_type == "circle"


def test_parse_manifest_keeps_declaration_order(base_manifest) -> None:
    document = copy.deepcopy(base_manifest)
    document["resolutions"] = [[30, 30], [10, 10], [20, 20]]
    first = document["images"][0]
    document["images"] = [dict(first, name=name) for name in ("c", "a", "b")]
    manifest = parse_manifest(document)
    assert [r.width for r in manifest.resolutions] == [30, 10, 20]
    assert [image.name for image in manifest.images] == ["c", "a", "b"]


def test_parse_manifest_allows_empty_lists_and_ignores_unknown_keys(base_manifest) -> None:
    document = copy.deepcopy(base_manifest)
    document["comment"] = "ignored"
    document["images"][0]["elements"] = []
    document["resolutions"] = []
    manifest = parse_manifest(document)
    assert manifest.resolutions == ()
    assert manifest.images[0].elements == ()


def test_element_parsers_registry_lists_rectangle() -> None:
    assert set(ELEMENT_PARSERS) == {"rectangle"}
