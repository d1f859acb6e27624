from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from click.testing import CliRunner

from sidle.settings import DRY_RUN_ENV_VAR, RLE_ENV_VAR

ManifestWriter = Callable[..., Path]


def _manifest_dict(output_path: str) -> Dict[str, Any]:
    return {
        "outputPath": output_path,
        "resolutions": [[100, 100]],
        "images": [
            {
                "name": "icon",
                "width": 1,
                "height": 1,
                "background": "#000000",
                "elements": [
                    {
                        "type": "rectangle",
                        "x": 0,
                        "y": 0,
                        "width": 1,
                        "height": 1,
                        "colour": "#ffffff",
                    }
                ],
            }
        ],
    }


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment flags out of the test runs."""

    monkeypatch.delenv(RLE_ENV_VAR, raising=False)
    monkeypatch.delenv(DRY_RUN_ENV_VAR, raising=False)
    # Long tmp paths must not be folded by Rich's default 80-column console.
    monkeypatch.setenv("COLUMNS", "400")


@pytest.fixture
def write_manifest(tmp_path: Path) -> ManifestWriter:
    """Write a manifest document (dict or raw text) and return its path."""

    def _write(document: Dict[str, Any] | str, name: str = "manifest.json") -> Path:
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()


@pytest.fixture
def base_manifest(output_dir: Path) -> Dict[str, Any]:
    """Single 1x1 image at 100x100: black background under a full white rectangle."""

    return _manifest_dict(str(output_dir))
