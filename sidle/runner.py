from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from rich.markup import escape

from sidle.cli_runtime import CLIAppError, NullCliOutputManager, ReporterProtocol, format_kv
from sidle.datatypes import Manifest, RenderedFile, RenderSettings, Resolution
from sidle.manifest_loader import (
    ManifestParseError,
    ManifestReadError,
    ManifestSchemaError,
    load_manifest,
)
from sidle.render.encoder import write_tga
from sidle.render.errors import OutputDirectoryError, RenderError
from sidle.render.naming import image_filename, resolution_dirname
from sidle.render.renderer import render_image
from sidle.settings import DEFAULT_SETTINGS


@dataclass
class RunRequest:
    manifest_path: str | os.PathLike[str]
    settings: RenderSettings = DEFAULT_SETTINGS
    reporter: ReporterProtocol | None = None


@dataclass
class RunResult:
    manifest: Manifest
    settings: RenderSettings
    files: List[RenderedFile] = field(default_factory=list)

    @property
    def output_root(self) -> Path:
        return self.manifest.output_path


logger = logging.getLogger("sidle")


def _fail(category: str, detail: str | None = None) -> CLIAppError:
    message = f"error: {category}"
    rich_message = f"[bold]error:[/] {escape(category)}"
    if detail:
        message = f"{message}\n{detail}"
        rich_message = f"{rich_message}\n{escape(detail)}"
    return CLIAppError(message, rich_message=rich_message)


def ensure_resolution_dir(output_root: Path, resolution: Resolution) -> Path:
    """
    Create (if needed) and return the directory for *resolution*.

    Raises:
        OutputDirectoryError: If the directory cannot be created or the path
            is taken by something that is not a directory.
    """

    directory = output_root / resolution_dirname(resolution)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(f"could not create output folder {directory}: {exc.strerror or exc}") from exc
    if not directory.is_dir():
        raise OutputDirectoryError(f"could not create output folder {directory}")
    return directory


def render_manifest(
    manifest: Manifest,
    settings: RenderSettings = DEFAULT_SETTINGS,
    reporter: ReporterProtocol | None = None,
) -> List[RenderedFile]:
    """
    Render every image of *manifest* at every resolution, in declaration order.

    Resolutions form the outer loop so each output directory is finished
    before the next one is started. With ``settings.dry_run`` images are
    still rendered but nothing is written.

    Raises:
        OutputDirectoryError: If an output directory is unusable.
        CanvasSizeError: If an image scales to a canvas that cannot be encoded.
        EncoderError: If a file cannot be written.
        UnsupportedElementType: If an image holds an unknown element.
    """

    reporter = reporter or NullCliOutputManager()
    files: List[RenderedFile] = []
    for resolution in manifest.resolutions:
        if settings.dry_run:
            directory = manifest.output_path / resolution_dirname(resolution)
        else:
            directory = ensure_resolution_dir(manifest.output_path, resolution)
        for image in manifest.images:
            target = directory / image_filename(image.name)
            raw = render_image(image, resolution)
            if not settings.dry_run:
                write_tga(raw, target, rle=settings.rle)
            logger.info("%s %s (%dx%d)", "Rendered" if settings.dry_run else "Wrote", target, raw.width, raw.height)
            reporter.verbose_line(f"{escape(str(target))} {raw.width}x{raw.height}")
            files.append(
                RenderedFile(
                    image=image.name,
                    resolution=resolution,
                    path=target,
                    width=raw.width,
                    height=raw.height,
                )
            )
    return files


def run(request: RunRequest) -> RunResult:
    """
    Load the manifest named by *request* and render it.

    Returns:
        RunResult: The manifest, effective settings and the files produced.

    Raises:
        CLIAppError: For unreadable, unparsable or invalid manifests, unusable
            output directories, oversized canvases and encoder failures.
            Files written before the failure are left in place.
    """

    reporter = request.reporter or NullCliOutputManager()
    settings = request.settings
    manifest_path = Path(request.manifest_path)

    try:
        manifest = load_manifest(manifest_path)
    except ManifestReadError as exc:
        logger.debug("Manifest read failed: %s", exc)
        raise _fail(f"could not open {manifest_path}") from exc
    except ManifestParseError as exc:
        raise _fail(f"could not parse {manifest_path}", str(exc)) from exc
    except ManifestSchemaError as exc:
        raise _fail("invalid description", str(exc)) from exc

    reporter.banner(f"Rendering {len(manifest.images)} image(s) at {len(manifest.resolutions)} resolution(s)")
    reporter.verbose_line(format_kv("output", manifest.output_path))
    reporter.verbose_line(format_kv("rle", settings.rle))
    if settings.dry_run:
        reporter.line("[yellow]Dry run: no files will be written[/]")

    try:
        files = render_manifest(manifest, settings, reporter)
    except ManifestSchemaError as exc:
        raise _fail("invalid description", str(exc)) from exc
    except RenderError as exc:
        raise _fail(str(exc)) from exc

    verb = "Rendered" if settings.dry_run else "Wrote"
    reporter.line(f"{verb} {len(files)} file(s) under {escape(str(manifest.output_path))}")
    return RunResult(manifest=manifest, settings=settings, files=files)


__all__ = [
    "RunRequest",
    "RunResult",
    "ensure_resolution_dir",
    "render_manifest",
    "run",
]
