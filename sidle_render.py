"""CLI entry point: render every image of a manifest at every resolution."""

from __future__ import annotations

import logging
from typing import Any, Optional

import click

from sidle.cli_runtime import CLIAppError, CliOutputManager
from sidle.runner import RunRequest, RunResult, run
from sidle.settings import DRY_RUN_ENV_VAR, RLE_ENV_VAR, resolve_settings

__all__ = ["main", "run_cli"]


class _RenderCommand(click.Command):
    """Command whose usage errors exit with status 1 like every other failure."""

    def make_context(
        self,
        info_name: Optional[str],
        args: list[str],
        parent: Optional[click.Context] = None,
        **extra: Any,
    ) -> click.Context:
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


def _configure_logging(quiet: bool, verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    logging.getLogger("sidle").setLevel(level)


def run_cli(
    manifest_path: str,
    *,
    rle: Optional[bool] = None,
    dry_run: Optional[bool] = None,
    quiet: bool = False,
    verbose: bool = False,
    no_color: bool = False,
) -> RunResult:
    """Resolve settings, build the reporter and delegate to the runner."""

    reporter = CliOutputManager(quiet=quiet, verbose=verbose, no_color=no_color)
    settings = resolve_settings(rle=rle, dry_run=dry_run)
    try:
        return run(RunRequest(manifest_path=manifest_path, settings=settings, reporter=reporter))
    except CLIAppError as exc:
        reporter.error(exc.rich_message)
        raise


@click.command(cls=_RenderCommand)
@click.argument("manifest_path", metavar="DESCRIPTION_FILE")
@click.option(
    "--rle/--no-rle",
    default=None,
    help=f"Run-length encode TGA output (default on; env {RLE_ENV_VAR}).",
)
@click.option(
    "--dry-run/--no-dry-run",
    default=None,
    help=f"Render everything but write no files (env {DRY_RUN_ENV_VAR}).",
)
@click.option("--quiet", is_flag=True, help="Only print errors.")
@click.option("--verbose", is_flag=True, help="List every file and enable debug logging.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
def main(
    manifest_path: str,
    rle: Optional[bool],
    dry_run: Optional[bool],
    quiet: bool,
    verbose: bool,
    no_color: bool,
) -> None:
    """Render the images described in DESCRIPTION_FILE into res<W>x<H> folders."""

    _configure_logging(quiet, verbose)
    try:
        run_cli(
            manifest_path,
            rle=rle,
            dry_run=dry_run,
            quiet=quiet,
            verbose=verbose,
            no_color=no_color,
        )
    except CLIAppError as exc:
        raise click.exceptions.Exit(exc.code) from exc


if __name__ == "__main__":
    main()
