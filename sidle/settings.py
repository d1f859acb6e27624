"""Run settings resolved from CLI flags, environment variables and defaults."""

from __future__ import annotations

from typing import Final, Mapping, Optional

from .datatypes import RenderSettings
from .env_flags import env_flag

RLE_ENV_VAR: Final[str] = "SIDLE_TGA_RLE"
DRY_RUN_ENV_VAR: Final[str] = "SIDLE_DRY_RUN"

DEFAULT_SETTINGS: Final[RenderSettings] = RenderSettings()


def resolve_settings(
    *,
    rle: Optional[bool] = None,
    dry_run: Optional[bool] = None,
    environ: Mapping[str, str] | None = None,
) -> RenderSettings:
    """
    Combine explicit overrides with environment flags.

    Each setting takes the explicit argument when it is not ``None``, then
    the environment variable when it holds a recognised boolean, then the
    default from ``RenderSettings``.
    """

    return RenderSettings(
        rle=rle if rle is not None else env_flag(RLE_ENV_VAR, DEFAULT_SETTINGS.rle, environ),
        dry_run=(
            dry_run
            if dry_run is not None
            else env_flag(DRY_RUN_ENV_VAR, DEFAULT_SETTINGS.dry_run, environ)
        ),
    )


__all__ = ["DEFAULT_SETTINGS", "DRY_RUN_ENV_VAR", "RLE_ENV_VAR", "resolve_settings"]
