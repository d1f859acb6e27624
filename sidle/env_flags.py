"""Environment flag helpers."""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def parse_env_flag(value: Any) -> Optional[bool]:
    """Return the boolean *value* represents, or ``None`` when it is unset or unrecognised."""
    if value is None:
        return None
    if isinstance(value, bytes):
        text = value.decode(errors="ignore")
    else:
        text = str(value)
    normalized = text.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def env_flag(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Read flag *name* from *environ* (``os.environ`` by default), falling back to *default*."""
    env = os.environ if environ is None else environ
    parsed = parse_env_flag(env.get(name))
    return default if parsed is None else parsed


__all__ = ["env_flag", "parse_env_flag"]
