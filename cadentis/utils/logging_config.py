"""Process-wide logging setup for the CLI and embedding applications."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "CADENTIS_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False


def resolve_level(level: str | int | None) -> int:
    """Turn a level name or number into a ``logging`` level, defaulting to INFO."""

    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        resolved = logging.getLevelName(normalized)
        return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> int:
    """Install the root handler once and return the effective level.

    ``level`` wins over the ``CADENTIS_LOG_LEVEL`` environment variable.
    Calling again is a no-op unless ``force`` is set.
    """

    global _CONFIGURED

    env_level = os.environ.get(LOG_LEVEL_ENV)
    resolved_level = resolve_level(level if level is not None else env_level)

    if _CONFIGURED and not force:
        return resolved_level

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("cadentis").setLevel(resolved_level)
    _CONFIGURED = True
    return resolved_level


__all__ = ["LOG_LEVEL_ENV", "configure_logging", "resolve_level"]
