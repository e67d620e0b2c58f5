"""Shared logging helpers for whodid."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

# chatty per-request INFO lines from the HTTP stack
_QUIET_LOGGERS = ("httpx", "httpcore")


def _level_from_environment() -> int:
    raw = optional_env_var("WHODID_LOG_LEVEL")
    if raw is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise ConfigurationError(f"WHODID_LOG_LEVEL must be a logging level name, got {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    ``level`` defaults to ``WHODID_LOG_LEVEL`` (INFO when unset). Pass
    ``force=True`` to reconfigure during tests or specialised entry points.
    """

    effective = level if level is not None else _level_from_environment()
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
