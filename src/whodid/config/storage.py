"""Database location and connection settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from .env import int_env_var, optional_env_var
from .errors import ConfigurationError

DATABASE_FILENAME: Final[str] = "whodid.db"
DEFAULT_BUSY_TIMEOUT_SECONDS: Final[int] = 15


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Where the database lives and how long a writer waits for a locked SQLite file.

    Two moderators deciding the same claim contend for the SQLite write lock; the
    second one waits up to ``busy_timeout_seconds`` and then sees the decided claim.
    """

    uri: str
    busy_timeout_seconds: int = DEFAULT_BUSY_TIMEOUT_SECONDS

    @property
    def is_sqlite(self) -> bool:
        return self.uri.startswith("sqlite")

    def engine_options(self) -> dict[str, Any]:
        if not self.is_sqlite:
            return {}
        return {"connect_args": {"timeout": self.busy_timeout_seconds}}


def data_dir() -> Path:
    """Return ``WHODID_DATA_DIR`` or the XDG data directory for whodid."""

    explicit = optional_env_var("WHODID_DATA_DIR")
    if explicit is not None:
        return Path(explicit).expanduser().resolve()
    xdg = optional_env_var("XDG_DATA_HOME")
    base = Path(xdg) if xdg is not None else Path.home() / ".local" / "share"
    return (base / "whodid").expanduser().resolve()


def get_database_config(*, uri: str | None = None) -> DatabaseConfig:
    """Build the database settings; ``uri`` overrides ``DATABASE_URI``.

    Without either, a SQLite file under :func:`data_dir` is used and the directory
    is created.
    """

    timeout = int_env_var("WHODID_DB_BUSY_TIMEOUT", DEFAULT_BUSY_TIMEOUT_SECONDS)
    if timeout < 0:
        raise ConfigurationError(f"WHODID_DB_BUSY_TIMEOUT must not be negative, got {timeout}")

    resolved = uri or optional_env_var("DATABASE_URI")
    if resolved is None:
        directory = data_dir()
        directory.mkdir(parents=True, exist_ok=True)
        resolved = f"sqlite+pysqlite:///{directory / DATABASE_FILENAME}"
    return DatabaseConfig(uri=resolved, busy_timeout_seconds=timeout)
