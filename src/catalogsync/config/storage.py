"""Where the SQL target keeps its data.

The database is chosen in this order: an explicit URI (``--database-uri``), the
``DATABASE_URI`` environment variable, then a SQLite file in the per-user data directory
(``CATALOGSYNC_DATA_DIR`` overrides the directory).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Any, Final

from .env import optional_env_var

log = getLogger(__name__)

APP_DIR_NAME: Final[str] = "catalogsync"
DEFAULT_DB_FILENAME: Final[str] = "catalogsync.db"
DATA_DIR_ENV_VAR: Final[str] = "CATALOGSYNC_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


def default_data_dir() -> Path:
    if os.name == "nt":
        root = optional_env_var("LOCALAPPDATA") or Path.home() / "AppData" / "Local"
    else:
        root = optional_env_var("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(root, APP_DIR_NAME)


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def database_path(self) -> Path:
        """Path of the SQLite file; the data directory is created on demand."""
        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str

    @property
    def is_sqlite(self) -> bool:
        return self.uri.startswith("sqlite")

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for ``sqlalchemy.create_engine``."""
        if self.is_sqlite:
            # connections are used from worker threads
            return {"connect_args": {"check_same_thread": False}}
        return {}


def get_storage_config() -> StorageConfig:
    data_dir = optional_env_var(DATA_DIR_ENV_VAR)
    return StorageConfig(data_dir=Path(data_dir) if data_dir else default_data_dir())


def get_database_config(
    *,
    uri: str | None = None,
    storage: StorageConfig | None = None,
) -> DatabaseConfig:
    if uri:
        return DatabaseConfig(uri=uri)
    env_uri = optional_env_var(DATABASE_URI_ENV_VAR)
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    path = (storage or get_storage_config()).database_path()
    log.debug("No database URI configured, using %s", path)
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{path}")
