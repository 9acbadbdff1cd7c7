"""Process-wide engine management for the SQL target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from catalogsync.config.storage import get_database_config

from .tables import metadata

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from catalogsync.config.storage import DatabaseConfig


class StartupError(RuntimeError):
    """Raised when the SQL target is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None

    def require_engine(self) -> Engine:
        if self.engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call catalogsync.adapters.sqlalchemy."
                "state.startup() before creating a catalog service."
            )
        return self.engine


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Initialise the engine and create the entity table if needed."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or _create_engine(get_database_config(uri=database_uri))
    metadata.create_all(resolved_engine, checkfirst=True)
    _STATE.engine = resolved_engine
    return resolved_engine


def _create_engine(config: DatabaseConfig) -> Engine:
    return create_engine(config.uri, **config.engine_options())


def configured_engine() -> Engine:
    """Return the engine currently managed by the adapter."""

    return _STATE.require_engine()


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
