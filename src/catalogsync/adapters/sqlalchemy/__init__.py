"""SQLAlchemy adapter (SQL target)."""

from __future__ import annotations

from .services import SqlAlchemyCatalogService
from .state import StartupError, configured_engine, is_started, shutdown, startup
from .tables import catalog_entities_table, metadata

__all__ = [
    "SqlAlchemyCatalogService",
    "StartupError",
    "catalog_entities_table",
    "configured_engine",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
