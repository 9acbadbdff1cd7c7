"""Domain ports (interfaces) for the sync engine's collaborators."""

from __future__ import annotations

from .catalog import CatalogService
from .results import Failure, FailureKind, Ok, Result

__all__ = ["CatalogService", "Failure", "FailureKind", "Ok", "Result"]
