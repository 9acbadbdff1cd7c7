"""Configuration error definitions."""

from __future__ import annotations

from catalogsync.domain.errors import CatalogSyncError


class ConfigurationError(CatalogSyncError, RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""
