"""Synchronization defaults for sync runs."""

from __future__ import annotations

from dataclasses import dataclass

from catalogsync.domain.sync.options import DEFAULT_BATCH_SIZE

from .env import positive_int_env_var
from .errors import ConfigurationError

BATCH_SIZE_ENV_VAR = "CATALOGSYNC_BATCH_SIZE"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    batch_size: int = DEFAULT_BATCH_SIZE


def get_sync_config(*, batch_size: int | None = None) -> SyncConfig:
    """Build the sync config; an explicit ``batch_size`` beats the environment."""
    if batch_size is None:
        batch_size = positive_int_env_var(BATCH_SIZE_ENV_VAR)
        if batch_size is None:
            return SyncConfig()
    if batch_size < 1:
        raise ConfigurationError(f"Batch size must be a positive integer, got {batch_size}")
    return SyncConfig(batch_size=batch_size)
