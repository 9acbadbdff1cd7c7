"""Exception hierarchy shared by the engine and the adapters."""

from __future__ import annotations


class CatalogSyncError(Exception):
    """Base class for all errors raised by catalogsync."""


class SyncError(CatalogSyncError):
    """Failure of a single record (or batch) reported through a sync event."""


class RemoteServiceError(CatalogSyncError):
    """A target rejected a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConcurrentModificationError(RemoteServiceError):
    """The entity version sent with an update is no longer the current one."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)
