"""Sync events: the single channel through which errors and warnings escape a run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.domain.errors import SyncError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from catalogsync.domain.operations import UpdateOperation

log = getLogger(__name__)


class SyncEventKind(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncEvent:
    """Error or warning raised while validating, diffing or syncing a record.

    ``exception`` is always a :class:`SyncError` whose ``__cause__`` is the underlying
    failure, if there was one.
    """

    kind: SyncEventKind
    message: str
    exception: SyncError | None = None
    old_entity: object | None = None
    new_draft: object | None = None
    operations: tuple[UpdateOperation, ...] | None = None


type SyncEventHandler = Callable[[SyncEvent], None]


@dataclass(slots=True)
class EventReporter:
    """Logs events and forwards them to the caller's handler, if any."""

    handler: SyncEventHandler | None = None
    logger: logging.Logger = field(default=log)

    def error(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        old_entity: object | None = None,
        new_draft: object | None = None,
        operations: Sequence[UpdateOperation] | None = None,
    ) -> None:
        self._emit(
            SyncEventKind.ERROR,
            message,
            cause=cause,
            old_entity=old_entity,
            new_draft=new_draft,
            operations=operations,
        )

    def warning(
        self,
        message: str,
        *,
        old_entity: object | None = None,
        new_draft: object | None = None,
    ) -> None:
        self._emit(
            SyncEventKind.WARNING,
            message,
            cause=None,
            old_entity=old_entity,
            new_draft=new_draft,
            operations=None,
        )

    def _emit(
        self,
        kind: SyncEventKind,
        message: str,
        *,
        cause: BaseException | None,
        old_entity: object | None,
        new_draft: object | None,
        operations: Sequence[UpdateOperation] | None,
    ) -> None:
        exception = SyncError(message)
        exception.__cause__ = cause
        level = logging.ERROR if kind is SyncEventKind.ERROR else logging.WARNING
        self.logger.log(level, message, exc_info=cause)
        if self.handler is None:
            return
        self.handler(
            SyncEvent(
                kind=kind,
                message=message,
                exception=exception,
                old_entity=old_entity,
                new_draft=new_draft,
                operations=tuple(operations) if operations is not None else None,
            )
        )


__all__ = ["EventReporter", "SyncEvent", "SyncEventHandler", "SyncEventKind"]
