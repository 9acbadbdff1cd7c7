"""Caller-facing knobs of a sync run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from catalogsync.domain.diff.filters import SyncFilter

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from catalogsync.domain.events import SyncEventHandler
    from catalogsync.domain.operations import UpdateOperation

DEFAULT_BATCH_SIZE = 50

type BeforeCreateHook[TDraft] = Callable[[TDraft], TDraft | None]
type BeforeUpdateHook[TDraft, TEntity] = Callable[
    [Sequence[UpdateOperation], TDraft, TEntity], Sequence[UpdateOperation]
]


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncOptions[TDraft, TEntity]:
    """Options for one :class:`~catalogsync.domain.sync.engine.BatchSync`.

    ``before_create`` may veto a creation by returning ``None``. ``before_update`` may
    rewrite the operations computed for an update; returning none skips the update.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    on_event: SyncEventHandler | None = None
    before_create: BeforeCreateHook[TDraft] | None = None
    before_update: BeforeUpdateHook[TDraft, TEntity] | None = None
    sync_filter: SyncFilter = field(default_factory=SyncFilter)
    same_for_all_attributes: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size}")

    def apply_before_create(self, draft: TDraft) -> TDraft | None:
        if self.before_create is None:
            return draft
        return self.before_create(draft)

    def apply_before_update(
        self,
        operations: Sequence[UpdateOperation],
        draft: TDraft,
        entity: TEntity,
    ) -> list[UpdateOperation]:
        if self.before_update is None or not operations:
            return list(operations)
        return list(self.before_update(operations, draft, entity))


__all__ = ["DEFAULT_BATCH_SIZE", "BeforeCreateHook", "BeforeUpdateHook", "SyncOptions"]
