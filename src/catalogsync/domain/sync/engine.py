"""Batch sync orchestrator.

Drafts are cut into batches that are processed one after another. Inside a batch every
record is created or updated concurrently; an update rejected for a version conflict is
re-fetched, re-diffed and attempted exactly once more.
"""

from __future__ import annotations

import asyncio
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.domain.diff import DiffContext
from catalogsync.domain.events import EventReporter
from catalogsync.domain.model import Draft, RemoteEntity
from catalogsync.domain.ports import Failure, FailureKind, Ok
from catalogsync.domain.sync.matching import match_drafts
from catalogsync.domain.sync.options import SyncOptions
from catalogsync.domain.sync.statistics import SyncStatistics
from catalogsync.domain.sync.validation import DraftValidator

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable, Sequence

    from catalogsync.domain.operations import UpdateOperation
    from catalogsync.domain.ports import CatalogService, Result
    from catalogsync.domain.sync.kinds import ResourceKind
    from catalogsync.domain.sync.matching import MatchPair

log = getLogger(__name__)

FETCH_FAILED = "Failed to fetch existing {resources} with keys: '{keys}'."
CREATE_FAILED = "Failed to create {resource} with key: '{key}'. Reason: {reason}"
UPDATE_FAILED = "Failed to update {resource} with key: '{key}'. Reason: {reason}"
RETRY_FETCH_FAILED = "Failed to fetch from the target while retrying after a concurrent modification."
RETRY_NOT_FOUND = "Not found when attempting to fetch while retrying after a concurrent modification."


class BatchSync[TDraft: Draft, TEntity: RemoteEntity]:
    """Sync drafts of one kind into a :class:`CatalogService`.

    Normal remote failures never escape :meth:`sync`; they are counted as failed and
    reported through the event handler of the options.
    """

    def __init__(
        self,
        *,
        kind: ResourceKind[TDraft, TEntity],
        service: CatalogService[TDraft, TEntity],
        options: SyncOptions[TDraft, TEntity] | None = None,
    ) -> None:
        self.kind = kind
        self.service = service
        self.options = options or SyncOptions()
        self.statistics = SyncStatistics(resource_name=kind.plural)
        self._reporter = EventReporter(handler=self.options.on_event)
        self._validator = DraftValidator(
            reporter=self._reporter,
            label=kind.label,
            checks=kind.checks,
        )
        self._context = DiffContext(
            reporter=self._reporter,
            sync_filter=self.options.sync_filter,
            same_for_all_attributes=self.options.same_for_all_attributes,
        )

    async def sync(self, drafts: Iterable[TDraft | None]) -> SyncStatistics:
        """Sync all ``drafts`` and return the statistics of this run."""
        self.statistics = SyncStatistics(resource_name=self.kind.plural)
        self.statistics.start()
        log.info(
            "Starting %s sync (batch_size=%s)", self.kind.name, self.options.batch_size
        )
        for batch in batched(drafts, self.options.batch_size):
            await self._process_batch(batch)
        self.statistics.finish()
        log.info(
            "%s (%.2fs)", self.statistics.report_message, self.statistics.elapsed_seconds
        )
        return self.statistics

    async def _process_batch(self, batch: Sequence[TDraft | None]) -> None:
        validation = self._validator.validate(batch)
        if validation.drafts:
            await self._sync_valid_drafts(validation.drafts, validation.keys)
        self.statistics.increment_processed(len(batch))

    async def _sync_valid_drafts(self, drafts: Sequence[TDraft], keys: frozenset[str]) -> None:
        try:
            existing = await self.service.fetch_by_keys(keys)
        except Exception as exc:  # noqa: BLE001
            self._reporter.error(
                FETCH_FAILED.format(resources=self.kind.plural, keys=", ".join(sorted(keys))),
                cause=exc,
            )
            self.statistics.increment_failed(len(keys))
            return

        pairs = match_drafts(existing, drafts)
        log.debug(
            "Batch of %s %s: %s to create, %s to update",
            len(pairs),
            self.kind.plural,
            sum(pair.is_new for pair in pairs),
            sum(not pair.is_new for pair in pairs),
        )
        await asyncio.gather(*(self._sync_pair(pair) for pair in pairs))

    async def _sync_pair(self, pair: MatchPair[TDraft, TEntity]) -> None:
        if pair.entity is None:
            await self._create(pair.draft)
        else:
            await self._update(pair.entity, pair.draft, retry_on_conflict=True)

    async def _create(self, draft: TDraft) -> None:
        prepared = self.options.apply_before_create(draft)
        if prepared is None:
            log.debug("Creation of %s %r skipped by before_create", self.kind.name, draft.key)
            return
        result = await _settle(self.service.create(prepared))
        if isinstance(result, Ok):
            self.statistics.increment_created()
            return
        self._reporter.error(
            CREATE_FAILED.format(resource=self.kind.name, key=prepared.key, reason=result.error),
            cause=result.error,
            new_draft=prepared,
        )
        self.statistics.increment_failed()

    async def _update(self, entity: TEntity, draft: TDraft, *, retry_on_conflict: bool) -> None:
        operations = self.kind.diff(entity, draft, self._context)
        operations = self.options.apply_before_update(operations, draft, entity)
        if not operations:
            return

        result = await _settle(self.service.update(entity, operations))
        if isinstance(result, Ok):
            self.statistics.increment_updated()
            return
        if result.is_conflict and retry_on_conflict:
            log.debug("Conflict on %s %r, retrying once", self.kind.name, entity.key)
            await self._refetch_and_update(entity, draft)
            return
        self._fail_update(entity, draft, str(result.error), cause=result.error, operations=operations)

    async def _refetch_and_update(self, entity: TEntity, draft: TDraft) -> None:
        key = entity.key
        if key is None:
            self._fail_update(entity, draft, RETRY_NOT_FOUND)
            return
        try:
            fresh = await self.service.fetch_by_key(key)
        except Exception as exc:  # noqa: BLE001
            self._fail_update(entity, draft, RETRY_FETCH_FAILED, cause=exc)
            return
        if fresh is None:
            self._fail_update(entity, draft, RETRY_NOT_FOUND)
            return
        await self._update(fresh, draft, retry_on_conflict=False)

    def _fail_update(
        self,
        entity: TEntity,
        draft: TDraft,
        reason: str,
        *,
        cause: BaseException | None = None,
        operations: Sequence[UpdateOperation] | None = None,
    ) -> None:
        self._reporter.error(
            UPDATE_FAILED.format(resource=self.kind.name, key=entity.key, reason=reason),
            cause=cause,
            old_entity=entity,
            new_draft=draft,
            operations=operations,
        )
        self.statistics.increment_failed()


async def _settle[T](call: Awaitable[Result[T]]) -> Result[T]:
    """Await a write; an exception escaping the service counts as a remote failure."""
    try:
        return await call
    except Exception as exc:  # noqa: BLE001
        return Failure(FailureKind.REMOTE, exc)


__all__ = [
    "CREATE_FAILED",
    "FETCH_FAILED",
    "RETRY_FETCH_FAILED",
    "RETRY_NOT_FOUND",
    "UPDATE_FAILED",
    "BatchSync",
]
