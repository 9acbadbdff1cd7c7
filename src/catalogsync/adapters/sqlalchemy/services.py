"""SQL implementation of the :class:`CatalogService` port.

Entities live as JSON documents in one table. Every update is a compare-and-swap on the
stored version, so two writers working from the same snapshot cannot both win; the loser
gets a ``CONFLICT`` failure, which the sync engine answers with one re-fetch and retry.
Blocking database calls run in worker threads.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from catalogsync.domain.apply import OperationNotApplicableError, apply_operations, materialize
from catalogsync.domain.errors import ConcurrentModificationError, RemoteServiceError
from catalogsync.domain.model import RemoteEntity
from catalogsync.domain.ports import Failure, FailureKind, Ok

from .state import configured_engine
from .tables import catalog_entities_table

if TYPE_CHECKING:
    from collections.abc import Sequence, Set

    from sqlalchemy.engine import Engine

    from catalogsync.adapters.commerce.codecs import KindCodec
    from catalogsync.domain.operations import UpdateOperation
    from catalogsync.domain.ports import Result

log = getLogger(__name__)


class SqlAlchemyCatalogService[TDraft, TEntity: RemoteEntity]:
    def __init__(self, codec: KindCodec[TDraft, TEntity], *, engine: Engine | None = None) -> None:
        self.codec = codec
        self._engine = engine or configured_engine()

    async def fetch_by_keys(self, keys: Set[str]) -> list[TEntity]:
        return await asyncio.to_thread(self._fetch_by_keys, frozenset(keys))

    async def fetch_by_key(self, key: str) -> TEntity | None:
        entities = await asyncio.to_thread(self._fetch_by_keys, frozenset({key}))
        return entities[0] if entities else None

    async def create(self, draft: TDraft) -> Result[TEntity]:
        return await asyncio.to_thread(self._create, draft)

    async def update(
        self,
        entity: TEntity,
        operations: Sequence[UpdateOperation],
    ) -> Result[TEntity]:
        return await asyncio.to_thread(self._update, entity, tuple(operations))

    def _fetch_by_keys(self, keys: frozenset[str]) -> list[TEntity]:
        if not keys:
            return []
        table = catalog_entities_table
        stmt = select(table.c.version, table.c.payload).where(
            table.c.kind == self.codec.kind,
            table.c.key.in_(sorted(keys)),
        )
        with self._engine.connect() as connection:
            rows = connection.execute(stmt).all()
        return [self._decode(row.payload, row.version) for row in rows]

    def _create(self, draft: TDraft) -> Result[TEntity]:
        entity: TEntity = materialize(draft, entity_id=str(uuid4()))  # type: ignore[assignment]
        try:
            with self._engine.begin() as connection:
                connection.execute(
                    catalog_entities_table.insert().values(
                        id=entity.id,
                        kind=self.codec.kind,
                        key=entity.key,
                        version=entity.version,
                        payload=self.codec.encode_entity(entity),
                    )
                )
        except IntegrityError as exc:
            error = RemoteServiceError(
                f"A {self.codec.kind} with key '{entity.key}' already exists", status_code=400
            )
            error.__cause__ = exc
            return Failure(FailureKind.REMOTE, error)
        return Ok(entity)

    def _update(self, entity: TEntity, operations: tuple[UpdateOperation, ...]) -> Result[TEntity]:
        try:
            updated = apply_operations(entity, operations)
        except (OperationNotApplicableError, TypeError) as exc:
            return Failure(FailureKind.REMOTE, exc)
        new_version = entity.version + 1
        updated = replace(updated, version=new_version)  # type: ignore[type-var]

        table = catalog_entities_table
        stmt = (
            update(table)
            .where(table.c.id == entity.id, table.c.version == entity.version)
            .values(version=new_version, payload=self.codec.encode_entity(updated))
        )
        with self._engine.begin() as connection:
            result = connection.execute(stmt)
        if result.rowcount == 0:
            log.debug("Version %s of %s %s is stale", entity.version, self.codec.kind, entity.id)
            return Failure(
                FailureKind.CONFLICT,
                ConcurrentModificationError(
                    f"Object {entity.id} has a different version than expected. "
                    f"Expected: {entity.version}."
                ),
            )
        return Ok(updated)

    def _decode(self, payload: dict[str, Any], version: int) -> TEntity:
        entity = self.codec.decode_entity(payload)
        if entity.version != version:
            entity = replace(entity, version=version)  # type: ignore[type-var]
        return entity


__all__ = ["SqlAlchemyCatalogService"]
