"""Port through which the sync engine reads and writes one entity kind."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence, Set

    from catalogsync.domain.operations import UpdateOperation
    from catalogsync.domain.ports.results import Result


@runtime_checkable
class CatalogService[TDraft, TEntity](Protocol):
    """Target collection of one entity kind.

    Fetches raise on failure. Writes report failures through :class:`Result` so the
    engine can tell a version conflict from everything else.
    """

    async def fetch_by_keys(self, keys: Set[str]) -> Sequence[TEntity]:
        """Fetch all entities with one of ``keys`` in a single round trip."""
        ...

    async def fetch_by_key(self, key: str) -> TEntity | None: ...

    async def create(self, draft: TDraft) -> Result[TEntity]: ...

    async def update(
        self,
        entity: TEntity,
        operations: Sequence[UpdateOperation],
    ) -> Result[TEntity]: ...


__all__ = ["CatalogService"]
