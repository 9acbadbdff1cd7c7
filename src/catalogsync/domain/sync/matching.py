"""Pair drafts with the existing entities fetched for their keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalogsync.domain.model import Draft, RemoteEntity

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class MatchPair[TDraft: Draft, TEntity: RemoteEntity]:
    draft: TDraft
    entity: TEntity | None

    @property
    def is_new(self) -> bool:
        return self.entity is None


def match_drafts[TDraft: Draft, TEntity: RemoteEntity](
    existing: Iterable[TEntity],
    drafts: Iterable[TDraft],
) -> list[MatchPair[TDraft, TEntity]]:
    """Pair every draft with the entity of the same key, or ``None``.

    Should the target return two entities with one key, the later one wins.
    """
    by_key: dict[str | None, TEntity] = {}
    for entity in existing:
        by_key[entity.key] = entity
    return [MatchPair(draft=draft, entity=by_key.get(draft.key)) for draft in drafts]


__all__ = ["MatchPair", "match_drafts"]
