"""Per-run inputs shared by every diff call."""

from __future__ import annotations

from dataclasses import dataclass, field

from catalogsync.domain.diff.filters import SyncFilter
from catalogsync.domain.events import EventReporter


@dataclass(frozen=True, slots=True, kw_only=True)
class DiffContext:
    """What a diff function may consult besides the two records.

    ``same_for_all_attributes`` names attributes that must hold one value across all
    variants of a product; changes to them become ``setAttributeInAllVariants``.
    """

    reporter: EventReporter = field(default_factory=EventReporter)
    sync_filter: SyncFilter = field(default_factory=SyncFilter)
    same_for_all_attributes: frozenset[str] = frozenset()


__all__ = ["DiffContext"]
