"""Diff engine: pure functions from (entity, draft, context) to ordered update operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.diff.channel import build_channel_operations
from catalogsync.domain.diff.context import DiffContext
from catalogsync.domain.diff.filters import ActionGroup, SyncFilter
from catalogsync.domain.diff.product import build_product_operations
from catalogsync.domain.diff.variants import build_variant_operations

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogsync.domain.operations import UpdateOperation

type DiffFunction[TEntity, TDraft] = Callable[[TEntity, TDraft, DiffContext], list[UpdateOperation]]

__all__ = [
    "ActionGroup",
    "DiffContext",
    "DiffFunction",
    "SyncFilter",
    "build_channel_operations",
    "build_product_operations",
    "build_variant_operations",
]
