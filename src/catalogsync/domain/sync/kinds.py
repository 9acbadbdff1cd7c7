"""Entity kinds: the capabilities the generic engine needs per kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalogsync.domain.diff import build_channel_operations, build_product_operations
from catalogsync.domain.sync.validation import check_product_variants

if TYPE_CHECKING:
    from catalogsync.domain.diff import DiffFunction
    from catalogsync.domain.model import Channel, ChannelDraft, Product, ProductDraft
    from catalogsync.domain.sync.validation import DraftCheck


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceKind[TDraft, TEntity]:
    name: str
    plural: str
    diff: DiffFunction[TEntity, TDraft]
    checks: tuple[DraftCheck[TDraft], ...] = ()

    @property
    def label(self) -> str:
        return self.name.capitalize()


CHANNELS: ResourceKind[ChannelDraft, Channel] = ResourceKind(
    name="channel",
    plural="channels",
    diff=build_channel_operations,
)

PRODUCTS: ResourceKind[ProductDraft, Product] = ResourceKind(
    name="product",
    plural="products",
    diff=build_product_operations,
    checks=(check_product_variants,),
)

KINDS = {kind.plural: kind for kind in (CHANNELS, PRODUCTS)}


__all__ = ["CHANNELS", "KINDS", "PRODUCTS", "ResourceKind"]
