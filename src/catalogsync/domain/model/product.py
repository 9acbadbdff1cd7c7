"""Product drafts and entities.

A product is the hierarchical kind: besides its own fields it owns an ordered list of
variants, exactly one of which is the master variant. Drafts describe the desired staged
state; entities mirror what the target currently holds (including the publish flags).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from catalogsync.domain.model.primitives import (
        CountryCode,
        Image,
        Locale,
        LocalizedString,
        Money,
        ResourceIdentifier,
    )


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    value: object


@dataclass(frozen=True, slots=True, kw_only=True)
class PriceDraft:
    value: Money
    country: CountryCode | None = None
    channel: ResourceIdentifier | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Price(PriceDraft):
    id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AssetDraft:
    key: str
    name: LocalizedString
    sources: tuple[str, ...] = ()
    tags: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True, kw_only=True)
class Asset(AssetDraft):
    id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class VariantDraft:
    key: str | None
    sku: str | None = None
    attributes: tuple[Attribute, ...] = ()
    prices: tuple[PriceDraft, ...] = ()
    images: tuple[Image, ...] = ()
    assets: tuple[AssetDraft, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Variant:
    id: int
    key: str | None
    sku: str | None = None
    attributes: tuple[Attribute, ...] = ()
    prices: tuple[Price, ...] = ()
    images: tuple[Image, ...] = ()
    assets: tuple[Asset, ...] = ()


type SearchKeywords = Mapping[Locale, tuple[str, ...]]
type CategoryOrderHints = Mapping[str, str]


@dataclass(frozen=True, slots=True, kw_only=True)
class ProductDraft:
    key: str | None
    product_type: ResourceIdentifier
    name: LocalizedString
    slug: LocalizedString
    description: LocalizedString | None = None
    meta_title: LocalizedString | None = None
    meta_description: LocalizedString | None = None
    meta_keywords: LocalizedString | None = None
    search_keywords: SearchKeywords | None = None
    categories: tuple[ResourceIdentifier, ...] = ()
    category_order_hints: CategoryOrderHints | None = None
    tax_category: ResourceIdentifier | None = None
    state: ResourceIdentifier | None = None
    master_variant: VariantDraft | None = None
    variants: tuple[VariantDraft | None, ...] = ()
    publish: bool | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Product:
    """Staged projection of a product held by the target."""

    id: str
    version: int
    key: str | None
    product_type: ResourceIdentifier
    name: LocalizedString
    slug: LocalizedString
    master_variant: Variant
    description: LocalizedString | None = None
    meta_title: LocalizedString | None = None
    meta_description: LocalizedString | None = None
    meta_keywords: LocalizedString | None = None
    search_keywords: SearchKeywords | None = None
    categories: tuple[ResourceIdentifier, ...] = ()
    category_order_hints: CategoryOrderHints | None = None
    tax_category: ResourceIdentifier | None = None
    state: ResourceIdentifier | None = None
    variants: tuple[Variant, ...] = ()
    published: bool = False
    has_staged_changes: bool = False

    def all_variants(self) -> Iterator[Variant]:
        yield self.master_variant
        yield from self.variants
