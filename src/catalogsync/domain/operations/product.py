"""Update operations for products and their variants.

Variant-level operations address their variant by the numeric variant id of the entity
being updated. Prices and assets are addressed by id or key respectively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalogsync.domain.operations.base import UpdateOperation

if TYPE_CHECKING:
    from catalogsync.domain.model import (
        AssetDraft,
        Attribute,
        Image,
        LocalizedString,
        PriceDraft,
        ResourceIdentifier,
        SearchKeywords,
    )


# --- product fields -------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeName(UpdateOperation):
    ACTION = "changeName"

    name: LocalizedString


@dataclass(frozen=True, slots=True, kw_only=True)
class SetDescription(UpdateOperation):
    ACTION = "setDescription"

    description: LocalizedString | None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeSlug(UpdateOperation):
    ACTION = "changeSlug"

    slug: LocalizedString


@dataclass(frozen=True, slots=True, kw_only=True)
class SetSearchKeywords(UpdateOperation):
    ACTION = "setSearchKeywords"

    search_keywords: SearchKeywords | None


@dataclass(frozen=True, slots=True, kw_only=True)
class SetMetaTitle(UpdateOperation):
    ACTION = "setMetaTitle"

    meta_title: LocalizedString | None


@dataclass(frozen=True, slots=True, kw_only=True)
class SetMetaDescription(UpdateOperation):
    ACTION = "setMetaDescription"

    meta_description: LocalizedString | None


@dataclass(frozen=True, slots=True, kw_only=True)
class SetMetaKeywords(UpdateOperation):
    ACTION = "setMetaKeywords"

    meta_keywords: LocalizedString | None


@dataclass(frozen=True, slots=True, kw_only=True)
class SetTaxCategory(UpdateOperation):
    ACTION = "setTaxCategory"

    tax_category: ResourceIdentifier | None


@dataclass(frozen=True, slots=True, kw_only=True)
class TransitionState(UpdateOperation):
    ACTION = "transitionState"

    state: ResourceIdentifier
    force: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class AddToCategory(UpdateOperation):
    ACTION = "addToCategory"

    category: ResourceIdentifier


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveFromCategory(UpdateOperation):
    ACTION = "removeFromCategory"

    category: ResourceIdentifier


@dataclass(frozen=True, slots=True, kw_only=True)
class SetCategoryOrderHint(UpdateOperation):
    """Set (or clear, with ``order_hint=None``) the order hint of one category."""

    ACTION = "setCategoryOrderHint"

    category_id: str
    order_hint: str | None


# --- variant list ---------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class AddVariant(UpdateOperation):
    ACTION = "addVariant"

    key: str | None
    sku: str | None = None
    attributes: tuple[Attribute, ...] = ()
    prices: tuple[PriceDraft, ...] = ()
    images: tuple[Image, ...] = ()
    assets: tuple[AssetDraft, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveVariant(UpdateOperation):
    ACTION = "removeVariant"

    variant_id: int


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeMasterVariant(UpdateOperation):
    ACTION = "changeMasterVariant"

    sku: str


# --- variant fields -------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class SetAttribute(UpdateOperation):
    """Set an attribute on one variant; ``value=None`` removes it."""

    ACTION = "setAttribute"

    variant_id: int
    name: str
    value: object = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SetAttributeInAllVariants(UpdateOperation):
    ACTION = "setAttributeInAllVariants"

    name: str
    value: object = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddExternalImage(UpdateOperation):
    ACTION = "addExternalImage"

    variant_id: int
    image: Image


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveImage(UpdateOperation):
    ACTION = "removeImage"

    variant_id: int
    image_url: str


@dataclass(frozen=True, slots=True, kw_only=True)
class MoveImageToPosition(UpdateOperation):
    ACTION = "moveImageToPosition"

    variant_id: int
    image_url: str
    position: int


@dataclass(frozen=True, slots=True, kw_only=True)
class AddPrice(UpdateOperation):
    ACTION = "addPrice"

    variant_id: int
    price: PriceDraft


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangePrice(UpdateOperation):
    ACTION = "changePrice"

    price_id: str
    price: PriceDraft


@dataclass(frozen=True, slots=True, kw_only=True)
class RemovePrice(UpdateOperation):
    ACTION = "removePrice"

    price_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AddAsset(UpdateOperation):
    ACTION = "addAsset"

    variant_id: int
    asset: AssetDraft
    position: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveAsset(UpdateOperation):
    ACTION = "removeAsset"

    variant_id: int
    asset_key: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeAssetName(UpdateOperation):
    ACTION = "changeAssetName"

    variant_id: int
    asset_key: str
    name: LocalizedString


@dataclass(frozen=True, slots=True, kw_only=True)
class SetAssetSources(UpdateOperation):
    ACTION = "setAssetSources"

    variant_id: int
    asset_key: str
    sources: tuple[str, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class SetAssetTags(UpdateOperation):
    ACTION = "setAssetTags"

    variant_id: int
    asset_key: str
    tags: frozenset[str]


@dataclass(frozen=True, slots=True, kw_only=True)
class SetSku(UpdateOperation):
    ACTION = "setSku"

    variant_id: int
    sku: str | None


# --- publishing -----------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class Publish(UpdateOperation):
    ACTION = "publish"


@dataclass(frozen=True, slots=True, kw_only=True)
class Unpublish(UpdateOperation):
    ACTION = "unpublish"


__all__ = [
    "AddAsset",
    "AddExternalImage",
    "AddPrice",
    "AddToCategory",
    "AddVariant",
    "ChangeAssetName",
    "ChangeMasterVariant",
    "ChangeName",
    "ChangePrice",
    "ChangeSlug",
    "MoveImageToPosition",
    "Publish",
    "RemoveAsset",
    "RemoveFromCategory",
    "RemoveImage",
    "RemovePrice",
    "RemoveVariant",
    "SetAssetSources",
    "SetAssetTags",
    "SetAttribute",
    "SetAttributeInAllVariants",
    "SetCategoryOrderHint",
    "SetDescription",
    "SetMetaDescription",
    "SetMetaKeywords",
    "SetMetaTitle",
    "SetSearchKeywords",
    "SetSku",
    "SetTaxCategory",
    "TransitionState",
    "Unpublish",
]
