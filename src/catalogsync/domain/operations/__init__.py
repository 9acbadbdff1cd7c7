"""Update operations produced by the diff engine and consumed by targets."""

from __future__ import annotations

from catalogsync.domain.operations.base import UpdateOperation
from catalogsync.domain.operations.channel import (
    AddChannelRole,
    ChangeChannelDescription,
    ChangeChannelName,
    RemoveChannelRole,
    SetChannelGeoLocation,
)
from catalogsync.domain.operations.product import (
    AddAsset,
    AddExternalImage,
    AddPrice,
    AddToCategory,
    AddVariant,
    ChangeAssetName,
    ChangeMasterVariant,
    ChangeName,
    ChangePrice,
    ChangeSlug,
    MoveImageToPosition,
    Publish,
    RemoveAsset,
    RemoveFromCategory,
    RemoveImage,
    RemovePrice,
    RemoveVariant,
    SetAssetSources,
    SetAssetTags,
    SetAttribute,
    SetAttributeInAllVariants,
    SetCategoryOrderHint,
    SetDescription,
    SetMetaDescription,
    SetMetaKeywords,
    SetMetaTitle,
    SetSearchKeywords,
    SetSku,
    SetTaxCategory,
    TransitionState,
    Unpublish,
)

__all__ = [  # noqa: RUF022
    "UpdateOperation",
    # channel
    "AddChannelRole",
    "ChangeChannelDescription",
    "ChangeChannelName",
    "RemoveChannelRole",
    "SetChannelGeoLocation",
    # product
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
