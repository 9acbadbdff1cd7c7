"""Public domain model surface."""

from __future__ import annotations

from typing import Protocol

from catalogsync.domain.model.channel import Channel, ChannelDraft
from catalogsync.domain.model.enums import ChannelRole, ResourceType
from catalogsync.domain.model.primitives import (
    CountryCode,
    CurrencyCode,
    GeoLocation,
    Image,
    ImageDimensions,
    Locale,
    LocalizedString,
    Money,
    ResourceIdentifier,
    is_blank,
    same_optional_resource,
)
from catalogsync.domain.model.product import (
    Asset,
    AssetDraft,
    Attribute,
    CategoryOrderHints,
    Price,
    PriceDraft,
    Product,
    ProductDraft,
    SearchKeywords,
    Variant,
    VariantDraft,
)


class Draft(Protocol):
    """Anything the sync engine can match by natural key."""

    @property
    def key(self) -> str | None: ...


class RemoteEntity(Protocol):
    """An entity held by a target, identified by id and guarded by a version."""

    @property
    def id(self) -> str: ...

    @property
    def key(self) -> str | None: ...

    @property
    def version(self) -> int: ...


__all__ = [  # noqa: RUF022
    # protocols
    "Draft",
    "RemoteEntity",
    # channel
    "Channel",
    "ChannelDraft",
    # product
    "Asset",
    "AssetDraft",
    "Attribute",
    "Price",
    "PriceDraft",
    "Product",
    "ProductDraft",
    "Variant",
    "VariantDraft",
    # enums
    "ChannelRole",
    "ResourceType",
    # primitives
    "CategoryOrderHints",
    "CountryCode",
    "CurrencyCode",
    "GeoLocation",
    "Image",
    "ImageDimensions",
    "Locale",
    "LocalizedString",
    "Money",
    "ResourceIdentifier",
    "SearchKeywords",
    "is_blank",
    "same_optional_resource",
]
