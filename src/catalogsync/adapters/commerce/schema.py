"""Pydantic models describing the commerce API payloads.

Field names are snake_case; the wire uses camelCase, handled by the alias generator.
The same variant/price/asset models serve drafts and entities, with the ids optional.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

type LocalizedStringPayload = dict[str, str]


class CommerceBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExpandedObjectPayload(CommerceBaseModel):
    id: str | None = None
    key: str | None = None


class ResourceIdentifierPayload(CommerceBaseModel):
    """Identifier or reference; ``obj`` is only filled on expanded references."""

    type_id: str
    id: str | None = None
    key: str | None = None
    obj: ExpandedObjectPayload | None = None

    @property
    def resolved_key(self) -> str | None:
        if self.key is not None:
            return self.key
        return self.obj.key if self.obj is not None else None


class MoneyPayload(CommerceBaseModel):
    currency_code: str
    cent_amount: int
    type: str | None = None
    fraction_digits: int | None = None


class PricePayload(CommerceBaseModel):
    id: str | None = None
    value: MoneyPayload
    country: str | None = None
    channel: ResourceIdentifierPayload | None = None


class ImageDimensionsPayload(CommerceBaseModel):
    w: int
    h: int


class ImagePayload(CommerceBaseModel):
    url: str
    label: str | None = None
    dimensions: ImageDimensionsPayload | None = None


class AssetSourcePayload(CommerceBaseModel):
    uri: str
    key: str | None = None


class AssetPayload(CommerceBaseModel):
    id: str | None = None
    key: str
    name: LocalizedStringPayload
    sources: list[AssetSourcePayload] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class AttributePayload(CommerceBaseModel):
    name: str
    value: Any = None


class VariantPayload(CommerceBaseModel):
    id: int | None = None
    key: str | None = None
    sku: str | None = None
    attributes: list[AttributePayload] = Field(default_factory=list)
    prices: list[PricePayload] = Field(default_factory=list)
    images: list[ImagePayload] = Field(default_factory=list)
    assets: list[AssetPayload] = Field(default_factory=list)


class SearchKeywordPayload(CommerceBaseModel):
    text: str


class ProductDataPayload(CommerceBaseModel):
    """Catalog data of a product, as found in drafts, projections and ``masterData``."""

    name: LocalizedStringPayload
    slug: LocalizedStringPayload
    description: LocalizedStringPayload | None = None
    meta_title: LocalizedStringPayload | None = None
    meta_description: LocalizedStringPayload | None = None
    meta_keywords: LocalizedStringPayload | None = None
    search_keywords: dict[str, list[SearchKeywordPayload]] | None = None
    categories: list[ResourceIdentifierPayload] = Field(default_factory=list)
    category_order_hints: dict[str, str] | None = None
    tax_category: ResourceIdentifierPayload | None = None
    state: ResourceIdentifierPayload | None = None
    master_variant: VariantPayload | None = None
    variants: list[VariantPayload | None] = Field(default_factory=list)

    @field_validator("search_keywords", mode="before")
    @classmethod
    def _wrap_plain_keywords(cls, value: object) -> object:
        # Hand-written draft files may list keywords as plain strings.
        if not isinstance(value, Mapping):
            return value
        mapping = cast(Mapping[str, list[object]], value)
        return {
            locale: [{"text": item} if isinstance(item, str) else item for item in items]
            for locale, items in mapping.items()
        }


class ProductDraftPayload(ProductDataPayload):
    key: str | None = None
    product_type: ResourceIdentifierPayload
    publish: bool | None = None


class ProductProjectionPayload(ProductDataPayload):
    id: str
    version: int
    key: str | None = None
    product_type: ResourceIdentifierPayload
    published: bool = False
    has_staged_changes: bool = False


class MasterDataPayload(CommerceBaseModel):
    published: bool = False
    has_staged_changes: bool = False
    staged: ProductDataPayload


class ProductPayload(CommerceBaseModel):
    """Full product resource, as returned by create and update requests."""

    id: str
    version: int
    key: str | None = None
    product_type: ResourceIdentifierPayload
    master_data: MasterDataPayload


class GeoJsonPointPayload(CommerceBaseModel):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class ChannelDraftPayload(CommerceBaseModel):
    key: str | None = None
    name: LocalizedStringPayload | None = None
    description: LocalizedStringPayload | None = None
    roles: list[str] = Field(default_factory=list)
    geo_location: GeoJsonPointPayload | None = None


class ChannelPayload(ChannelDraftPayload):
    id: str
    version: int


class UpdateRequest(CommerceBaseModel):
    version: int
    actions: list[dict[str, Any]]


class ErrorObject(CommerceBaseModel):
    code: str
    message: str


class ErrorResponse(CommerceBaseModel):
    status_code: int
    message: str
    errors: list[ErrorObject] = Field(default_factory=list)

