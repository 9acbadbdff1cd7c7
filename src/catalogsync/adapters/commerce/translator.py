"""Translate commerce API payloads to domain objects, and domain objects back to the wire."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from functools import singledispatch
from typing import TYPE_CHECKING, Any

from pydantic.alias_generators import to_camel

from catalogsync.domain.model import (
    Asset,
    AssetDraft,
    Attribute,
    Channel,
    ChannelDraft,
    ChannelRole,
    GeoLocation,
    Image,
    ImageDimensions,
    Money,
    Price,
    PriceDraft,
    Product,
    ProductDraft,
    ResourceIdentifier,
    ResourceType,
    Variant,
    VariantDraft,
)
from catalogsync.domain.operations import (
    AddChannelRole,
    RemoveChannelRole,
    SetAssetSources,
    SetSearchKeywords,
    UpdateOperation,
)

from .schema import (
    AssetPayload,
    AssetSourcePayload,
    AttributePayload,
    ChannelDraftPayload,
    ChannelPayload,
    GeoJsonPointPayload,
    ImageDimensionsPayload,
    ImagePayload,
    MoneyPayload,
    PricePayload,
    ProductDataPayload,
    ProductDraftPayload,
    ProductPayload,
    ProductProjectionPayload,
    ResourceIdentifierPayload,
    SearchKeywordPayload,
    VariantPayload,
)

if TYPE_CHECKING:
    from catalogsync.domain.model import LocalizedString, SearchKeywords


# --- payload -> domain ------------------------------------------------------


def _localized(value: Mapping[str, str] | None) -> LocalizedString | None:
    return dict(value) if value is not None else None


def _resource(payload: ResourceIdentifierPayload | None) -> ResourceIdentifier | None:
    if payload is None:
        return None
    return _required_resource(payload)


def _required_resource(payload: ResourceIdentifierPayload) -> ResourceIdentifier:
    return ResourceIdentifier(
        type_id=ResourceType(payload.type_id), id=payload.id, key=payload.resolved_key
    )


def _money(payload: MoneyPayload) -> Money:
    return Money(currency_code=payload.currency_code, cent_amount=payload.cent_amount)


def _price_draft(payload: PricePayload) -> PriceDraft:
    return PriceDraft(
        value=_money(payload.value),
        country=payload.country,
        channel=_resource(payload.channel),
    )


def _price(payload: PricePayload) -> Price:
    if payload.id is None:
        raise ValueError("Price payload of an existing variant has no id")
    return Price(
        id=payload.id,
        value=_money(payload.value),
        country=payload.country,
        channel=_resource(payload.channel),
    )


def _image(payload: ImagePayload) -> Image:
    dimensions = (
        ImageDimensions(width=payload.dimensions.w, height=payload.dimensions.h)
        if payload.dimensions is not None
        else None
    )
    return Image(url=payload.url, label=payload.label, dimensions=dimensions)


def _asset_draft(payload: AssetPayload) -> AssetDraft:
    return AssetDraft(
        key=payload.key,
        name=dict(payload.name),
        sources=tuple(source.uri for source in payload.sources),
        tags=frozenset(payload.tags),
    )


def _asset(payload: AssetPayload) -> Asset:
    if payload.id is None:
        raise ValueError(f"Asset payload {payload.key!r} of an existing variant has no id")
    return Asset(
        id=payload.id,
        key=payload.key,
        name=dict(payload.name),
        sources=tuple(source.uri for source in payload.sources),
        tags=frozenset(payload.tags),
    )


def _attributes(payloads: list[AttributePayload]) -> tuple[Attribute, ...]:
    return tuple(Attribute(name=payload.name, value=payload.value) for payload in payloads)


def variant_draft_from_payload(payload: VariantPayload) -> VariantDraft:
    return VariantDraft(
        key=payload.key,
        sku=payload.sku,
        attributes=_attributes(payload.attributes),
        prices=tuple(_price_draft(price) for price in payload.prices),
        images=tuple(_image(image) for image in payload.images),
        assets=tuple(_asset_draft(asset) for asset in payload.assets),
    )


def variant_from_payload(payload: VariantPayload) -> Variant:
    if payload.id is None:
        raise ValueError(f"Variant payload {payload.key!r} of an existing product has no id")
    return Variant(
        id=payload.id,
        key=payload.key,
        sku=payload.sku,
        attributes=_attributes(payload.attributes),
        prices=tuple(_price(price) for price in payload.prices),
        images=tuple(_image(image) for image in payload.images),
        assets=tuple(_asset(asset) for asset in payload.assets),
    )


def _search_keywords(
    payload: dict[str, list[SearchKeywordPayload]] | None,
) -> SearchKeywords | None:
    if payload is None:
        return None
    return {locale: tuple(item.text for item in items) for locale, items in payload.items()}


def _geo_location(payload: GeoJsonPointPayload | None) -> GeoLocation | None:
    if payload is None:
        return None
    longitude, latitude = payload.coordinates
    return GeoLocation(longitude=longitude, latitude=latitude)


def channel_draft_from_payload(payload: ChannelDraftPayload) -> ChannelDraft:
    return ChannelDraft(
        key=payload.key,
        name=_localized(payload.name),
        description=_localized(payload.description),
        roles=tuple(ChannelRole(role) for role in payload.roles),
        geo_location=_geo_location(payload.geo_location),
    )


def channel_from_payload(payload: ChannelPayload) -> Channel:
    return Channel(
        id=payload.id,
        version=payload.version,
        key=payload.key,
        name=_localized(payload.name),
        description=_localized(payload.description),
        roles=tuple(ChannelRole(role) for role in payload.roles),
        geo_location=_geo_location(payload.geo_location),
    )


def product_draft_from_payload(payload: ProductDraftPayload) -> ProductDraft:
    return ProductDraft(
        key=payload.key,
        product_type=_required_resource(payload.product_type),
        name=dict(payload.name),
        slug=dict(payload.slug),
        description=_localized(payload.description),
        meta_title=_localized(payload.meta_title),
        meta_description=_localized(payload.meta_description),
        meta_keywords=_localized(payload.meta_keywords),
        search_keywords=_search_keywords(payload.search_keywords),
        categories=tuple(_required_resource(category) for category in payload.categories),
        category_order_hints=payload.category_order_hints,
        tax_category=_resource(payload.tax_category),
        state=_resource(payload.state),
        master_variant=(
            variant_draft_from_payload(payload.master_variant)
            if payload.master_variant is not None
            else None
        ),
        variants=tuple(
            variant_draft_from_payload(variant) if variant is not None else None
            for variant in payload.variants
        ),
        publish=payload.publish,
    )


def _product(
    *,
    entity_id: str,
    version: int,
    key: str | None,
    product_type: ResourceIdentifierPayload,
    data: ProductDataPayload,
    published: bool,
    has_staged_changes: bool,
) -> Product:
    if data.master_variant is None:
        raise ValueError(f"Product payload {key!r} has no master variant")
    return Product(
        id=entity_id,
        version=version,
        key=key,
        product_type=_required_resource(product_type),
        name=dict(data.name),
        slug=dict(data.slug),
        description=_localized(data.description),
        meta_title=_localized(data.meta_title),
        meta_description=_localized(data.meta_description),
        meta_keywords=_localized(data.meta_keywords),
        search_keywords=_search_keywords(data.search_keywords),
        categories=tuple(_required_resource(category) for category in data.categories),
        category_order_hints=data.category_order_hints,
        tax_category=_resource(data.tax_category),
        state=_resource(data.state),
        master_variant=variant_from_payload(data.master_variant),
        variants=tuple(
            variant_from_payload(variant) for variant in data.variants if variant is not None
        ),
        published=published,
        has_staged_changes=has_staged_changes,
    )


def product_from_projection(payload: ProductProjectionPayload) -> Product:
    return _product(
        entity_id=payload.id,
        version=payload.version,
        key=payload.key,
        product_type=payload.product_type,
        data=payload,
        published=payload.published,
        has_staged_changes=payload.has_staged_changes,
    )


def product_from_payload(payload: ProductPayload) -> Product:
    """Flatten a full product resource into its staged projection."""
    master_data = payload.master_data
    return _product(
        entity_id=payload.id,
        version=payload.version,
        key=payload.key,
        product_type=payload.product_type,
        data=master_data.staged,
        published=master_data.published,
        has_staged_changes=master_data.has_staged_changes,
    )


# --- domain -> payload ------------------------------------------------------


def _resource_payload(resource: ResourceIdentifier) -> ResourceIdentifierPayload:
    return ResourceIdentifierPayload(type_id=resource.type_id.value, id=resource.id, key=resource.key)


def _money_payload(money: Money) -> MoneyPayload:
    return MoneyPayload(currency_code=money.currency_code, cent_amount=money.cent_amount)


def _price_payload(price: PriceDraft) -> PricePayload:
    return PricePayload(
        id=price.id if isinstance(price, Price) else None,
        value=_money_payload(price.value),
        country=price.country,
        channel=_resource_payload(price.channel) if price.channel is not None else None,
    )


def _image_payload(image: Image) -> ImagePayload:
    dimensions = (
        ImageDimensionsPayload(w=image.dimensions.width, h=image.dimensions.height)
        if image.dimensions is not None
        else None
    )
    return ImagePayload(url=image.url, label=image.label, dimensions=dimensions)


def _asset_payload(asset: AssetDraft) -> AssetPayload:
    return AssetPayload(
        id=asset.id if isinstance(asset, Asset) else None,
        key=asset.key,
        name=dict(asset.name),
        sources=[AssetSourcePayload(uri=uri) for uri in asset.sources],
        tags=sorted(asset.tags),
    )


def _variant_payload(variant: VariantDraft | Variant) -> VariantPayload:
    return VariantPayload(
        id=variant.id if isinstance(variant, Variant) else None,
        key=variant.key,
        sku=variant.sku,
        attributes=[
            AttributePayload(name=attribute.name, value=attribute.value)
            for attribute in variant.attributes
        ],
        prices=[_price_payload(price) for price in variant.prices],
        images=[_image_payload(image) for image in variant.images],
        assets=[_asset_payload(asset) for asset in variant.assets],
    )


def _search_keywords_payload(
    keywords: SearchKeywords | None,
) -> dict[str, list[SearchKeywordPayload]] | None:
    if keywords is None:
        return None
    return {
        locale: [SearchKeywordPayload(text=text) for text in texts]
        for locale, texts in keywords.items()
    }


def _geo_location_payload(location: GeoLocation | None) -> GeoJsonPointPayload | None:
    if location is None:
        return None
    return GeoJsonPointPayload(coordinates=(location.longitude, location.latitude))


def channel_draft_to_payload(draft: ChannelDraft) -> ChannelDraftPayload:
    return ChannelDraftPayload(
        key=draft.key,
        name=_localized(draft.name),
        description=_localized(draft.description),
        roles=[role.value for role in draft.roles],
        geo_location=_geo_location_payload(draft.geo_location),
    )


def channel_to_payload(channel: Channel) -> ChannelPayload:
    return ChannelPayload(
        id=channel.id,
        version=channel.version,
        key=channel.key,
        name=_localized(channel.name),
        description=_localized(channel.description),
        roles=[role.value for role in channel.roles],
        geo_location=_geo_location_payload(channel.geo_location),
    )


def _product_data(product: ProductDraft | Product) -> dict[str, Any]:
    return {
        "name": dict(product.name),
        "slug": dict(product.slug),
        "description": _localized(product.description),
        "meta_title": _localized(product.meta_title),
        "meta_description": _localized(product.meta_description),
        "meta_keywords": _localized(product.meta_keywords),
        "search_keywords": _search_keywords_payload(product.search_keywords),
        "categories": [_resource_payload(category) for category in product.categories],
        "category_order_hints": (
            dict(product.category_order_hints) if product.category_order_hints else None
        ),
        "tax_category": (
            _resource_payload(product.tax_category) if product.tax_category is not None else None
        ),
        "state": _resource_payload(product.state) if product.state is not None else None,
    }


def product_draft_to_payload(draft: ProductDraft) -> ProductDraftPayload:
    return ProductDraftPayload(
        key=draft.key,
        product_type=_resource_payload(draft.product_type),
        master_variant=(
            _variant_payload(draft.master_variant) if draft.master_variant is not None else None
        ),
        variants=[
            _variant_payload(variant) if variant is not None else None
            for variant in draft.variants
        ],
        publish=draft.publish,
        **_product_data(draft),
    )


def product_to_projection_payload(product: Product) -> ProductProjectionPayload:
    return ProductProjectionPayload(
        id=product.id,
        version=product.version,
        key=product.key,
        product_type=_resource_payload(product.product_type),
        master_variant=_variant_payload(product.master_variant),
        variants=[_variant_payload(variant) for variant in product.variants],
        published=product.published,
        has_staged_changes=product.has_staged_changes,
        **_product_data(product),
    )


# --- operations -> update actions -------------------------------------------


@singledispatch
def _wire_value(value: object) -> Any:
    return value


@_wire_value.register
def _(value: ResourceIdentifier) -> Any:
    # identifiers in update actions carry either the id or the key, never both
    if value.id is not None:
        value = ResourceIdentifier(type_id=value.type_id, id=value.id)
    return _resource_payload(value).to_wire()


@_wire_value.register
def _(value: Money) -> Any:
    return _money_payload(value).to_wire()


@_wire_value.register
def _(value: PriceDraft) -> Any:
    return _price_payload(value).to_wire()


@_wire_value.register
def _(value: Image) -> Any:
    return _image_payload(value).to_wire()


@_wire_value.register
def _(value: AssetDraft) -> Any:
    return _asset_payload(value).to_wire()


@_wire_value.register
def _(value: Attribute) -> Any:
    return AttributePayload(name=value.name, value=value.value).to_wire()


@_wire_value.register
def _(value: GeoLocation) -> Any:
    return GeoJsonPointPayload(coordinates=(value.longitude, value.latitude)).to_wire()


@_wire_value.register(tuple)
@_wire_value.register(list)
def _(value: tuple[object, ...] | list[object]) -> Any:
    return [_wire_value(item) for item in value]


@_wire_value.register
def _(value: frozenset) -> Any:  # type: ignore[type-arg]
    return sorted(_wire_value(item) for item in value)


@_wire_value.register(Mapping)
def _(value: Mapping[str, object]) -> Any:
    return {key: _wire_value(item) for key, item in value.items()}


@singledispatch
def operation_to_action(operation: UpdateOperation) -> dict[str, Any]:
    """Encode an operation as an update action: its fields in camelCase, unset ones omitted."""
    action: dict[str, Any] = {"action": operation.action}
    for spec in fields(operation):
        value = getattr(operation, spec.name)
        if value is None:
            continue
        action[to_camel(spec.name)] = _wire_value(value)
    return action


@operation_to_action.register(AddChannelRole)
@operation_to_action.register(RemoveChannelRole)
def _(operation: AddChannelRole | RemoveChannelRole) -> dict[str, Any]:
    return {"action": operation.action, "roles": [operation.role.value]}


@operation_to_action.register
def _(operation: SetSearchKeywords) -> dict[str, Any]:
    keywords = _search_keywords_payload(operation.search_keywords) or {}
    return {
        "action": operation.action,
        "searchKeywords": {
            locale: [item.to_wire() for item in items] for locale, items in keywords.items()
        },
    }


@operation_to_action.register
def _(operation: SetAssetSources) -> dict[str, Any]:
    return {
        "action": operation.action,
        "variantId": operation.variant_id,
        "assetKey": operation.asset_key,
        "sources": [{"uri": uri} for uri in operation.sources],
    }


__all__ = [
    "channel_draft_from_payload",
    "channel_draft_to_payload",
    "channel_from_payload",
    "channel_to_payload",
    "operation_to_action",
    "product_draft_from_payload",
    "product_draft_to_payload",
    "product_from_payload",
    "product_from_projection",
    "product_to_projection_payload",
    "variant_draft_from_payload",
    "variant_from_payload",
]
