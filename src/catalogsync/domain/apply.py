"""Apply update operations to entity snapshots.

Targets that store entities themselves (rather than forwarding operations to a remote
API) use this to compute the state an update leads to. Every function returns a new
snapshot; inputs are never modified.
"""

from __future__ import annotations

from dataclasses import replace
from functools import singledispatch
from typing import TYPE_CHECKING
from uuid import uuid4

from catalogsync.domain.model import (
    Asset,
    AssetDraft,
    Attribute,
    Channel,
    ChannelDraft,
    Price,
    PriceDraft,
    Product,
    ProductDraft,
    Variant,
    VariantDraft,
)
from catalogsync.domain.operations import (
    AddAsset,
    AddChannelRole,
    AddExternalImage,
    AddPrice,
    AddToCategory,
    AddVariant,
    ChangeAssetName,
    ChangeChannelDescription,
    ChangeChannelName,
    ChangeMasterVariant,
    ChangeName,
    ChangePrice,
    ChangeSlug,
    MoveImageToPosition,
    Publish,
    RemoveAsset,
    RemoveChannelRole,
    RemoveFromCategory,
    RemoveImage,
    RemovePrice,
    RemoveVariant,
    SetAssetSources,
    SetAssetTags,
    SetAttribute,
    SetAttributeInAllVariants,
    SetCategoryOrderHint,
    SetChannelGeoLocation,
    SetDescription,
    SetMetaDescription,
    SetMetaKeywords,
    SetMetaTitle,
    SetSearchKeywords,
    SetSku,
    SetTaxCategory,
    TransitionState,
    Unpublish,
    UpdateOperation,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class OperationNotApplicableError(ValueError):
    """An operation refers to something the entity does not have."""


def apply_operations[TEntity](entity: TEntity, operations: Iterable[UpdateOperation]) -> TEntity:
    """Apply ``operations`` in order and return the resulting snapshot."""
    for operation in operations:
        entity = apply_operation(operation, entity)
    return entity


@singledispatch
def apply_operation(operation: UpdateOperation, entity: object) -> object:
    raise TypeError(f"Cannot apply {type(operation).__name__} to {type(entity).__name__}")


@singledispatch
def materialize(draft: object, *, entity_id: str) -> object:
    """Turn a draft into the entity a target creates from it (version 1)."""
    raise TypeError(f"Cannot materialize {type(draft).__name__}")


def _new_id() -> str:
    return str(uuid4())


# --- channels ---------------------------------------------------------------


@materialize.register
def _(draft: ChannelDraft, *, entity_id: str) -> Channel:
    return Channel(
        id=entity_id,
        version=1,
        key=draft.key,
        name=draft.name,
        description=draft.description,
        roles=draft.roles,
        geo_location=draft.geo_location,
    )


@apply_operation.register
def _(operation: ChangeChannelName, entity: Channel) -> Channel:
    return replace(entity, name=operation.name)


@apply_operation.register
def _(operation: ChangeChannelDescription, entity: Channel) -> Channel:
    return replace(entity, description=operation.description)


@apply_operation.register
def _(operation: AddChannelRole, entity: Channel) -> Channel:
    if operation.role in entity.roles:
        return entity
    return replace(entity, roles=(*entity.roles, operation.role))


@apply_operation.register
def _(operation: RemoveChannelRole, entity: Channel) -> Channel:
    return replace(entity, roles=tuple(role for role in entity.roles if role != operation.role))


@apply_operation.register
def _(operation: SetChannelGeoLocation, entity: Channel) -> Channel:
    return replace(entity, geo_location=operation.geo_location)


# --- products ---------------------------------------------------------------


def _to_price(draft: PriceDraft, *, price_id: str | None = None) -> Price:
    return Price(
        id=price_id or _new_id(),
        value=draft.value,
        country=draft.country,
        channel=draft.channel,
    )


def _to_asset(draft: AssetDraft) -> Asset:
    return Asset(
        id=_new_id(),
        key=draft.key,
        name=draft.name,
        sources=draft.sources,
        tags=draft.tags,
    )


def _to_variant(draft: VariantDraft | AddVariant, *, variant_id: int) -> Variant:
    return Variant(
        id=variant_id,
        key=draft.key,
        sku=draft.sku,
        attributes=draft.attributes,
        prices=tuple(_to_price(price) for price in draft.prices),
        images=draft.images,
        assets=tuple(_to_asset(asset) for asset in draft.assets),
    )


@materialize.register
def _(draft: ProductDraft, *, entity_id: str) -> Product:
    if draft.master_variant is None:
        raise OperationNotApplicableError(f"Product draft {draft.key!r} has no master variant")
    others = [variant for variant in draft.variants if variant is not None]
    return Product(
        id=entity_id,
        version=1,
        key=draft.key,
        product_type=draft.product_type,
        name=draft.name,
        slug=draft.slug,
        description=draft.description,
        meta_title=draft.meta_title,
        meta_description=draft.meta_description,
        meta_keywords=draft.meta_keywords,
        search_keywords=draft.search_keywords,
        categories=draft.categories,
        category_order_hints=draft.category_order_hints,
        tax_category=draft.tax_category,
        state=draft.state,
        master_variant=_to_variant(draft.master_variant, variant_id=1),
        variants=tuple(
            _to_variant(variant, variant_id=index)
            for index, variant in enumerate(others, start=2)
        ),
        published=bool(draft.publish),
        has_staged_changes=False,
    )


def _staged(product: Product, **changes: object) -> Product:
    return replace(product, has_staged_changes=True, **changes)  # type: ignore[arg-type]


def _update_variants(
    product: Product,
    update: Callable[[Variant], Variant],
    *,
    variant_id: int | None = None,
) -> Product:
    """Apply ``update`` to one variant (by id) or, without ``variant_id``, to all."""
    if variant_id is not None and all(v.id != variant_id for v in product.all_variants()):
        raise OperationNotApplicableError(f"Product {product.key!r} has no variant {variant_id}")

    def _maybe(variant: Variant) -> Variant:
        if variant_id is None or variant.id == variant_id:
            return update(variant)
        return variant

    return _staged(
        product,
        master_variant=_maybe(product.master_variant),
        variants=tuple(_maybe(variant) for variant in product.variants),
    )


@apply_operation.register
def _(operation: ChangeName, entity: Product) -> Product:
    return _staged(entity, name=operation.name)


@apply_operation.register
def _(operation: SetDescription, entity: Product) -> Product:
    return _staged(entity, description=operation.description)


@apply_operation.register
def _(operation: ChangeSlug, entity: Product) -> Product:
    return _staged(entity, slug=operation.slug)


@apply_operation.register
def _(operation: SetSearchKeywords, entity: Product) -> Product:
    return _staged(entity, search_keywords=operation.search_keywords)


@apply_operation.register
def _(operation: SetMetaTitle, entity: Product) -> Product:
    return _staged(entity, meta_title=operation.meta_title)


@apply_operation.register
def _(operation: SetMetaDescription, entity: Product) -> Product:
    return _staged(entity, meta_description=operation.meta_description)


@apply_operation.register
def _(operation: SetMetaKeywords, entity: Product) -> Product:
    return _staged(entity, meta_keywords=operation.meta_keywords)


@apply_operation.register
def _(operation: SetTaxCategory, entity: Product) -> Product:
    return _staged(entity, tax_category=operation.tax_category)


@apply_operation.register
def _(operation: TransitionState, entity: Product) -> Product:
    # State is not part of the staged projection.
    return replace(entity, state=operation.state)


@apply_operation.register
def _(operation: AddToCategory, entity: Product) -> Product:
    if any(category.same_resource(operation.category) for category in entity.categories):
        return entity
    return _staged(entity, categories=(*entity.categories, operation.category))


@apply_operation.register
def _(operation: RemoveFromCategory, entity: Product) -> Product:
    return _staged(
        entity,
        categories=tuple(
            category
            for category in entity.categories
            if not category.same_resource(operation.category)
        ),
    )


@apply_operation.register
def _(operation: SetCategoryOrderHint, entity: Product) -> Product:
    hints = dict(entity.category_order_hints or {})
    if operation.order_hint is None:
        hints.pop(operation.category_id, None)
    else:
        hints[operation.category_id] = operation.order_hint
    return _staged(entity, category_order_hints=hints or None)


@apply_operation.register
def _(operation: AddVariant, entity: Product) -> Product:
    next_id = max(variant.id for variant in entity.all_variants()) + 1
    return _staged(entity, variants=(*entity.variants, _to_variant(operation, variant_id=next_id)))


@apply_operation.register
def _(operation: RemoveVariant, entity: Product) -> Product:
    if entity.master_variant.id == operation.variant_id:
        raise OperationNotApplicableError("The master variant cannot be removed")
    remaining = tuple(v for v in entity.variants if v.id != operation.variant_id)
    if len(remaining) == len(entity.variants):
        raise OperationNotApplicableError(
            f"Product {entity.key!r} has no variant {operation.variant_id}"
        )
    return _staged(entity, variants=remaining)


@apply_operation.register
def _(operation: ChangeMasterVariant, entity: Product) -> Product:
    if entity.master_variant.sku == operation.sku:
        return entity
    new_master = next((v for v in entity.variants if v.sku == operation.sku), None)
    if new_master is None:
        raise OperationNotApplicableError(f"Product {entity.key!r} has no variant {operation.sku!r}")
    others = tuple(v for v in entity.variants if v is not new_master)
    return _staged(entity, master_variant=new_master, variants=(*others, entity.master_variant))


def _with_attribute(variant: Variant, name: str, value: object) -> Variant:
    attributes = [attribute for attribute in variant.attributes if attribute.name != name]
    if value is not None:
        attributes.append(Attribute(name=name, value=value))
    return replace(variant, attributes=tuple(attributes))


@apply_operation.register
def _(operation: SetAttribute, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: _with_attribute(variant, operation.name, operation.value),
        variant_id=operation.variant_id,
    )


@apply_operation.register
def _(operation: SetAttributeInAllVariants, entity: Product) -> Product:
    return _update_variants(
        entity, lambda variant: _with_attribute(variant, operation.name, operation.value)
    )


@apply_operation.register
def _(operation: AddExternalImage, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(variant, images=(*variant.images, operation.image)),
        variant_id=operation.variant_id,
    )


@apply_operation.register
def _(operation: RemoveImage, entity: Product) -> Product:
    def _remove(variant: Variant) -> Variant:
        images = list(variant.images)
        index = next(
            (i for i, image in enumerate(images) if image.url == operation.image_url), None
        )
        if index is None:
            raise OperationNotApplicableError(f"Variant has no image {operation.image_url!r}")
        del images[index]
        return replace(variant, images=tuple(images))

    return _update_variants(entity, _remove, variant_id=operation.variant_id)


@apply_operation.register
def _(operation: MoveImageToPosition, entity: Product) -> Product:
    def _move(variant: Variant) -> Variant:
        images = list(variant.images)
        index = next(
            (i for i, image in enumerate(images) if image.url == operation.image_url), None
        )
        if index is None:
            raise OperationNotApplicableError(f"Variant has no image {operation.image_url!r}")
        images.insert(operation.position, images.pop(index))
        return replace(variant, images=tuple(images))

    return _update_variants(entity, _move, variant_id=operation.variant_id)


@apply_operation.register
def _(operation: AddPrice, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(variant, prices=(*variant.prices, _to_price(operation.price))),
        variant_id=operation.variant_id,
    )


def _owner_of_price(entity: Product, price_id: str) -> int:
    for variant in entity.all_variants():
        if any(price.id == price_id for price in variant.prices):
            return variant.id
    raise OperationNotApplicableError(f"Product {entity.key!r} has no price {price_id!r}")


@apply_operation.register
def _(operation: ChangePrice, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(
            variant,
            prices=tuple(
                _to_price(operation.price, price_id=price.id)
                if price.id == operation.price_id
                else price
                for price in variant.prices
            ),
        ),
        variant_id=_owner_of_price(entity, operation.price_id),
    )


@apply_operation.register
def _(operation: RemovePrice, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(
            variant,
            prices=tuple(price for price in variant.prices if price.id != operation.price_id),
        ),
        variant_id=_owner_of_price(entity, operation.price_id),
    )


@apply_operation.register
def _(operation: AddAsset, entity: Product) -> Product:
    def _add(variant: Variant) -> Variant:
        assets = list(variant.assets)
        assets.insert(operation.position, _to_asset(operation.asset))
        return replace(variant, assets=tuple(assets))

    return _update_variants(entity, _add, variant_id=operation.variant_id)


@apply_operation.register
def _(operation: RemoveAsset, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(
            variant,
            assets=tuple(asset for asset in variant.assets if asset.key != operation.asset_key),
        ),
        variant_id=operation.variant_id,
    )


def _update_asset(
    entity: Product,
    variant_id: int,
    asset_key: str,
    **changes: object,
) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(
            variant,
            assets=tuple(
                replace(asset, **changes) if asset.key == asset_key else asset  # type: ignore[arg-type]
                for asset in variant.assets
            ),
        ),
        variant_id=variant_id,
    )


@apply_operation.register
def _(operation: ChangeAssetName, entity: Product) -> Product:
    return _update_asset(entity, operation.variant_id, operation.asset_key, name=operation.name)


@apply_operation.register
def _(operation: SetAssetSources, entity: Product) -> Product:
    return _update_asset(
        entity, operation.variant_id, operation.asset_key, sources=operation.sources
    )


@apply_operation.register
def _(operation: SetAssetTags, entity: Product) -> Product:
    return _update_asset(entity, operation.variant_id, operation.asset_key, tags=operation.tags)


@apply_operation.register
def _(operation: SetSku, entity: Product) -> Product:
    return _update_variants(
        entity,
        lambda variant: replace(variant, sku=operation.sku),
        variant_id=operation.variant_id,
    )


@apply_operation.register
def _(_operation: Publish, entity: Product) -> Product:
    return replace(entity, published=True, has_staged_changes=False)


@apply_operation.register
def _(_operation: Unpublish, entity: Product) -> Product:
    return replace(entity, published=False)


__all__ = [
    "OperationNotApplicableError",
    "apply_operation",
    "apply_operations",
    "materialize",
]
