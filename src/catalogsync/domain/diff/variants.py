"""Variant list reconciliation for products.

The old and new variant lists are matched by variant key. The result is, in order:

1. ``removeVariant`` for every old non-master variant whose key the draft no longer has,
2. per new variant (master first, then the others in draft order) either the field
   operations against the matching old variant or one ``addVariant``,
3. ``changeMasterVariant`` plus the removal of the old master when it was dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.diff.common import build_update_operation, collect
from catalogsync.domain.diff.filters import ActionGroup
from catalogsync.domain.model import is_blank, same_optional_resource
from catalogsync.domain.operations import (
    AddAsset,
    AddExternalImage,
    AddPrice,
    AddVariant,
    ChangeAssetName,
    ChangeMasterVariant,
    ChangePrice,
    MoveImageToPosition,
    RemoveAsset,
    RemoveImage,
    RemovePrice,
    RemoveVariant,
    SetAssetSources,
    SetAssetTags,
    SetAttribute,
    SetAttributeInAllVariants,
    SetSku,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from catalogsync.domain.diff.context import DiffContext
    from catalogsync.domain.model import (
        Image,
        Price,
        PriceDraft,
        Product,
        ProductDraft,
        Variant,
        VariantDraft,
    )
    from catalogsync.domain.operations import UpdateOperation

FAILED_TO_BUILD_VARIANTS = (
    "Failed to build variants update actions on the product with key '{key}'. Reason: {reason}"
)
BLANK_VARIANT_KEY = "The variant key is blank."
MISSING_VARIANT = "The variant is missing."
BLANK_OLD_MASTER_VARIANT_KEY = "Old master variant key is blank."
BLANK_NEW_MASTER_VARIANT_KEY = "New master variant is missing or has a blank key."
BLANK_NEW_MASTER_VARIANT_SKU = "New master variant has a blank SKU."


def build_variant_operations(
    old: Product,
    new: ProductDraft,
    context: DiffContext,
) -> list[UpdateOperation]:
    new_master = _valid_new_master(old, new, context)
    if new_master is None:
        return []

    # Master indexed last so it wins over a non-master sharing its key.
    old_by_key = {variant.key: variant for variant in (*old.variants, old.master_variant)}
    new_variants = [new_master, *new.variants]
    new_keys = {variant.key for variant in new_variants if variant is not None}

    operations: list[UpdateOperation] = [
        RemoveVariant(variant_id=variant.id)
        for variant in old.variants
        if variant.key not in new_keys
    ]

    for new_variant in new_variants:
        if new_variant is None:
            _report(context, old, MISSING_VARIANT)
            continue
        if is_blank(new_variant.key):
            _report(context, old, BLANK_VARIANT_KEY)
            continue
        old_variant = old_by_key.get(new_variant.key)
        if old_variant is None:
            operations.append(build_add_variant_operation(new_variant))
            continue
        operations += _dedupe_same_for_all(
            build_matched_variant_operations(old_variant, new_variant, context),
            collected=operations,
        )

    operations += _build_change_master_operations(old, new, new_master, context)
    return operations


def build_matched_variant_operations(
    old_variant: Variant,
    new_variant: VariantDraft,
    context: DiffContext,
) -> list[UpdateOperation]:
    allows = context.sync_filter.allows
    operations: list[UpdateOperation] = []
    if allows(ActionGroup.ATTRIBUTES):
        operations += build_attribute_operations(
            old_variant, new_variant, same_for_all=context.same_for_all_attributes
        )
    if allows(ActionGroup.IMAGES):
        operations += build_image_operations(old_variant, new_variant)
    if allows(ActionGroup.PRICES):
        operations += build_price_operations(old_variant, new_variant)
    if allows(ActionGroup.ASSETS):
        operations += build_asset_operations(old_variant, new_variant)
    if allows(ActionGroup.SKU):
        operations += collect(
            build_update_operation(
                old_variant.sku,
                new_variant.sku,
                lambda: SetSku(variant_id=old_variant.id, sku=new_variant.sku),
            )
        )
    return operations


def build_add_variant_operation(variant: VariantDraft) -> AddVariant:
    return AddVariant(
        key=variant.key,
        sku=variant.sku,
        attributes=variant.attributes,
        prices=variant.prices,
        images=variant.images,
        assets=variant.assets,
    )


# --- attributes -------------------------------------------------------------


def build_attribute_operations(
    old_variant: Variant,
    new_variant: VariantDraft,
    *,
    same_for_all: frozenset[str] = frozenset(),
) -> list[UpdateOperation]:
    old_values = {attribute.name: attribute.value for attribute in old_variant.attributes}
    new_values = {attribute.name: attribute.value for attribute in new_variant.attributes}

    def _set(name: str, value: object) -> UpdateOperation:
        if name in same_for_all:
            return SetAttributeInAllVariants(name=name, value=value)
        return SetAttribute(variant_id=old_variant.id, name=name, value=value)

    operations = [
        _set(name, value)
        for name, value in new_values.items()
        if name not in old_values or old_values[name] != value
    ]
    operations += [
        _set(name, None)
        for name, value in old_values.items()
        if name not in new_values and value is not None
    ]
    return operations


def _dedupe_same_for_all(
    operations: Iterable[UpdateOperation],
    *,
    collected: Sequence[UpdateOperation],
) -> list[UpdateOperation]:
    result: list[UpdateOperation] = []
    for operation in operations:
        if isinstance(operation, SetAttributeInAllVariants) and (
            operation in collected or operation in result
        ):
            continue
        result.append(operation)
    return result


# --- images -----------------------------------------------------------------


def _unique_images(images: Iterable[Image]) -> list[Image]:
    result: list[Image] = []
    for image in images:
        if image not in result:
            result.append(image)
    return result


def build_image_operations(old_variant: Variant, new_variant: VariantDraft) -> list[UpdateOperation]:
    variant_id = old_variant.id
    old_images = _unique_images(old_variant.images)
    new_images = _unique_images(new_variant.images)

    operations: list[UpdateOperation] = [
        RemoveImage(variant_id=variant_id, image_url=image.url)
        for image in old_images
        if image not in new_images
    ]
    current = [image for image in old_images if image in new_images]
    for image in new_images:
        if image not in old_images:
            operations.append(AddExternalImage(variant_id=variant_id, image=image))
            current.append(image)

    # Added images land at the end, so only moves are left to reach the draft order.
    for position, image in enumerate(new_images):
        if current[position] == image:
            continue
        operations.append(
            MoveImageToPosition(variant_id=variant_id, image_url=image.url, position=position)
        )
        current.remove(image)
        current.insert(position, image)
    return operations


# --- prices -----------------------------------------------------------------


def _same_price_slot(left: PriceDraft, right: PriceDraft) -> bool:
    return (
        left.value.currency_code == right.value.currency_code
        and left.country == right.country
        and same_optional_resource(left.channel, right.channel)
    )


def _find_price[P: PriceDraft](price: PriceDraft, candidates: Iterable[P]) -> P | None:
    return next((candidate for candidate in candidates if _same_price_slot(price, candidate)), None)


def build_price_operations(old_variant: Variant, new_variant: VariantDraft) -> list[UpdateOperation]:
    removals: list[UpdateOperation] = []
    changes: list[UpdateOperation] = []
    for old_price in old_variant.prices:
        match = _find_price(old_price, new_variant.prices)
        if match is None:
            removals.append(RemovePrice(price_id=old_price.id))
        elif match.value != old_price.value:
            changes.append(ChangePrice(price_id=old_price.id, price=match))

    old_prices: list[Price] = list(old_variant.prices)
    additions: list[UpdateOperation] = [
        AddPrice(variant_id=old_variant.id, price=new_price)
        for new_price in new_variant.prices
        if _find_price(new_price, old_prices) is None
    ]
    return [*removals, *changes, *additions]


# --- assets -----------------------------------------------------------------


def build_asset_operations(old_variant: Variant, new_variant: VariantDraft) -> list[UpdateOperation]:
    variant_id = old_variant.id
    old_by_key = {asset.key: asset for asset in old_variant.assets}
    new_keys = {asset.key for asset in new_variant.assets}

    operations: list[UpdateOperation] = [
        RemoveAsset(variant_id=variant_id, asset_key=asset.key)
        for asset in old_variant.assets
        if asset.key not in new_keys
    ]
    for new_asset in new_variant.assets:
        old_asset = old_by_key.get(new_asset.key)
        if old_asset is None:
            continue
        key = new_asset.key
        operations += collect(
            build_update_operation(
                old_asset.name,
                new_asset.name,
                lambda: ChangeAssetName(variant_id=variant_id, asset_key=key, name=new_asset.name),
            ),
            build_update_operation(
                old_asset.sources,
                new_asset.sources,
                lambda: SetAssetSources(
                    variant_id=variant_id, asset_key=key, sources=new_asset.sources
                ),
            ),
            build_update_operation(
                old_asset.tags,
                new_asset.tags,
                lambda: SetAssetTags(variant_id=variant_id, asset_key=key, tags=new_asset.tags),
            ),
        )
    operations += [
        AddAsset(variant_id=variant_id, asset=new_asset, position=position)
        for position, new_asset in enumerate(new_variant.assets)
        if new_asset.key not in old_by_key
    ]
    return operations


# --- master variant ---------------------------------------------------------


def _valid_new_master(
    old: Product,
    new: ProductDraft,
    context: DiffContext,
) -> VariantDraft | None:
    if is_blank(old.master_variant.key):
        _report(context, old, BLANK_OLD_MASTER_VARIANT_KEY)
        return None
    if new.master_variant is None or is_blank(new.master_variant.key):
        _report(context, old, BLANK_NEW_MASTER_VARIANT_KEY)
        return None
    return new.master_variant


def _build_change_master_operations(
    old: Product,
    new: ProductDraft,
    new_master: VariantDraft,
    context: DiffContext,
) -> list[UpdateOperation]:
    old_master_key = old.master_variant.key
    if new_master.key == old_master_key:
        return []
    if new_master.sku is None or is_blank(new_master.sku):
        _report(context, old, BLANK_NEW_MASTER_VARIANT_SKU)
        return []

    operations: list[UpdateOperation] = [ChangeMasterVariant(sku=new_master.sku)]
    demoted = any(
        variant is not None and variant.key == old_master_key for variant in new.variants
    )
    if not demoted:
        operations.append(RemoveVariant(variant_id=old.master_variant.id))
    return operations


def _report(context: DiffContext, old: Product, reason: str) -> None:
    context.reporter.error(
        FAILED_TO_BUILD_VARIANTS.format(key=old.key, reason=reason),
        old_entity=old,
    )


__all__ = [
    "BLANK_NEW_MASTER_VARIANT_KEY",
    "BLANK_NEW_MASTER_VARIANT_SKU",
    "BLANK_OLD_MASTER_VARIANT_KEY",
    "BLANK_VARIANT_KEY",
    "FAILED_TO_BUILD_VARIANTS",
    "MISSING_VARIANT",
    "build_add_variant_operation",
    "build_asset_operations",
    "build_attribute_operations",
    "build_image_operations",
    "build_matched_variant_operations",
    "build_price_operations",
    "build_variant_operations",
]
