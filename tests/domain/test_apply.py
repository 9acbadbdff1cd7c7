from __future__ import annotations

import pytest

from catalogsync.domain.apply import OperationNotApplicableError, apply_operations, materialize
from catalogsync.domain.diff import DiffContext, build_channel_operations, build_product_operations
from catalogsync.domain.model import (
    Asset,
    AssetDraft,
    Attribute,
    ChannelRole,
    GeoLocation,
    Image,
    Money,
    Price,
    PriceDraft,
    Product,
    ResourceIdentifier,
    ResourceType,
)
from catalogsync.domain.operations import ChangeMasterVariant, RemoveVariant
from tests.support.catalog import (
    make_channel,
    make_channel_draft,
    make_product,
    make_product_draft,
    make_variant,
    make_variant_draft,
)


def _category(category_id: str) -> ResourceIdentifier:
    return ResourceIdentifier(type_id=ResourceType.CATEGORY, id=category_id)


def test_channel_converges_after_applying_its_diff() -> None:
    old = make_channel(roles=(ChannelRole.INVENTORY_SUPPLY,))
    new = make_channel_draft(
        name={"en": "Berlin"},
        roles=(ChannelRole.PRIMARY, ChannelRole.ORDER_EXPORT),
        geo_location=GeoLocation(longitude=13.4, latitude=52.5),
    )

    updated = apply_operations(old, build_channel_operations(old, new, DiffContext()))

    assert build_channel_operations(updated, new, DiffContext()) == []
    assert set(updated.roles) == {ChannelRole.PRIMARY, ChannelRole.ORDER_EXPORT}


def test_product_converges_after_applying_its_diff() -> None:
    front = Image(url="https://img.example/front.png")
    back = Image(url="https://img.example/back.png")
    side = Image(url="https://img.example/side.png")
    old = make_product(
        master=make_variant(
            1,
            "m",
            attributes=(Attribute("size", "S"), Attribute("fit", "slim")),
            images=(front, back),
            prices=(
                Price(id="p1", value=Money("EUR", 1000)),
                Price(id="p2", value=Money("USD", 1200)),
            ),
            assets=(Asset(id="x1", key="manual", name={"en": "Manual"}),),
        ),
        variants=[make_variant(2, "a"), make_variant(3, "b")],
        categories=(_category("c1"),),
        category_order_hints={"c1": "0.1"},
        published=True,
    )
    new = make_product_draft(
        name={"en": "Oxford shirt"},
        master=make_variant_draft("a", attributes=(Attribute("size", "M"),)),
        variants=[
            make_variant_draft(
                "m",
                attributes=(Attribute("size", "M"),),
                images=(side, back, front),
                prices=(PriceDraft(value=Money("EUR", 1500)),),
                assets=(
                    AssetDraft(key="spec", name={"en": "Spec"}),
                    AssetDraft(key="manual", name={"en": "Guide"}, tags=frozenset({"pdf"})),
                ),
            ),
            make_variant_draft("c", sku="sku-c-1"),
        ],
        categories=(_category("c2"),),
        category_order_hints={"c2": "0.3"},
        publish=True,
    )
    context = DiffContext()

    operations = build_product_operations(old, new, context)
    updated = apply_operations(old, operations)

    assert build_product_operations(updated, new, context) == []
    assert updated.master_variant.key == "a"
    assert sorted(variant.key or "" for variant in updated.variants) == ["c", "m"]
    assert updated.published
    assert not updated.has_staged_changes
    demoted = next(variant for variant in updated.variants if variant.key == "m")
    assert [image.url for image in demoted.images] == [side.url, back.url, front.url]
    assert [asset.key for asset in demoted.assets] == ["spec", "manual"]


def test_operations_do_not_touch_the_input_snapshot() -> None:
    old = make_product(variants=[make_variant(2, "a")])

    apply_operations(old, [RemoveVariant(variant_id=2)])

    assert [variant.key for variant in old.variants] == ["a"]


def test_master_variant_cannot_be_removed() -> None:
    with pytest.raises(OperationNotApplicableError):
        apply_operations(make_product(), [RemoveVariant(variant_id=1)])


def test_unknown_master_sku_is_rejected() -> None:
    with pytest.raises(OperationNotApplicableError):
        apply_operations(make_product(), [ChangeMasterVariant(sku="nope")])


def test_materialized_product_numbers_variants_from_one() -> None:
    draft = make_product_draft(
        master=make_variant_draft("m", prices=(PriceDraft(value=Money("EUR", 100)),)),
        variants=[make_variant_draft("a"), None, make_variant_draft("b")],
        publish=True,
    )

    product = materialize(draft, entity_id="p-1")

    assert isinstance(product, Product)
    assert product.version == 1
    assert [variant.id for variant in product.all_variants()] == [1, 2, 3]
    assert product.master_variant.prices[0].id
    assert product.published
