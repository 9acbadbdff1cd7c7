from __future__ import annotations

from catalogsync.domain.diff.variants import (
    build_asset_operations,
    build_attribute_operations,
    build_image_operations,
    build_price_operations,
)
from catalogsync.domain.model import (
    Asset,
    AssetDraft,
    Attribute,
    Image,
    Money,
    Price,
    PriceDraft,
    ResourceIdentifier,
    ResourceType,
)
from catalogsync.domain.operations import (
    AddAsset,
    AddExternalImage,
    AddPrice,
    ChangeAssetName,
    ChangePrice,
    MoveImageToPosition,
    RemoveAsset,
    RemoveImage,
    RemovePrice,
    SetAssetSources,
    SetAssetTags,
    SetAttribute,
)
from tests.support.catalog import make_variant, make_variant_draft

IMAGE_A = Image(url="https://img.example/a.png")
IMAGE_B = Image(url="https://img.example/b.png")
IMAGE_C = Image(url="https://img.example/c.png")
IMAGE_D = Image(url="https://img.example/d.png")


def test_attributes_set_changed_and_unset_removed() -> None:
    old = make_variant(1, "m", attributes=(Attribute("size", "S"), Attribute("fit", "slim")))
    new = make_variant_draft("m", attributes=(Attribute("size", "M"),))

    assert build_attribute_operations(old, new) == [
        SetAttribute(variant_id=1, name="size", value="M"),
        SetAttribute(variant_id=1, name="fit", value=None),
    ]


def test_attribute_without_value_needs_no_unset() -> None:
    old = make_variant(1, "m", attributes=(Attribute("note", None),))
    new = make_variant_draft("m")

    assert build_attribute_operations(old, new) == []


def test_images_removed_added_then_moved_into_draft_order() -> None:
    old = make_variant(1, "m", images=(IMAGE_A, IMAGE_B, IMAGE_C))
    new = make_variant_draft("m", images=(IMAGE_C, IMAGE_A, IMAGE_D))

    assert build_image_operations(old, new) == [
        RemoveImage(variant_id=1, image_url=IMAGE_B.url),
        AddExternalImage(variant_id=1, image=IMAGE_D),
        MoveImageToPosition(variant_id=1, image_url=IMAGE_C.url, position=0),
    ]


def test_image_with_changed_label_is_replaced() -> None:
    relabelled = Image(url=IMAGE_A.url, label="front")
    old = make_variant(1, "m", images=(IMAGE_A,))
    new = make_variant_draft("m", images=(relabelled,))

    assert build_image_operations(old, new) == [
        RemoveImage(variant_id=1, image_url=IMAGE_A.url),
        AddExternalImage(variant_id=1, image=relabelled),
    ]


def test_same_images_in_same_order_need_nothing() -> None:
    old = make_variant(1, "m", images=(IMAGE_A, IMAGE_B))
    new = make_variant_draft("m", images=(IMAGE_A, IMAGE_B))

    assert build_image_operations(old, new) == []


def test_prices_matched_by_currency_country_and_channel() -> None:
    store = ResourceIdentifier(type_id=ResourceType.CHANNEL, id="store-1")
    old = make_variant(
        1,
        "m",
        prices=(
            Price(id="p1", value=Money("EUR", 1000)),
            Price(id="p2", value=Money("USD", 2000), country="US"),
            Price(id="p3", value=Money("EUR", 900), channel=store),
        ),
    )
    new_eur = PriceDraft(value=Money("EUR", 1500))
    new_gbp = PriceDraft(value=Money("GBP", 3000))
    same_store = PriceDraft(value=Money("EUR", 900), channel=store)
    new = make_variant_draft("m", prices=(new_eur, same_store, new_gbp))

    assert build_price_operations(old, new) == [
        RemovePrice(price_id="p2"),
        ChangePrice(price_id="p1", price=new_eur),
        AddPrice(variant_id=1, price=new_gbp),
    ]


def test_assets_matched_by_key() -> None:
    manual = Asset(
        id="x1",
        key="manual",
        name={"en": "Manual"},
        sources=("https://files.example/manual.pdf",),
        tags=frozenset({"docs"}),
    )
    leaflet = Asset(id="x2", key="leaflet", name={"en": "Leaflet"})
    old = make_variant(1, "m", assets=(manual, leaflet))

    guide = AssetDraft(
        key="manual",
        name={"en": "Guide"},
        sources=("https://files.example/guide.pdf",),
        tags=frozenset({"docs", "print"}),
    )
    spec_sheet = AssetDraft(key="spec", name={"en": "Spec sheet"})
    new = make_variant_draft("m", assets=(guide, spec_sheet))

    assert build_asset_operations(old, new) == [
        RemoveAsset(variant_id=1, asset_key="leaflet"),
        ChangeAssetName(variant_id=1, asset_key="manual", name={"en": "Guide"}),
        SetAssetSources(
            variant_id=1, asset_key="manual", sources=("https://files.example/guide.pdf",)
        ),
        SetAssetTags(variant_id=1, asset_key="manual", tags=frozenset({"docs", "print"})),
        AddAsset(variant_id=1, asset=spec_sheet, position=1),
    ]
