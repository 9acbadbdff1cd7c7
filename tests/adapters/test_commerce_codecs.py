from __future__ import annotations

import pytest
from pydantic import ValidationError

from catalogsync.adapters.commerce import CODECS
from catalogsync.adapters.commerce.translator import operation_to_action
from catalogsync.domain.model import (
    AssetDraft,
    ChannelRole,
    GeoLocation,
    Money,
    PriceDraft,
    ResourceIdentifier,
    ResourceType,
)
from catalogsync.domain.operations import (
    AddAsset,
    AddPrice,
    RemoveChannelRole,
    SetAssetSources,
    SetAttribute,
    SetCategoryOrderHint,
    SetChannelGeoLocation,
    SetSearchKeywords,
    TransitionState,
)


def test_product_drafts_decode_from_camel_case_json() -> None:
    data = [
        {
            "key": "shirt",
            "productType": {"typeId": "product-type", "key": "apparel"},
            "name": {"en": "Shirt"},
            "slug": {"en": "shirt"},
            "searchKeywords": {"en": ["tee", {"text": "top"}]},
            "masterVariant": {
                "key": "m",
                "sku": "sku-m",
                "prices": [{"value": {"currencyCode": "EUR", "centAmount": 1999}}],
                "attributes": [{"name": "size", "value": "M"}],
            },
            "variants": [{"key": "a", "sku": "sku-a"}, None],
            "publish": True,
        },
        None,
    ]

    drafts = CODECS["products"].decode_drafts(data)

    assert drafts[1] is None
    draft = drafts[0]
    assert draft is not None
    assert draft.search_keywords == {"en": ("tee", "top")}
    assert draft.master_variant is not None
    assert draft.master_variant.prices == (PriceDraft(value=Money("EUR", 1999)),)
    assert draft.variants[1] is None
    assert draft.publish is True


def test_channel_drafts_decode_roles_and_geo_location() -> None:
    (draft,) = CODECS["channels"].decode_drafts(
        [
            {
                "key": "berlin",
                "roles": ["InventorySupply"],
                "geoLocation": {"type": "Point", "coordinates": [13.4, 52.5]},
            }
        ]
    )

    assert draft is not None
    assert draft.roles == (ChannelRole.INVENTORY_SUPPLY,)
    assert draft.geo_location == GeoLocation(longitude=13.4, latitude=52.5)


def test_malformed_drafts_raise_validation_error() -> None:
    with pytest.raises(ValidationError):
        CODECS["products"].decode_drafts([{"key": "no-name"}])


def test_draft_file_must_be_a_list() -> None:
    with pytest.raises(ValueError, match="JSON list"):
        CODECS["channels"].decode_drafts({"key": "berlin"})


def test_operation_actions_use_wire_names() -> None:
    category_hint = SetCategoryOrderHint(category_id="c1", order_hint=None)
    state = ResourceIdentifier(type_id=ResourceType.STATE, key="approved")

    assert operation_to_action(category_hint) == {
        "action": "setCategoryOrderHint",
        "categoryId": "c1",
    }
    assert operation_to_action(SetAttribute(variant_id=2, name="size", value="M")) == {
        "action": "setAttribute",
        "variantId": 2,
        "name": "size",
        "value": "M",
    }
    assert operation_to_action(TransitionState(state=state)) == {
        "action": "transitionState",
        "state": {"typeId": "state", "key": "approved"},
        "force": True,
    }
    assert operation_to_action(RemoveChannelRole(role=ChannelRole.PRIMARY)) == {
        "action": "removeRoles",
        "roles": ["Primary"],
    }
    assert operation_to_action(
        SetChannelGeoLocation(geo_location=GeoLocation(longitude=1.5, latitude=2.5))
    ) == {
        "action": "setGeoLocation",
        "geoLocation": {"type": "Point", "coordinates": [1.5, 2.5]},
    }


def test_nested_values_are_encoded() -> None:
    price = PriceDraft(value=Money("EUR", 500), country="DE")
    asset = AssetDraft(key="manual", name={"en": "Manual"}, sources=("https://f.example/m.pdf",))

    assert operation_to_action(AddPrice(variant_id=1, price=price)) == {
        "action": "addPrice",
        "variantId": 1,
        "price": {"value": {"currencyCode": "EUR", "centAmount": 500}, "country": "DE"},
    }
    assert operation_to_action(AddAsset(variant_id=1, asset=asset, position=0)) == {
        "action": "addAsset",
        "variantId": 1,
        "asset": {
            "key": "manual",
            "name": {"en": "Manual"},
            "sources": [{"uri": "https://f.example/m.pdf"}],
            "tags": [],
        },
        "position": 0,
    }
    assert operation_to_action(
        SetAssetSources(variant_id=1, asset_key="manual", sources=("a", "b"))
    ) == {
        "action": "setAssetSources",
        "variantId": 1,
        "assetKey": "manual",
        "sources": [{"uri": "a"}, {"uri": "b"}],
    }
    assert operation_to_action(SetSearchKeywords(search_keywords={"en": ("tee",)})) == {
        "action": "setSearchKeywords",
        "searchKeywords": {"en": [{"text": "tee"}]},
    }
