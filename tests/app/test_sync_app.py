from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from catalogsync.adapters.http_resilience import ResilientClient
from catalogsync.app import load_drafts, sync_drafts
from catalogsync.config import CommerceConfig, ResilienceConfig, RetryPolicy
from catalogsync.domain.sync import SyncOptions

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from catalogsync.app import ClientFactory

CHANNEL_DRAFTS = [
    {"key": "berlin", "name": {"en": "Berlin"}, "roles": ["InventorySupply"]},
    {"key": "hamburg", "name": {"en": "Hamburg"}},
]


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_sql_target_creates_then_updates(sqlite_engine: Engine, tmp_path: Path) -> None:
    drafts = load_drafts("channels", _write(tmp_path / "channels.json", CHANNEL_DRAFTS))

    first = sync_drafts("channels", drafts, target="sql")
    changed = [{**CHANNEL_DRAFTS[0], "name": {"en": "Berlin Mitte"}}, CHANNEL_DRAFTS[1]]
    second = sync_drafts(
        "channels",
        load_drafts("channels", _write(tmp_path / "changed.json", changed)),
        target="sql",
    )

    assert first.report_message == (
        "Summary: 2 channels were processed in total (2 created, 0 updated and 0 failed to sync)."
    )
    assert (second.created, second.updated, second.unchanged) == (0, 1, 1)


def test_product_sync_republishes_on_change(sqlite_engine: Engine, tmp_path: Path) -> None:
    draft = {
        "key": "shirt",
        "productType": {"typeId": "product-type", "key": "apparel"},
        "name": {"en": "Shirt"},
        "slug": {"en": "shirt"},
        "masterVariant": {"key": "m", "sku": "sku-m"},
        "variants": [{"key": "a", "sku": "sku-a"}],
        "publish": True,
    }
    promoted = {
        **draft,
        "masterVariant": {"key": "a", "sku": "sku-a"},
        "variants": [{"key": "m", "sku": "sku-m"}, {"key": "b", "sku": "sku-b"}],
    }

    created = sync_drafts(
        "products", load_drafts("products", _write(tmp_path / "p1.json", [draft])), target="sql"
    )
    updated = sync_drafts(
        "products", load_drafts("products", _write(tmp_path / "p2.json", [promoted])), target="sql"
    )
    unchanged = sync_drafts(
        "products", load_drafts("products", _write(tmp_path / "p3.json", [promoted])), target="sql"
    )

    assert created.created == 1
    assert updated.updated == 1
    assert (unchanged.updated, unchanged.unchanged) == (0, 1)


def test_explicit_options_take_precedence(sqlite_engine: Engine) -> None:
    events: list[object] = []
    statistics = sync_drafts(
        "channels",
        [None],
        target="sql",
        options=SyncOptions(batch_size=1, on_event=events.append),
    )

    assert statistics.processed == 1
    assert len(events) == 1


def _commerce_config() -> CommerceConfig:
    return CommerceConfig(
        api_url="https://api.example.test",
        auth_url="https://auth.example.test",
        project_key="shop",
        client_id="id",
        client_secret="secret",
        scopes=("manage_project:shop",),
        resilience=ResilienceConfig(
            name="commerce-test",
            base_url="https://api.example.test/shop",
            retry=RetryPolicy(total=0),
        ),
    )


def _mock_client_factory(handler: Callable[[httpx.Request], httpx.Response]) -> ClientFactory:
    return lambda resilience: ResilientClient(resilience, transport=httpx.MockTransport(handler))


def test_http_target_uses_the_commerce_api(tmp_path: Path) -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(f"{request.method} {request.url.path}")
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json={"access_token": "t"})
        if request.method == "GET":
            return httpx.Response(200, json={"results": []})
        body = json.loads(request.content)
        return httpx.Response(201, json={**body, "id": f"id-{body['key']}", "version": 1})

    drafts = load_drafts("channels", _write(tmp_path / "channels.json", CHANNEL_DRAFTS))

    statistics = sync_drafts(
        "channels",
        drafts,
        commerce_config=_commerce_config(),
        client_factory=_mock_client_factory(handler),
    )

    assert statistics.created == 2
    assert calls[:2] == ["POST /oauth/token", "GET /shop/channels"]
    assert sorted(calls[2:]) == ["POST /shop/channels", "POST /shop/channels"]


def _expanded(type_id: str, entity_id: str, key: str) -> dict[str, object]:
    return {"typeId": type_id, "id": entity_id, "obj": {"id": entity_id, "key": key}}


def test_http_target_leaves_unchanged_key_referenced_product_alone(tmp_path: Path) -> None:
    draft = {
        "key": "shirt",
        "productType": {"typeId": "product-type", "key": "apparel"},
        "name": {"en": "Shirt"},
        "slug": {"en": "shirt"},
        "categories": [{"typeId": "category", "key": "tops"}],
        "taxCategory": {"typeId": "tax-category", "key": "standard"},
        "state": {"typeId": "state", "key": "approved"},
        "masterVariant": {
            "key": "m",
            "sku": "sku-m",
            "prices": [
                {
                    "value": {"currencyCode": "EUR", "centAmount": 1999},
                    "channel": {"typeId": "channel", "key": "berlin"},
                }
            ],
        },
        "publish": True,
    }
    projection = {
        "id": "p-1",
        "version": 7,
        "key": "shirt",
        "productType": _expanded("product-type", "pt-1", "apparel"),
        "name": {"en": "Shirt"},
        "slug": {"en": "shirt"},
        "categories": [_expanded("category", "c-1", "tops")],
        "taxCategory": _expanded("tax-category", "tc-1", "standard"),
        "state": _expanded("state", "s-1", "approved"),
        "masterVariant": {
            "id": 1,
            "key": "m",
            "sku": "sku-m",
            "prices": [
                {
                    "id": "price-1",
                    "value": {"type": "centPrecision", "currencyCode": "EUR", "centAmount": 1999},
                    "channel": _expanded("channel", "ch-1", "berlin"),
                }
            ],
        },
        "published": True,
        "hasStagedChanges": False,
    }
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json={"access_token": "t"})
        requests.append(request)
        return httpx.Response(200, json={"results": [projection]})

    statistics = sync_drafts(
        "products",
        load_drafts("products", _write(tmp_path / "products.json", [draft])),
        commerce_config=_commerce_config(),
        client_factory=_mock_client_factory(handler),
    )

    assert (statistics.updated, statistics.unchanged, statistics.failed) == (0, 1, 0)
    assert [request.method for request in requests] == ["GET"]
    expansions = requests[0].url.params.get_list("expand")
    assert "categories[*]" in expansions
    assert "masterVariant.prices[*].channel" in expansions



def test_unknown_kind_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unsupported resource kind"):
        load_drafts("carts", _write(tmp_path / "carts.json", []))
