"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from catalogsync.adapters.commerce import (
    CODECS,
    CommerceChannelService,
    CommerceClient,
    CommerceProductService,
)
from catalogsync.adapters.sqlalchemy import SqlAlchemyCatalogService, is_started, startup
from catalogsync.config import get_commerce_config, get_sync_config
from catalogsync.domain.sync import KINDS, BatchSync, SyncOptions

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from catalogsync.adapters.http_resilience import ResilientClient
    from catalogsync.config import CommerceConfig
    from catalogsync.config.http_resilience import ResilienceConfig
    from catalogsync.domain.ports import CatalogService
    from catalogsync.domain.sync import ResourceKind, SyncStatistics

type Target = Literal["http", "sql"]
type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

TARGETS: tuple[Target, ...] = ("http", "sql")

_HTTP_SERVICES = {
    "channels": CommerceChannelService,
    "products": CommerceProductService,
}

log = getLogger(__name__)


def _resolve_kind(kind: str) -> str:
    if kind not in KINDS:
        raise ValueError(f"Unsupported resource kind: {kind!r} (expected one of {sorted(KINDS)})")
    return kind


def load_drafts(kind: str, path: Path) -> list[object | None]:
    """Read a JSON array of drafts of ``kind``; ``null`` entries are kept for validation."""

    codec = CODECS[_resolve_kind(kind)]
    with path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    return list(codec.decode_drafts(data))


def sync_drafts(
    kind: str,
    drafts: Sequence[object | None],
    *,
    target: Target = "http",
    batch_size: int | None = None,
    options: SyncOptions[object, object] | None = None,
    database_uri: str | None = None,
    commerce_config: CommerceConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> SyncStatistics:
    """Synchronise ``drafts`` of one kind into the chosen target."""

    return asyncio.run(
        sync_drafts_async(
            kind,
            drafts,
            target=target,
            batch_size=batch_size,
            options=options,
            database_uri=database_uri,
            commerce_config=commerce_config,
            client_factory=client_factory,
        )
    )


async def sync_drafts_async(
    kind: str,
    drafts: Sequence[object | None],
    *,
    target: Target = "http",
    batch_size: int | None = None,
    options: SyncOptions[object, object] | None = None,
    database_uri: str | None = None,
    commerce_config: CommerceConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> SyncStatistics:
    resource_kind = KINDS[_resolve_kind(kind)]
    sync_config = get_sync_config(batch_size=batch_size)
    effective_options = options or SyncOptions(batch_size=sync_config.batch_size)
    log.info(
        "Starting %s sync: drafts=%s, target=%s, batch_size=%s",
        kind,
        len(drafts),
        target,
        effective_options.batch_size,
    )

    if target == "sql":
        if not is_started():
            startup(database_uri=database_uri)
        service: CatalogService[object, object] = SqlAlchemyCatalogService(CODECS[kind])
        return await _run(resource_kind, service, effective_options, drafts)

    if target != "http":
        raise ValueError(f"Unsupported target: {target!r}")
    config = commerce_config or get_commerce_config()
    client = (
        CommerceClient(config=config, client_factory=client_factory)
        if client_factory is not None
        else CommerceClient(config=config)
    )
    async with client:
        service = _HTTP_SERVICES[kind](client)
        return await _run(resource_kind, service, effective_options, drafts)


async def _run(
    resource_kind: ResourceKind[object, object],
    service: CatalogService[object, object],
    options: SyncOptions[object, object],
    drafts: Sequence[object | None],
) -> SyncStatistics:
    engine = BatchSync(kind=resource_kind, service=service, options=options)
    return await engine.sync(drafts)
