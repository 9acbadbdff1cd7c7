"""Commerce API implementations of the :class:`CatalogService` port."""

from __future__ import annotations

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from catalogsync.domain.model import Channel, ChannelDraft, Product, ProductDraft, RemoteEntity
from catalogsync.domain.ports import Failure, FailureKind, Ok

from .client import CommerceAPIError, key_in_predicate
from .schema import ChannelPayload, ProductPayload, ProductProjectionPayload
from .translator import (
    channel_draft_to_payload,
    channel_from_payload,
    operation_to_action,
    product_draft_to_payload,
    product_from_payload,
    product_from_projection,
)

if TYPE_CHECKING:
    from collections.abc import Sequence, Set

    from catalogsync.domain.operations import UpdateOperation
    from catalogsync.domain.ports import Result

    from .client import CommerceClient, QueryParam

log = getLogger(__name__)

# Expanded references carry the referenced key, so key-only drafts compare equal.
REFERENCE_EXPANSIONS = (
    "productType",
    "categories[*]",
    "taxCategory",
    "state",
    "masterVariant.prices[*].channel",
    "variants[*].prices[*].channel",
)


def _failure(exc: CommerceAPIError | httpx.HTTPError) -> Failure:
    if isinstance(exc, CommerceAPIError) and exc.status_code == httpx.codes.CONFLICT:
        return Failure(FailureKind.CONFLICT, exc)
    return Failure(FailureKind.REMOTE, exc)


class CommerceService[TDraft, TEntity: RemoteEntity](ABC):
    """Shared request flow; subclasses name the resources and convert payloads."""

    query_resource: ClassVar[str]
    write_resource: ClassVar[str]
    query_params: ClassVar[dict[str, QueryParam]] = {}

    def __init__(self, client: CommerceClient) -> None:
        self._client = client

    async def fetch_by_keys(self, keys: Set[str]) -> list[TEntity]:
        if not keys:
            return []
        payloads = await self._client.query(
            self.query_resource, where=key_in_predicate(keys), **self.query_params
        )
        return [self._entity_from_query(payload) for payload in payloads]

    async def fetch_by_key(self, key: str) -> TEntity | None:
        payload = await self._client.get_by_key(self.query_resource, key, **self.query_params)
        return self._entity_from_query(payload) if payload is not None else None

    async def create(self, draft: TDraft) -> Result[TEntity]:
        try:
            payload = await self._client.create(self.write_resource, self._draft_body(draft))
        except (CommerceAPIError, httpx.HTTPError) as exc:
            return _failure(exc)
        return Ok(self._entity_from_write(payload))

    async def update(
        self,
        entity: TEntity,
        operations: Sequence[UpdateOperation],
    ) -> Result[TEntity]:
        actions = [operation_to_action(operation) for operation in operations]
        try:
            payload = await self._client.update(
                self.write_resource, entity.id, version=entity.version, actions=actions
            )
        except (CommerceAPIError, httpx.HTTPError) as exc:
            return _failure(exc)
        log.debug("Applied %s actions to %s %s", len(actions), self.write_resource, entity.id)
        return Ok(self._entity_from_write(payload))

    @abstractmethod
    def _draft_body(self, draft: TDraft) -> dict[str, Any]:
        """Wire body for creating ``draft``."""
        ...

    @abstractmethod
    def _entity_from_query(self, payload: dict[str, Any]) -> TEntity:
        """Entity from a query or get-by-key result."""
        ...

    def _entity_from_write(self, payload: dict[str, Any]) -> TEntity:
        return self._entity_from_query(payload)


class CommerceChannelService(CommerceService[ChannelDraft, Channel]):
    query_resource = "channels"
    write_resource = "channels"

    def _draft_body(self, draft: ChannelDraft) -> dict[str, Any]:
        return channel_draft_to_payload(draft).to_wire()

    def _entity_from_query(self, payload: dict[str, Any]) -> Channel:
        return channel_from_payload(ChannelPayload.model_validate(payload))


class CommerceProductService(CommerceService[ProductDraft, Product]):
    """Products are read as staged projections and written as product resources."""

    query_resource = "product-projections"
    write_resource = "products"
    query_params: ClassVar[dict[str, QueryParam]] = {
        "staged": "true",
        "expand": list(REFERENCE_EXPANSIONS),
    }

    def _draft_body(self, draft: ProductDraft) -> dict[str, Any]:
        return product_draft_to_payload(draft).to_wire()

    def _entity_from_query(self, payload: dict[str, Any]) -> Product:
        return product_from_projection(ProductProjectionPayload.model_validate(payload))

    def _entity_from_write(self, payload: dict[str, Any]) -> Product:
        return product_from_payload(ProductPayload.model_validate(payload))


__all__ = ["CommerceChannelService", "CommerceProductService", "CommerceService"]
