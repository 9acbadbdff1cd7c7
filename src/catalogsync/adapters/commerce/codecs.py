"""JSON codecs for drafts and entities, built on the wire schema.

The SQL target stores entities as JSON documents in this format, and draft files read
by the CLI use the draft payload format of the API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from .schema import ChannelDraftPayload, ChannelPayload, ProductDraftPayload, ProductProjectionPayload
from .translator import (
    channel_draft_from_payload,
    channel_from_payload,
    channel_to_payload,
    product_draft_from_payload,
    product_from_projection,
    product_to_projection_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogsync.domain.model import Channel, ChannelDraft, Product, ProductDraft


@dataclass(frozen=True, slots=True, kw_only=True)
class KindCodec[TDraft, TEntity]:
    kind: str
    encode_entity: Callable[[TEntity], dict[str, Any]]
    decode_entity: Callable[[dict[str, Any]], TEntity]
    decode_drafts: Callable[[object], list[TDraft | None]]


def _draft_items(data: object) -> list[dict[str, Any] | None]:
    if not isinstance(data, list):
        raise ValueError(f"Draft file must hold a JSON list, got {type(data).__name__}")
    return cast(list[dict[str, Any] | None], data)


def _decode_channel_drafts(data: object) -> list[ChannelDraft | None]:
    return [
        channel_draft_from_payload(ChannelDraftPayload.model_validate(item))
        if item is not None
        else None
        for item in _draft_items(data)
    ]


def _decode_product_drafts(data: object) -> list[ProductDraft | None]:
    return [
        product_draft_from_payload(ProductDraftPayload.model_validate(item))
        if item is not None
        else None
        for item in _draft_items(data)
    ]


def _encode_channel(channel: Channel) -> dict[str, Any]:
    return channel_to_payload(channel).to_wire()


def _decode_channel(data: dict[str, Any]) -> Channel:
    return channel_from_payload(ChannelPayload.model_validate(data))


def _encode_product(product: Product) -> dict[str, Any]:
    return product_to_projection_payload(product).to_wire()


def _decode_product(data: dict[str, Any]) -> Product:
    return product_from_projection(ProductProjectionPayload.model_validate(data))


CHANNEL_CODEC: KindCodec[ChannelDraft, Channel] = KindCodec(
    kind="channel",
    encode_entity=_encode_channel,
    decode_entity=_decode_channel,
    decode_drafts=_decode_channel_drafts,
)

PRODUCT_CODEC: KindCodec[ProductDraft, Product] = KindCodec(
    kind="product",
    encode_entity=_encode_product,
    decode_entity=_decode_product,
    decode_drafts=_decode_product_drafts,
)

CODECS = {"channels": CHANNEL_CODEC, "products": PRODUCT_CODEC}


__all__ = ["CHANNEL_CODEC", "CODECS", "PRODUCT_CODEC", "KindCodec"]
