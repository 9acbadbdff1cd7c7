"""Commerce API adapter (HTTP target)."""

from __future__ import annotations

from .client import CommerceAPIError, CommerceClient
from .codecs import CHANNEL_CODEC, CODECS, PRODUCT_CODEC, KindCodec
from .services import CommerceChannelService, CommerceProductService, CommerceService

__all__ = [
    "CHANNEL_CODEC",
    "CODECS",
    "PRODUCT_CODEC",
    "CommerceAPIError",
    "CommerceChannelService",
    "CommerceClient",
    "CommerceProductService",
    "CommerceService",
    "KindCodec",
]
