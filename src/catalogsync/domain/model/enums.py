"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ResourceType(StrEnum):
    """Type id carried by resource identifiers."""

    CATEGORY = "category"
    CHANNEL = "channel"
    PRODUCT = "product"
    PRODUCT_TYPE = "product-type"
    STATE = "state"
    TAX_CATEGORY = "tax-category"


class ChannelRole(StrEnum):
    INVENTORY_SUPPLY = "InventorySupply"
    PRODUCT_DISTRIBUTION = "ProductDistribution"
    ORDER_EXPORT = "OrderExport"
    ORDER_IMPORT = "OrderImport"
    PRIMARY = "Primary"
