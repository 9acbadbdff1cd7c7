"""Operation groups and the filter that restricts a diff to some of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ActionGroup(StrEnum):
    NAME = "name"
    DESCRIPTION = "description"
    SLUG = "slug"
    SEARCH_KEYWORDS = "search_keywords"
    METADATA = "metadata"
    TAX_CATEGORY = "tax_category"
    STATE = "state"
    CATEGORIES = "categories"
    CATEGORY_ORDER_HINTS = "category_order_hints"
    VARIANTS = "variants"
    ATTRIBUTES = "attributes"
    IMAGES = "images"
    PRICES = "prices"
    ASSETS = "assets"
    SKU = "sku"
    ROLES = "roles"
    GEO_LOCATION = "geo_location"


@dataclass(frozen=True, slots=True)
class SyncFilter:
    """Include-list or exclude-list over :class:`ActionGroup`.

    The default (exclude nothing) lets every group through.
    """

    groups: frozenset[ActionGroup] = frozenset()
    include: bool = False

    @classmethod
    def only(cls, *groups: ActionGroup) -> SyncFilter:
        return cls(frozenset(groups), include=True)

    @classmethod
    def excluding(cls, *groups: ActionGroup) -> SyncFilter:
        return cls(frozenset(groups), include=False)

    def allows(self, group: ActionGroup) -> bool:
        return (group in self.groups) is self.include


__all__ = ["ActionGroup", "SyncFilter"]
