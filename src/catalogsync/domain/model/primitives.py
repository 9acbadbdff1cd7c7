"""Domain primitives: scalar aliases + small value objects shared by all entity kinds."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from catalogsync.domain.model.enums import ResourceType

type Locale = str
type LocalizedString = Mapping[Locale, str]
type CountryCode = str
type CurrencyCode = str


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceIdentifier:
    """Reference to another resource, by id, by key, or both."""

    type_id: ResourceType
    id: str | None = None
    key: str | None = None

    def same_resource(self, other: ResourceIdentifier) -> bool:
        """Ids win when both sides carry one; otherwise fall back to keys."""
        if self.id is not None and other.id is not None:
            return self.id == other.id
        if self.key is not None and other.key is not None:
            return self.key == other.key
        return False


def same_optional_resource(
    left: ResourceIdentifier | None,
    right: ResourceIdentifier | None,
) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return left.same_resource(right)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class Money:
    currency_code: CurrencyCode
    cent_amount: int


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """A geographic point; coordinates follow GeoJSON order (longitude first)."""

    longitude: float
    latitude: float


@dataclass(frozen=True, slots=True)
class ImageDimensions:
    width: int
    height: int


@dataclass(frozen=True, slots=True, kw_only=True)
class Image:
    url: str
    label: str | None = None
    dimensions: ImageDimensions | None = None
