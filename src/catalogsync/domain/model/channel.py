"""Channel drafts and entities (flat kind, no child lists)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalogsync.domain.model.enums import ChannelRole
    from catalogsync.domain.model.primitives import GeoLocation, LocalizedString


@dataclass(frozen=True, slots=True, kw_only=True)
class ChannelDraft:
    key: str | None
    name: LocalizedString | None = None
    description: LocalizedString | None = None
    roles: tuple[ChannelRole, ...] = ()
    geo_location: GeoLocation | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Channel:
    id: str
    version: int
    key: str | None
    name: LocalizedString | None = None
    description: LocalizedString | None = None
    roles: tuple[ChannelRole, ...] = ()
    geo_location: GeoLocation | None = None
