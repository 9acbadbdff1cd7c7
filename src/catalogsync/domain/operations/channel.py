"""Update operations for channels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalogsync.domain.operations.base import UpdateOperation

if TYPE_CHECKING:
    from catalogsync.domain.model import ChannelRole, GeoLocation, LocalizedString


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeChannelName(UpdateOperation):
    ACTION = "changeName"

    name: LocalizedString | None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeChannelDescription(UpdateOperation):
    ACTION = "changeDescription"

    description: LocalizedString | None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddChannelRole(UpdateOperation):
    ACTION = "addRoles"

    role: ChannelRole


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveChannelRole(UpdateOperation):
    ACTION = "removeRoles"

    role: ChannelRole


@dataclass(frozen=True, slots=True, kw_only=True)
class SetChannelGeoLocation(UpdateOperation):
    ACTION = "setGeoLocation"

    geo_location: GeoLocation | None


__all__ = [
    "AddChannelRole",
    "ChangeChannelDescription",
    "ChangeChannelName",
    "RemoveChannelRole",
    "SetChannelGeoLocation",
]
