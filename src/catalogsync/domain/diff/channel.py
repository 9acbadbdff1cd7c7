"""Diff rules for channels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.diff.common import build_update_operation, collect, symmetric_difference
from catalogsync.domain.diff.filters import ActionGroup
from catalogsync.domain.operations import (
    AddChannelRole,
    ChangeChannelDescription,
    ChangeChannelName,
    RemoveChannelRole,
    SetChannelGeoLocation,
)

if TYPE_CHECKING:
    from catalogsync.domain.diff.context import DiffContext
    from catalogsync.domain.model import Channel, ChannelDraft
    from catalogsync.domain.operations import UpdateOperation


def build_channel_operations(
    old: Channel,
    new: ChannelDraft,
    context: DiffContext,
) -> list[UpdateOperation]:
    allows = context.sync_filter.allows
    operations: list[UpdateOperation] = []
    if allows(ActionGroup.NAME):
        operations += collect(
            build_update_operation(
                old.name, new.name, lambda: ChangeChannelName(name=new.name)
            )
        )
    if allows(ActionGroup.DESCRIPTION):
        operations += collect(
            build_update_operation(
                old.description,
                new.description,
                lambda: ChangeChannelDescription(description=new.description),
            )
        )
    if allows(ActionGroup.ROLES):
        operations += build_role_operations(old, new)
    if allows(ActionGroup.GEO_LOCATION):
        operations += collect(
            build_update_operation(
                old.geo_location,
                new.geo_location,
                lambda: SetChannelGeoLocation(geo_location=new.geo_location),
            )
        )
    return operations


def build_role_operations(old: Channel, new: ChannelDraft) -> list[UpdateOperation]:
    removed, added = symmetric_difference(old.roles, new.roles, same=lambda a, b: a == b)
    return [
        *(RemoveChannelRole(role=role) for role in removed),
        *(AddChannelRole(role=role) for role in added),
    ]


__all__ = ["build_channel_operations", "build_role_operations"]
