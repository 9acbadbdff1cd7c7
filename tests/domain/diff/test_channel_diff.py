from __future__ import annotations

from catalogsync.domain.diff import ActionGroup, DiffContext, SyncFilter, build_channel_operations
from catalogsync.domain.model import ChannelRole, GeoLocation
from catalogsync.domain.operations import (
    AddChannelRole,
    ChangeChannelDescription,
    ChangeChannelName,
    RemoveChannelRole,
    SetChannelGeoLocation,
)
from tests.support.catalog import make_channel, make_channel_draft


def test_unchanged_channel_produces_no_operations() -> None:
    old = make_channel(roles=(ChannelRole.PRIMARY,))
    new = make_channel_draft(roles=(ChannelRole.PRIMARY,))

    assert build_channel_operations(old, new, DiffContext()) == []


def test_channel_operations() -> None:
    old = make_channel(
        roles=(ChannelRole.INVENTORY_SUPPLY, ChannelRole.PRODUCT_DISTRIBUTION),
    )
    berlin = GeoLocation(longitude=13.4, latitude=52.5)
    new = make_channel_draft(
        name={"en": "Berlin store"},
        description={"en": "Flagship"},
        roles=(ChannelRole.PRODUCT_DISTRIBUTION, ChannelRole.ORDER_EXPORT),
        geo_location=berlin,
    )

    assert build_channel_operations(old, new, DiffContext()) == [
        ChangeChannelName(name={"en": "Berlin store"}),
        ChangeChannelDescription(description={"en": "Flagship"}),
        RemoveChannelRole(role=ChannelRole.INVENTORY_SUPPLY),
        AddChannelRole(role=ChannelRole.ORDER_EXPORT),
        SetChannelGeoLocation(geo_location=berlin),
    ]


def test_role_order_does_not_matter() -> None:
    old = make_channel(roles=(ChannelRole.PRIMARY, ChannelRole.ORDER_IMPORT))
    new = make_channel_draft(roles=(ChannelRole.ORDER_IMPORT, ChannelRole.PRIMARY))

    assert build_channel_operations(old, new, DiffContext()) == []


def test_channel_filter_excludes_roles() -> None:
    old = make_channel()
    new = make_channel_draft(roles=(ChannelRole.PRIMARY,))
    context = DiffContext(sync_filter=SyncFilter.excluding(ActionGroup.ROLES))

    assert build_channel_operations(old, new, context) == []
