from __future__ import annotations

from catalogsync.domain.diff import ActionGroup, SyncFilter
from catalogsync.domain.diff.common import build_update_operation, collect, symmetric_difference
from catalogsync.domain.operations import Publish


def test_symmetric_difference_keeps_order_and_drops_repeats() -> None:
    only_old, only_new = symmetric_difference(
        ["a", "b", "b", "c"], ["c", "d", "e", "d"], same=lambda x, y: x == y
    )

    assert only_old == ["a", "b"]
    assert only_new == ["d", "e"]


def test_symmetric_difference_uses_custom_equality() -> None:
    only_old, only_new = symmetric_difference(
        ["Red", "green"], ["RED", "blue"], same=lambda x, y: x.lower() == y.lower()
    )

    assert only_old == ["green"]
    assert only_new == ["blue"]


def test_build_update_operation_only_on_change() -> None:
    assert build_update_operation("a", "a", Publish) is None
    assert build_update_operation("a", "b", Publish) == Publish()
    assert build_update_operation(None, {}, Publish) == Publish()
    assert collect(None, Publish(), None) == [Publish()]


def test_default_filter_allows_everything() -> None:
    assert all(SyncFilter().allows(group) for group in ActionGroup)


def test_include_and_exclude_filters() -> None:
    only_prices = SyncFilter.only(ActionGroup.PRICES)
    no_prices = SyncFilter.excluding(ActionGroup.PRICES)

    assert only_prices.allows(ActionGroup.PRICES)
    assert not only_prices.allows(ActionGroup.IMAGES)
    assert not no_prices.allows(ActionGroup.PRICES)
    assert no_prices.allows(ActionGroup.IMAGES)
