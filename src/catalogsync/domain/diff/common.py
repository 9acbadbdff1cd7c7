"""Building blocks shared by the per-kind diff functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from catalogsync.domain.operations import UpdateOperation


def build_update_operation[T](
    old: T | None,
    new: T | None,
    factory: Callable[[], UpdateOperation],
) -> UpdateOperation | None:
    """Return ``factory()`` when the values differ, else ``None``."""
    if old == new:
        return None
    return factory()


def collect(*operations: UpdateOperation | None) -> list[UpdateOperation]:
    return [operation for operation in operations if operation is not None]


def symmetric_difference[T](
    old: Iterable[T],
    new: Iterable[T],
    *,
    same: Callable[[T, T], bool],
) -> tuple[list[T], list[T]]:
    """Split two collections into (only in old, only in new).

    Membership uses ``same`` instead of ``==``; both outputs keep input order and carry
    no element twice.
    """
    old_items = list(old)
    new_items = list(new)

    def _unique_absent(items: list[T], others: list[T]) -> list[T]:
        result: list[T] = []
        for item in items:
            if any(same(item, other) for other in others):
                continue
            if any(same(item, seen) for seen in result):
                continue
            result.append(item)
        return result

    return _unique_absent(old_items, new_items), _unique_absent(new_items, old_items)


__all__ = ["build_update_operation", "collect", "symmetric_difference"]
