"""Diff rules for products.

Operations come out in a fixed order: product fields, category membership and order
hints, the variant list, and finally the publish state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.diff.common import build_update_operation, collect, symmetric_difference
from catalogsync.domain.diff.filters import ActionGroup
from catalogsync.domain.diff.variants import build_variant_operations
from catalogsync.domain.operations import (
    AddToCategory,
    ChangeName,
    ChangeSlug,
    Publish,
    RemoveFromCategory,
    SetCategoryOrderHint,
    SetDescription,
    SetMetaDescription,
    SetMetaKeywords,
    SetMetaTitle,
    SetSearchKeywords,
    SetTaxCategory,
    TransitionState,
    Unpublish,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogsync.domain.diff.context import DiffContext
    from catalogsync.domain.model import Product, ProductDraft
    from catalogsync.domain.operations import UpdateOperation

type FieldRule = Callable[[Product, ProductDraft], list[UpdateOperation]]


def build_product_operations(
    old: Product,
    new: ProductDraft,
    context: DiffContext,
) -> list[UpdateOperation]:
    allows = context.sync_filter.allows
    operations: list[UpdateOperation] = []
    for group, rule in FIELD_RULES:
        if allows(group):
            operations += rule(old, new)
    if allows(ActionGroup.VARIANTS):
        operations += build_variant_operations(old, new, context)

    publish = build_publish_operation(old, new, has_other_operations=bool(operations))
    if publish is not None:
        operations.append(publish)
    return operations


def build_name_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    return collect(build_update_operation(old.name, new.name, lambda: ChangeName(name=new.name)))


def build_description_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    return collect(
        build_update_operation(
            old.description,
            new.description,
            lambda: SetDescription(description=new.description),
        )
    )


def build_slug_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    return collect(build_update_operation(old.slug, new.slug, lambda: ChangeSlug(slug=new.slug)))


def build_search_keywords_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    return collect(
        build_update_operation(
            old.search_keywords,
            new.search_keywords,
            lambda: SetSearchKeywords(search_keywords=new.search_keywords),
        )
    )


def build_metadata_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    return collect(
        build_update_operation(
            old.meta_title, new.meta_title, lambda: SetMetaTitle(meta_title=new.meta_title)
        ),
        build_update_operation(
            old.meta_description,
            new.meta_description,
            lambda: SetMetaDescription(meta_description=new.meta_description),
        ),
        build_update_operation(
            old.meta_keywords,
            new.meta_keywords,
            lambda: SetMetaKeywords(meta_keywords=new.meta_keywords),
        ),
    )


def build_tax_category_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    if old.tax_category is not None and new.tax_category is not None:
        if old.tax_category.same_resource(new.tax_category):
            return []
    elif old.tax_category is None and new.tax_category is None:
        return []
    return [SetTaxCategory(tax_category=new.tax_category)]


def build_state_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    """Transition only towards a set state; a draft without state leaves it alone."""
    if new.state is None:
        return []
    if old.state is not None and old.state.same_resource(new.state):
        return []
    return [TransitionState(state=new.state)]


def build_category_operations(old: Product, new: ProductDraft) -> list[UpdateOperation]:
    removed, added = symmetric_difference(
        old.categories, new.categories, same=lambda a, b: a.same_resource(b)
    )
    return [
        *(RemoveFromCategory(category=category) for category in removed),
        *(AddToCategory(category=category) for category in added),
    ]


def build_category_order_hint_operations(
    old: Product,
    new: ProductDraft,
) -> list[UpdateOperation]:
    old_hints = dict(old.category_order_hints or {})
    new_hints = dict(new.category_order_hints or {})
    if old_hints == new_hints:
        return []

    new_category_ids = {category.id for category in new.categories if category.id is not None}
    operations: list[UpdateOperation] = [
        SetCategoryOrderHint(category_id=category_id, order_hint=None)
        for category_id in old_hints
        if category_id not in new_hints and category_id in new_category_ids
    ]
    operations += [
        SetCategoryOrderHint(category_id=category_id, order_hint=hint)
        for category_id, hint in new_hints.items()
        if old_hints.get(category_id) != hint
    ]
    return operations


def build_publish_operation(
    old: Product,
    new: ProductDraft,
    *,
    has_other_operations: bool,
) -> UpdateOperation | None:
    """Decide between ``publish``, ``unpublish`` and nothing.

    A published product is republished only when something is staged: either by this
    diff or already on the target.
    """
    if not new.publish:
        return Unpublish() if old.published else None
    if not old.published:
        return Publish()
    if has_other_operations or old.has_staged_changes:
        return Publish()
    return None


FIELD_RULES: tuple[tuple[ActionGroup, FieldRule], ...] = (
    (ActionGroup.NAME, build_name_operations),
    (ActionGroup.DESCRIPTION, build_description_operations),
    (ActionGroup.SLUG, build_slug_operations),
    (ActionGroup.SEARCH_KEYWORDS, build_search_keywords_operations),
    (ActionGroup.METADATA, build_metadata_operations),
    (ActionGroup.TAX_CATEGORY, build_tax_category_operations),
    (ActionGroup.STATE, build_state_operations),
    (ActionGroup.CATEGORIES, build_category_operations),
    (ActionGroup.CATEGORY_ORDER_HINTS, build_category_order_hint_operations),
)


__all__ = [
    "FIELD_RULES",
    "build_category_operations",
    "build_category_order_hint_operations",
    "build_product_operations",
    "build_publish_operation",
    "build_state_operations",
    "build_tax_category_operations",
]
