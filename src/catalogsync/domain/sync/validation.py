"""Batch-level draft validation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalogsync.domain.model import Draft, is_blank

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from catalogsync.domain.events import EventReporter
    from catalogsync.domain.model import ProductDraft

MISSING_DRAFT = "{label} draft is missing."
BLANK_DRAFT_KEY = (
    "{label} draft with name: {name} doesn't have a key. "
    "Please make sure all {label} drafts have keys."
)
DUPLICATE_DRAFT_KEY = "{count} {label} drafts in the same batch share the key '{key}'."
INVALID_DRAFT = "{label} draft with key: '{key}' is invalid. Reason: {reason}"

type DraftCheck[TDraft] = Callable[[TDraft], Sequence[str]]
"""Kind-specific rule; returns the reasons a draft is invalid (empty when valid)."""


@dataclass(frozen=True, slots=True)
class ValidationResult[TDraft]:
    drafts: tuple[TDraft, ...]
    keys: frozenset[str]


@dataclass(slots=True)
class DraftValidator[TDraft: Draft]:
    """Drop drafts that cannot be synced and collect the keys of the rest.

    Never raises; every dropped draft produces one error event. Drafts are kept in input
    order and each draft object appears once, even if the batch repeats it.
    """

    reporter: EventReporter
    label: str = "Resource"
    checks: Sequence[DraftCheck[TDraft]] = ()

    def validate(self, drafts: Iterable[TDraft | None]) -> ValidationResult[TDraft]:
        valid: list[TDraft] = []
        seen: set[int] = set()
        for draft in drafts:
            if draft is None:
                self.reporter.error(MISSING_DRAFT.format(label=self.label))
                continue
            if not self._is_valid(draft):
                continue
            if id(draft) in seen:
                continue
            seen.add(id(draft))
            valid.append(draft)

        key_counts = Counter(draft.key for draft in valid)
        for key, count in key_counts.items():
            if count > 1:
                self.reporter.warning(
                    DUPLICATE_DRAFT_KEY.format(count=count, label=self.label.lower(), key=key)
                )
        return ValidationResult(
            drafts=tuple(valid),
            keys=frozenset(key for key in key_counts if key is not None),
        )

    def _is_valid(self, draft: TDraft) -> bool:
        if is_blank(draft.key):
            self.reporter.error(
                BLANK_DRAFT_KEY.format(
                    label=self.label,
                    name=getattr(draft, "name", None),
                ),
                new_draft=draft,
            )
            return False
        reasons = [reason for check in self.checks for reason in check(draft)]
        for reason in reasons:
            self.reporter.error(
                INVALID_DRAFT.format(label=self.label, key=draft.key, reason=reason),
                new_draft=draft,
            )
        return not reasons


def check_product_variants(draft: ProductDraft) -> list[str]:
    """Master variant present and no non-blank variant key used twice.

    Blank variant keys are reported later, by the variant diff.
    """
    if draft.master_variant is None:
        return ["The master variant is missing."]
    variant_keys = [
        variant.key
        for variant in (draft.master_variant, *draft.variants)
        if variant is not None and not is_blank(variant.key)
    ]
    return [
        f"The variant key '{key}' is used by {count} variants."
        for key, count in Counter(variant_keys).items()
        if count > 1
    ]


__all__ = [
    "BLANK_DRAFT_KEY",
    "DUPLICATE_DRAFT_KEY",
    "INVALID_DRAFT",
    "MISSING_DRAFT",
    "DraftCheck",
    "DraftValidator",
    "ValidationResult",
    "check_product_variants",
]
