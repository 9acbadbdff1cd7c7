from __future__ import annotations

from catalogsync.domain.events import EventReporter, SyncEventKind
from catalogsync.domain.sync import DraftValidator
from catalogsync.domain.sync.validation import check_product_variants
from tests.support.catalog import (
    EventRecorder,
    make_channel_draft,
    make_product_draft,
    make_variant_draft,
)


def _validator(recorder: EventRecorder, **kwargs: object) -> DraftValidator[object]:
    return DraftValidator(reporter=EventReporter(handler=recorder), **kwargs)  # type: ignore[arg-type]


def test_valid_drafts_pass_in_order() -> None:
    recorder = EventRecorder()
    first = make_channel_draft("a")
    second = make_channel_draft("b")

    result = _validator(recorder, label="Channel").validate([first, second])

    assert result.drafts == (first, second)
    assert result.keys == frozenset({"a", "b"})
    assert recorder.events == []


def test_missing_and_keyless_drafts_are_dropped_with_one_error_each() -> None:
    recorder = EventRecorder()
    keyless = make_channel_draft(None, name={"en": "Nameless"})
    blank = make_channel_draft("   ")

    result = _validator(recorder, label="Channel").validate([None, keyless, blank])

    assert result.drafts == ()
    assert result.keys == frozenset()
    assert [event.kind for event in recorder.events] == [SyncEventKind.ERROR] * 3
    assert recorder.messages[0] == "Channel draft is missing."
    assert recorder.messages[1].startswith("Channel draft with name: {'en': 'Nameless'} doesn't")
    assert recorder.events[1].new_draft is keyless


def test_repeated_draft_object_is_kept_once() -> None:
    recorder = EventRecorder()
    draft = make_channel_draft("a")

    result = _validator(recorder).validate([draft, draft])

    assert result.drafts == (draft,)
    assert recorder.events == []


def test_distinct_drafts_sharing_a_key_are_kept_with_a_warning() -> None:
    recorder = EventRecorder()
    first = make_channel_draft("a")
    second = make_channel_draft("a", description={"en": "other"})

    result = _validator(recorder, label="Channel").validate([first, second])

    assert result.drafts == (first, second)
    assert result.keys == frozenset({"a"})
    assert [event.kind for event in recorder.events] == [SyncEventKind.WARNING]
    assert "share the key 'a'" in recorder.messages[0]


def test_kind_checks_drop_invalid_drafts() -> None:
    recorder = EventRecorder()
    duplicated = make_product_draft(
        "shirt",
        master=make_variant_draft("m"),
        variants=[make_variant_draft("m"), make_variant_draft("a")],
    )
    fine = make_product_draft("trousers")

    result = _validator(recorder, label="Product", checks=(check_product_variants,)).validate(
        [duplicated, fine]
    )

    assert result.drafts == (fine,)
    assert recorder.messages == [
        "Product draft with key: 'shirt' is invalid. "
        "Reason: The variant key 'm' is used by 2 variants."
    ]


def test_product_without_master_variant_is_invalid() -> None:
    draft = make_product_draft()
    without_master = type(draft)(
        key="shirt", product_type=draft.product_type, name=draft.name, slug=draft.slug
    )

    assert check_product_variants(without_master) == ["The master variant is missing."]
    assert check_product_variants(draft) == []
