from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyquotes.models import (
    ConflictRecord,
    Quote,
    QuoteFields,
    RemotePost,
    StatusKind,
    SyncOutcome,
    SyncStatus,
    quotes_from_records,
)


def test_quote_is_frozen() -> None:
    quote = Quote(text="a", category="b")

    with pytest.raises(ValidationError):
        quote.text = "changed"  # type: ignore[misc]


def test_quote_rejects_non_string_text() -> None:
    with pytest.raises(ValidationError):
        Quote(text=123, category="b")  # type: ignore[arg-type]


@pytest.mark.parametrize("fields", [{"text": "", "category": "b"}, {"text": "a", "category": ""}])
def test_quote_rejects_empty_fields(fields: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        Quote(**fields)


def test_to_record_omits_only_missing_id() -> None:
    assert Quote(text="a", category="b").to_record() == {"text": "a", "category": "b"}
    assert Quote(id=0, text="a", category="b").to_record() == {"id": 0, "text": "a", "category": "b"}


def test_quotes_from_records_drops_bad_items() -> None:
    items = [{"text": "Q", "category": "C"}, {"text": 123, "category": "C"}, None, {"id": "5", "text": "R", "category": "D"}]

    assert quotes_from_records(items) == [Quote(text="Q", category="C"), Quote(id=5, text="R", category="D")]


def test_remote_post_keeps_raw_payload() -> None:
    payload = {"userId": 4, "id": 31, "title": "ullam ut quidem", "body": "res", "extra": True}

    post = RemotePost.model_validate(payload)

    assert post.user_id == 4
    assert post.raw == payload
    assert post.to_quote() == Quote(id=31, text="ullam ut quidem", category="Server")


@pytest.mark.parametrize(
    ("outcome", "kind", "fragment"),
    [
        (SyncOutcome(status=SyncStatus.CLEAN), StatusKind.SUCCESS, "synced"),
        (SyncOutcome(status=SyncStatus.CLEAN, added=3), StatusKind.SUCCESS, "3 new"),
        (
            SyncOutcome(
                status=SyncStatus.CONFLICTS,
                conflicts=[
                    ConflictRecord(id=1, local=QuoteFields(text="a", category="X"), server=QuoteFields(text="b", category="X")),
                    ConflictRecord(id=2, local=QuoteFields(text="c", category="X"), server=QuoteFields(text="d", category="X")),
                ],
            ),
            StatusKind.WARNING,
            "2 conflicts",
        ),
        (SyncOutcome(status=SyncStatus.FAILED, error="HTTP 500"), StatusKind.ERROR, "HTTP 500"),
    ],
)
def test_outcome_messages(outcome: SyncOutcome, kind: StatusKind, fragment: str) -> None:
    message = outcome.message

    assert message.kind == kind
    assert fragment in message.text
