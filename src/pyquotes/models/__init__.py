"""Data models for quotes and sync results."""

from pyquotes.models.quote import Quote, coerce_quote_id, is_quote_record, quote_from_record, quotes_from_records
from pyquotes.models.remote import RemotePost
from pyquotes.models.sync import (
    ConflictRecord,
    MergeResult,
    QuoteFields,
    StatusKind,
    StatusMessage,
    SyncOutcome,
    SyncState,
    SyncStatus,
)

__all__ = [
    "ConflictRecord",
    "MergeResult",
    "Quote",
    "QuoteFields",
    "RemotePost",
    "StatusKind",
    "StatusMessage",
    "SyncOutcome",
    "SyncState",
    "SyncStatus",
    "coerce_quote_id",
    "is_quote_record",
    "quote_from_record",
    "quotes_from_records",
]
