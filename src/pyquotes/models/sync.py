"""Sync result models: conflicts, merge results and cycle outcomes."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyquotes.models.quote import Quote


class QuoteFields(BaseModel):
    """The mutable payload of a quote, as reported in a conflict."""

    model_config = ConfigDict(frozen=True)

    text: str
    category: str

    @classmethod
    def of(cls, quote: Quote) -> QuoteFields:
        return cls(text=quote.text, category=quote.category)


class ConflictRecord(BaseModel):
    """A remote record that disagreed with the local record sharing its id."""

    model_config = ConfigDict(frozen=True)

    id: int
    local: QuoteFields
    server: QuoteFields


class MergeResult(BaseModel):
    """Output of a reconciliation pass."""

    model_config = ConfigDict(frozen=True)

    merged: list[Quote] = Field(default_factory=list)
    conflicts: list[ConflictRecord] = Field(default_factory=list)
    added: int = 0
    """Number of remote-only records appended."""


class SyncState(StrEnum):
    IDLE = "idle"
    SYNCING = "syncing"


class SyncStatus(StrEnum):
    CLEAN = "clean"
    CONFLICTS = "conflicts"
    FAILED = "failed"


class StatusKind(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class StatusMessage(BaseModel):
    """A user-facing status line for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    kind: StatusKind
    text: str


class SyncOutcome(BaseModel):
    """Terminal state of one sync cycle."""

    model_config = ConfigDict(frozen=True)

    status: SyncStatus
    conflicts: list[ConflictRecord] = Field(default_factory=list)
    added: int = 0
    error: str | None = None

    @property
    def message(self) -> StatusMessage:
        """Render the outcome as a status message."""
        if self.status == SyncStatus.FAILED:
            return StatusMessage(kind=StatusKind.ERROR, text=f"Sync failed: {self.error or 'unknown error'}")
        if self.status == SyncStatus.CONFLICTS:
            count = len(self.conflicts)
            noun = "conflict" if count == 1 else "conflicts"
            return StatusMessage(
                kind=StatusKind.WARNING,
                text=f"Synced with server: {count} {noun} resolved using server data.",
            )
        if self.added:
            return StatusMessage(
                kind=StatusKind.SUCCESS,
                text=f"Synced with server: {self.added} new quote(s) added.",
            )
        return StatusMessage(kind=StatusKind.SUCCESS, text="Quotes synced with server.")
