"""Custom exception hierarchy for pyquotes."""

from __future__ import annotations


class QuoteError(Exception):
    """Base exception for all pyquotes errors."""


class QuoteConfigError(QuoteError):
    """Invalid or missing configuration."""


class QuoteValidationError(QuoteError):
    """A quote was rejected because its text or category is empty."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class QuoteStorageParseError(QuoteError):
    """A persisted blob could not be decoded.

    Never surfaced to callers: the persistence adapter catches it and
    falls back to an empty or default value.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class QuoteNetworkError(QuoteError):
    """HTTP-level failure (network, non-2xx, invalid JSON, unexpected shape)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class QuoteImportFormatError(QuoteError):
    """Imported data is not a JSON array of quote records.

    Raised only for a malformed top level.  Individual malformed items
    inside a valid array are skipped without an error.
    """
