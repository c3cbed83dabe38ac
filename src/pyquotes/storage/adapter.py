"""Serialization of quotes, filter state and the last viewed quote.

Every read fails soft: missing or corrupt data yields an empty/default value
and a warning in the log, never an exception.  Writes that the backend
rejects are logged and absorbed as well.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from pyquotes._constants import FILTER_ALL, FILTER_KEY, LAST_QUOTE_KEY, QUOTES_KEY
from pyquotes.exceptions import QuoteStorageParseError
from pyquotes.models.quote import Quote, is_quote_record, quote_from_record, quotes_from_records
from pyquotes.storage.backends import BlobStore, MemoryBlobStore

_logger = logging.getLogger(__name__)


def _decode(key: str, blob: str) -> Any:
    try:
        return json.loads(blob)
    except json.JSONDecodeError as exc:
        raise QuoteStorageParseError(f"Stored value for {key} is not JSON: {blob[:64]}", key=key) from exc


class PersistenceAdapter:
    """Reads and writes quote state through two blob stores.

    Parameters
    ----------
    store
        Durable store for the collection and the active filter.
    session_store
        Short-lived store for the last viewed quote.  Defaults to a fresh
        in-memory store, i.e. one scoped to this process.
    """

    def __init__(self, store: BlobStore, session_store: BlobStore | None = None) -> None:
        self._store = store
        self._session_store: BlobStore = session_store if session_store is not None else MemoryBlobStore()

    # ------------------------------------------------------------------
    # Quote collection
    # ------------------------------------------------------------------

    def save(self, collection: Sequence[Quote]) -> None:
        payload = json.dumps([quote.to_record() for quote in collection], ensure_ascii=False)
        self._write(self._store, QUOTES_KEY, payload)

    def load_with_status(self) -> tuple[list[Quote], bool]:
        """Load the collection and report whether a valid stored array existed."""
        blob = self._store.get(QUOTES_KEY)
        if not blob:
            return [], False
        try:
            parsed = _decode(QUOTES_KEY, blob)
            if not isinstance(parsed, list):
                raise QuoteStorageParseError(f"Stored value for {QUOTES_KEY} is not an array", key=QUOTES_KEY)
        except QuoteStorageParseError as exc:
            _logger.warning("Ignoring stored quotes: %s", exc)
            return [], False

        quotes = quotes_from_records(parsed)
        dropped = len(parsed) - len(quotes)
        if dropped:
            _logger.debug("Dropped %d malformed stored quote record(s)", dropped)
        return quotes, True

    def load(self) -> list[Quote]:
        quotes, _ = self.load_with_status()
        return quotes

    # ------------------------------------------------------------------
    # Category filter
    # ------------------------------------------------------------------

    def save_filter(self, value: str) -> None:
        self._write(self._store, FILTER_KEY, value)

    def load_filter(self) -> str:
        value = self._store.get(FILTER_KEY)
        return value if value else FILTER_ALL

    # ------------------------------------------------------------------
    # Last viewed quote (session scoped)
    # ------------------------------------------------------------------

    def save_last_quote(self, quote: Quote) -> None:
        self._write(self._session_store, LAST_QUOTE_KEY, json.dumps(quote.to_record(), ensure_ascii=False))

    def load_last_quote(self) -> Quote | None:
        blob = self._session_store.get(LAST_QUOTE_KEY)
        if not blob:
            return None
        try:
            parsed = _decode(LAST_QUOTE_KEY, blob)
        except QuoteStorageParseError as exc:
            _logger.warning("Ignoring last viewed quote: %s", exc)
            return None
        if not is_quote_record(parsed):
            return None
        return quote_from_record(parsed)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write(store: BlobStore, key: str, value: str) -> None:
        try:
            store.set(key, value)
        except OSError:
            _logger.warning("Failed to persist %s", key, exc_info=True)
