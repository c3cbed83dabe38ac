"""High-level async client for the quote generator."""

from __future__ import annotations

import asyncio
import json
import logging
import random
from collections.abc import Callable, Coroutine
from typing import Any

import aiohttp

from pyquotes._constants import DEFAULT_QUOTES
from pyquotes._transport import HttpTransport, Transport
from pyquotes.config import QuoteConfig
from pyquotes.exceptions import QuoteError, QuoteImportFormatError
from pyquotes.models.quote import Quote, quotes_from_records
from pyquotes.models.sync import SyncOutcome
from pyquotes.remote import RemoteSyncClient
from pyquotes.scheduler import SyncScheduler
from pyquotes.state.categories import CategoryIndex, resolve_filter
from pyquotes.state.store import QuoteStore
from pyquotes.storage.adapter import PersistenceAdapter
from pyquotes.storage.backends import BlobStore, JsonFileBlobStore, MemoryBlobStore

_logger = logging.getLogger(__name__)


def _default_collection() -> list[Quote]:
    return [Quote(text=text, category=category) for text, category in DEFAULT_QUOTES]


class QuoteClient:
    """Async facade used by the presentation layer.

    Usage::

        async with QuoteClient(config) as client:
            quote = client.show_random_quote()
            outcome = await client.sync_now()
    """

    def __init__(
        self,
        config: QuoteConfig | None = None,
        *,
        blob_store: BlobStore | None = None,
        session_store: BlobStore | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_status: Callable[[SyncOutcome], None] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or QuoteConfig()
        if blob_store is None:
            if self._config.storage_path:
                blob_store = JsonFileBlobStore(self._config.storage_path)
            else:
                blob_store = MemoryBlobStore()
        self._persistence = PersistenceAdapter(blob_store, session_store)
        self._store = QuoteStore()
        self._categories = CategoryIndex()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._remote: RemoteSyncClient | None = None
        self._scheduler: SyncScheduler | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._background: set[asyncio.Task[Any]] = set()
        self._on_status = on_status
        self._rng = rng
        self._hydrated = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> QuoteClient:
        self._loop = asyncio.get_running_loop()
        self.hydrate()
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._remote = RemoteSyncClient(self._config, self._transport)
        self._scheduler = SyncScheduler(
            self._store,
            self._persistence,
            self._categories,
            self._remote,
            interval=self._config.sync_interval,
            on_status=self._on_status,
        )
        if self._config.auto_sync:
            self._scheduler.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._scheduler is not None:
            await self._scheduler.stop()
            self._scheduler = None
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None
        self._remote = None
        self._loop = None

    def hydrate(self) -> None:
        """Load persisted state into memory.  Runs once per client."""
        if self._hydrated:
            return
        quotes, found = self._persistence.load_with_status()
        if not found and self._config.seed_defaults:
            quotes = _default_collection()
            self._persistence.save(quotes)
        self._store = QuoteStore(quotes)
        self._categories = CategoryIndex(self._persistence.load_filter())
        self._categories.refresh(self._store.all())
        self._hydrated = True
        _logger.debug("Hydrated %d quote(s), filter=%s", len(self._store), self._categories.active)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> QuoteStore:
        self.hydrate()
        return self._store

    @property
    def active_filter(self) -> str:
        self.hydrate()
        return self._categories.active

    @property
    def scheduler(self) -> SyncScheduler | None:
        return self._scheduler

    def quotes(self) -> list[Quote]:
        self.hydrate()
        return self._store.all()

    def categories(self) -> list[str]:
        """Filter options, ``"all"`` first."""
        self.hydrate()
        return self._categories.options()

    def last_viewed_quote(self) -> Quote | None:
        return self._persistence.load_last_quote()

    # ------------------------------------------------------------------
    # Presentation operations
    # ------------------------------------------------------------------

    def show_random_quote(self, category: str | None = None) -> Quote | None:
        """Pick a random quote and remember it.

        Uses the active filter unless *category* is given; an explicit
        category is a one-off pick and does not change the stored filter.
        """
        self.hydrate()
        if category is None:
            chosen = self._categories.active
        else:
            chosen = resolve_filter(category, self._categories.available)
        quote = self._store.random_quote(chosen, self._rng)
        if quote is not None:
            self._persistence.save_last_quote(quote)
        return quote

    def add_quote(self, text: str, category: str) -> Quote:
        """Add a local quote.

        Raises :class:`QuoteValidationError` for empty fields.  Uploading to
        the remote endpoint happens in the background and never affects the
        result of this call.
        """
        self.hydrate()
        quote = self._store.add(text, category)
        self._persist()
        self._persistence.save_last_quote(quote)
        if self._config.post_new_quotes and self._remote is not None:
            self._spawn(self._remote.post_local, quote)
        return quote

    def filter_quotes(self, category: str) -> list[Quote]:
        """Select and persist the active filter; return the matching quotes."""
        self.hydrate()
        active = self._categories.select(category)
        self._persistence.save_filter(active)
        return self._store.filtered(active)

    def export_collection(self) -> str:
        """Serialize the collection as a pretty-printed JSON array."""
        self.hydrate()
        return json.dumps([quote.to_record() for quote in self._store.all()], indent=2, ensure_ascii=False)

    def import_collection(self, blob: str | bytes) -> int:
        """Append the well-formed quotes of a JSON array; return how many were added.

        Raises :class:`QuoteImportFormatError` when *blob* is not JSON or its
        top level is not an array.  Malformed items are skipped silently.
        """
        try:
            parsed = json.loads(blob)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise QuoteImportFormatError(f"Import is not valid JSON: {exc}") from exc
        if not isinstance(parsed, list):
            raise QuoteImportFormatError("Invalid JSON format. Expected an array of quotes.")

        self.hydrate()
        imported = self._store.extend(quotes_from_records(parsed))
        self._persist()
        _logger.debug("Imported %d of %d item(s)", imported, len(parsed))
        return imported

    async def sync_now(self) -> SyncOutcome:
        """Run (or join) a sync cycle against the remote endpoint."""
        return await self._require_scheduler().sync_now()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_scheduler(self) -> SyncScheduler:
        if self._scheduler is None:
            raise QuoteError("Client not initialized. Use 'async with QuoteClient(...) as client:'")
        return self._scheduler

    def _persist(self) -> None:
        self._persistence.save(self._store.all())
        self._store.mark_clean()
        self._categories.refresh(self._store.all())

    def _spawn(self, fn: Callable[[Quote], Coroutine[Any, Any, None]], quote: Quote) -> None:
        """Fire-and-forget *fn(quote)* on the client loop."""
        loop = self._loop
        if loop is None:
            _logger.debug("No running loop; skipping background upload")
            return
        task = loop.create_task(fn(quote))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
