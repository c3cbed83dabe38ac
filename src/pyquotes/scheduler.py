"""Periodic and on-demand sync cycles.

A sync cycle is: fetch the remote snapshot, merge it into the store with
server precedence, persist, refresh categories and reapply the active
filter.  At most one cycle runs at a time; a trigger that arrives while a
cycle is in flight waits for that cycle and returns its outcome.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable

from pyquotes.exceptions import QuoteNetworkError
from pyquotes.models.sync import SyncOutcome, SyncState, SyncStatus
from pyquotes.remote import RemoteSyncClient
from pyquotes.state.categories import CategoryIndex
from pyquotes.state.store import QuoteStore
from pyquotes.storage.adapter import PersistenceAdapter

_logger = logging.getLogger(__name__)


class SyncScheduler:
    """Runs reconciliation on a fixed interval and on demand."""

    def __init__(
        self,
        store: QuoteStore,
        persistence: PersistenceAdapter,
        categories: CategoryIndex,
        remote: RemoteSyncClient,
        *,
        interval: float,
        on_status: Callable[[SyncOutcome], None] | None = None,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._categories = categories
        self._remote = remote
        self._interval = interval
        self._on_status = on_status
        self._state = SyncState.IDLE
        self._inflight: asyncio.Task[SyncOutcome] | None = None
        self._periodic: asyncio.Task[None] | None = None
        self.last_outcome: SyncOutcome | None = None

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the periodic task is active."""
        return self._periodic is not None and not self._periodic.done()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    async def sync_now(self) -> SyncOutcome:
        """Run a sync cycle, or join the one already in flight."""
        task = self._inflight
        if task is None or task.done():
            task = asyncio.get_running_loop().create_task(self._run_cycle())
            self._inflight = task
        else:
            _logger.debug("Sync already in flight; joining it")
        return await asyncio.shield(task)

    def start(self) -> None:
        """Start the periodic sync task on the running loop."""
        if self.is_running:
            return
        self._periodic = asyncio.get_running_loop().create_task(self._run_periodic())
        _logger.debug("Periodic sync started (interval=%.1fs)", self._interval)

    async def stop(self) -> None:
        """Cancel the periodic task, then let a cycle in flight run to completion.

        Callers joined to that cycle through :meth:`sync_now` still receive
        its outcome.
        """
        periodic = self._periodic
        self._periodic = None
        if periodic is not None and not periodic.done():
            periodic.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await periodic

        inflight = self._inflight
        if inflight is not None and not inflight.done():
            with contextlib.suppress(asyncio.CancelledError):
                await asyncio.shield(inflight)
        self._inflight = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_periodic(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.sync_now()
            except asyncio.CancelledError:
                raise
            except Exception:
                _logger.warning("Scheduled sync crashed", exc_info=True)

    async def _run_cycle(self) -> SyncOutcome:
        self._state = SyncState.SYNCING
        try:
            outcome = await self._sync_once()
        finally:
            self._state = SyncState.IDLE

        self.last_outcome = outcome
        if self._on_status is not None:
            try:
                self._on_status(outcome)
            except Exception:
                _logger.debug("on_status callback failed", exc_info=True)
        return outcome

    async def _sync_once(self) -> SyncOutcome:
        try:
            remote = await self._remote.fetch_remote()
        except QuoteNetworkError as exc:
            _logger.warning("Sync failed: %s", exc)
            return SyncOutcome(status=SyncStatus.FAILED, error=str(exc))

        result = self._store.merge(remote)

        self._persistence.save(self._store.all())
        self._store.mark_clean()
        active = self._categories.refresh(self._store.all())
        self._persistence.save_filter(active)

        if result.conflicts:
            _logger.info("Sync resolved %d conflict(s) with server data", len(result.conflicts))
            return SyncOutcome(status=SyncStatus.CONFLICTS, conflicts=result.conflicts, added=result.added)
        return SyncOutcome(status=SyncStatus.CLEAN, added=result.added)
