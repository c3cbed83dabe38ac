from __future__ import annotations

import asyncio
import json

import pytest

from pyquotes._constants import FILTER_KEY, QUOTES_KEY
from pyquotes.config import QuoteConfig
from pyquotes.models.quote import Quote
from pyquotes.models.sync import StatusKind, SyncOutcome, SyncState, SyncStatus
from pyquotes.remote import RemoteSyncClient
from pyquotes.scheduler import SyncScheduler
from pyquotes.state.categories import CategoryIndex
from pyquotes.state.store import QuoteStore
from pyquotes.storage.adapter import PersistenceAdapter
from pyquotes.storage.backends import MemoryBlobStore

from conftest import FakeQuoteBackend


def _make_scheduler(
    backend: FakeQuoteBackend,
    quotes: list[Quote],
    *,
    active: str = "all",
    interval: float = 30.0,
    on_status=None,
) -> tuple[SyncScheduler, QuoteStore, CategoryIndex, MemoryBlobStore]:
    blobs = MemoryBlobStore()
    store = QuoteStore(quotes)
    index = CategoryIndex(active=active)
    index.refresh(store.all())
    scheduler = SyncScheduler(
        store,
        PersistenceAdapter(blobs),
        index,
        RemoteSyncClient(QuoteConfig(), backend),
        interval=interval,
        on_status=on_status,
    )
    return scheduler, store, index, blobs


@pytest.mark.asyncio
async def test_clean_sync_appends_and_persists(backend: FakeQuoteBackend) -> None:
    scheduler, store, index, blobs = _make_scheduler(backend, [Quote(text="mine", category="Books")])

    outcome = await scheduler.sync_now()

    assert outcome.status == SyncStatus.CLEAN
    assert outcome.added == 2
    assert outcome.message.kind == StatusKind.SUCCESS
    assert [q.id for q in store.all()] == [None, 1, 2]
    assert len(json.loads(blobs.get(QUOTES_KEY) or "[]")) == 3
    assert index.options() == ["all", "Books", "Server"]
    assert not store.dirty
    assert scheduler.state == SyncState.IDLE


@pytest.mark.asyncio
async def test_sync_with_conflicts_reports_count(backend: FakeQuoteBackend) -> None:
    scheduler, store, _index, _blobs = _make_scheduler(backend, [Quote(id=1, text="edited locally", category="Server")])

    outcome = await scheduler.sync_now()

    assert outcome.status == SyncStatus.CONFLICTS
    assert len(outcome.conflicts) == 1
    assert outcome.conflicts[0].local.text == "edited locally"
    assert outcome.conflicts[0].server.text == "sunt aut facere"
    assert outcome.message.kind == StatusKind.WARNING
    assert "1 conflict" in outcome.message.text
    assert store.find_by_id(1) == Quote(id=1, text="sunt aut facere", category="Server")


@pytest.mark.asyncio
async def test_second_sync_of_same_snapshot_is_clean(backend: FakeQuoteBackend) -> None:
    scheduler, store, _index, _blobs = _make_scheduler(backend, [Quote(id=2, text="stale", category="Server")])

    first = await scheduler.sync_now()
    snapshot = store.all()
    second = await scheduler.sync_now()

    assert first.status == SyncStatus.CONFLICTS
    assert second.status == SyncStatus.CLEAN
    assert second.added == 0
    assert store.all() == snapshot


@pytest.mark.asyncio
async def test_failed_sync_leaves_state_untouched(backend: FakeQuoteBackend) -> None:
    backend.fail_get = True
    original = [Quote(id=1, text="local", category="Books")]
    scheduler, store, _index, blobs = _make_scheduler(backend, original)

    outcome = await scheduler.sync_now()

    assert outcome.status == SyncStatus.FAILED
    assert outcome.error is not None and "connection refused" in outcome.error
    assert outcome.message.kind == StatusKind.ERROR
    assert store.all() == original
    assert blobs.get(QUOTES_KEY) is None
    assert scheduler.state == SyncState.IDLE


@pytest.mark.asyncio
async def test_sync_reapplies_and_persists_active_filter(backend: FakeQuoteBackend) -> None:
    # The only "Books" quote is overwritten by the server record, so the filter falls back.
    scheduler, _store, index, blobs = _make_scheduler(backend, [Quote(id=1, text="x", category="Books")], active="Books")
    assert index.active == "Books"

    await scheduler.sync_now()

    assert index.active == "all"
    assert blobs.get(FILTER_KEY) == "all"


@pytest.mark.asyncio
async def test_overlapping_triggers_share_one_cycle(backend: FakeQuoteBackend) -> None:
    backend.gate = asyncio.Event()
    scheduler, store, _index, _blobs = _make_scheduler(backend, [])

    first = asyncio.create_task(scheduler.sync_now())
    second = asyncio.create_task(scheduler.sync_now())
    for _ in range(5):
        await asyncio.sleep(0)
    assert scheduler.state == SyncState.SYNCING

    backend.gate.set()
    outcome_1, outcome_2 = await asyncio.gather(first, second)

    assert backend.calls["get"] == 1
    assert outcome_1 == outcome_2
    assert len(store) == 2


@pytest.mark.asyncio
async def test_status_callback_receives_every_outcome(backend: FakeQuoteBackend) -> None:
    seen: list[SyncOutcome] = []
    scheduler, _store, _index, _blobs = _make_scheduler(backend, [], on_status=seen.append)

    await scheduler.sync_now()
    backend.fail_get = True
    await scheduler.sync_now()

    assert [o.status for o in seen] == [SyncStatus.CLEAN, SyncStatus.FAILED]
    assert scheduler.last_outcome == seen[-1]


@pytest.mark.asyncio
async def test_broken_status_callback_does_not_break_sync(backend: FakeQuoteBackend) -> None:
    def _explode(_outcome: SyncOutcome) -> None:
        raise RuntimeError("renderer crashed")

    scheduler, _store, _index, _blobs = _make_scheduler(backend, [], on_status=_explode)

    outcome = await scheduler.sync_now()

    assert outcome.status == SyncStatus.CLEAN


@pytest.mark.asyncio
async def test_periodic_task_runs_until_stopped(backend: FakeQuoteBackend) -> None:
    scheduler, _store, _index, _blobs = _make_scheduler(backend, [], interval=0.01)

    scheduler.start()
    scheduler.start()  # second start is a no-op
    assert scheduler.is_running
    await asyncio.sleep(0.1)
    await scheduler.stop()
    calls = backend.calls.get("get", 0)
    await asyncio.sleep(0.05)

    assert calls >= 1
    assert backend.calls.get("get", 0) == calls
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_stop_lets_inflight_cycle_finish_for_waiters(backend: FakeQuoteBackend) -> None:
    backend.gate = asyncio.Event()
    scheduler, store, _index, _blobs = _make_scheduler(backend, [], interval=30.0)
    scheduler.start()

    waiter = asyncio.create_task(scheduler.sync_now())
    for _ in range(5):
        await asyncio.sleep(0)
    stopping = asyncio.create_task(scheduler.stop())
    for _ in range(5):
        await asyncio.sleep(0)
    assert not stopping.done()

    backend.gate.set()
    outcome = await waiter
    await stopping

    assert outcome.status == SyncStatus.CLEAN
    assert len(store) == 2
    assert not scheduler.is_running
    assert scheduler.state == SyncState.IDLE
