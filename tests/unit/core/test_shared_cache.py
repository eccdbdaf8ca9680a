import asyncio

import pytest

from fetchcache.core.services.shared_cache import SharedCache
from fetchcache.domain.models.cache import CacheOptions
from fetchcache.infrastructure.cache.ttl_store import TTLCacheStore


@pytest.fixture
def shared(clock):
    return SharedCache(options=CacheOptions(ttl=5.0, max_size=10), sweep_interval=0.01, clock=clock)


def test_builds_store_from_options(shared):
    assert isinstance(shared.store, TTLCacheStore)
    assert shared.store.max_size == 10
    assert not shared.running


def test_uses_injected_store(clock):
    store = TTLCacheStore(clock=clock)
    assert SharedCache(store=store).store is store


def test_clear_single_key_and_everything(shared):
    shared.store.set("a", 1)
    shared.store.set("b", 2)

    shared.clear("a")
    assert shared.store.keys() == ["b"]
    assert shared.size() == 1

    shared.clear()
    assert shared.size() == 0


def test_cleanup_runs_one_sweep(shared, clock):
    shared.store.set("a", 1)
    shared.store.set("b", 2, 60.0)
    clock.advance(6.0)
    assert shared.cleanup() == 1
    assert shared.size() == 1


@pytest.mark.asyncio
async def test_start_and_stop_control_background_sweep(shared, clock):
    shared.store.set("a", 1)
    clock.advance(6.0)

    shared.start()
    assert shared.running
    await asyncio.sleep(0.05)
    await shared.stop()

    assert not shared.running
    assert shared.size() == 0


@pytest.mark.asyncio
async def test_async_context_manager_stops_sweep(shared):
    async with shared as cache:
        assert cache.running
    assert not shared.running


@pytest.mark.asyncio
async def test_bindings_share_one_store(shared):
    calls = []

    async def fetcher():
        calls.append(1)
        return "report"

    first = await shared.bind("report", fetcher)
    second = await shared.bind("report", fetcher)

    assert first.value == second.value == "report"
    assert len(calls) == 1
    assert shared.size() == 1


@pytest.mark.asyncio
async def test_out_of_band_clear_forces_refetch(shared):
    calls = []

    async def fetcher():
        calls.append(1)
        return len(calls)

    binding = await shared.bind("k", fetcher)
    shared.clear("k")
    assert await binding.fetch() == 2
