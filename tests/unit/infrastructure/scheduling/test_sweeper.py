import asyncio

import pytest
from unittest.mock import MagicMock

from fetchcache.domain.models.cache import CacheOptions
from fetchcache.infrastructure.cache.ttl_store import TTLCacheStore
from fetchcache.infrastructure.scheduling.sweeper import PeriodicSweeper


@pytest.fixture
def store(clock):
    return TTLCacheStore(CacheOptions(ttl=1.0), clock=clock)


def test_rejects_non_positive_interval(store):
    with pytest.raises(ValueError):
        PeriodicSweeper(store, interval=0)


def test_sweep_once_removes_expired_entries(store, clock):
    store.set("a", 1)
    store.set("b", 2, 10.0)
    clock.advance(2.0)

    sweeper = PeriodicSweeper(store, interval=60)
    assert sweeper.sweep_once() == 1
    assert store.keys() == ["b"]
    assert sweeper.sweep_count == 1


@pytest.mark.asyncio
async def test_background_sweep_runs_until_stopped(store, clock):
    store.set("a", 1)
    clock.advance(2.0)
    sweeper = PeriodicSweeper(store, interval=0.01)

    sweeper.start()
    assert sweeper.running
    await asyncio.sleep(0.05)
    await sweeper.stop()

    assert not sweeper.running
    assert store.size() == 0
    assert sweeper.sweep_count >= 1
    count = sweeper.sweep_count
    await asyncio.sleep(0.03)
    assert sweeper.sweep_count == count


@pytest.mark.asyncio
async def test_start_twice_keeps_single_task(store):
    sweeper = PeriodicSweeper(store, interval=10)
    sweeper.start()
    first = sweeper._task
    sweeper.start()
    assert sweeper._task is first
    await sweeper.stop()


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(store):
    sweeper = PeriodicSweeper(store, interval=10)
    await sweeper.stop()
    assert not sweeper.running


@pytest.mark.asyncio
async def test_failing_callback_does_not_kill_sweep(clock):
    on_expire = MagicMock(side_effect=RuntimeError("hook failed"))
    store = TTLCacheStore(CacheOptions(ttl=1.0, on_expire=on_expire), clock=clock)
    store.set("a", 1)
    clock.advance(2.0)
    sweeper = PeriodicSweeper(store, interval=0.01)

    sweeper.start()
    await asyncio.sleep(0.05)
    assert sweeper.running
    await sweeper.stop()
    on_expire.assert_called_once_with("a")
