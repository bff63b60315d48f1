import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from gagyebu.core.cache import QueryCache
from gagyebu.core.db_utils import StoreWriteError, with_store_errors


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_request():
    cache = QueryCache(ttl_seconds=60)
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return ["row"]

    entries = await asyncio.gather(*(cache.fetch("u:categories", fetcher) for _ in range(5)))
    assert calls == 1
    assert all(e.data == ["row"] for e in entries)


@pytest.mark.asyncio
async def test_fresh_entries_are_served_from_memory_until_ttl():
    clock = FakeClock()
    cache = QueryCache(ttl_seconds=30, clock=clock)
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        return calls

    assert (await cache.fetch("k", fetcher)).data == 1
    clock.now = 29
    assert (await cache.fetch("k", fetcher)).data == 1
    clock.now = 31
    assert (await cache.fetch("k", fetcher)).data == 2


@pytest.mark.asyncio
async def test_failed_fetch_carries_error_and_is_not_cached():
    cache = QueryCache()
    boom = RuntimeError("store unreachable")

    async def failing():
        raise boom

    entry = await cache.fetch("k", failing)
    assert entry.data is None
    assert entry.error is boom
    assert not entry.ok
    assert cache.peek("k") is None

    async def working():
        return []

    entry = await cache.fetch("k", working)
    assert entry.ok
    assert entry.data == []
    assert entry.error is None


@pytest.mark.asyncio
async def test_invalidate_forces_refetch():
    cache = QueryCache()
    version = 0

    async def fetcher():
        nonlocal version
        version += 1
        return version

    await cache.fetch("u1:transactions-2025-3", fetcher)
    cache.invalidate("u1:transactions-2025-3")
    assert (await cache.fetch("u1:transactions-2025-3", fetcher)).data == 2


@pytest.mark.asyncio
async def test_invalidate_prefix_only_touches_matching_keys():
    cache = QueryCache()

    async def fetcher():
        return "x"

    for key in ["u1:transactions-2025-3", "u1:transactions-2025-4", "u1:categories", "u2:transactions-2025-3"]:
        await cache.fetch(key, fetcher)

    assert cache.invalidate_prefix("u1:transactions-") == 2
    assert cache.peek("u1:categories") is not None
    assert cache.peek("u2:transactions-2025-3") is not None
    assert len(cache) == 2


@pytest.mark.asyncio
async def test_invalidation_during_fetch_discards_stale_result():
    cache = QueryCache()
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow():
        started.set()
        await release.wait()
        return "stale"

    task = asyncio.create_task(cache.fetch("k", slow))
    await started.wait()
    cache.invalidate("k")
    release.set()
    entry = await task
    assert entry.data == "stale"
    assert cache.peek("k") is None


@pytest.mark.asyncio
async def test_store_errors_become_store_write_error():
    @with_store_errors
    async def insert():
        raise IntegrityError("INSERT INTO transactions ...", {}, Exception("CHECK constraint failed: amount > 0"))

    with pytest.raises(StoreWriteError) as excinfo:
        await insert()
    assert excinfo.value.message == "CHECK constraint failed: amount > 0"
    assert excinfo.value.detail == "저장에 실패했습니다: CHECK constraint failed: amount > 0"
