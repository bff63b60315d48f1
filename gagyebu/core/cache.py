"""
In-memory query cache with request de-duplication and key-based invalidation.

Every read in the app goes through `QueryCache.fetch(key, fetcher)`. Callers
that ask for the same key while a fetch is running await the same future, so
concurrent requests share one round-trip to the store. Entries older than the
TTL are revalidated on the next read. Writes are expected to
call `invalidate` for every key whose result they could change.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from .config import settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    data: Optional[Any] = None
    error: Optional[BaseException] = None
    is_loading: bool = False
    fetched_at: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None


class QueryCache:
    def __init__(
        self,
        ttl_seconds: float = settings.CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, asyncio.Future] = {}

    def peek(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        if entry.fetched_at is None:
            return False
        return self._clock() - entry.fetched_at < self.ttl_seconds

    async def fetch(self, key: str, fetcher: Callable[[], Awaitable[Any]]) -> CacheEntry:
        """
        Return the cached entry for `key`, fetching it when missing or stale.

        A failed fetch yields an entry with `error` set and `data` left as None;
        the failure is not stored, so the next call tries again.
        """
        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            return entry

        pending = self._inflight.get(key)
        if pending is not None:
            logger.debug(f"Joining in-flight fetch for {key}")
            return await asyncio.shield(pending)

        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        self._inflight[key] = future
        try:
            data = await fetcher()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            logger.error(f"Query {key} failed: {str(e)}")
            result = CacheEntry(data=None, error=e)
        else:
            result = CacheEntry(data=data, fetched_at=self._clock())
            # An invalidation that landed mid-fetch wins over this result
            if self._inflight.get(key) is future:
                self._entries[key] = result
        finally:
            if self._inflight.get(key) is future:
                del self._inflight[key]
        future.set_result(result)
        return result

    def mutate(self, key: str, data: Any) -> None:
        """Replace the cached data for `key` without a fetch."""
        self._entries[key] = CacheEntry(data=data, fetched_at=self._clock())

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)
        self._inflight.pop(key, None)
        logger.info(f"Invalidated cache key {key}")

    def invalidate_prefix(self, prefix: str) -> int:
        keys = [k for k in list(self._entries) + list(self._inflight) if k.startswith(prefix)]
        for key in set(keys):
            self.invalidate(key)
        return len(set(keys))

    def clear(self) -> None:
        self._entries.clear()
        self._inflight.clear()

    def __len__(self) -> int:
        return len(self._entries)


query_cache = QueryCache()
