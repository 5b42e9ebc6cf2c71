"""
order_ingest.services.query

Read path: cache first, persistent store on a miss.

A store hit is returned but not copied into the cache; only the ingestion write path
populates the cache.
"""

from __future__ import annotations

from order_ingest.cache.read_cache import ReadCache
from order_ingest.db.store import OrderStore
from order_ingest.observability.logging import get_logger

log = get_logger(__name__)


class OrderQueryService:
    def __init__(self, *, store: OrderStore, cache: ReadCache) -> None:
        self._store = store
        self._cache = cache

    async def lookup(self, uid: str) -> bytes:
        """Return the raw payload for `uid`; raises OrderNotFound or StoreError."""

        cached = self._cache.get(uid)
        if cached is not None:
            return cached

        log.debug("cache_miss", order_uid=uid)
        return await self._store.get(uid)
