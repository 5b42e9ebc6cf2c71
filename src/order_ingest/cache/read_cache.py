"""
order_ingest.cache.read_cache

In-memory read cache mirroring the persistent store.

Responsibilities:
- Hold uid -> raw payload bytes behind a single lock.
- Reject second writes for a uid (same insert-once policy as the store).
- Rebuild the whole mapping from a store snapshot at startup.

No TTL, no eviction, no capacity bound: entries live for the lifetime of the process.
"""

from __future__ import annotations

import threading
from typing import Protocol

from order_ingest.errors import CacheConflict
from order_ingest.observability.logging import get_logger

log = get_logger(__name__)


class SnapshotSource(Protocol):
    async def get_all(self) -> dict[str, bytes]: ...


class ReadCache:
    def __init__(self) -> None:
        self._orders: dict[str, bytes] = {}
        # Never held across an await.
        self._lock = threading.Lock()

    def put(self, uid: str, payload: bytes) -> None:
        with self._lock:
            if uid in self._orders:
                raise CacheConflict(uid)
            self._orders[uid] = payload

    def get(self, uid: str) -> bytes | None:
        with self._lock:
            return self._orders.get(uid)

    async def rebuild(self, store: SnapshotSource) -> int:
        """
        Replace the cache contents with `store.get_all()`.

        The snapshot is loaded before the lock is taken; if loading fails the current
        contents are left as they were and the StoreError propagates.
        """

        snapshot = await store.get_all()
        with self._lock:
            self._orders.clear()
            self._orders.update(snapshot)
            size = len(self._orders)
        log.info("cache_rebuilt", entries=size)
        return size

    def __contains__(self, uid: object) -> bool:
        with self._lock:
            return uid in self._orders

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
