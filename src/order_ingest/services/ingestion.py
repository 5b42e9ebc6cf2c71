"""
order_ingest.services.ingestion

Write path for orders delivered by the message stream.

Responsibilities:
- Run each payload through Received -> Decoded -> Validated -> Persisted -> Cached.
- Write through to the store first, then the cache, preserving cache/store parity.
- Report every abort on the log and in the returned `PipelineResult`.

`handle` is independent of how deliveries are dispatched; the stream consumer calls it
once per message, tests call it directly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from order_ingest.cache.read_cache import ReadCache
from order_ingest.db.store import OrderStore
from order_ingest.domain.order import decode
from order_ingest.domain.schema_check import diff_keys
from order_ingest.errors import (
    CacheConflict,
    DecodeError,
    DuplicateOrderError,
    OrderIngestError,
    StoreError,
    ValidationMismatch,
)
from order_ingest.observability.logging import get_logger

log = get_logger(__name__)


class Stage(enum.IntEnum):
    # Ordered: a later stage implies all earlier ones succeeded.
    received = 0
    decoded = 1
    validated = 2
    persisted = 3
    cached = 4


@dataclass(frozen=True, slots=True)
class PipelineResult:
    stage: Stage
    order_uid: str | None = None
    error: OrderIngestError | None = None

    @property
    def accepted(self) -> bool:
        # Persisted is the commit point; a cache conflict afterwards does not undo it.
        return self.stage >= Stage.persisted


class IngestionPipeline:
    def __init__(self, *, store: OrderStore, cache: ReadCache) -> None:
        self._store = store
        self._cache = cache

    async def handle(self, payload: bytes) -> PipelineResult:
        try:
            order = decode(payload)
        except DecodeError as e:
            log.warning("order_decode_failed", error=str(e), size=len(payload))
            return PipelineResult(Stage.received, error=e)

        uid = order.order_uid
        unexpected, miscounted = diff_keys(order, payload)
        if unexpected or miscounted:
            err = ValidationMismatch(uid, unexpected=unexpected, miscounted=miscounted)
            log.warning(
                "order_schema_mismatch",
                order_uid=uid,
                unexpected=list(err.unexpected),
                miscounted=list(err.miscounted),
            )
            return PipelineResult(Stage.decoded, uid, err)

        try:
            await self._store.put(uid, payload)
        except DuplicateOrderError as e:
            log.info("order_duplicate_rejected", order_uid=uid)
            return PipelineResult(Stage.validated, uid, e)
        except StoreError as e:
            log.error("order_store_failed", order_uid=uid, error=str(e))
            return PipelineResult(Stage.validated, uid, e)

        try:
            self._cache.put(uid, payload)
        except CacheConflict as e:
            # Store write stands; the next startup rebuild reconciles the cache.
            log.warning("order_cache_conflict", order_uid=uid)
            return PipelineResult(Stage.persisted, uid, e)

        log.info("order_accepted", order_uid=uid)
        return PipelineResult(Stage.cached, uid)


# --- Module Notes -----------------------------------------------------------
# Redelivered duplicates stop at the store insert, so they never reach the cache twice.
