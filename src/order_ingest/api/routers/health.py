"""
order_ingest.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with store connectivity and cache size.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from order_ingest.api.deps import cache_from_app, store_from_app
from order_ingest.cache.read_cache import ReadCache
from order_ingest.db.store import OrderStore
from order_ingest.errors import StoreError

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    store: OrderStore = Depends(store_from_app),
    cache: ReadCache = Depends(cache_from_app),
) -> dict[str, Any]:
    try:
        await store.ping()
    except StoreError as e:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return {"status": "ready", "cached_orders": len(cache)}
