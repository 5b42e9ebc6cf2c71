"""
order_ingest.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access (store, cache, query service) for routers.
"""

from __future__ import annotations

from fastapi import Request

from order_ingest.cache.read_cache import ReadCache
from order_ingest.db.store import OrderStore
from order_ingest.services.query import OrderQueryService


# All three objects are created once on startup in `order_ingest.api.app.create_app`.
def store_from_app(request: Request) -> OrderStore:
    return request.app.state.store  # type: ignore[attr-defined]


def cache_from_app(request: Request) -> ReadCache:
    return request.app.state.cache  # type: ignore[attr-defined]


def query_service_from_app(request: Request) -> OrderQueryService:
    return request.app.state.query_service  # type: ignore[attr-defined]
