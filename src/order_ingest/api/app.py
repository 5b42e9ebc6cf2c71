"""
order_ingest.api.app

FastAPI app factory for the order service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own startup ordering: store -> schema (dev/test) -> cache rebuild -> stream subscription.
- Stop the subscription and release the store on shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from order_ingest import __version__
from order_ingest.api.routers.health import router as health_router
from order_ingest.api.routers.orders import router as orders_router
from order_ingest.cache.read_cache import ReadCache
from order_ingest.db.store import OrderStore
from order_ingest.messaging.consumer import OrderStreamConsumer
from order_ingest.observability.logging import configure_logging, get_logger
from order_ingest.observability.middleware import RequestContextMiddleware
from order_ingest.services.ingestion import IngestionPipeline
from order_ingest.services.query import OrderQueryService
from order_ingest.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    stream_client_factory: Callable[..., Any] | None = None,
) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        fmt=settings.log_format,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        store = OrderStore.from_settings(settings)
        consumer: OrderStreamConsumer | None = None
        try:
            if settings.env in ("dev", "test"):
                await store.create_schema()

            # Serve nothing until the cache mirrors the store.
            cache = ReadCache()
            await cache.rebuild(store)

            pipeline = IngestionPipeline(store=store, cache=cache)
            app.state.store = store
            app.state.cache = cache
            app.state.pipeline = pipeline
            app.state.query_service = OrderQueryService(store=store, cache=cache)

            if settings.stream_enabled:
                kwargs: dict[str, Any] = {}
                if stream_client_factory is not None:
                    kwargs["client_factory"] = stream_client_factory
                consumer = OrderStreamConsumer(
                    settings=settings, handler=pipeline.handle, **kwargs
                )
                await consumer.start()
            app.state.consumer = consumer

            yield
        finally:
            try:
                if consumer is not None:
                    await consumer.stop()
            finally:
                await store.close()
            log.info("shutdown")

    app = FastAPI(
        title="Order Ingest Service",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(orders_router)

    return app


# --- Module Notes -----------------------------------------------------------
# The consumer is stopped before the store closes so no in-flight message writes to a
# disposed engine.
