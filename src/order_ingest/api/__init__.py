"""
order_ingest.api

HTTP read boundary for the order service.

Responsibilities:
- FastAPI app factory (composition root for store, cache, pipeline and consumer).
- Order lookup and health routers.
"""
