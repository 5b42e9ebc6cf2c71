"""
order_ingest.services

Service-layer package.

Responsibilities:
- Ingestion write path (decode, validate, store, cache).
- Query read path (cache first, store fallback).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services do not know how messages or requests arrive; transport lives in
# `order_ingest.messaging` and `order_ingest.api`.
