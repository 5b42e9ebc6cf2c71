"""
tests.conftest

Shared fixtures: test settings, a file-backed SQLite store, and sample order payloads.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from order_ingest.cache.read_cache import ReadCache
from order_ingest.db.store import OrderStore
from order_ingest.settings import Settings

SAMPLE_ORDER: dict[str, Any] = {
    "order_uid": "b563feb7b2b84b6test",
    "track_number": "WBILMTESTTRACK",
    "entry": "WBIL",
    "delivery": {
        "name": "Test Testov",
        "phone": "+9720000000",
        "zip": "2639809",
        "city": "Kiryat Mozkin",
        "address": "Ploshad Mira 15",
        "region": "Kraiot",
        "email": "test@gmail.com",
    },
    "payment": {
        "transaction": "b563feb7b2b84b6test",
        "request_id": "",
        "currency": "USD",
        "provider": "wbpay",
        "amount": 1817,
        "payment_dt": 1637907727,
        "bank": "alpha",
        "delivery_cost": 1500,
        "goods_total": 317,
        "custom_fee": 0,
    },
    "items": [
        {
            "chrt_id": 9934930,
            "track_number": "WBILMTESTTRACK",
            "price": 453,
            "rid": "ab4219087a764ae0btest",
            "name": "Mascaras",
            "sale": 30,
            "size": "0",
            "total_price": 317,
            "nm_id": 2389212,
            "brand": "Vivienne Sabo",
            "status": 202,
        }
    ],
    "locale": "en",
    "internal_signature": "",
    "customer_id": "test",
    "delivery_service": "meest",
    "shardkey": "9",
    "sm_id": 99,
    "date_created": "2021-11-26T06:22:19Z",
    "oof_shard": "1",
}


def make_payload(*, indent: int | None = None, **overrides: Any) -> bytes:
    doc = json.loads(json.dumps(SAMPLE_ORDER))
    doc.update(overrides)
    if indent is None:
        return json.dumps(doc, separators=(",", ":")).encode("utf-8")
    return json.dumps(doc, indent=indent).encode("utf-8")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}",
        stream_enabled=False,
        stream_poll_timeout_ms=10,
        stream_error_backoff_seconds=0.01,
    )


@pytest_asyncio.fixture
async def store(settings: Settings) -> AsyncIterator[OrderStore]:
    s = OrderStore.from_settings(settings)
    await s.create_schema()
    try:
        yield s
    finally:
        await s.close()


@pytest.fixture
def cache() -> ReadCache:
    return ReadCache()


@pytest.fixture
def payload() -> bytes:
    return make_payload()


@pytest.fixture
def payload_factory():
    return make_payload
