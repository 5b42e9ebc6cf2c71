"""
tests.test_store

Persistent store behaviour against a temporary SQLite database.
"""

from __future__ import annotations

import pytest

from order_ingest.db.store import OrderStore
from order_ingest.errors import DuplicateOrderError, OrderNotFound, StoreError
from order_ingest.settings import Settings


@pytest.mark.asyncio
async def test_put_then_get_returns_identical_bytes(store: OrderStore, payload: bytes) -> None:
    await store.put("b563feb7b2b84b6test", payload)

    assert await store.get("b563feb7b2b84b6test") == payload


@pytest.mark.asyncio
async def test_put_rejects_duplicate_uid(store: OrderStore) -> None:
    await store.put("A1", b'{"order_uid":"A1"}')

    with pytest.raises(DuplicateOrderError) as exc_info:
        await store.put("A1", b'{"order_uid":"A1","locale":"en"}')

    assert isinstance(exc_info.value, StoreError)
    # No upsert: the first payload is kept.
    assert await store.get("A1") == b'{"order_uid":"A1"}'


@pytest.mark.asyncio
async def test_get_missing_uid(store: OrderStore) -> None:
    with pytest.raises(OrderNotFound):
        await store.get("nope")


@pytest.mark.asyncio
async def test_get_all_is_a_full_snapshot(store: OrderStore) -> None:
    for i in range(5):
        await store.put(f"id-{i}", f'{{"order_uid":"id-{i}"}}'.encode())

    snapshot = await store.get_all()

    assert sorted(snapshot) == [f"id-{i}" for i in range(5)]
    assert snapshot["id-3"] == b'{"order_uid":"id-3"}'


@pytest.mark.asyncio
async def test_missing_table_surfaces_store_error(settings: Settings) -> None:
    bare = OrderStore.from_settings(settings)
    try:
        with pytest.raises(StoreError):
            await bare.put("A1", b"{}")
        with pytest.raises(StoreError):
            await bare.get("A1")
        with pytest.raises(StoreError):
            await bare.get_all()
    finally:
        await bare.close()


@pytest.mark.asyncio
async def test_ping_and_idempotent_close(store: OrderStore) -> None:
    await store.ping()

    await store.close()
    await store.close()
