"""
order_ingest.db.repositories.orders

Repository for `OrderRecord` rows.

Responsibilities:
- Insert one order row; a duplicate uid surfaces on flush.
- Fetch a single row by uid, or every row for cache reconciliation.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from order_ingest.db.models import OrderRecord


class OrderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, *, uid: str, json_data: bytes) -> OrderRecord:
        # Plain INSERT: a duplicate uid surfaces as IntegrityError on flush.
        rec = OrderRecord(uid=uid, json_data=json_data)
        self._session.add(rec)
        await self._session.flush()
        return rec

    async def get(self, uid: str) -> OrderRecord | None:
        return await self._session.get(OrderRecord, uid)

    async def all(self) -> list[OrderRecord]:
        stmt = select(OrderRecord)
        return list((await self._session.execute(stmt)).scalars().all())
