"""
order_ingest.db.store

Persistent store of raw order payloads keyed by order uid.

Responsibilities:
- Insert-once writes (no upsert); duplicate uids are rejected by the primary key.
- Single-record and full-snapshot reads.
- Translate SQLAlchemy failures into the service error taxonomy.

The store is the source of truth; the read cache is rebuilt from it on startup.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from order_ingest.db.init_db import init_db
from order_ingest.db.repositories.orders import OrderRepo
from order_ingest.db.session import create_engine, create_sessionmaker
from order_ingest.errors import DuplicateOrderError, OrderNotFound, StoreError
from order_ingest.observability.logging import get_logger
from order_ingest.settings import Settings

log = get_logger(__name__)


class OrderStore:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = create_sessionmaker(engine)
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> OrderStore:
        return cls(create_engine(settings))

    async def create_schema(self) -> None:
        try:
            await init_db(self._engine)
        except SQLAlchemyError as e:
            raise StoreError(f"cannot create orders table: {e}") from e

    async def put(self, uid: str, payload: bytes) -> None:
        async with self._sessions() as session:
            try:
                await OrderRepo(session).add(uid=uid, json_data=payload)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateOrderError(uid) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(f"cannot insert order {uid!r}: {e}") from e

    async def get(self, uid: str) -> bytes:
        async with self._sessions() as session:
            try:
                rec = await OrderRepo(session).get(uid)
            except SQLAlchemyError as e:
                raise StoreError(f"cannot read order {uid!r}: {e}") from e
        if rec is None:
            raise OrderNotFound(uid)
        return bytes(rec.json_data)

    async def get_all(self) -> dict[str, bytes]:
        # One SELECT inside one session: a consistent snapshot for the cache rebuild.
        async with self._sessions() as session:
            try:
                records = await OrderRepo(session).all()
            except SQLAlchemyError as e:
                raise StoreError(f"cannot read orders: {e}") from e
        return {rec.uid: bytes(rec.json_data) for rec in records}

    async def ping(self) -> None:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreError(f"store unreachable: {e}") from e

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._engine.dispose()
        log.info("store_closed")
