"""
order_ingest.db.init_db

Create the orders table for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from order_ingest.db import models  # noqa: F401  # registers OrderRecord on Base.metadata
from order_ingest.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# Startup only calls this in dev/test; prod schemas are managed by `alembic upgrade head`
# (see alembic/versions). Keep the two in step with `order_ingest.db.models`.
