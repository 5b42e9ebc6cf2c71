"""
order_ingest.db.models

Persistence schema: one row per accepted order.

Responsibilities:
- Map `orders(uid, json_data)`; uid is the primary key, json_data the payload exactly
  as received from the stream.
"""

from __future__ import annotations

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from order_ingest.db.base import Base


class OrderRecord(Base):
    __tablename__ = "orders"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    # Raw bytes so lookups return byte-identical payloads.
    json_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


# --- Module Notes -----------------------------------------------------------
# Rows are insert-only; there is no update or delete path anywhere in the service.
