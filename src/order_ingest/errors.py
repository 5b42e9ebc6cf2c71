"""
order_ingest.errors

Error taxonomy shared by the ingestion, storage and query layers.

Responsibilities:
- Distinguish per-message terminal failures (decode/validation) from storage and
  cache failures so callers can apply the right propagation policy.
"""

from __future__ import annotations

from collections.abc import Iterable


class OrderIngestError(Exception):
    """Base class for all errors raised by this package."""


class DecodeError(OrderIngestError):
    """Payload is not well-formed JSON or a field has the wrong type."""


class ValidationMismatch(OrderIngestError):
    """
    Key names in the received payload do not line up with the Order model.

    `unexpected` holds keys the model does not know about; `miscounted` holds keys
    that occur a different number of times after re-encoding.
    """

    def __init__(
        self,
        order_uid: str,
        *,
        unexpected: Iterable[str] = (),
        miscounted: Iterable[str] = (),
    ) -> None:
        self.order_uid = order_uid
        self.unexpected = tuple(sorted(unexpected))
        self.miscounted = tuple(sorted(miscounted))
        super().__init__(
            f"structural drift in order {order_uid!r}: "
            f"unexpected={list(self.unexpected)} miscounted={list(self.miscounted)}"
        )


class StoreError(OrderIngestError):
    """Persistent store connectivity or constraint failure."""


class DuplicateOrderError(StoreError):
    def __init__(self, order_uid: str) -> None:
        self.order_uid = order_uid
        super().__init__(f"order {order_uid!r} already exists in store")


class CacheConflict(OrderIngestError):
    def __init__(self, order_uid: str) -> None:
        self.order_uid = order_uid
        super().__init__(f"order {order_uid!r} already exists in cache")


class StreamError(OrderIngestError):
    """Message stream client could not be created or used."""


class OrderNotFound(OrderIngestError):
    def __init__(self, order_uid: str) -> None:
        self.order_uid = order_uid
        super().__init__(f"order {order_uid!r} not found")


# --- Module Notes -----------------------------------------------------------
# The HTTP layer maps OrderNotFound -> 404 and StoreError -> 503 (see api.routers.orders).
