"""
order_ingest.domain

Order model and payload validation.

Responsibilities:
- Typed Order record with strict JSON decode and canonical encode.
- Structural drift detection between a received payload and the model.
"""

from order_ingest.domain.order import Delivery, Item, Order, Payment, decode, encode
from order_ingest.domain.schema_check import diff_keys, extract_keys, key_counts, matches

__all__ = [
    "Delivery",
    "Item",
    "Order",
    "Payment",
    "decode",
    "diff_keys",
    "encode",
    "extract_keys",
    "key_counts",
    "matches",
]
