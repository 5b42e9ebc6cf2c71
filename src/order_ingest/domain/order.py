"""
order_ingest.domain.order

Order record as published by the upstream producer.

Responsibilities:
- Define the Order / Delivery / Payment / Item models in canonical field order.
- Decode raw bytes with strict typing and re-encode to compact JSON.

Integer money fields are minor currency units. A JSON `null` reads as the field's zero
value (`""`, `0`, an empty nested record, `[]`), the same as an absent key.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
)

from order_ingest.errors import DecodeError


def _null_as(zero: Callable[[], Any]) -> BeforeValidator:
    return BeforeValidator(lambda v: zero() if v is None else v)


# Scalars are strict (no "5" -> 5, no 1.5 -> 1); nested records still accept JSON objects.
Str = Annotated[StrictStr, _null_as(str)]
Int = Annotated[StrictInt, _null_as(int)]


class _Record(BaseModel):
    # Unknown keys are dropped here and caught by schema_check.
    model_config = ConfigDict(frozen=True, extra="ignore")


class Delivery(_Record):
    name: Str = ""
    phone: Str = ""
    zip: Str = ""
    city: Str = ""
    address: Str = ""
    region: Str = ""
    email: Str = ""


class Payment(_Record):
    transaction: Str = ""
    request_id: Str = ""
    currency: Str = ""
    provider: Str = ""
    amount: Int = 0
    payment_dt: Int = 0
    bank: Str = ""
    delivery_cost: Int = 0
    goods_total: Int = 0
    custom_fee: Int = 0


class Item(_Record):
    chrt_id: Int = 0
    track_number: Str = ""
    price: Int = 0
    rid: Str = ""
    name: Str = ""
    sale: Int = 0
    size: Str = ""
    total_price: Int = 0
    nm_id: Int = 0
    brand: Str = ""
    status: Int = 0


def _items(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return [Item() if v is None else v for v in value]
    return value


class Order(_Record):
    order_uid: Str = Field(min_length=1)
    track_number: Str = ""
    entry: Str = ""
    delivery: Annotated[Delivery, _null_as(Delivery)] = Field(default_factory=Delivery)
    payment: Annotated[Payment, _null_as(Payment)] = Field(default_factory=Payment)
    items: Annotated[list[Item], BeforeValidator(_items)] = Field(default_factory=list)
    locale: Str = ""
    internal_signature: Str = ""
    customer_id: Str = ""
    delivery_service: Str = ""
    shardkey: Str = ""
    sm_id: Int = 0
    date_created: Str = ""
    oof_shard: Str = ""


def decode(data: bytes) -> Order:
    try:
        return Order.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(_describe(e)) from e


def encode(order: Order) -> bytes:
    return order.model_dump_json().encode("utf-8")


def _describe(err: ValidationError) -> str:
    first = err.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    more = err.error_count() - 1
    suffix = f" (+{more} more)" if more > 0 else ""
    return f"{loc}: {first.get('msg', 'invalid value')}{suffix}"
