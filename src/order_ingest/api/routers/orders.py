"""
order_ingest.api.routers.orders

Order lookup endpoint.

Responsibilities:
- Map `/orders/{uid}` to `OrderQueryService.lookup` and return the stored bytes verbatim.
- Map lookup failures to HTTP errors (404 not found, 503 store unavailable).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import Response
from starlette.status import HTTP_404_NOT_FOUND, HTTP_503_SERVICE_UNAVAILABLE

from order_ingest.api.deps import query_service_from_app
from order_ingest.errors import OrderNotFound, StoreError
from order_ingest.observability.logging import get_logger
from order_ingest.services.query import OrderQueryService

router = APIRouter(prefix="/orders", tags=["orders"])

log = get_logger(__name__)


@router.get("/{uid}")
async def get_order(
    uid: str,
    queries: OrderQueryService = Depends(query_service_from_app),
) -> Response:
    try:
        payload = await queries.lookup(uid)
    except OrderNotFound as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Order not found") from e
    except StoreError as e:
        log.error("order_lookup_failed", order_uid=uid, error=str(e))
        raise HTTPException(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Order store unavailable"
        ) from e

    # Raw bytes as ingested; not re-serialized.
    return Response(content=payload, media_type="application/json")
