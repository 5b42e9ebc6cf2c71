"""
order_ingest.observability.middleware

Log context binding for the two inbound paths: HTTP reads and stream deliveries.

Responsibilities:
- Generate/propagate request IDs for the read API.
- Bind stream coordinates (topic/partition/offset) around per-message handling.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        ):
            response: Response = await call_next(request)

        response.headers["x-request-id"] = request_id
        return response


@contextmanager
def message_context(*, topic: str, partition: int, offset: int) -> Iterator[None]:
    """
    Bind stream coordinates for the duration of one message's handling.

    Each message runs in its own asyncio task, which copies the context on creation,
    so bindings made here never leak into sibling deliveries.
    """

    with structlog.contextvars.bound_contextvars(
        topic=topic,
        partition=partition,
        offset=offset,
    ):
        yield


# --- Module Notes -----------------------------------------------------------
# Both helpers only touch contextvars; processors in `observability.logging` merge them
# into every log line.
