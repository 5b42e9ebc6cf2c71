"""
order_ingest.messaging.consumer

Durable subscription to the orders topic (Kafka, kafka-python client).

Responsibilities:
- Join the consumer group named by `stream_durable_name` so offsets are checkpointed by
  the broker and a restart resumes from the last committed position.
- Dispatch one asyncio task per delivered message, bounded by `stream_max_in_flight`.
- Commit offsets once every message in a polled batch has been handled.
- Shut down without closing the client under a running poll or commit.

The blocking client is only touched from `asyncio.to_thread` calls issued sequentially by
the loop task, so it is never used from two threads at once. Those calls are shielded
and tracked; `stop()` waits for the last one to return before `close()` runs.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

from kafka import KafkaConsumer
from kafka.errors import KafkaError

from order_ingest.errors import StreamError
from order_ingest.observability.logging import get_logger
from order_ingest.observability.middleware import message_context
from order_ingest.settings import Settings

log = get_logger(__name__)

MessageHandler = Callable[[bytes], Awaitable[Any]]


class OrderStreamConsumer:
    def __init__(
        self,
        *,
        settings: Settings,
        handler: MessageHandler,
        client_factory: Callable[..., Any] = KafkaConsumer,
    ) -> None:
        self._settings = settings
        self._handler = handler
        self._client_factory = client_factory
        self._client: Any | None = None
        self._client_call: asyncio.Future[Any] | None = None
        self._inflight = asyncio.Semaphore(settings.stream_max_in_flight)
        self._stopping = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self.running = False

    async def start(self) -> None:
        if self._task is not None:
            return
        self.running = True
        self._stopping.clear()
        self._task = asyncio.create_task(self._run(), name="order-stream-consumer")
        log.info(
            "stream_consumer_started",
            topic=self._settings.stream_topic,
            durable_name=self._settings.stream_durable_name,
        )

    async def stop(self) -> None:
        """
        Let the loop leave after its current batch, then close the client.

        The loop is cancelled only when it overruns one poll timeout plus
        `stream_shutdown_grace_seconds`; even then the client call it was waiting on
        is awaited before `close()`. Never raises for a loop that died on its own.
        """

        self.running = False
        self._stopping.set()
        task, self._task = self._task, None
        if task is not None:
            s = self._settings
            grace = s.stream_poll_timeout_ms / 1000 + s.stream_shutdown_grace_seconds
            done, _ = await asyncio.wait({task}, timeout=grace)
            if not done:
                log.warning("stream_consumer_stop_timeout", waited=grace)
                task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception:
                log.exception("stream_consumer_failed")

        pending = self._client_call
        if pending is not None and not pending.done():
            # The result is discarded; uncommitted records are redelivered to the group.
            with contextlib.suppress(Exception):
                await pending

        if self._client is not None:
            client, self._client = self._client, None
            await asyncio.to_thread(client.close)
        log.info("stream_consumer_stopped")

    async def consume_once(self) -> int:
        """Poll one batch, handle every message in it, then commit. Returns the batch size."""

        client = await self._connect()
        batch = await self._call(
            client.poll,
            timeout_ms=self._settings.stream_poll_timeout_ms,
            max_records=self._settings.stream_max_poll_records,
        )
        records = [record for part in (batch or {}).values() for record in part]
        if not records:
            return 0

        await asyncio.gather(*(self._dispatch(record) for record in records))
        # Dropped messages count as handled: decode/validation failures are not redelivered.
        await self._call(client.commit)
        return len(records)

    async def _call(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        # Cancelling the caller must not orphan the worker thread still using the client.
        self._client_call = asyncio.ensure_future(asyncio.to_thread(fn, *args, **kwargs))
        return await asyncio.shield(self._client_call)

    async def _connect(self) -> Any:
        if self._client is not None:
            return self._client
        s = self._settings
        try:
            self._client = await asyncio.to_thread(
                self._client_factory,
                s.stream_topic,
                bootstrap_servers=s.stream_bootstrap_servers,
                group_id=s.stream_durable_name,
                client_id=s.stream_client_id,
                auto_offset_reset=s.stream_start_position,
                enable_auto_commit=False,
                max_poll_records=s.stream_max_poll_records,
            )
        except KafkaError as e:
            raise StreamError(f"cannot subscribe to {s.stream_topic!r}: {e}") from e
        log.info("stream_subscribed", topic=s.stream_topic, group_id=s.stream_durable_name)
        return self._client

    async def _dispatch(self, record: Any) -> None:
        async with self._inflight:
            with message_context(
                topic=record.topic,
                partition=record.partition,
                offset=record.offset,
            ):
                try:
                    await self._handler(record.value or b"")
                except Exception:
                    # One bad message must not stop the subscription.
                    log.exception("message_handler_failed")

    async def _run(self) -> None:
        backoff = self._settings.stream_error_backoff_seconds
        while self.running:
            try:
                await self.consume_once()
            except (KafkaError, StreamError) as e:
                log.error("stream_error", error=str(e), retry_in=backoff)
                await self._pause(backoff)
            except Exception:
                log.exception("stream_loop_failed", retry_in=backoff)
                await self._pause(backoff)

    async def _pause(self, seconds: float) -> None:
        # Returns early once stop() has been called.
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._stopping.wait(), timeout=seconds)


# --- Module Notes -----------------------------------------------------------
# A commit that fails after a rebalance leads to redelivery; the store's primary key
# rejects the duplicates, so at-least-once delivery is safe here.
