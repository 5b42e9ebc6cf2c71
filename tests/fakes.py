"""
tests.fakes

In-memory stand-ins for the kafka-python consumer client.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any


@dataclass
class FakeRecord:
    topic: str
    partition: int
    offset: int
    value: bytes | None


class FakeKafkaClient:
    def __init__(
        self,
        topic: str,
        *,
        poll_delay: float = 0.0,
        poll_errors: list[Exception] | None = None,
        **config: Any,
    ) -> None:
        self.topic = topic
        self.config = config
        self.batches: list[dict[Any, list[FakeRecord]]] = []
        self.poll_delay = poll_delay
        self.poll_errors = list(poll_errors or [])
        self.polls = 0
        self.commits = 0
        self.closed = False
        # Set when close() runs while another thread is inside poll().
        self.closed_during_poll = False
        self._polling = threading.Event()

    def poll(self, timeout_ms: int = 0, max_records: int | None = None) -> dict:
        self._polling.set()
        try:
            self.polls += 1
            if self.poll_errors:
                raise self.poll_errors.pop(0)
            time.sleep(self.poll_delay)
            if self.batches:
                return self.batches.pop(0)
            time.sleep(timeout_ms / 1000)
            return {}
        finally:
            self._polling.clear()

    def commit(self) -> None:
        self.commits += 1

    def close(self) -> None:
        self.closed_during_poll = self._polling.is_set()
        self.closed = True


class FakeClientFactory:
    """Callable with the KafkaConsumer signature; remembers the client it built."""

    def __init__(
        self,
        *batches: dict[Any, list[FakeRecord]],
        poll_delay: float = 0.0,
        poll_errors: list[Exception] | None = None,
    ) -> None:
        self._batches = list(batches)
        self._poll_delay = poll_delay
        self._poll_errors = poll_errors
        self.client: FakeKafkaClient | None = None

    def __call__(self, topic: str, **config: Any) -> FakeKafkaClient:
        self.client = FakeKafkaClient(
            topic,
            poll_delay=self._poll_delay,
            poll_errors=self._poll_errors,
            **config,
        )
        self.client.batches.extend(self._batches)
        return self.client


def make_batch(*values: bytes | None, topic: str = "orders") -> dict[Any, list[FakeRecord]]:
    # Keyed like kafka-python's poll() result; a tuple stands in for TopicPartition.
    return {
        (topic, 0): [FakeRecord(topic, 0, offset, v) for offset, v in enumerate(values)],
    }
