"""
order_ingest.messaging

Message stream subscription that feeds the ingestion pipeline.
"""

from order_ingest.messaging.consumer import OrderStreamConsumer

__all__ = ["OrderStreamConsumer"]
