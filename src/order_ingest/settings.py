"""
order_ingest.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the store, the stream subscription and the API.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    All values are read from `ORDERS_*` environment variables.
    Defaults target a local single-node setup.
    """

    model_config = SettingsConfigDict(env_prefix="ORDERS_", case_sensitive=False)

    # dev/test auto-create the orders table on startup.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "order-ingest"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    api_host: str = "127.0.0.1"
    api_port: int = 8081

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./orders.db"

    # Message stream
    stream_enabled: bool = True
    stream_bootstrap_servers: str = "localhost:9092"
    stream_topic: str = "orders"
    # Consumer group id; the broker checkpoints offsets under this name.
    stream_durable_name: str = "sub-1-durable"
    stream_client_id: str = "sub-1"
    stream_start_position: Literal["latest", "earliest"] = "latest"
    stream_poll_timeout_ms: int = Field(default=1000, ge=0)
    stream_max_poll_records: int = Field(default=100, ge=1)
    stream_max_in_flight: int = Field(default=16, ge=1)
    stream_error_backoff_seconds: float = Field(default=5.0, ge=0)
    # Extra wait, beyond one poll timeout, for the loop to finish its batch on stop().
    stream_shutdown_grace_seconds: float = Field(default=10.0, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
