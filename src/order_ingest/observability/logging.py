"""
order_ingest.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Route structlog through stdlib logging to stdout.
- Render JSON lines for log shipping, or a readable console format for local runs.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog

# Loggers from libraries that are noisy at INFO (group coordination, pool checkouts).
_QUIET_LIBRARIES = ("kafka", "aiosqlite")


def configure_logging(
    *,
    service_name: str,
    level: str,
    fmt: Literal["json", "console"] = "json",
) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: Any
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks if fmt == "json" else _passthrough,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _passthrough(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # ConsoleRenderer formats exc_info itself.
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
