"""
order_ingest.api.__main__

Entrypoint for running the service via `python -m order_ingest.api`.

Responsibilities:
- Load settings.
- Create the app (which also starts the stream subscription).
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from order_ingest.api.app import create_app
from order_ingest.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
