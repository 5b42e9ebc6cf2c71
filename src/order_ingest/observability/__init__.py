"""
order_ingest.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Log context propagation for HTTP requests and stream messages.
"""
