"""
order_ingest.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the ORM model, engine/session setup, the orders repository and the
  persistent store facade used by ingestion and queries.
"""
