"""
order_ingest.api.routers

FastAPI routers.
"""
