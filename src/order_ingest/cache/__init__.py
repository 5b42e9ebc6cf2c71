"""
order_ingest.cache

Read cache package.
"""

from order_ingest.cache.read_cache import ReadCache

__all__ = ["ReadCache"]
