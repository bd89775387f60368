"""
Gateway caching package.

Provides the item catalog cache used by the API Gateway to reduce latency
and load on the backend. The TTL is the only invalidation mechanism.
"""

from .item_cache import ItemCache, ItemCacheEntry

__all__ = ["ItemCache", "ItemCacheEntry"]
