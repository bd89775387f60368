"""
Time-bounded cache for the backend item catalog.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence, Tuple, TYPE_CHECKING

from shared.config import DEFAULT_ITEM_CACHE_TTL_MS
from shared.logging import get_logger
from servex_gateway.app.domain.normalizer import Item

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


CACHE_TYPE = "items"

CatalogFetcher = Callable[[], Awaitable[Sequence[Item]]]
Clock = Callable[[], int]


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass(frozen=True)
class ItemCacheEntry:
    """One catalog snapshot and the time its fetch started."""

    items: Tuple[Item, ...] = ()
    fetched_at_ms: int = 0


class ItemCache:
    """Process-wide memoization of the item catalog.

    A non-empty snapshot younger than ``ttl_ms`` is served as is. Otherwise
    the catalog is fetched; a successful fetch replaces the entry in one
    assignment, a failed one propagates and leaves the entry untouched so
    the next call retries.

    Concurrent callers hitting an expired entry each trigger their own
    fetch; refreshes are not coalesced.
    """

    def __init__(
        self,
        fetch: CatalogFetcher,
        *,
        ttl_ms: int = DEFAULT_ITEM_CACHE_TTL_MS,
        clock: Optional[Clock] = None,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self._fetch = fetch
        self.ttl_ms = ttl_ms
        self._clock = clock or monotonic_ms
        self.metrics = metrics
        self.logger = get_logger("gateway.item_cache")
        self._entry = ItemCacheEntry()

    @property
    def entry(self) -> ItemCacheEntry:
        return self._entry

    def is_fresh(self, now_ms: int) -> bool:
        entry = self._entry
        return bool(entry.items) and now_ms - entry.fetched_at_ms < self.ttl_ms

    async def get_items(self) -> Tuple[Item, ...]:
        """Return the current catalog, refreshing it when stale or empty."""
        now = self._clock()
        if self.is_fresh(now):
            self._count("cache_hits_total")
            return self._entry.items

        self._count("cache_misses_total")
        try:
            items = tuple(await self._fetch())
        except Exception as exc:
            self._count("cache_refresh_failures_total")
            self.logger.warning(
                "Item catalog refresh failed",
                error=str(exc),
                cached_items=len(self._entry.items),
            )
            raise

        self._entry = ItemCacheEntry(items=items, fetched_at_ms=now)
        self.logger.info("Item catalog refreshed", items=len(items))
        return items

    def invalidate(self) -> None:
        """Drop the snapshot so the next call fetches."""
        self._entry = ItemCacheEntry()

    def _count(self, metric_name: str) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, cache_type=CACHE_TYPE)
