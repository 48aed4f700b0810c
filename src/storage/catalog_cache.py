# src/storage/catalog_cache.py

"""In-memory cache for the catalog list fetch."""

import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("catalog_manager.cache")


@dataclass
class CacheEntry:
    """The last fetched catalog and when it was fetched."""

    products: list[Product]
    timestamp: float


class CatalogCache:
    """Keep the fetched catalog for a short while.

    The list screen re-reads the catalog on every refresh; within the TTL
    the cached copy is served instead of another round trip.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._entry: CacheEntry | None = None
        self._ttl: float = (
            Settings.CATALOG_CACHE_TTL if ttl is None else ttl
        )

    def get(self) -> list[Product] | None:
        """Return a copy of the cached catalog, or ``None`` if stale/empty."""
        if self._entry is None:
            return None
        age = time.time() - self._entry.timestamp
        if age >= self._ttl:
            logger.debug("Catalog cache expired (age %.1fs)", age)
            self._entry = None
            return None
        logger.info(
            "Catalog cache hit (%d products, age %.1fs)",
            len(self._entry.products),
            age,
        )
        return list(self._entry.products)

    def store(self, products: list[Product]) -> None:
        self._entry = CacheEntry(
            products=list(products), timestamp=time.time()
        )
        logger.info("Cached %d products", len(products))

    def clear(self) -> int:
        """Drop the cached catalog.

        Returns the number of products that were discarded.
        """
        count = len(self._entry.products) if self._entry else 0
        self._entry = None
        logger.info("Catalog cache purged (%d products removed)", count)
        return count
