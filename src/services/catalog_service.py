# src/services/catalog_service.py

"""Coordinates catalog loading, filtering, and product submissions."""

import asyncio
import logging
from dataclasses import dataclass, field

from src.clients.product_api import ProductApiClient
from src.filters.catalog_filter import CatalogFilter
from src.forms.product_form import FormState, build_payload
from src.models.product import Product
from src.storage.catalog_cache import CatalogCache

logger = logging.getLogger("catalog_manager.service")


@dataclass
class CatalogView:
    """What the list screen renders for one (query, category) pair."""

    query: str
    category: str | None
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    categories: list[str] = field(
        default_factory=lambda: list[str]()
    )
    total: int = 0

    @property
    def summary(self) -> str:
        return CatalogFilter.summary(len(self.products), self.total)

    @property
    def filtered(self) -> bool:
        return CatalogFilter.has_active_filters(self.query, self.category)


class CatalogService:
    """Glue between the API client, the cache, and the pure filters.

    Blocking client calls are pushed onto worker threads so the Textual
    event loop stays responsive.
    """

    def __init__(
        self,
        client: ProductApiClient | None = None,
        cache: CatalogCache | None = None,
    ) -> None:
        self.client = client or ProductApiClient()
        self.cache = cache or CatalogCache()
        self.catalog: list[Product] = []

    def load_catalog(self, force: bool = False) -> list[Product]:
        """Return the catalog, from cache unless *force* or stale."""
        cached = None if force else self.cache.get()
        if cached is not None:
            self.catalog = cached
            return list(cached)

        products = self.client.fetch_products()
        if products:
            self.cache.store(products)
        self.catalog = products
        return list(products)

    def view(self, query: str = "", category: str | None = None) -> CatalogView:
        """Filter the loaded catalog for display."""
        wanted = CatalogFilter.normalise_category(category)
        return CatalogView(
            query=query,
            category=wanted,
            products=CatalogFilter.filter_products(
                self.catalog, query, wanted
            ),
            categories=CatalogFilter.unique_categories(self.catalog),
            total=len(self.catalog),
        )

    def get_product(self, product_id: int) -> Product | None:
        return self.client.fetch_product(product_id)

    def submit(self, state: FormState) -> Product | None:
        """Create or update from a validated form state.

        A draft with ``id == 0`` is created, anything else is updated.
        Returns the server's record, or ``None`` if the API refused.
        """
        payload = build_payload(state)
        if state.draft.id:
            result = self.client.update_product(state.draft.id, payload)
        else:
            result = self.client.create_product(payload)
        if result is not None:
            self.cache.clear()
        else:
            logger.warning(
                "Submission failed for draft id=%d", state.draft.id
            )
        return result

    def delete(self, product_id: int) -> bool:
        deleted = self.client.delete_product(product_id)
        if deleted:
            self.cache.clear()
        return deleted

    # ── Async wrappers for the TUI ───────────────────────

    async def load_catalog_async(self, force: bool = False) -> list[Product]:
        return await asyncio.to_thread(self.load_catalog, force)

    async def get_product_async(self, product_id: int) -> Product | None:
        return await asyncio.to_thread(self.get_product, product_id)

    async def submit_async(self, state: FormState) -> Product | None:
        return await asyncio.to_thread(self.submit, state)

    async def delete_async(self, product_id: int) -> bool:
        return await asyncio.to_thread(self.delete, product_id)
