# src/filters/catalog_filter.py

"""Search and category filtering over the fetched catalog."""

import logging
from collections.abc import Sequence

from src.models.product import Product

logger = logging.getLogger("catalog_manager.filters")


class CatalogFilter:
    """Derive the visible product subset and the category list."""

    @staticmethod
    def normalise_category(category: str | None) -> str | None:
        """Map the "All" selector to ``None``.

        An empty string and ``None`` both mean no category filter.
        """
        return category or None

    @staticmethod
    def filter_products(
        products: Sequence[Product],
        query: str,
        category: str | None = None,
    ) -> list[Product]:
        """Keep products whose title contains *query* and whose category matches.

        Title matching is a case-insensitive substring test on the raw
        query (no trimming).  Input order is preserved.
        """
        needle = query.lower()
        wanted = CatalogFilter.normalise_category(category)

        kept = [
            product
            for product in products
            if needle in product.title.lower()
            and (wanted is None or product.category == wanted)
        ]

        logger.debug(
            "Filter query=%r category=%r kept %d of %d products",
            query,
            wanted,
            len(kept),
            len(products),
        )
        return kept

    @staticmethod
    def unique_categories(products: Sequence[Product]) -> list[str]:
        """Return distinct categories in first-seen order."""
        seen: set[str] = set()
        categories: list[str] = []
        for product in products:
            if product.category not in seen:
                seen.add(product.category)
                categories.append(product.category)
        return categories

    @staticmethod
    def has_active_filters(query: str, category: str | None) -> bool:
        """True when either the search box or a category narrows the list."""
        return bool(query) or CatalogFilter.normalise_category(
            category
        ) is not None

    @staticmethod
    def summary(shown: int, total: int) -> str:
        return f"Showing {shown} of {total} products"
