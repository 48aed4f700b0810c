# src/models/product.py

"""Product data model shared by the API client, filters, forms and UI."""

from dataclasses import dataclass, field
from typing import Any

from src.config.settings import Settings


@dataclass
class Rating:
    """Server-owned review summary; never edited through the form."""

    rate: float = 0.0
    count: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Rating":
        """Parse a ``{"rate": .., "count": ..}`` mapping, defaulting to zero."""
        if not isinstance(data, dict):
            return cls()
        try:
            return cls(
                rate=float(data.get("rate", 0) or 0),
                count=int(data.get("count", 0) or 0),
            )
        except (TypeError, ValueError):
            return cls()

    def to_dict(self) -> dict[str, float | int]:
        return {"rate": self.rate, "count": self.count}


@dataclass
class Product:
    """A single catalog record as served by the remote product API."""

    title: str
    price: float
    description: str = ""
    category: str = ""
    image: str = ""
    id: int = 0
    rating: Rating = field(default_factory=Rating)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from a JSON record, tolerating missing keys."""
        try:
            price = float(data.get("price", 0) or 0)
        except (TypeError, ValueError):
            price = 0.0
        try:
            product_id = int(data.get("id", 0) or 0)
        except (TypeError, ValueError):
            product_id = 0
        return cls(
            id=product_id,
            title=str(data.get("title", "") or ""),
            price=price,
            description=str(data.get("description", "") or ""),
            category=str(data.get("category", "") or ""),
            image=str(data.get("image", "") or ""),
            rating=Rating.from_dict(data.get("rating")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON body the product API accepts."""
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "rating": self.rating.to_dict(),
        }

    @property
    def is_popular(self) -> bool:
        return self.rating.rate > Settings.POPULAR_RATING

    @property
    def free_shipping(self) -> bool:
        return self.price > Settings.FREE_SHIPPING_PRICE


def format_price(price: float) -> str:
    """Render a price the way the storefront shows it, e.g. ``$109.95``."""
    return f"${price:,.2f}"


def display_category(category: str) -> str:
    """Capitalise only the first letter (``men's clothing`` -> ``Men's clothing``)."""
    if not category:
        return ""
    return category[0].upper() + category[1:]
