"""
Data models for catalog products.

Contains typed dataclasses for the static product list and its enriched,
per-request form.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

IMAGE_COLORS = ("yellow", "white", "rose")


@dataclass(frozen=True)
class Product:
    """
    Static catalog product, immutable for the process lifetime.

    Attributes:
        id: Product identifier.
        name: Display name.
        weight: Gold weight in grams.
        popularity_score: Popularity in [0, 1].
        images: Colour variant ("yellow", "white", "rose") to image URL.
    """

    id: int | str
    name: str
    weight: float
    popularity_score: float
    images: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", MappingProxyType(dict(self.images)))

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_id: int) -> "Product":
        """
        Create a Product from a catalog JSON entry.

        Args:
            data: Raw entry (already validated).
            default_id: Identifier used when the entry has none.

        Returns:
            Product: Parsed product.
        """
        return cls(
            id=data.get("id", default_id),
            name=data["name"],
            weight=float(data["weight"]),
            popularity_score=float(data["popularityScore"]),
            images=dict(data.get("images") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the catalog JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "weight": self.weight,
            "popularityScore": self.popularity_score,
            "images": dict(self.images),
        }


@dataclass
class EnrichedProduct:
    """
    Product with its derived price and rating. Built per request, never stored.

    Attributes:
        product: Source catalog product.
        price_usd: Price in USD rounded to 2 decimals.
        popularity_out_of_5: Rating on a 0-5 scale rounded to 1 decimal.
    """

    product: Product
    price_usd: float
    popularity_out_of_5: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API JSON shape."""
        return {
            **self.product.to_dict(),
            "priceUsd": self.price_usd,
            "popularityOutOf5": self.popularity_out_of_5,
        }


@dataclass
class CatalogListing:
    """Response envelope for a product listing."""

    gold_price_per_gram: float
    products: list[EnrichedProduct] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.products)

    def to_dict(self) -> dict[str, Any]:
        return {
            "goldPricePerGram": self.gold_price_per_gram,
            "count": self.count,
            "products": [p.to_dict() for p in self.products],
        }
