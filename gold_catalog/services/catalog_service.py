"""
Catalog Service for the Gold Catalog API.

Handles the price enrichment logic, extracted from routes for:
- Better testability
- Separation of concerns
- Reuse from the CLI
"""

import logging
from typing import Optional, Sequence

from gold_catalog.catalog.filters import ProductFilters
from gold_catalog.catalog.models import CatalogListing, EnrichedProduct, Product
from gold_catalog.pricing.gold_price import GoldPriceAdapter
from gold_catalog.pricing.pricing_engine import (
    calculate_price_usd,
    popularity_out_of_5,
    round_gold_price,
)

logger = logging.getLogger(__name__)


def enrich_product(product: Product, gold_price_per_gram: float) -> EnrichedProduct:
    """
    Attach the derived price and rating to a product.

    Args:
        product: Static catalog product.
        gold_price_per_gram: Gold price in USD per gram.

    Returns:
        EnrichedProduct with price_usd and popularity_out_of_5.
    """
    return EnrichedProduct(
        product=product,
        price_usd=calculate_price_usd(product.popularity_score, product.weight, gold_price_per_gram),
        popularity_out_of_5=popularity_out_of_5(product.popularity_score),
    )


class CatalogService:
    """
    Service for listing catalog products priced from the live gold price.

    Handles:
    - Gold price lookup (via the price adapter and its cache)
    - Price and rating enrichment
    - Range filtering
    """

    def __init__(self, products: Sequence[Product], price_adapter: GoldPriceAdapter):
        """
        Initialize catalog service.

        Args:
            products: Static product list, in display order.
            price_adapter: Source of the gold price per gram.
        """
        self.products = tuple(products)
        self.price_adapter = price_adapter

    def list_products(self, filters: Optional[ProductFilters] = None) -> CatalogListing:
        """
        List enriched products matching the filters.

        Args:
            filters: Optional inclusive price/popularity bounds.

        Returns:
            CatalogListing with the rounded gold price and matching products.

        Raises:
            ProviderError: If the gold price cannot be fetched.
            ConfigurationError: If the provider is missing credentials.
        """
        filters = filters or ProductFilters()
        gold_price = self.price_adapter.get_price_per_gram()

        enriched = [enrich_product(p, gold_price) for p in self.products]
        if not filters.is_empty():
            enriched = filters.apply(enriched)
            logger.debug(f"Filters {filters} matched {len(enriched)}/{len(self.products)} products")

        return CatalogListing(
            gold_price_per_gram=round_gold_price(gold_price),
            products=enriched,
        )
