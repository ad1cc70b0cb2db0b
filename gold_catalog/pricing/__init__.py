"""
Pricing module.

Handles gold price retrieval from upstream providers and the derived product
pricing formula.
"""

from gold_catalog.pricing.gold_price import GoldPriceAdapter, build_price_adapter
from gold_catalog.pricing.models import OUNCE_TO_GRAM, GoldPriceQuote
from gold_catalog.pricing.pricing_engine import calculate_price_usd, popularity_out_of_5
from gold_catalog.pricing.providers import (
    DefaultPriceProvider,
    GoldApiProvider,
    GoldPriceProvider,
    MetalsApiProvider,
    create_provider,
)

__all__ = [
    "GoldPriceAdapter",
    "build_price_adapter",
    "GoldPriceQuote",
    "OUNCE_TO_GRAM",
    "calculate_price_usd",
    "popularity_out_of_5",
    "GoldPriceProvider",
    "GoldApiProvider",
    "MetalsApiProvider",
    "DefaultPriceProvider",
    "create_provider",
]
