"""
Data models for gold price provider results.
"""

import time
from dataclasses import dataclass, field

# Grams per troy ounce
OUNCE_TO_GRAM = 31.1034768


@dataclass
class GoldPriceQuote:
    """
    Gold price normalised to USD per gram.

    Attributes:
        price_per_gram: Spot price in USD per gram.
        provider: Provider that produced the quote (e.g. "GOLDAPI").
        source_unit: Unit the provider reported in ("oz_t", "gram", "inverse_rate", "default").
        fetched_at: Unix timestamp of the fetch.
    """

    price_per_gram: float
    provider: str
    source_unit: str
    fetched_at: float = field(default_factory=time.time)


def ounce_to_gram_price(price_per_ounce: float) -> float:
    """Convert a USD per troy ounce price to USD per gram."""
    return price_per_ounce / OUNCE_TO_GRAM
