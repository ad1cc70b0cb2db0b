"""
Storage modules for in-process state.
"""

from gold_catalog.storage.price_cache import CachedGoldPrice, GoldPriceCache

__all__ = [
    "CachedGoldPrice",
    "GoldPriceCache",
]
