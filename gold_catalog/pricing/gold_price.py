"""
Gold price adapter.

Resolves the gold price per gram in this order:
1. Fixed override from configuration (no cache, no network)
2. Cached value younger than the TTL
3. One call to the configured upstream provider, stored in the cache
"""

import logging
from typing import Any, Optional, Tuple

import requests

from gold_catalog.pricing.providers import GoldPriceProvider, create_provider
from gold_catalog.storage.price_cache import GoldPriceCache
from gold_catalog.utils.config_loader import AppConfig


logger = logging.getLogger(__name__)


class GoldPriceAdapter:
    """
    Source of the current gold price in USD per gram.

    Attributes:
        provider: Upstream provider used on cache misses.
        cache: Single-slot TTL cache shared across requests.
        fixed_price_per_gram: Optional override that bypasses cache and provider.
    """

    def __init__(
        self,
        provider: GoldPriceProvider,
        cache: GoldPriceCache,
        fixed_price_per_gram: Optional[float] = None,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            provider: Upstream gold price provider.
            cache: Price cache created at process start.
            fixed_price_per_gram: Optional fixed price override.
        """
        self.provider = provider
        self.cache = cache
        self.fixed_price_per_gram = fixed_price_per_gram

    def _resolve(self) -> Tuple[float, str]:
        if self.fixed_price_per_gram is not None:
            return self.fixed_price_per_gram, "override"

        entry, from_cache = self.cache.get_or_fetch(self.provider.fetch)
        if from_cache:
            logger.debug(f"Gold price served from cache: {entry.price_per_gram:.4f} USD/g")
            return entry.price_per_gram, "cache"

        logger.info(
            f"Fetched gold price from {entry.provider}: {entry.price_per_gram:.4f} USD/g "
            f"(source unit: {entry.source_unit})"
        )
        return entry.price_per_gram, "upstream"

    def get_price_per_gram(self) -> float:
        """
        Get the current gold price per gram in USD.

        Returns:
            float: Price per gram.

        Raises:
            ProviderError: If the upstream call fails.
            ConfigurationError: If the provider lacks required credentials.
        """
        price, _ = self._resolve()
        return price

    def get_price_info(self) -> dict[str, Any]:
        """
        Get the current price with information about where it came from.

        Returns:
            dict: Price, source (override/cache/upstream), provider and cache stats.
        """
        price, source = self._resolve()
        entry = self.cache.peek()
        return {
            "price_per_gram": price,
            "source": source,
            "provider": self.provider.name,
            "source_unit": entry.source_unit if entry and source != "override" else None,
            "cache": self.cache.get_stats(),
        }


def build_price_adapter(
    config: AppConfig,
    session: Optional[requests.Session] = None,
    cache: Optional[GoldPriceCache] = None,
) -> GoldPriceAdapter:
    """
    Build the gold price adapter from application configuration.

    Args:
        config: Application configuration.
        session: Optional requests session for the provider.
        cache: Optional pre-built cache (defaults to one using the configured TTL).

    Returns:
        GoldPriceAdapter ready for use.
    """
    provider = create_provider(config.gold, session=session)
    cache = cache or GoldPriceCache(ttl_seconds=config.gold.cache_ttl_seconds)

    fixed_price = config.gold.fixed_price_per_gram
    if fixed_price is not None:
        logger.info(f"Using fixed gold price override: {fixed_price} USD/g")

    return GoldPriceAdapter(provider, cache, fixed_price_per_gram=fixed_price)
