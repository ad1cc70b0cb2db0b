"""
Tests for the gold price adapter.
"""

import pytest

from gold_catalog.exceptions import ProviderError
from gold_catalog.pricing.gold_price import GoldPriceAdapter, build_price_adapter
from gold_catalog.pricing.providers import DefaultPriceProvider, GoldApiProvider
from gold_catalog.storage.price_cache import GoldPriceCache
from gold_catalog.utils.config_loader import AppConfig
from tests.fixtures.gold_mocks import (
    GOLDAPI_OUNCE_RESPONSE,
    PRICE_PER_GRAM,
    CountingProvider,
    FakeClock,
    FakeResponse,
    FakeSession,
)


class TestGoldPriceAdapter:
    """Tests for GoldPriceAdapter."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    def test_override_bypasses_provider_and_cache(self, clock) -> None:
        provider = CountingProvider(60.0)
        cache = GoldPriceCache(clock=clock)
        adapter = GoldPriceAdapter(provider, cache, fixed_price_per_gram=55.5)

        assert adapter.get_price_per_gram() == 55.5
        assert adapter.get_price_per_gram() == 55.5
        assert provider.calls == 0
        assert cache.peek() is None

    def test_idempotent_within_ttl(self, clock) -> None:
        provider = CountingProvider(60.0, 70.0)
        adapter = GoldPriceAdapter(provider, GoldPriceCache(ttl_seconds=300, clock=clock))

        first = adapter.get_price_per_gram()
        clock.advance(299)
        second = adapter.get_price_per_gram()

        assert first == second == 60.0
        assert provider.calls == 1

    def test_single_refetch_after_ttl(self, clock) -> None:
        provider = CountingProvider(60.0, 70.0)
        adapter = GoldPriceAdapter(provider, GoldPriceCache(ttl_seconds=300, clock=clock))

        adapter.get_price_per_gram()
        clock.advance(300)

        assert adapter.get_price_per_gram() == 70.0
        assert adapter.get_price_per_gram() == 70.0
        assert provider.calls == 2

    def test_price_info_sources(self, clock) -> None:
        adapter = GoldPriceAdapter(CountingProvider(60.0), GoldPriceCache(clock=clock))

        first = adapter.get_price_info()
        second = adapter.get_price_info()

        assert first["source"] == "upstream"
        assert second["source"] == "cache"
        assert second["provider"] == "FAKE"
        assert second["source_unit"] == "gram"
        assert second["cache"]["hits"] == 1

    def test_price_info_override(self, clock) -> None:
        adapter = GoldPriceAdapter(CountingProvider(60.0), GoldPriceCache(clock=clock), fixed_price_per_gram=42.0)

        info = adapter.get_price_info()

        assert info["price_per_gram"] == 42.0
        assert info["source"] == "override"
        assert info["source_unit"] is None

    def test_provider_error_not_cached(self, clock) -> None:
        error = ProviderError("GOLDAPI error 429: too many requests", "GOLDAPI", status=429)
        provider = CountingProvider(error=error)
        adapter = GoldPriceAdapter(provider, GoldPriceCache(clock=clock))

        with pytest.raises(ProviderError):
            adapter.get_price_per_gram()
        with pytest.raises(ProviderError):
            adapter.get_price_per_gram()
        assert provider.calls == 2


class TestBuildPriceAdapter:
    """Tests for build_price_adapter."""

    def test_builds_goldapi_adapter_with_session(self) -> None:
        config = AppConfig()
        config.gold.goldapi_key = "key-123"
        session = FakeSession(FakeResponse(200, GOLDAPI_OUNCE_RESPONSE))

        adapter = build_price_adapter(config, session=session)

        assert isinstance(adapter.provider, GoldApiProvider)
        assert adapter.get_price_per_gram() == pytest.approx(PRICE_PER_GRAM)
        assert len(session.calls) == 1

    def test_cache_uses_configured_ttl(self) -> None:
        config = AppConfig()
        config.gold.cache_ttl_seconds = 30
        adapter = build_price_adapter(config)
        assert adapter.cache.ttl_seconds == 30

    def test_fixed_price_passed_through(self) -> None:
        config = AppConfig()
        config.gold.provider = "DEFAULT"
        config.gold.fixed_price_per_gram = 65.0

        adapter = build_price_adapter(config)

        assert isinstance(adapter.provider, DefaultPriceProvider)
        assert adapter.get_price_per_gram() == 65.0

    def test_default_provider_serves_80(self) -> None:
        config = AppConfig()
        config.gold.provider = "DEFAULT"
        assert build_price_adapter(config).get_price_per_gram() == 80.0

    def test_unknown_provider_serves_default(self) -> None:
        config = AppConfig()
        config.gold.provider = "BOGUS"

        adapter = build_price_adapter(config)

        assert isinstance(adapter.provider, DefaultPriceProvider)
        assert adapter.get_price_per_gram() == 80.0
