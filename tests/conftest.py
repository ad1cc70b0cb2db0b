"""
Shared pytest fixtures.
"""

import pytest

from gold_catalog.catalog.models import Product
from gold_catalog.pricing.gold_price import GoldPriceAdapter
from gold_catalog.storage.price_cache import GoldPriceCache
from gold_catalog.utils.config_loader import AppConfig
from tests.fixtures.gold_mocks import CountingProvider, FakeClock


@pytest.fixture
def sample_products() -> list[Product]:
    """Small catalog with known prices at 60 USD/gram."""
    return [
        Product(1, "Solitaire", 5.0, 0.85, {"yellow": "https://img.test/1-y.jpg"}),
        Product(2, "Band", 2.0, 0.5, {"white": "https://img.test/2-w.jpg"}),
        Product(3, "Halo", 1.0, 0.95, {"rose": "https://img.test/3-r.jpg"}),
    ]


@pytest.fixture
def config() -> AppConfig:
    """Default configuration with logging left alone."""
    return AppConfig()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def counting_provider() -> CountingProvider:
    return CountingProvider(60.0)


@pytest.fixture
def price_adapter(counting_provider: CountingProvider, fake_clock: FakeClock) -> GoldPriceAdapter:
    """Adapter serving 60 USD/gram from a fake provider."""
    return GoldPriceAdapter(counting_provider, GoldPriceCache(ttl_seconds=300, clock=fake_clock))
