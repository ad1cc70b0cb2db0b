"""
Mock responses for gold price provider calls.

Provides canned GoldAPI / Metals-API payloads and a fake requests session.
"""

import json
from typing import Any, Optional
from unittest.mock import patch

import requests

from gold_catalog.pricing.models import OUNCE_TO_GRAM, GoldPriceQuote

# Ounce price that normalises to exactly 60 USD/gram
PRICE_PER_GRAM = 60.0
PRICE_PER_OUNCE = PRICE_PER_GRAM * OUNCE_TO_GRAM

GOLDAPI_OUNCE_RESPONSE = {
    "timestamp": 1700000000,
    "metal": "XAU",
    "currency": "USD",
    "price": PRICE_PER_OUNCE,
    "unit": "oz_t",
}

GOLDAPI_GRAM_RESPONSE = {
    "metal": "XAU",
    "currency": "USD",
    "price": PRICE_PER_OUNCE,
    "unit": "g",
    "price_per_gram": 61.25,
}

METALSAPI_INVERSE_RATE_RESPONSE = {
    "success": True,
    "base": "USD",
    "rates": {"XAU": 1 / PRICE_PER_OUNCE},
    "unit": "per troy ounce",
}

METALSAPI_DIRECT_RATE_RESPONSE = {
    "success": True,
    "base": "USD",
    "rates": {"XAU": PRICE_PER_OUNCE},
}

METALSAPI_ERROR_RESPONSE = {
    "success": False,
    "error": {"code": 101, "type": "invalid_access_key", "info": "You have not supplied a valid API Access Key."},
}


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self._body = body if body is not None else {}
        self.text = self._body if isinstance(self._body, str) else json.dumps(self._body)

    def json(self):
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body


class FakeSession:
    """Records GET calls and replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs):
        self.calls.append({"url": url, **kwargs})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class CountingProvider:
    """Provider double that returns a sequence of prices and counts fetches."""

    name = "FAKE"

    def __init__(self, *prices: float, error: Optional[Exception] = None):
        self.prices = list(prices) or [PRICE_PER_GRAM]
        self.error = error
        self.calls = 0

    def is_configured(self) -> bool:
        return True

    def fetch(self) -> GoldPriceQuote:
        self.calls += 1
        if self.error is not None:
            raise self.error
        price = self.prices[min(self.calls, len(self.prices)) - 1]
        return GoldPriceQuote(price, self.name, "gram")


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def patch_session_get(*responses):
    """
    Patch requests.Session.get for code that builds its own session.

    Usage:
        with patch_session_get(FakeResponse(200, GOLDAPI_OUNCE_RESPONSE)) as mock_get:
            ...
    """
    return patch.object(requests.Session, "get", side_effect=list(responses))
