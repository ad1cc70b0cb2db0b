"""
Gold price provider module.

Retrieves the gold spot price from GoldAPI, Metals-API or a fixed development
default, and normalises every response to USD per gram.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from gold_catalog.exceptions import ConfigurationError, ProviderError
from gold_catalog.pricing.models import GoldPriceQuote, ounce_to_gram_price
from gold_catalog.utils.config_loader import GoldConfig


logger = logging.getLogger(__name__)


class GoldPriceProvider(ABC):
    """
    Base class for upstream gold price providers.

    Subclasses perform one HTTP call per ``fetch`` (no retries) and return a
    quote in USD per gram.

    Attributes:
        name: Provider identifier used in config and error messages.
        timeout: Request timeout in seconds.
        verify_tls: Whether to verify upstream TLS certificates.
        session: Requests session used for upstream calls.
    """

    name: str = "BASE"

    def __init__(
        self,
        timeout: float = 10.0,
        verify_tls: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.session = session or requests.Session()

    @abstractmethod
    def fetch(self) -> GoldPriceQuote:
        """
        Fetch the current gold price.

        Returns:
            GoldPriceQuote: Price normalised to USD per gram.

        Raises:
            ProviderError: If the upstream call fails or returns a malformed body.
            ConfigurationError: If required credentials are missing.
        """

    def is_configured(self) -> bool:
        """Check whether the provider has the credentials it needs."""
        return True

    def _get_json(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Perform a GET request and decode a JSON object body.

        Raises:
            ProviderError: On transport failure, non-2xx status or non-object JSON.
        """
        logger.info(f"Fetching gold price from {self.name}: {url}")

        try:
            response = self.session.get(
                url,
                headers=headers,
                params=params,
                timeout=self.timeout,
                verify=self.verify_tls,
            )
        except requests.exceptions.Timeout as e:
            raise ProviderError(
                f"{self.name} request timed out after {self.timeout}s", self.name
            ) from e
        except requests.exceptions.RequestException as e:
            # str(e) embeds the request URL, which carries the API key for some providers
            raise ProviderError(f"{self.name} request failed: {type(e).__name__}", self.name) from e

        if not 200 <= response.status_code < 300:
            body = response.text or ""
            raise ProviderError(
                f"{self.name} error {response.status_code}: {body[:200]}",
                self.name,
                status=response.status_code,
                body=body,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.name} returned a non-JSON body",
                self.name,
                status=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                f"Unexpected {self.name} response format",
                self.name,
                status=response.status_code,
                body=response.text,
            )
        return data

    def _positive_number(self, value: Any, field_name: str) -> float:
        """Coerce a response field to a positive float or raise ProviderError."""
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ProviderError(f"{self.name} returned non-numeric {field_name}: {value!r}", self.name)
        if not math.isfinite(number) or number <= 0:
            raise ProviderError(f"{self.name} returned invalid {field_name}: {value!r}", self.name)
        return number


class DefaultPriceProvider(GoldPriceProvider):
    """Fixed local price for development, no network access."""

    name = "DEFAULT"

    def __init__(self, price_per_gram: float = 80.0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.price_per_gram = price_per_gram

    def fetch(self) -> GoldPriceQuote:
        return GoldPriceQuote(self.price_per_gram, self.name, "default")


class ApiKeyProvider(GoldPriceProvider):
    """
    Provider authenticated with an API key.

    When the key is missing, ``missing_key_policy`` decides between serving
    ``default_price_per_gram`` ("fallback") and raising ConfigurationError ("fail").
    """

    key_env_var: str = ""
    default_base_url: str = ""
    default_missing_key_policy: str = "fail"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        missing_key_policy: Optional[str] = None,
        default_price_per_gram: float = 80.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.missing_key_policy = missing_key_policy or self.default_missing_key_policy
        self.default_price_per_gram = default_price_per_gram

    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def fetch(self) -> GoldPriceQuote:
        if not self.is_configured():
            if self.missing_key_policy == "fallback":
                logger.warning(
                    f"{self.key_env_var} not set. Falling back to local default price "
                    f"{self.default_price_per_gram} USD/gram."
                )
                return GoldPriceQuote(self.default_price_per_gram, self.name, "default")
            raise ConfigurationError(f"{self.key_env_var} env var not set")
        return self._fetch_with_key()

    @abstractmethod
    def _fetch_with_key(self) -> GoldPriceQuote:
        """Call the upstream API with the configured key."""


class GoldApiProvider(ApiKeyProvider):
    """
    Provider for goldapi.io.

    ``GET {base_url}/api/XAU/USD`` with an ``x-access-token`` header. The
    response carries ``price`` (usually per troy ounce, see ``unit``) and
    sometimes ``price_per_gram``.
    """

    name = "GOLDAPI"
    key_env_var = "GOLDAPI_KEY"
    default_base_url = "https://www.goldapi.io"
    default_missing_key_policy = "fallback"

    def _fetch_with_key(self) -> GoldPriceQuote:
        data = self._get_json(
            f"{self.base_url}/api/XAU/USD",
            headers={"x-access-token": self.api_key, "Accept": "application/json"},
        )

        unit = data.get("unit")
        if isinstance(unit, str) and "oz" in unit.lower():
            price = self._positive_number(data.get("price"), "price")
            return GoldPriceQuote(ounce_to_gram_price(price), self.name, "oz_t")
        if data.get("price_per_gram"):
            price = self._positive_number(data.get("price_per_gram"), "price_per_gram")
            return GoldPriceQuote(price, self.name, "gram")

        # No unit given: price is per troy ounce
        price = self._positive_number(data.get("price"), "price")
        return GoldPriceQuote(ounce_to_gram_price(price), self.name, "oz_t")


class MetalsApiProvider(ApiKeyProvider):
    """
    Provider for metals-api.com.

    ``GET {base_url}/api/latest?access_key=<key>&base=USD&symbols=XAU``. The
    response is either ``{"rates": {"XAU": r}}`` where ``r`` may be the
    inverse rate (ounces of gold per USD), or ``{"price": p}`` per ounce.
    """

    name = "METALSAPI"
    key_env_var = "METALS_API_KEY"
    default_base_url = "https://metals-api.com"
    default_missing_key_policy = "fail"

    def _fetch_with_key(self) -> GoldPriceQuote:
        data = self._get_json(
            f"{self.base_url}/api/latest",
            params={"access_key": self.api_key, "base": "USD", "symbols": "XAU"},
        )

        if data.get("success") is False:
            error = data.get("error")
            if isinstance(error, dict):
                error = error.get("info") or error.get("type")
            raise ProviderError(f"Metals-API error: {error}", self.name, body=str(data))

        rates = data.get("rates")
        xau = rates.get("XAU") if isinstance(rates, dict) else None
        if xau:
            rate = self._positive_number(xau, "rates.XAU")
            if rate < 1:
                # 1 USD buys `rate` ounces, so one ounce costs 1 / rate USD
                return GoldPriceQuote(ounce_to_gram_price(1 / rate), self.name, "inverse_rate")
            return GoldPriceQuote(ounce_to_gram_price(rate), self.name, "oz_t")
        if data.get("price"):
            price = self._positive_number(data.get("price"), "price")
            return GoldPriceQuote(ounce_to_gram_price(price), self.name, "oz_t")

        raise ProviderError("Unexpected metals-api response format", self.name, body=str(data))


def create_provider(
    gold_config: GoldConfig,
    session: Optional[requests.Session] = None,
) -> GoldPriceProvider:
    """
    Build the provider selected by ``gold_config.provider``.

    Args:
        gold_config: Gold price configuration.
        session: Optional requests session (shared or mocked).

    Returns:
        GoldPriceProvider for the configured provider id. Unknown ids get the
        fixed default provider.
    """
    provider_id = (gold_config.provider or "").strip().upper()
    verify_tls = not gold_config.disable_tls_verify
    if not verify_tls:
        logger.warning("TLS verification disabled for gold price providers (dev only, insecure)")
        urllib3.disable_warnings(InsecureRequestWarning)

    common: dict[str, Any] = {
        "timeout": gold_config.timeout_seconds,
        "verify_tls": verify_tls,
        "session": session,
    }

    if provider_id == "GOLDAPI":
        provider: GoldPriceProvider = GoldApiProvider(
            api_key=gold_config.goldapi_key,
            base_url=gold_config.goldapi.base_url,
            missing_key_policy=gold_config.goldapi.missing_key_policy,
            default_price_per_gram=gold_config.default_price_per_gram,
            **common,
        )
    elif provider_id == "METALSAPI":
        provider = MetalsApiProvider(
            api_key=gold_config.metals_api_key,
            base_url=gold_config.metalsapi.base_url,
            missing_key_policy=gold_config.metalsapi.missing_key_policy,
            default_price_per_gram=gold_config.default_price_per_gram,
            **common,
        )
    elif provider_id == "DEFAULT":
        provider = DefaultPriceProvider(gold_config.default_price_per_gram, **common)
    else:
        logger.warning(
            f"Unknown gold price provider {gold_config.provider!r}, serving default price "
            f"{gold_config.default_price_per_gram} USD/gram (supported: GOLDAPI, METALSAPI, DEFAULT)"
        )
        provider = DefaultPriceProvider(gold_config.default_price_per_gram, **common)

    if not provider.is_configured():
        policy = getattr(provider, "missing_key_policy", "fail")
        logger.warning(
            f"No API key configured for {provider.name}; missing_key_policy={policy} "
            f"({'default price will be served' if policy == 'fallback' else 'requests will fail'})"
        )

    logger.info(f"Gold price provider: {provider.name}")
    return provider
