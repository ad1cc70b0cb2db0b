"""
Configuration loader module.

Loads application configuration from YAML files and environment variables.
Environment variables (optionally read from a .env file) take precedence over
values from the YAML file.
"""

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Packaged default catalog
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "products.json"

MISSING_KEY_POLICIES = ("fallback", "fail")


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class ProviderEndpointConfig:
    """Settings for a single upstream gold price provider."""

    base_url: str = ""
    missing_key_policy: str = "fail"  # "fallback" or "fail"


@dataclass
class GoldConfig:
    """Gold price provider configuration."""

    provider: str = "GOLDAPI"  # "GOLDAPI", "METALSAPI" or "DEFAULT"
    goldapi_key: str = ""
    metals_api_key: str = ""
    fixed_price_per_gram: float | None = None
    disable_tls_verify: bool = False
    cache_ttl_seconds: float = 300.0
    timeout_seconds: float = 10.0
    default_price_per_gram: float = 80.0
    goldapi: ProviderEndpointConfig = field(
        default_factory=lambda: ProviderEndpointConfig("https://www.goldapi.io", "fallback")
    )
    metalsapi: ProviderEndpointConfig = field(
        default_factory=lambda: ProviderEndpointConfig("https://metals-api.com", "fail")
    )


@dataclass
class CatalogConfig:
    """Static product catalog configuration."""

    path: str = str(DEFAULT_CATALOG_PATH)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "text"  # "text" or "json"
    file: str | None = None


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all configuration sections into a single object.
    """

    server: ServerConfig = field(default_factory=ServerConfig)
    gold: GoldConfig = field(default_factory=GoldConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_env(env_file: Path = Path(".env")) -> None:
    """
    Load environment variables from .env file.

    Args:
        env_file: Path to .env file.
    """
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug(f"Loaded environment from: {env_file}")
    else:
        logger.debug(f"No .env file found at: {env_file}")


def load_config(
    config_file: Path = Path("config/config.yaml"),
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """
    Load application configuration from YAML file and environment.

    Args:
        config_file: Path to configuration YAML file.
        environ: Environment mapping to read overrides from (defaults to os.environ).

    Returns:
        AppConfig: Loaded configuration object.

    Raises:
        yaml.YAMLError: If config file is invalid.
    """
    if not config_file.exists():
        logger.debug(f"Config file not found: {config_file}. Using defaults.")
        raw_config: dict[str, Any] = {}
    else:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
        logger.info(f"Loaded configuration from: {config_file}")

    config = _parse_config(raw_config)
    _apply_env_overrides(config, os.environ if environ is None else environ)
    return config


def _parse_config(raw: dict[str, Any]) -> AppConfig:
    """
    Parse raw YAML dict into AppConfig dataclass.

    Args:
        raw: Raw dictionary from YAML file.

    Returns:
        AppConfig: Parsed configuration object.
    """
    server_raw = raw.get("server") or {}
    server = ServerConfig(
        host=server_raw.get("host", "0.0.0.0"),
        port=int(server_raw.get("port", 4000)),
        cors_origins=list(server_raw.get("cors_origins", ["*"])),
    )

    gold_raw = raw.get("gold") or {}
    goldapi_raw = gold_raw.get("goldapi") or {}
    metalsapi_raw = gold_raw.get("metalsapi") or {}
    gold = GoldConfig(
        provider=str(gold_raw.get("provider", "GOLDAPI")),
        fixed_price_per_gram=parse_price_override(gold_raw.get("fixed_price_per_gram")),
        disable_tls_verify=bool(gold_raw.get("disable_tls_verify", False)),
        cache_ttl_seconds=float(gold_raw.get("cache_ttl_seconds", 300.0)),
        timeout_seconds=float(gold_raw.get("timeout_seconds", 10.0)),
        default_price_per_gram=float(gold_raw.get("default_price_per_gram", 80.0)),
        goldapi=ProviderEndpointConfig(
            base_url=goldapi_raw.get("base_url", "https://www.goldapi.io"),
            missing_key_policy=_parse_policy(goldapi_raw.get("missing_key_policy", "fallback")),
        ),
        metalsapi=ProviderEndpointConfig(
            base_url=metalsapi_raw.get("base_url", "https://metals-api.com"),
            missing_key_policy=_parse_policy(metalsapi_raw.get("missing_key_policy", "fail")),
        ),
    )

    catalog_raw = raw.get("catalog") or {}
    catalog = CatalogConfig(path=str(catalog_raw.get("path", DEFAULT_CATALOG_PATH)))

    logging_raw = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_raw.get("level", "INFO"),
        format=logging_raw.get("format", "text"),
        file=logging_raw.get("file"),
    )

    return AppConfig(server=server, gold=gold, catalog=catalog, logging=logging_config)


def _apply_env_overrides(config: AppConfig, environ: Any) -> None:
    """Apply environment variable overrides in place."""
    if environ.get("HOST"):
        config.server.host = environ["HOST"]
    if environ.get("PORT"):
        try:
            config.server.port = int(environ["PORT"])
        except ValueError:
            logger.warning(f"Ignoring invalid PORT value: {environ['PORT']!r}")

    if environ.get("PROVIDER"):
        config.gold.provider = environ["PROVIDER"]
    config.gold.goldapi_key = environ.get("GOLDAPI_KEY", config.gold.goldapi_key)
    config.gold.metals_api_key = environ.get("METALS_API_KEY", config.gold.metals_api_key)
    if environ.get("GOLD_PRICE_PER_GRAM"):
        config.gold.fixed_price_per_gram = parse_price_override(environ["GOLD_PRICE_PER_GRAM"])
    if "DISABLE_TLS_VERIFY" in environ:
        config.gold.disable_tls_verify = environ["DISABLE_TLS_VERIFY"] == "1"

    if environ.get("CATALOG_FILE"):
        config.catalog.path = environ["CATALOG_FILE"]

    if environ.get("LOG_LEVEL"):
        config.logging.level = environ["LOG_LEVEL"]
    if environ.get("LOG_FORMAT"):
        config.logging.format = environ["LOG_FORMAT"]
    if environ.get("LOG_FILE"):
        config.logging.file = environ["LOG_FILE"]


def parse_price_override(value: Any) -> float | None:
    """
    Parse a fixed gold price override.

    Args:
        value: Raw value from YAML or environment.

    Returns:
        Positive float, or None if the value is absent or not a positive number.
    """
    if value is None or value == "":
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric gold price override: {value!r}")
        return None
    if not math.isfinite(price) or price <= 0:
        logger.warning(f"Ignoring non-positive gold price override: {value!r}")
        return None
    return price


def _parse_policy(value: Any) -> str:
    policy = str(value).lower()
    if policy not in MISSING_KEY_POLICIES:
        logger.warning(f"Unknown missing_key_policy {value!r}, using 'fail'")
        return "fail"
    return policy
