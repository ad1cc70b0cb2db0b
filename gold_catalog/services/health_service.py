"""
Health check service for monitoring application status.

Reports catalog, provider and cache state without calling the upstream
gold price provider.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from gold_catalog import __version__
from gold_catalog.catalog.models import Product
from gold_catalog.pricing.gold_price import GoldPriceAdapter

logger = logging.getLogger(__name__)


@dataclass
class ComponentHealth:
    """Health status of a single component."""

    name: str
    status: str  # "ok", "degraded", "error"
    message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {
            "status": self.status,
        }
        if self.message:
            result["message"] = self.message
        if self.details:
            result.update(self.details)
        return result


@dataclass
class HealthReport:
    """Complete health report for the application."""

    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: str
    version: str
    components: Dict[str, ComponentHealth] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "version": self.version,
            "components": {
                name: comp.to_dict()
                for name, comp in self.components.items()
            },
        }


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class HealthService:
    """Service for checking application health."""

    def __init__(self, products: Sequence[Product], price_adapter: GoldPriceAdapter):
        self.products = products
        self.price_adapter = price_adapter

    def get_full_health(self) -> HealthReport:
        """
        Get complete health report for all components.

        Returns:
            HealthReport with status of all components.
        """
        components = {
            "catalog": self._check_catalog(),
            "price_provider": self._check_price_provider(),
            "price_cache": self._check_price_cache(),
        }

        statuses = [c.status for c in components.values()]
        if all(s == "ok" for s in statuses):
            overall_status = "healthy"
        elif any(s == "error" for s in statuses):
            overall_status = "unhealthy"
        else:
            overall_status = "degraded"

        return HealthReport(
            status=overall_status,
            timestamp=utc_timestamp(),
            version=__version__,
            components=components,
        )

    def _check_catalog(self) -> ComponentHealth:
        """Check the static catalog was loaded."""
        if not self.products:
            return ComponentHealth(
                name="catalog",
                status="degraded",
                message="Catalog is empty",
            )
        return ComponentHealth(
            name="catalog",
            status="ok",
            message=f"{len(self.products)} products loaded",
            details={"product_count": len(self.products)},
        )

    def _check_price_provider(self) -> ComponentHealth:
        """Check the provider configuration (no network call)."""
        adapter = self.price_adapter
        provider = adapter.provider

        if adapter.fixed_price_per_gram is not None:
            return ComponentHealth(
                name="price_provider",
                status="ok",
                message="Fixed gold price override in use",
                details={"provider": provider.name, "fixed_price_per_gram": adapter.fixed_price_per_gram},
            )

        if provider.is_configured():
            return ComponentHealth(
                name="price_provider",
                status="ok",
                message="Provider configured",
                details={"provider": provider.name},
            )

        policy = getattr(provider, "missing_key_policy", "fail")
        if policy == "fallback":
            return ComponentHealth(
                name="price_provider",
                status="degraded",
                message="No API key - serving default gold price",
                details={"provider": provider.name, "missing_key_policy": policy},
            )
        return ComponentHealth(
            name="price_provider",
            status="error",
            message="No API key - product requests will fail",
            details={"provider": provider.name, "missing_key_policy": policy},
        )

    def _check_price_cache(self) -> ComponentHealth:
        """Report the gold price cache state."""
        stats = self.price_adapter.cache.get_stats()
        if not stats["cached"]:
            message = "Empty"
        elif stats["fresh"]:
            message = f"Fresh ({stats['age_seconds']}s old)"
        else:
            message = "Stale, refreshes on next request"
        return ComponentHealth(
            name="price_cache",
            status="ok",
            message=message,
            details=stats,
        )
