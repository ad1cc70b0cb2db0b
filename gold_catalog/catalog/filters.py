"""
Range filters for enriched product listings.

All bounds are optional and inclusive. Values that are absent or do not parse
as a finite number are ignored rather than rejected.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from gold_catalog.catalog.models import EnrichedProduct

logger = logging.getLogger(__name__)


def parse_bound(value: Any) -> Optional[float]:
    """
    Parse a filter bound from a query string value.

    Args:
        value: Raw value (string, number or None).

    Returns:
        Finite float, or None if the value is absent or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        bound = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring unparseable filter value: {value!r}")
        return None
    if not math.isfinite(bound):
        logger.debug(f"Ignoring non-finite filter value: {value!r}")
        return None
    return bound


@dataclass(frozen=True)
class ProductFilters:
    """Inclusive price and popularity bounds."""

    price_min: Optional[float] = None
    price_max: Optional[float] = None
    pop_min: Optional[float] = None
    pop_max: Optional[float] = None

    @classmethod
    def from_query(
        cls,
        price_min: Any = None,
        price_max: Any = None,
        pop_min: Any = None,
        pop_max: Any = None,
    ) -> "ProductFilters":
        """Build filters from raw query values, dropping unparseable ones."""
        return cls(
            price_min=parse_bound(price_min),
            price_max=parse_bound(price_max),
            pop_min=parse_bound(pop_min),
            pop_max=parse_bound(pop_max),
        )

    def is_empty(self) -> bool:
        return all(b is None for b in (self.price_min, self.price_max, self.pop_min, self.pop_max))

    def matches(self, item: EnrichedProduct) -> bool:
        """Check one enriched product against every active bound."""
        if self.price_min is not None and item.price_usd < self.price_min:
            return False
        if self.price_max is not None and item.price_usd > self.price_max:
            return False
        if self.pop_min is not None and item.popularity_out_of_5 < self.pop_min:
            return False
        if self.pop_max is not None and item.popularity_out_of_5 > self.pop_max:
            return False
        return True

    def apply(self, items: Iterable[EnrichedProduct]) -> list[EnrichedProduct]:
        """Filter items, preserving their order."""
        return [item for item in items if self.matches(item)]
