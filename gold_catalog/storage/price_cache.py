"""
Gold price caching to reduce upstream provider calls.

Holds a single in-memory slot with the last normalised gold price per gram.
The slot is invalidated only by elapsed wall-clock time (default: 5 minutes).

Concurrent callers that miss the cache share one upstream fetch: the first
caller performs it, the others wait on the same future and receive the same
value or the same exception.
"""

import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

if TYPE_CHECKING:
    from gold_catalog.pricing.models import GoldPriceQuote

logger = logging.getLogger(__name__)


@dataclass
class CachedGoldPrice:
    """Cached gold price entry with metadata."""
    price_per_gram: float
    provider: str
    source_unit: str
    cached_at: float  # Unix timestamp
    ttl_seconds: float

    def age(self, now: float) -> float:
        """Seconds since this entry was stored."""
        return now - self.cached_at

    def is_expired(self, now: float) -> bool:
        """Check if this cache entry has expired."""
        return self.age(now) >= self.ttl_seconds

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class GoldPriceCache:
    """
    Single-slot TTL cache for the gold price per gram.

    Created once at process start and injected into the price adapter.
    Last writer wins; there is no manual invalidation.
    """

    DEFAULT_TTL = 5 * 60  # 5 minutes

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the gold price cache.

        Args:
            ttl_seconds: How long a fetched price stays valid.
            clock: Time source returning Unix seconds (injectable for tests).
        """
        self.ttl_seconds = float(self.DEFAULT_TTL if ttl_seconds is None else ttl_seconds)
        self._clock = clock
        self._entry: Optional[CachedGoldPrice] = None
        self._in_flight: Optional[Future] = None
        self._lock = threading.Lock()

        # Stats tracking
        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._coalesced = 0

    def _fresh_entry(self) -> Optional[CachedGoldPrice]:
        if self._entry is None:
            return None
        if self._entry.is_expired(self._clock()):
            return None
        return self._entry

    def peek(self) -> Optional[CachedGoldPrice]:
        """Return the stored entry, fresh or stale, without touching stats."""
        return self._entry

    def _store(self, quote: "GoldPriceQuote") -> CachedGoldPrice:
        entry = CachedGoldPrice(
            price_per_gram=quote.price_per_gram,
            provider=quote.provider,
            source_unit=quote.source_unit,
            cached_at=self._clock(),
            ttl_seconds=self.ttl_seconds,
        )
        self._entry = entry
        return entry

    def get_or_fetch(
        self,
        fetch: Callable[[], "GoldPriceQuote"],
    ) -> Tuple[CachedGoldPrice, bool]:
        """
        Return the cached price, fetching it once on a miss.

        Args:
            fetch: Callable performing the upstream request.

        Returns:
            Tuple of (entry, from_cache).

        Raises:
            Whatever ``fetch`` raises; concurrent waiters see the same error.
        """
        with self._lock:
            entry = self._fresh_entry()
            if entry is not None:
                self._hits += 1
                return entry, True

            future = self._in_flight
            leader = future is None
            if leader:
                self._misses += 1
                future = Future()
                self._in_flight = future
            else:
                self._coalesced += 1

        if not leader:
            logger.debug("Gold price fetch already in flight, waiting for result")
            return future.result(), False

        logger.info("Gold price cache miss, fetching from provider")
        try:
            quote = fetch()
        except BaseException as exc:
            # Waiters must never block on a future that will not resolve
            with self._lock:
                self._in_flight = None
            future.set_exception(exc)
            raise

        with self._lock:
            entry = self._store(quote)
            self._fetches += 1
            self._in_flight = None
        future.set_result(entry)
        return entry, False

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total_requests = self._hits + self._misses
        hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0

        entry = self._entry
        now = self._clock()
        return {
            "cached": entry is not None,
            "fresh": entry is not None and not entry.is_expired(now),
            "age_seconds": round(entry.age(now), 1) if entry else None,
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "fetches": self._fetches,
            "coalesced": self._coalesced,
            "hit_rate_pct": round(hit_rate, 1),
        }
