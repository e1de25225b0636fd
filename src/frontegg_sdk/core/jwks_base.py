"""Bounded-lifetime key set cache.

Entries are keyed by the key set URL, so configurations pointing at
different vendor planes never share keys.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import JWKS


class KeySetCache:
    """Thread-safe key set cache with a hard TTL.

    Attributes:
        ttl_seconds: Lifetime of a cached key set in seconds.
    """

    def __init__(
        self,
        ttl_seconds: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize key set cache.

        Args:
            ttl_seconds: Lifetime of a cached key set; must be positive.
            clock: Monotonic clock, injectable for tests.
        """
        if ttl_seconds <= 0:
            msg = "ttl_seconds must be positive"
            raise ValueError(msg)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[JWKS, float]] = {}
        self._lock = threading.RLock()

    def get(self, url: str) -> JWKS | None:
        """Get the cached key set for ``url`` unless it has expired."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            jwks, cached_at = entry
            if self._clock() - cached_at >= self.ttl_seconds:
                del self._entries[url]
                return None
            return jwks

    def put(self, url: str, jwks: JWKS) -> None:
        """Store a freshly fetched key set."""
        with self._lock:
            self._entries[url] = (jwks, self._clock())

    def time_until_expiry(self, url: str) -> float:
        """Seconds until the entry for ``url`` expires (0 if absent)."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return 0
            remaining = self.ttl_seconds - (self._clock() - entry[1])
            return max(0, remaining)

    def invalidate(self, url: str | None = None) -> None:
        """Drop one entry, or every entry when ``url`` is None."""
        with self._lock:
            if url is None:
                self._entries.clear()
            else:
                self._entries.pop(url, None)

    def is_cached(self, url: str) -> bool:
        """Check if a live key set is cached for ``url``."""
        return self.get(url) is not None
