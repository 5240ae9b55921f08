"""In-memory TTL cache for fetched note collections."""

import json
import time
from typing import Any, Callable, Optional

import structlog

from .models import CacheEntry

logger = structlog.get_logger().bind(source="notes_cache")

DEFAULT_TTL_SECONDS = 5 * 60


class TTLCache:
    """Cache payloads per request fingerprint for a fixed time window.

    Expiry is lazy: an expired entry reads as a miss and stays in memory
    until the next ``put`` for its key or ``clear_expired``. Not thread-safe;
    all access is expected from a single event loop.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached payload if present and not expired, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_valid(self._clock()):
            logger.debug("cache_entry_expired", key=key)
            return None
        return entry.data

    def put(self, key: str, payload: Any, ttl: Optional[float] = None) -> CacheEntry:
        """Store payload under key, replacing any previous entry."""
        now = self._clock()
        entry = CacheEntry(
            data=payload,
            timestamp=now,
            expires_at=now + (self.default_ttl if ttl is None else ttl),
        )
        self._entries[key] = entry
        return entry

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one entry, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def clear_expired(self) -> int:
        """Delete expired entries. Returns how many were removed."""
        now = self._clock()
        stale = [k for k, e in self._entries.items() if not e.is_valid(now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    @staticmethod
    def make_key(operation: str, params: Optional[dict] = None) -> str:
        """Operation name, followed by the params as sorted-key JSON if any."""
        key = operation
        if params:
            key += json.dumps(params, sort_keys=True, default=str)
        return key

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
