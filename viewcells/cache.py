"""Simple in-memory fragment store for rendered cells."""

import threading
from datetime import datetime, timedelta

from viewcells.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class CacheEntry:
    """A cached fragment with optional expiration time."""

    def __init__(self, value: str, expires_at: datetime | None = None):
        self.value = value
        self.expires_at = expires_at

    def is_expired(self) -> bool:
        """Check if cache entry has expired."""
        return self.expires_at is not None and datetime.now() >= self.expires_at


class FragmentStore:
    """Simple in-memory fragment store with TTL support.

    Thread-safe using threading.Lock, since hosts may render cells for
    several requests at once.
    """

    def __init__(self):
        self._cache: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> str | None:
        """Get stored fragment if not expired.

        Args:
            key: Cache key

        Returns:
            Stored fragment or None if not found/expired
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry and not entry.is_expired():
                log_with_context(
                    logger,
                    "debug",
                    "Fragment hit",
                    cache_key=key,
                    event_type="fragment_hit",
                )
                return entry.value

            # Remove expired entry
            if entry:
                del self._cache[key]
                log_with_context(
                    logger,
                    "debug",
                    "Fragment expired",
                    cache_key=key,
                    event_type="fragment_expired",
                )

            return None

    def write(self, key: str, content: str, expires_in: float | None = None) -> None:
        """Store a fragment.

        Args:
            key: Cache key
            content: Rendered fragment
            expires_in: Time to live in seconds, or None to keep until cleared
        """
        with self._lock:
            expires_at = datetime.now() + timedelta(seconds=expires_in) if expires_in is not None else None
            self._cache[key] = CacheEntry(content, expires_at)
            log_with_context(
                logger,
                "debug",
                "Fragment stored",
                cache_key=key,
                expires_in=expires_in,
                event_type="fragment_write",
            )

    def clear(self, key: str | None = None) -> None:
        """Clear a fragment or the entire store.

        Args:
            key: Specific key to clear, or None to clear all
        """
        with self._lock:
            if key:
                if key in self._cache:
                    del self._cache[key]
                    log_with_context(
                        logger,
                        "debug",
                        "Fragment cleared",
                        cache_key=key,
                        event_type="fragment_clear",
                    )
            else:
                self._cache.clear()
                log_with_context(
                    logger,
                    "info",
                    "Fragment store cleared",
                    event_type="fragment_clear_all",
                )

    def cleanup_expired(self) -> None:
        """Remove all expired entries from the store."""
        with self._lock:
            expired_keys = [key for key, entry in self._cache.items() if entry.is_expired()]
            for key in expired_keys:
                del self._cache[key]

            if expired_keys:
                log_with_context(
                    logger,
                    "debug",
                    "Cleaned up expired fragments",
                    count=len(expired_keys),
                    event_type="fragment_cleanup",
                )

    def __len__(self) -> int:
        return len(self._cache)


# Global fragment store instance
_store = FragmentStore()


def get_fragment_store() -> FragmentStore:
    """Get global fragment store instance."""
    return _store
