"""
Cache adapter implementations.

Provides Django cache and in-memory implementations of CachePort.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from django.core.cache import caches

from core.infrastructure.cache import CachePort

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Uses Django's cache framework (can be Redis, Memcached, LocMem, etc.).
    Backend errors are logged and turned into misses.
    """

    def __init__(self, alias: str = "default"):
        """
        Initialize adapter.

        Args:
            alias: Name of the entry in settings.CACHES to use
        """
        self.alias = alias

    @property
    def _cache(self):
        return caches[self.alias]

    def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        try:
            value = self._cache.get(key)
            if value is not None:
                logger.debug("Cache hit: %s", key)
            else:
                logger.debug("Cache miss: %s", key)
            return value
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for no expiration)
        """
        try:
            self._cache.set(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """
        try:
            self._cache.delete(key)
            logger.debug("Cache delete: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)


class InMemoryCacheAdapter(CachePort):
    """
    Process-local cache implementing CachePort.

    Expiry is checked when an entry is read; expired entries are
    purged at that point.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize adapter.

        Args:
            clock: Monotonic clock returning seconds
        """
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss: %s", key)
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Cache expired: %s", key)
                return None
            logger.debug("Cache hit: %s", key)
            return value

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        expires_at = None if timeout is None else self._clock() + timeout
        with self._lock:
            self._entries[key] = (value, expires_at)
        logger.debug("Cache set: %s (timeout=%s)", key, timeout)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
        logger.debug("Cache delete: %s", key)
