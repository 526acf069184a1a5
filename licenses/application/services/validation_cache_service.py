"""
Validation cache service.

Read-through cache for remote license validation. Both outcomes are
cached: after a failed validation the service must not be asked again
until the negative entry expires or is invalidated.
"""
import logging
from typing import Optional

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)

# Cache key (one per host, see DESIGN.md)
CACHE_KEY_LICENSE_VALIDATION = "sls_license_validation"

CACHE_VALUE_VALID = "valid"
CACHE_VALUE_INVALID = "invalid"

# Cache TTLs (in seconds)
CACHE_TTL_LICENSE_VALIDATION = 3600  # 1 hour
CACHE_TTL_FAILED_VALIDATION = 3600  # 1 hour


class ValidationCacheService:
    """Service for caching license validation outcomes."""

    cache_name = "license_validation"

    def __init__(
        self,
        cache: CachePort,
        valid_ttl: int = CACHE_TTL_LICENSE_VALIDATION,
        invalid_ttl: int = CACHE_TTL_FAILED_VALIDATION,
        cache_key: str = CACHE_KEY_LICENSE_VALIDATION,
    ):
        """
        Initialize service.

        Args:
            cache: Cache backend
            valid_ttl: Lifetime of a positive entry in seconds
            invalid_ttl: Lifetime of a negative entry in seconds
            cache_key: Key the outcome is stored under
        """
        self.cache = cache
        self.valid_ttl = valid_ttl
        self.invalid_ttl = invalid_ttl
        self.cache_key = cache_key

    def get(self) -> Optional[bool]:
        """
        Get the cached validation outcome.

        Returns:
            True/False for a fresh entry, None on a miss
        """
        cached = self.cache.get(self.cache_key)
        if cached == CACHE_VALUE_VALID:
            cache_hits_total.labels(cache=self.cache_name).inc()
            return True
        if cached == CACHE_VALUE_INVALID:
            cache_hits_total.labels(cache=self.cache_name).inc()
            return False

        if cached is not None:
            logger.warning("Discarding unexpected validation cache value: %r", cached)
            self.cache.delete(self.cache_key)
        cache_misses_total.labels(cache=self.cache_name).inc()
        return None

    def store(self, valid: bool) -> None:
        """
        Cache a validation outcome.

        Args:
            valid: Outcome of the remote validation
        """
        if valid:
            self.cache.set(self.cache_key, CACHE_VALUE_VALID, timeout=self.valid_ttl)
        else:
            self.cache.set(self.cache_key, CACHE_VALUE_INVALID, timeout=self.invalid_ttl)

    def invalidate(self) -> None:
        """Drop the cached outcome."""
        self.cache.delete(self.cache_key)
        logger.debug("Invalidated validation cache")
