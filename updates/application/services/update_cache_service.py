"""
Update check cache service.

Same read-through pattern as the validation cache, applied to the
version check. "Up to date" is cached too.
"""
import logging
from typing import Optional, Tuple

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total
from updates.domain.update_info import UpdateInfo

logger = logging.getLogger(__name__)

CACHE_KEY_UPDATE_CHECK = "sls_update_check"
CACHE_TTL_UPDATE_CHECK = 86400  # 24 hours


class UpdateCacheService:
    """Service for caching update check results."""

    cache_name = "update_check"

    def __init__(
        self,
        cache: CachePort,
        ttl: int = CACHE_TTL_UPDATE_CHECK,
        cache_key: str = CACHE_KEY_UPDATE_CHECK,
    ):
        self.cache = cache
        self.ttl = ttl
        self.cache_key = cache_key

    def get(self) -> Tuple[bool, Optional[UpdateInfo]]:
        """
        Get the cached update check result.

        Returns:
            (hit, update); update is None on a miss or when the cached
            result was "up to date"
        """
        cached = self.cache.get(self.cache_key)
        if not isinstance(cached, dict) or "update" not in cached:
            if cached is not None:
                logger.warning("Discarding unexpected update cache value")
                self.cache.delete(self.cache_key)
            cache_misses_total.labels(cache=self.cache_name).inc()
            return False, None

        cache_hits_total.labels(cache=self.cache_name).inc()
        return True, UpdateInfo.from_api(cached["update"])

    def store(self, update: Optional[UpdateInfo]) -> None:
        """
        Cache an update check result.

        Args:
            update: Available update, or None for "up to date"
        """
        payload = {"update": update.to_dict() if update else None}
        self.cache.set(self.cache_key, payload, timeout=self.ttl)

    def invalidate(self) -> None:
        self.cache.delete(self.cache_key)
