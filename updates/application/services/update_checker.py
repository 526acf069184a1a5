"""
Update checker.

Asks the licensing service whether a newer version of the plugin is
available and feeds the answer into the host's own update mechanism.
"""
import logging
from typing import Any, Dict, Optional

from api.results import ApiResult
from api.v1.client import LicenseApiClient
from core.infrastructure.site import SiteContext
from licenses.ports.license_state_repository import LicenseStateRepository
from updates.application.services.update_cache_service import UpdateCacheService
from updates.domain.update_info import UpdateInfo

logger = logging.getLogger(__name__)


class UpdateChecker:
    """Checks for plugin updates with a cached, licensed request."""

    def __init__(
        self,
        client: LicenseApiClient,
        state_repository: LicenseStateRepository,
        update_cache: UpdateCacheService,
        site: SiteContext,
        plugin_slug: str,
        plugin_file: str,
        current_version: str,
    ):
        self.client = client
        self.state_repository = state_repository
        self.update_cache = update_cache
        self.site = site
        self.plugin_slug = plugin_slug
        self.plugin_file = plugin_file
        self.current_version = current_version

    def check_for_updates(
        self, license_key: Optional[str] = None, domain: Optional[str] = None
    ) -> Optional[UpdateInfo]:
        """
        Check for an update, consulting the update cache first.

        Args:
            license_key: License key (defaults to the stored key)
            domain: Domain (defaults to the current site domain)

        Returns:
            UpdateInfo, or None when up to date, unlicensed or on failure
        """
        license_key = license_key or self.state_repository.stored_key()
        if not license_key:
            return None

        hit, cached = self.update_cache.get()
        if hit:
            return cached

        domain = domain or self.site.current_domain()
        result = ApiResult.of(
            self.client.check_for_updates,
            license_key,
            domain,
            self.plugin_slug,
            self.current_version,
        )
        if not result.ok:
            logger.warning(
                "Update check for %s failed: %s (%s)",
                self.plugin_slug,
                result.kind,
                result.error.message,
            )
            return None

        self.update_cache.store(result.value)
        if result.value:
            logger.info(
                "Update available for %s: %s -> %s",
                self.plugin_slug,
                self.current_version,
                result.value.version,
            )
        return result.value

    def inject_update_data(self, update_state: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add this plugin's update to the host's update state.

        Args:
            update_state: Host update state; ``checked`` lists the installed
                plugins and ``response`` collects available updates

        Returns:
            The same update state
        """
        if not update_state.get("checked"):
            return update_state

        update = self.check_for_updates()
        if update is None:
            return update_state

        update_state.setdefault("response", {})[self.plugin_file] = {
            "slug": self.plugin_slug,
            "plugin": self.plugin_file,
            "new_version": update.version,
            "package": update.download_url,
            "tested": update.tested_host_version,
            "requires": update.min_host_version,
            "sections": {"changelog": update.changelog},
        }
        return update_state
