"""
App configuration for License Lifecycle Client.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseLifecycleClientConfig(AppConfig):
    """App configuration for LicenseLifecycleClient."""

    name = "LicenseLifecycleClient"
    verbose_name = "License Lifecycle Client"

    def ready(self):
        """Log the effective client configuration once apps are loaded."""
        from core.conf import get_license_client_settings

        client_settings = get_license_client_settings()
        if not client_settings.api_base_url:
            logger.warning("LICENSE_CLIENT['API_BASE_URL'] is not configured")
        else:
            logger.debug(
                "License client configured for %s (timeout=%ss)",
                client_settings.api_base_url,
                client_settings.timeout,
            )
