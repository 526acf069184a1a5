"""
Service factories.

Wire the license manager and update checker to the Django-backed
adapters configured in settings.LICENSE_CLIENT.
"""
from api.v1.client import LicenseApiClient
from core.conf import LicenseClientSettings, get_license_client_settings
from core.infrastructure.cache_adapters import DjangoCacheAdapter
from core.infrastructure.http import RequestsHttpClient
from core.infrastructure.option_adapters import DjangoOptionStore
from core.infrastructure.site import SettingsSiteContext
from licenses.application.services.license_manager import LicenseManager
from licenses.application.services.validation_cache_service import (
    ValidationCacheService,
)
from licenses.infrastructure.repositories.option_license_state_repository import (
    OptionLicenseStateRepository,
)
from updates.application.services.update_cache_service import UpdateCacheService
from updates.application.services.update_checker import UpdateChecker


def build_api_client(client_settings: LicenseClientSettings = None) -> LicenseApiClient:
    """Create an API client for the configured licensing service."""
    client_settings = client_settings or get_license_client_settings()
    transport = RequestsHttpClient(
        client_settings.api_base_url,
        timeout=client_settings.timeout,
        user_agent=client_settings.user_agent,
    )
    return LicenseApiClient(
        client_settings.api_base_url,
        http_client=transport,
        timeout=client_settings.timeout,
    )


def build_license_manager(client_settings: LicenseClientSettings = None) -> LicenseManager:
    """Create a LicenseManager backed by the Django option table and cache."""
    client_settings = client_settings or get_license_client_settings()
    return LicenseManager(
        client=build_api_client(client_settings),
        state_repository=OptionLicenseStateRepository(DjangoOptionStore()),
        validation_cache=ValidationCacheService(
            DjangoCacheAdapter(client_settings.cache_alias),
            valid_ttl=client_settings.validation_cache_ttl,
            invalid_ttl=client_settings.failed_validation_cache_ttl,
        ),
        site=SettingsSiteContext(),
    )


def build_update_checker(client_settings: LicenseClientSettings = None) -> UpdateChecker:
    """Create an UpdateChecker for the configured plugin."""
    client_settings = client_settings or get_license_client_settings()
    return UpdateChecker(
        client=build_api_client(client_settings),
        state_repository=OptionLicenseStateRepository(DjangoOptionStore()),
        update_cache=UpdateCacheService(
            DjangoCacheAdapter(client_settings.cache_alias),
            ttl=client_settings.update_cache_ttl,
        ),
        site=SettingsSiteContext(),
        plugin_slug=client_settings.plugin_slug,
        plugin_file=client_settings.plugin_file,
        current_version=client_settings.plugin_version,
    )
