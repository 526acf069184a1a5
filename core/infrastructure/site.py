"""
Site context (port and adapters).

Resolves the identity of the host installation: the domain a license
is activated on and a human-readable site name.
"""
from abc import ABC, abstractmethod
from urllib.parse import urlparse


class SiteContext(ABC):
    """Abstract resolver for the current site identity."""

    @abstractmethod
    def current_domain(self) -> str:
        """Return the domain of the running installation."""
        pass

    @abstractmethod
    def current_site_name(self) -> str:
        """Return the display name of the running installation."""
        pass


class StaticSiteContext(SiteContext):
    """Site context with fixed values."""

    def __init__(self, domain: str, site_name: str = ""):
        self.domain = domain
        self.site_name = site_name

    def current_domain(self) -> str:
        return self.domain

    def current_site_name(self) -> str:
        return self.site_name


class SettingsSiteContext(SiteContext):
    """
    Site context read from the LICENSE_CLIENT settings.

    The domain is the host part of SITE_URL, the same way a site's
    home URL identifies it.
    """

    def current_domain(self) -> str:
        from core.conf import get_license_client_settings

        site_url = get_license_client_settings().site_url
        if not site_url:
            return ""
        # Bare hostnames have no scheme, urlparse would treat them as a path
        if "//" not in site_url:
            site_url = f"//{site_url}"
        return urlparse(site_url).hostname or ""

    def current_site_name(self) -> str:
        from core.conf import get_license_client_settings

        return get_license_client_settings().site_name
