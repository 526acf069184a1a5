"""
License client configuration.

Reads the LICENSE_CLIENT dict from Django settings and merges it over
the defaults below.
"""
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

from django.conf import settings

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "API_BASE_URL": "",
    "TIMEOUT": 15,
    "USER_AGENT": "License-Lifecycle-Client/1.0",
    "SITE_URL": "",
    "SITE_NAME": "",
    "VALIDATION_CACHE_TTL": 3600,
    "FAILED_VALIDATION_CACHE_TTL": 3600,
    "UPDATE_CACHE_TTL": 86400,
    "CACHE_ALIAS": "default",
    "PLUGIN_SLUG": "",
    "PLUGIN_FILE": "",
    "PLUGIN_VERSION": "",
}

_INT_OPTIONS = (
    "TIMEOUT",
    "VALIDATION_CACHE_TTL",
    "FAILED_VALIDATION_CACHE_TTL",
    "UPDATE_CACHE_TTL",
)


@dataclass(frozen=True)
class LicenseClientSettings:
    """Resolved license client settings."""

    api_base_url: str
    timeout: int
    user_agent: str
    site_url: str
    site_name: str
    validation_cache_ttl: int
    failed_validation_cache_ttl: int
    update_cache_ttl: int
    cache_alias: str
    plugin_slug: str
    plugin_file: str
    plugin_version: str


def _as_int(name: str, raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid LICENSE_CLIENT[%s]=%r, using default", name, raw)
        return DEFAULTS[name]


def get_license_client_settings() -> LicenseClientSettings:
    """
    Build LicenseClientSettings from django.conf.settings.

    Returns:
        LicenseClientSettings with defaults applied
    """
    merged = dict(DEFAULTS)
    merged.update(getattr(settings, "LICENSE_CLIENT", {}) or {})
    for name in _INT_OPTIONS:
        merged[name] = _as_int(name, merged[name])

    values = {f.name: merged[f.name.upper()] for f in fields(LicenseClientSettings)}
    return LicenseClientSettings(**values)
