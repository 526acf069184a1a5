"""
Test settings for LicenseLifecycleClient.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# Use in-memory SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "license-client-tests",
    }
}

LICENSE_CLIENT = {
    "API_BASE_URL": "https://api.example.com",
    "TIMEOUT": 15,
    "SITE_URL": "https://example.com",
    "SITE_NAME": "Test Site",
    "PLUGIN_SLUG": "test-plugin",
    "PLUGIN_FILE": "test-plugin/test-plugin.php",
    "PLUGIN_VERSION": "1.0.0",
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"

# Disable logging during tests
LOGGING_CONFIG = None
