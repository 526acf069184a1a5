"""
Base Django settings for LicenseLifecycleClient.

A host application either uses these settings directly or copies the
INSTALLED_APPS entries and the LICENSE_CLIENT block into its own.
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "license-client-insecure-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "") == "1"

ALLOWED_HOSTS = [h for h in os.environ.get("ALLOWED_HOSTS", "localhost").split(",") if h]

# Application definition
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # Local apps
    "LicenseLifecycleClient",
    "core",
    "licenses",
    "updates",
]


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("LICENSE_CLIENT_DB", str(BASE_DIR / "license_client.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

TIME_ZONE = "UTC"
USE_TZ = True

# Cache backing the validation and update check caches
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "OPTIONS": {
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
        },
    }
    if os.environ.get("REDIS_URL")
    else {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "license-client",
    }
}

# License client
LICENSE_CLIENT = {
    "API_BASE_URL": os.environ.get("LICENSE_API_BASE_URL", "https://licensing.example.com"),
    "TIMEOUT": _env_int("LICENSE_API_TIMEOUT", 15),
    "USER_AGENT": os.environ.get("LICENSE_CLIENT_USER_AGENT", "License-Lifecycle-Client/1.0"),
    "SITE_URL": os.environ.get("LICENSE_SITE_URL", ""),
    "SITE_NAME": os.environ.get("LICENSE_SITE_NAME", ""),
    "VALIDATION_CACHE_TTL": _env_int("LICENSE_VALIDATION_CACHE_TTL", 3600),
    "FAILED_VALIDATION_CACHE_TTL": _env_int("LICENSE_FAILED_VALIDATION_CACHE_TTL", 3600),
    "UPDATE_CACHE_TTL": _env_int("LICENSE_UPDATE_CACHE_TTL", 86400),
    "CACHE_ALIAS": "default",
    "PLUGIN_SLUG": os.environ.get("LICENSE_PLUGIN_SLUG", ""),
    "PLUGIN_FILE": os.environ.get("LICENSE_PLUGIN_FILE", ""),
    "PLUGIN_VERSION": os.environ.get("LICENSE_PLUGIN_VERSION", ""),
}

# Celery (periodic update check)
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://127.0.0.1:6379/0")
CELERY_TASK_ALWAYS_EAGER = False
CELERY_BEAT_SCHEDULE = {
    "refresh-update-check": {
        "task": "updates.tasks.refresh_update_check",
        "schedule": _env_int("LICENSE_UPDATE_CHECK_INTERVAL", 86400),
    },
}

# Observability
LOGGING = get_logging_config(os.environ.get("LICENSE_CLIENT_ENV", "production"))
