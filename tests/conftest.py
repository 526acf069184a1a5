"""
Pytest configuration and shared fixtures.
"""

import json
from unittest.mock import MagicMock

import pytest

from api.v1.client import LicenseApiClient
from core.infrastructure.cache_adapters import InMemoryCacheAdapter
from core.infrastructure.http import HttpClient, HttpResponse
from core.infrastructure.option_adapters import InMemoryOptionStore
from core.infrastructure.site import StaticSiteContext
from licenses.application.services.license_manager import LicenseManager
from licenses.application.services.validation_cache_service import (
    ValidationCacheService,
)
from licenses.infrastructure.repositories.option_license_state_repository import (
    OptionLicenseStateRepository,
)
from updates.application.services.update_cache_service import UpdateCacheService

LICENSE_KEY = "eyJsaWNlbnNlIjoiYWJjIn0.c2lnbmF0dXJl"
DOMAIN = "example.com"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(status: int = 200, body=None) -> HttpResponse:
    """Build an HttpResponse with a JSON (or raw string) body."""
    if not isinstance(body, str):
        body = json.dumps(body if body is not None else {})
    return HttpResponse(status=status, body=body)


@pytest.fixture
def license_key():
    """Fixture for an opaque license key."""
    return LICENSE_KEY


@pytest.fixture
def clock():
    """Fixture for a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Fixture for an in-memory cache driven by the fake clock."""
    return InMemoryCacheAdapter(clock=clock)


@pytest.fixture
def option_store():
    """Fixture for an in-memory option store."""
    return InMemoryOptionStore()


@pytest.fixture
def site():
    """Fixture for a fixed site identity."""
    return StaticSiteContext(DOMAIN, "Test Site")


@pytest.fixture
def http_client():
    """Fixture for a mocked HTTP transport."""
    return MagicMock(spec=HttpClient)


@pytest.fixture
def response_factory():
    """Fixture returning the HttpResponse builder."""
    return make_response


@pytest.fixture
def api_client(http_client):
    """Fixture for an API client over the mocked transport."""
    return LicenseApiClient("https://api.example.com/", http_client=http_client)


@pytest.fixture
def state_repository(option_store):
    """Fixture for the option-backed license state repository."""
    return OptionLicenseStateRepository(option_store)


@pytest.fixture
def validation_cache(cache):
    """Fixture for the validation cache service."""
    return ValidationCacheService(cache)


@pytest.fixture
def update_cache(cache):
    """Fixture for the update check cache service."""
    return UpdateCacheService(cache)


@pytest.fixture
def manager(api_client, state_repository, validation_cache, site):
    """Fixture for a LicenseManager wired to in-memory adapters."""
    return LicenseManager(
        client=api_client,
        state_repository=state_repository,
        validation_cache=validation_cache,
        site=site,
    )


@pytest.fixture
def active_license_data():
    """Fixture for the data object of a successful activation."""
    return {
        "status": "active",
        "expires_at": "2030-01-01T00:00:00Z",
        "tier_code": "pro",
        "features": {"voice": True, "max_sites": 5, "region": "eu"},
    }
