"""
Unit tests for update checks.
"""
import pytest

from core.domain.exceptions import NetworkError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import LicenseRecord
from updates.application.services.update_cache_service import CACHE_KEY_UPDATE_CHECK
from updates.application.services.update_checker import UpdateChecker
from updates.domain.update_info import UpdateInfo

UPDATE = {
    "version": "2.0.0",
    "download_url": "https://dl.example.com/test-plugin.zip",
    "changelog": "New features",
    "min_host_version": "6.0",
    "tested_host_version": "6.5",
}


@pytest.fixture
def checker(api_client, state_repository, update_cache, site):
    """Fixture for an UpdateChecker wired to in-memory adapters."""
    return UpdateChecker(
        client=api_client,
        state_repository=state_repository,
        update_cache=update_cache,
        site=site,
        plugin_slug="test-plugin",
        plugin_file="test-plugin/test-plugin.php",
        current_version="1.0.0",
    )


@pytest.fixture
def licensed(state_repository, license_key):
    """Fixture storing an active license."""
    state_repository.save(LicenseRecord(license_key, LicenseStatus.ACTIVE))


class TestUpdateInfo:
    """Tests for UpdateInfo."""

    def test_from_empty(self):
        """Test missing update means up to date."""
        assert UpdateInfo.from_api(None) is None
        assert UpdateInfo.from_api({}) is None

    def test_host_version_aliases(self):
        """Test min_wp/tested_wp are accepted."""
        update = UpdateInfo.from_api({"version": "2.0.0", "min_wp": "5.8", "tested_wp": "6.4"})

        assert update.min_host_version == "5.8"
        assert update.tested_host_version == "6.4"

    def test_to_dict(self):
        """Test round trip through the cache representation."""
        update = UpdateInfo.from_api(UPDATE)

        assert UpdateInfo.from_api(update.to_dict()) == update


class TestCheckForUpdates:
    """Tests for UpdateChecker.check_for_updates."""

    @pytest.mark.usefixtures("licensed")
    def test_update_available(self, checker, http_client, response_factory, license_key):
        """Test available update is returned and sent with slug and version."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": UPDATE})

        update = checker.check_for_updates()

        _, data = http_client.post.call_args.args
        assert data == {
            "license_key": license_key,
            "domain": "example.com",
            "slug": "test-plugin",
            "current_version": "1.0.0",
        }
        assert update.version == "2.0.0"

    def test_unlicensed(self, checker, http_client):
        """Test no stored license means no check."""
        assert checker.check_for_updates() is None
        http_client.post.assert_not_called()

    @pytest.mark.usefixtures("licensed")
    def test_result_cached(self, checker, http_client, response_factory):
        """Test a second check within the TTL is served from the cache."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": UPDATE})

        first = checker.check_for_updates()
        second = checker.check_for_updates()

        assert first == second
        assert http_client.post.call_count == 1

    @pytest.mark.usefixtures("licensed")
    def test_up_to_date_cached(self, checker, http_client, response_factory, cache):
        """Test update null is returned as None and cached."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": None})

        assert checker.check_for_updates() is None
        assert checker.check_for_updates() is None

        assert http_client.post.call_count == 1
        assert cache.get(CACHE_KEY_UPDATE_CHECK) == {"update": None}

    @pytest.mark.usefixtures("licensed")
    def test_cache_expires_after_a_day(self, checker, http_client, response_factory, clock):
        """Test the check is repeated after 24 hours."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": None})

        checker.check_for_updates()
        clock.advance(86400)
        checker.check_for_updates()

        assert http_client.post.call_count == 2

    @pytest.mark.usefixtures("licensed")
    def test_failure_not_cached(self, checker, http_client, response_factory):
        """Test failed checks return None and are retried next time."""
        http_client.post.side_effect = NetworkError("Network error: refused")
        assert checker.check_for_updates() is None

        http_client.post.side_effect = None
        http_client.post.return_value = response_factory(200, {"success": True, "update": UPDATE})
        assert checker.check_for_updates().version == "2.0.0"


class TestInjectUpdateData:
    """Tests for UpdateChecker.inject_update_data."""

    @pytest.mark.usefixtures("licensed")
    def test_injects_update(self, checker, http_client, response_factory):
        """Test available update is added under the plugin file."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": UPDATE})
        state = {"checked": {"test-plugin/test-plugin.php": "1.0.0"}}

        result = checker.inject_update_data(state)

        assert result["response"]["test-plugin/test-plugin.php"] == {
            "slug": "test-plugin",
            "plugin": "test-plugin/test-plugin.php",
            "new_version": "2.0.0",
            "package": "https://dl.example.com/test-plugin.zip",
            "tested": "6.5",
            "requires": "6.0",
            "sections": {"changelog": "New features"},
        }

    @pytest.mark.usefixtures("licensed")
    def test_nothing_checked(self, checker, http_client):
        """Test an empty update state is returned untouched without a call."""
        state = {"checked": {}}

        assert checker.inject_update_data(state) == {"checked": {}}
        http_client.post.assert_not_called()

    @pytest.mark.usefixtures("licensed")
    def test_up_to_date(self, checker, http_client, response_factory):
        """Test no response entry is added when up to date."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": None})
        state = {"checked": {"test-plugin/test-plugin.php": "1.0.0"}}

        assert "response" not in checker.inject_update_data(state)
