"""
Unit tests for LicenseApiClient.
"""
import pytest

from api.v1.client import (
    API_ENDPOINT_LICENSES_ACTIVATE,
    API_ENDPOINT_LICENSES_DEACTIVATE,
    API_ENDPOINT_LICENSES_USAGE,
    API_ENDPOINT_LICENSES_VALIDATE,
    API_ENDPOINT_UPDATES_CHECK,
)
from api.v1.requests import ActivationRequest, UsageReport
from core.domain.exceptions import (
    ActivationLimitExceededError,
    ApiException,
    ApiValidationError,
    ErrorKind,
    LicenseExpiredError,
    LicenseNotFoundError,
    NetworkError,
)
from core.domain.value_objects import FeatureKind, FeatureValue, LicenseStatus


def error_body(code=None, message=None):
    error = {}
    if code is not None:
        error["code"] = code
    if message is not None:
        error["message"] = message
    return {"success": False, "error": error}


class TestActivateLicense:
    """Tests for activate_license."""

    def test_success(self, api_client, http_client, response_factory, license_key, active_license_data):
        """Test successful activation returns the reported record."""
        http_client.post.return_value = response_factory(
            200, {"success": True, "data": active_license_data}
        )

        record = api_client.activate_license(license_key, "example.com")

        assert record.key == license_key
        assert record.status == LicenseStatus.ACTIVE
        assert record.expires_at == "2030-01-01T00:00:00Z"
        assert record.tier_code == "pro"
        assert record.features["voice"] == FeatureValue(FeatureKind.BOOL, True)
        assert record.features["max_sites"].value == 5

    def test_optional_fields_omitted(self, api_client, http_client, response_factory, license_key):
        """Test only the set optional fields are sent."""
        http_client.post.return_value = response_factory(200, {"success": True, "data": {}})

        api_client.activate_license(
            license_key, "example.com", ActivationRequest(site_name="Site", region="eu")
        )

        path, data = http_client.post.call_args.args
        assert path == API_ENDPOINT_LICENSES_ACTIVATE
        assert data == {
            "license_key": license_key,
            "domain": "example.com",
            "site_name": "Site",
            "region": "eu",
        }

    def test_no_optional_fields(self, api_client, http_client, response_factory, license_key):
        """Test activation without a request sends key and domain only."""
        http_client.post.return_value = response_factory(200, {"success": True, "data": {}})

        api_client.activate_license(license_key, "example.com")

        _, data = http_client.post.call_args.args
        assert data == {"license_key": license_key, "domain": "example.com"}

    @pytest.mark.parametrize(
        "code,status,exception_class",
        [
            ("LICENSE_EXPIRED", 403, LicenseExpiredError),
            ("LICENSE_EXPIRED", 200, LicenseExpiredError),
            ("ACTIVATION_LIMIT_EXCEEDED", 400, ActivationLimitExceededError),
            ("ACTIVATION_LIMIT_EXCEEDED", 409, ActivationLimitExceededError),
            ("LICENSE_NOT_FOUND", 404, LicenseNotFoundError),
            ("LICENSE_NOT_FOUND", 500, LicenseNotFoundError),
            ("BAD_DOMAIN", 400, ApiValidationError),
        ],
    )
    def test_error_mapping(
        self, api_client, http_client, response_factory, license_key, code, status, exception_class
    ):
        """Test error codes map to typed exceptions regardless of status."""
        http_client.post.return_value = response_factory(status, error_body(code, "Nope"))

        with pytest.raises(exception_class) as exc_info:
            api_client.activate_license(license_key, "example.com")

        assert exc_info.value.code == code
        assert exc_info.value.message == "Nope"
        assert exc_info.value.http_status == status

    def test_unknown_code_is_generic(self, api_client, http_client, response_factory, license_key):
        """Test unknown code on a non-400 status raises a generic ApiException."""
        http_client.post.return_value = response_factory(500, error_body("SERVER_DOWN", "Boom"))

        with pytest.raises(ApiException) as exc_info:
            api_client.activate_license(license_key, "example.com")

        assert type(exc_info.value) is ApiException
        assert exc_info.value.kind == ErrorKind.API_ERROR

    def test_missing_error_details(self, api_client, http_client, response_factory, license_key):
        """Test missing code and message fall back to defaults."""
        http_client.post.return_value = response_factory(500, {"success": False})

        with pytest.raises(ApiException) as exc_info:
            api_client.activate_license(license_key, "example.com")

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.message == "API error"

    def test_non_json_body(self, api_client, http_client, response_factory, license_key):
        """Test non-JSON body raises a generic ApiException with the raw body."""
        http_client.post.return_value = response_factory(502, "<html>Bad Gateway</html>")

        with pytest.raises(ApiException) as exc_info:
            api_client.activate_license(license_key, "example.com")

        assert type(exc_info.value) is ApiException
        assert exc_info.value.http_status == 502
        assert exc_info.value.error_payload == {"body": "<html>Bad Gateway</html>"}

    @pytest.mark.parametrize("data", [[1], "oops"])
    def test_non_object_data(self, api_client, http_client, response_factory, license_key, data):
        """Test a success envelope with non-object data raises a generic ApiException."""
        response = response_factory(200, {"success": True, "data": data})
        http_client.post.return_value = response

        with pytest.raises(ApiException) as exc_info:
            api_client.validate_license(license_key, "example.com")

        assert type(exc_info.value) is ApiException
        assert exc_info.value.http_status == 200
        assert exc_info.value.error_payload == {"body": response.body}

    def test_json_array_body(self, api_client, http_client, response_factory, license_key):
        """Test a JSON body that is not an object is rejected."""
        http_client.post.return_value = response_factory(200, "[1, 2]")

        with pytest.raises(ApiException):
            api_client.activate_license(license_key, "example.com")

    def test_network_error_propagates(self, api_client, http_client, license_key):
        """Test transport failures surface as NetworkError."""
        http_client.post.side_effect = NetworkError("Network error: timed out")

        with pytest.raises(NetworkError):
            api_client.activate_license(license_key, "example.com")

    def test_empty_key_rejected_locally(self, api_client, http_client):
        """Test an empty key fails before any request."""
        with pytest.raises(ApiValidationError):
            api_client.activate_license("", "example.com")
        http_client.post.assert_not_called()

    def test_oversized_domain_rejected_locally(self, api_client, http_client, license_key):
        """Test a domain over 255 characters fails before any request."""
        with pytest.raises(ApiValidationError) as exc_info:
            api_client.activate_license(license_key, "a" * 256)
        assert exc_info.value.http_status == 0
        http_client.post.assert_not_called()


class TestValidateAndDeactivate:
    """Tests for validate_license and deactivate_license."""

    def test_validate_success(self, api_client, http_client, response_factory, license_key):
        """Test validation posts to the validate endpoint."""
        http_client.post.return_value = response_factory(
            200, {"success": True, "data": {"status": "expired"}}
        )

        record = api_client.validate_license(license_key, "example.com")

        assert http_client.post.call_args.args[0] == API_ENDPOINT_LICENSES_VALIDATE
        assert record.status == LicenseStatus.EXPIRED

    def test_validate_error(self, api_client, http_client, response_factory, license_key):
        """Test validation failures use the full error mapping."""
        http_client.post.return_value = response_factory(403, error_body("LICENSE_EXPIRED"))

        with pytest.raises(LicenseExpiredError):
            api_client.validate_license(license_key, "example.com")

    def test_deactivate_success(self, api_client, http_client, response_factory, license_key):
        """Test deactivation returns True on success."""
        http_client.post.return_value = response_factory(200, {"success": True})

        assert api_client.deactivate_license(license_key, "example.com") is True
        assert http_client.post.call_args.args[0] == API_ENDPOINT_LICENSES_DEACTIVATE

    def test_deactivate_errors_are_generic(self, api_client, http_client, response_factory, license_key):
        """Test deactivation failures are never classified."""
        http_client.post.return_value = response_factory(404, error_body("LICENSE_NOT_FOUND"))

        with pytest.raises(ApiException) as exc_info:
            api_client.deactivate_license(license_key, "example.com")

        assert type(exc_info.value) is ApiException
        assert exc_info.value.code == "LICENSE_NOT_FOUND"


class TestLicenseLookups:
    """Tests for get_license and get_license_features."""

    def test_get_license_path(self, api_client, http_client, response_factory):
        """Test key is URL-quoted into the path."""
        http_client.get.return_value = response_factory(
            200, {"success": True, "data": {"status": "active"}}
        )

        record = api_client.get_license("abc/def.sig")

        assert http_client.get.call_args.args[0] == "/api/v1/licenses/abc%2Fdef.sig"
        assert record.is_active

    def test_get_license_not_found(self, api_client, http_client, response_factory, license_key):
        """Test unknown key raises LicenseNotFoundError."""
        http_client.get.return_value = response_factory(404, error_body("LICENSE_NOT_FOUND"))

        with pytest.raises(LicenseNotFoundError):
            api_client.get_license(license_key)

    def test_features(self, api_client, http_client, response_factory, license_key):
        """Test features are returned as tagged values."""
        http_client.get.return_value = response_factory(
            200, {"success": True, "data": {"voice": False, "seats": 3, "nested": {"a": 1}}}
        )

        features = api_client.get_license_features(license_key)

        assert http_client.get.call_args.args[0] == f"/api/v1/licenses/{license_key}/features"
        assert features == {
            "voice": FeatureValue(FeatureKind.BOOL, False),
            "seats": FeatureValue(FeatureKind.NUMBER, 3),
        }

    def test_features_not_found(self, api_client, http_client, response_factory, license_key):
        """Test unknown key raises LicenseNotFoundError."""
        http_client.get.return_value = response_factory(404, error_body("LICENSE_NOT_FOUND"))

        with pytest.raises(LicenseNotFoundError):
            api_client.get_license_features(license_key)

    def test_features_other_errors_are_generic(self, api_client, http_client, response_factory, license_key):
        """Test other feature lookup failures are not classified."""
        http_client.get.return_value = response_factory(403, error_body("LICENSE_EXPIRED"))

        with pytest.raises(ApiException) as exc_info:
            api_client.get_license_features(license_key)

        assert type(exc_info.value) is ApiException


class TestUpdatesAndUsage:
    """Tests for check_for_updates and report_usage."""

    def test_update_available(self, api_client, http_client, response_factory, license_key):
        """Test update payload is returned as UpdateInfo."""
        http_client.post.return_value = response_factory(
            200,
            {
                "success": True,
                "update": {
                    "version": "1.2.0",
                    "download_url": "https://dl.example.com/p.zip",
                    "changelog": "Fixes",
                    "min_wp": "6.0",
                    "tested_wp": "6.5",
                },
            },
        )

        update = api_client.check_for_updates(license_key, "example.com", "my-plugin", "1.0.0")

        path, data = http_client.post.call_args.args
        assert path == API_ENDPOINT_UPDATES_CHECK
        assert data["slug"] == "my-plugin"
        assert data["current_version"] == "1.0.0"
        assert update.version == "1.2.0"
        assert update.min_host_version == "6.0"
        assert update.tested_host_version == "6.5"

    def test_no_update(self, api_client, http_client, response_factory, license_key):
        """Test update null means up to date."""
        http_client.post.return_value = response_factory(200, {"success": True, "update": None})

        assert api_client.check_for_updates(license_key, "example.com", "my-plugin", "1.0.0") is None

    def test_usage_defaults(self, api_client, http_client, response_factory, license_key):
        """Test unset usage counters are sent as zero."""
        http_client.post.return_value = response_factory(200, {"success": True})

        result = api_client.report_usage(
            license_key, "example.com", UsageReport(month="2024-05", voice_count=7)
        )

        path, data = http_client.post.call_args.args
        assert path == API_ENDPOINT_LICENSES_USAGE
        assert data == {
            "license_key": license_key,
            "domain": "example.com",
            "month": "2024-05",
            "conversations_count": 0,
            "voice_count": 7,
            "text_count": 0,
            "consents_captured": 0,
            "compliance_violations": 0,
        }
        assert result == {"success": True}

    def test_usage_error_envelope_returned(self, api_client, http_client, response_factory, license_key):
        """Test a rejected usage report returns the envelope instead of raising."""
        envelope = error_body("LICENSE_EXPIRED", "Expired")
        http_client.post.return_value = response_factory(403, envelope)

        assert api_client.report_usage(license_key, "example.com", UsageReport("2024-05")) == envelope

    def test_usage_month_format(self):
        """Test malformed months are rejected."""
        with pytest.raises(ValueError):
            UsageReport(month="2024-13")
        with pytest.raises(ValueError):
            UsageReport(month="May 2024")
