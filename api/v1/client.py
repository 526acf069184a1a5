"""
Licensing service API client (v1).

Translates the remote license operations into HTTP requests and
typed results. Every call sends at most one request.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

from api.exceptions import (
    RESPONSE_KEY_DATA,
    RESPONSE_KEY_UPDATE,
    check_data,
    is_success,
    parse_response,
    raise_for_error,
    raise_generic,
)
from api.v1.requests import ActivationRequest, UsageReport
from core.domain.exceptions import (
    ApiException,
    ApiValidationError,
    ErrorKind,
    ERROR_CODE_VALIDATION_ERROR,
)
from core.domain.value_objects import Domain, FeatureValue, LicenseKey
from core.infrastructure.http import (
    DEFAULT_TIMEOUT_SECONDS,
    HttpClient,
    HttpResponse,
    RequestsHttpClient,
)
from core.metrics import (
    license_api_request_duration_seconds,
    license_api_requests_total,
)
from licenses.domain.license import LicenseRecord, parse_features
from updates.domain.update_info import UpdateInfo

logger = logging.getLogger(__name__)

API_ENDPOINT_LICENSES_ACTIVATE = "/api/v1/licenses/activate"
API_ENDPOINT_LICENSES_VALIDATE = "/api/v1/licenses/validate"
API_ENDPOINT_LICENSES_DEACTIVATE = "/api/v1/licenses/deactivate"
API_ENDPOINT_LICENSES_GET = "/api/v1/licenses/{key}"
API_ENDPOINT_LICENSES_FEATURES = "/api/v1/licenses/{key}/features"
API_ENDPOINT_LICENSES_USAGE = "/api/v1/licenses/usage"
API_ENDPOINT_UPDATES_CHECK = "/api/v1/updates/check"

NOT_FOUND_ONLY = frozenset({ErrorKind.LICENSE_NOT_FOUND})


class LicenseApiClient:
    """Client for the public license endpoints of the licensing service."""

    def __init__(
        self,
        base_url: str,
        http_client: Optional[HttpClient] = None,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize client.

        Args:
            base_url: Service base URL (trailing slash ignored)
            http_client: Transport; a requests-backed one is created if omitted
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.http_client = http_client or RequestsHttpClient(self.base_url, timeout)

    def activate_license(
        self,
        license_key: str,
        domain: str,
        request: Optional[ActivationRequest] = None,
    ) -> LicenseRecord:
        """
        Activate a license on a domain.

        Args:
            license_key: License key
            domain: Domain to bind the activation to
            request: Optional activation fields; unset fields are not sent

        Returns:
            LicenseRecord reported by the service

        Raises:
            LicenseExpiredError, ActivationLimitExceededError,
            LicenseNotFoundError, ApiValidationError, NetworkError, ApiException
        """
        data = self._license_payload(license_key, domain)
        if request is not None:
            data.update(request.to_payload())

        parsed = self._call(
            "activate",
            lambda: self.http_client.post(API_ENDPOINT_LICENSES_ACTIVATE, data),
        )
        return LicenseRecord.from_api(license_key, parsed.get(RESPONSE_KEY_DATA))

    def validate_license(self, license_key: str, domain: str) -> LicenseRecord:
        """
        Validate a license on a domain.

        Raises the same exceptions as activate_license.
        """
        data = self._license_payload(license_key, domain)
        parsed = self._call(
            "validate",
            lambda: self.http_client.post(API_ENDPOINT_LICENSES_VALIDATE, data),
        )
        return LicenseRecord.from_api(license_key, parsed.get(RESPONSE_KEY_DATA))

    def deactivate_license(self, license_key: str, domain: str) -> bool:
        """
        Deactivate a license on a domain.

        Returns:
            True when the service confirmed the deactivation

        Raises:
            ApiException: Any failure, unclassified
        """
        data = self._license_payload(license_key, domain)
        self._call(
            "deactivate",
            lambda: self.http_client.post(API_ENDPOINT_LICENSES_DEACTIVATE, data),
            on_error=raise_generic,
        )
        return True

    def get_license(self, license_key: str) -> LicenseRecord:
        """
        Fetch license data by key.

        Raises:
            LicenseNotFoundError: If the key is unknown
            ApiException: Any other failure
        """
        path = API_ENDPOINT_LICENSES_GET.format(key=self._quoted_key(license_key))
        parsed = self._call("get_license", lambda: self.http_client.get(path))
        return LicenseRecord.from_api(license_key, parsed.get(RESPONSE_KEY_DATA))

    def get_license_features(self, license_key: str) -> Dict[str, FeatureValue]:
        """
        Fetch the features granted by a license.

        Raises:
            LicenseNotFoundError: If the key is unknown
            ApiException: Any other failure
        """
        path = API_ENDPOINT_LICENSES_FEATURES.format(key=self._quoted_key(license_key))
        parsed = self._call(
            "get_features",
            lambda: self.http_client.get(path),
            on_error=lambda envelope, status: raise_for_error(
                envelope, status, recognized=NOT_FOUND_ONLY
            ),
        )
        return parse_features(parsed.get(RESPONSE_KEY_DATA))

    def check_for_updates(
        self, license_key: str, domain: str, slug: str, current_version: str
    ) -> Optional[UpdateInfo]:
        """
        Ask whether a newer version of a plugin is available.

        Returns:
            UpdateInfo, or None when the installed version is current
        """
        data = self._license_payload(license_key, domain)
        data.update({"slug": slug, "current_version": current_version})
        parsed = self._call(
            "check_update",
            lambda: self.http_client.post(API_ENDPOINT_UPDATES_CHECK, data),
        )
        return UpdateInfo.from_api(parsed.get(RESPONSE_KEY_UPDATE))

    def report_usage(
        self, license_key: str, domain: str, report: UsageReport
    ) -> Dict[str, Any]:
        """
        Report usage counters for a month.

        Returns:
            The response envelope as sent by the service, unclassified
        """
        data = self._license_payload(license_key, domain)
        data.update(report.to_payload())
        return self._call(
            "report_usage",
            lambda: self.http_client.post(API_ENDPOINT_LICENSES_USAGE, data),
            on_error=None,
        )

    def _license_payload(self, license_key: str, domain: str) -> Dict[str, Any]:
        try:
            return {
                "license_key": str(LicenseKey(license_key)),
                "domain": str(Domain(domain)),
            }
        except ValueError as e:
            raise ApiValidationError(str(e), code=ERROR_CODE_VALIDATION_ERROR) from e

    def _quoted_key(self, license_key: str) -> str:
        try:
            return quote(str(LicenseKey(license_key)), safe="")
        except ValueError as e:
            raise ApiValidationError(str(e), code=ERROR_CODE_VALIDATION_ERROR) from e

    def _call(
        self,
        operation: str,
        send: Callable[[], HttpResponse],
        on_error: Optional[Callable[[Dict[str, Any], int], None]] = raise_for_error,
    ) -> Dict[str, Any]:
        """
        Send one request and parse its envelope.

        Args:
            operation: Operation name for logs and metrics
            send: Performs the request
            on_error: Raises for a non-success envelope; None returns it as is
        """
        started = time.monotonic()
        outcome = "error"
        try:
            response = send()
            parsed = parse_response(response)
            if not is_success(parsed):
                if on_error is not None:
                    on_error(parsed, response.status)
                outcome = "rejected"
                return parsed
            check_data(parsed, response)
            outcome = "success"
            return parsed
        except ApiException as e:
            outcome = str(e.kind)
            raise
        finally:
            license_api_requests_total.labels(operation=operation, outcome=outcome).inc()
            license_api_request_duration_seconds.labels(operation=operation).observe(
                time.monotonic() - started
            )
            logger.debug("Licensing service %s: %s", operation, outcome)
