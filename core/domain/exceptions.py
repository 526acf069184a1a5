"""
Client exceptions.

Client exceptions represent failures reported by the licensing service
or raised while talking to it. Every remote failure is an ApiException
tagged with one ErrorKind from a closed set.
"""
from enum import Enum
from typing import Any, Dict, Optional, Type


class ErrorKind(Enum):
    """Failure kinds a remote licensing call can end with."""

    LICENSE_EXPIRED = "license_expired"
    ACTIVATION_LIMIT_EXCEEDED = "activation_limit_exceeded"
    LICENSE_NOT_FOUND = "license_not_found"
    VALIDATION = "validation"
    NETWORK = "network"
    API_ERROR = "api_error"

    def __str__(self) -> str:
        """Return kind as string."""
        return self.value


# Server error codes
ERROR_CODE_LICENSE_EXPIRED = "LICENSE_EXPIRED"
ERROR_CODE_ACTIVATION_LIMIT_EXCEEDED = "ACTIVATION_LIMIT_EXCEEDED"
ERROR_CODE_LICENSE_NOT_FOUND = "LICENSE_NOT_FOUND"
ERROR_CODE_VALIDATION_ERROR = "VALIDATION_ERROR"
ERROR_CODE_NETWORK_ERROR = "NETWORK_ERROR"

HTTP_BAD_REQUEST = 400

# Evaluated in order, first match wins.
ERROR_CODE_KINDS = (
    (ERROR_CODE_LICENSE_EXPIRED, ErrorKind.LICENSE_EXPIRED),
    (ERROR_CODE_ACTIVATION_LIMIT_EXCEEDED, ErrorKind.ACTIVATION_LIMIT_EXCEEDED),
    (ERROR_CODE_LICENSE_NOT_FOUND, ErrorKind.LICENSE_NOT_FOUND),
)


class LicenseClientException(Exception):
    """Base exception for all license client exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize client exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ApiException(LicenseClientException):
    """Generic failure of a licensing service call."""

    kind = ErrorKind.API_ERROR

    def __init__(
        self,
        message: str = "API error",
        code: str = None,
        http_status: int = 0,
        error_payload: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize API exception.

        Args:
            message: Human-readable error message
            code: Server error code
            http_status: HTTP status of the response (0 when none was received)
            error_payload: Raw error payload kept for diagnostics
        """
        super().__init__(message, code=code or ERROR_CODE_VALIDATION_ERROR)
        self.http_status = http_status
        self.error_payload = error_payload

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"http_status={self.http_status}, message={self.message!r})"
        )


class LicenseExpiredError(ApiException):
    """Raised when the service reports the license has expired."""

    kind = ErrorKind.LICENSE_EXPIRED


class ActivationLimitExceededError(ApiException):
    """Raised when the license has reached its activation cap."""

    kind = ErrorKind.ACTIVATION_LIMIT_EXCEEDED


class LicenseNotFoundError(ApiException):
    """Raised when the service does not know the license key."""

    kind = ErrorKind.LICENSE_NOT_FOUND


class ApiValidationError(ApiException):
    """Raised when a request is malformed or rejected as invalid."""

    kind = ErrorKind.VALIDATION


class NetworkError(ApiException):
    """Raised when the service could not be reached."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, error_payload: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            code=ERROR_CODE_NETWORK_ERROR,
            http_status=0,
            error_payload=error_payload,
        )


EXCEPTIONS_BY_KIND: Dict[ErrorKind, Type[ApiException]] = {
    ErrorKind.LICENSE_EXPIRED: LicenseExpiredError,
    ErrorKind.ACTIVATION_LIMIT_EXCEEDED: ActivationLimitExceededError,
    ErrorKind.LICENSE_NOT_FOUND: LicenseNotFoundError,
    ErrorKind.VALIDATION: ApiValidationError,
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.API_ERROR: ApiException,
}


def classify_error(code: Optional[str], http_status: int) -> ErrorKind:
    """
    Map a server error code and HTTP status to an ErrorKind.

    Args:
        code: Error code from the error envelope (may be None)
        http_status: HTTP status of the response

    Returns:
        The matching ErrorKind; API_ERROR when nothing more specific matched
    """
    for known_code, kind in ERROR_CODE_KINDS:
        if code == known_code:
            return kind
    if http_status == HTTP_BAD_REQUEST:
        return ErrorKind.VALIDATION
    return ErrorKind.API_ERROR
