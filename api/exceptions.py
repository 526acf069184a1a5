"""
API error envelope handling.

This module turns licensing service responses into parsed envelopes
or typed client exceptions.
"""

import json
import logging
from typing import Any, Dict, FrozenSet, Optional

from core.domain.exceptions import (
    ERROR_CODE_VALIDATION_ERROR,
    EXCEPTIONS_BY_KIND,
    ApiException,
    ErrorKind,
    classify_error,
)
from core.infrastructure.http import HttpResponse

logger = logging.getLogger(__name__)

RESPONSE_KEY_SUCCESS = "success"
RESPONSE_KEY_DATA = "data"
RESPONSE_KEY_ERROR = "error"
RESPONSE_KEY_CODE = "code"
RESPONSE_KEY_MESSAGE = "message"
RESPONSE_KEY_UPDATE = "update"

DEFAULT_ERROR_MESSAGE = "API error"
INVALID_JSON_MESSAGE = "Invalid JSON response from server"


def parse_response(response: HttpResponse) -> Dict[str, Any]:
    """
    Decode a response body into a JSON object.

    Args:
        response: Raw HTTP response

    Returns:
        Parsed envelope

    Raises:
        ApiException: If the body is not a JSON object
    """
    try:
        parsed = json.loads(response.body)
    except (TypeError, ValueError):
        parsed = None

    if not isinstance(parsed, dict):
        logger.warning(
            "Non-JSON response from licensing service (HTTP %s)", response.status
        )
        raise ApiException(
            INVALID_JSON_MESSAGE,
            code=ERROR_CODE_VALIDATION_ERROR,
            http_status=response.status,
            error_payload={"body": response.body},
        )
    return parsed


def is_success(parsed: Dict[str, Any]) -> bool:
    """Return True when the envelope carries a truthy success flag."""
    return bool(parsed.get(RESPONSE_KEY_SUCCESS))


def check_data(parsed: Dict[str, Any], response: HttpResponse) -> None:
    """
    Reject a success envelope whose data is present but not an object.

    Raises:
        ApiException: If ``data`` is neither missing, null nor a JSON object
    """
    data = parsed.get(RESPONSE_KEY_DATA)
    if data is None or isinstance(data, dict):
        return
    logger.warning(
        "Malformed data in licensing service response (HTTP %s)", response.status
    )
    raise ApiException(
        INVALID_JSON_MESSAGE,
        code=ERROR_CODE_VALIDATION_ERROR,
        http_status=response.status,
        error_payload={"body": response.body},
    )


def _error_details(parsed: Dict[str, Any]):
    error = parsed.get(RESPONSE_KEY_ERROR)
    if not isinstance(error, dict):
        error = {}
    code = error.get(RESPONSE_KEY_CODE) or ERROR_CODE_VALIDATION_ERROR
    message = error.get(RESPONSE_KEY_MESSAGE) or DEFAULT_ERROR_MESSAGE
    return error, code, message


def raise_for_error(
    parsed: Dict[str, Any],
    http_status: int,
    recognized: Optional[FrozenSet[ErrorKind]] = None,
) -> None:
    """
    Raise the exception matching an error envelope.

    Args:
        parsed: Parsed error envelope
        http_status: HTTP status of the response
        recognized: Kinds the caller classifies; any other kind is
            raised as a generic ApiException. None means all kinds.

    Raises:
        ApiException: Always (or a subclass)
    """
    error, code, message = _error_details(parsed)
    kind = classify_error(code, http_status)
    if recognized is not None and kind not in recognized:
        kind = ErrorKind.API_ERROR

    logger.info("Licensing service error: %s (HTTP %s, %s)", code, http_status, kind)
    exception_class = EXCEPTIONS_BY_KIND[kind]
    raise exception_class(
        message,
        code=code,
        http_status=http_status,
        error_payload=error or None,
    )


def raise_generic(parsed: Dict[str, Any], http_status: int) -> None:
    """Raise an unclassified ApiException for an error envelope."""
    raise_for_error(parsed, http_status, recognized=frozenset())
