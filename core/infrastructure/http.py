"""
HTTP transport (port and requests adapter).

The transport only moves bytes: it returns status, body and headers
for any HTTP status and raises NetworkError when no response arrived.
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from core.domain.exceptions import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15
CONTENT_TYPE_JSON = "application/json"
DEFAULT_USER_AGENT = "License-Lifecycle-Client/1.0"


@dataclass(frozen=True)
class HttpResponse:
    """Raw HTTP response."""

    status: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)


class HttpClient(ABC):
    """Abstract HTTP transport."""

    @abstractmethod
    def get(self, path: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        """
        Send a GET request.

        Args:
            path: Path relative to the base URL
            headers: Extra request headers

        Returns:
            HttpResponse

        Raises:
            NetworkError: If the request could not be completed
        """
        pass

    @abstractmethod
    def post(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """
        Send a POST request with a JSON body.

        Args:
            path: Path relative to the base URL
            data: JSON-serializable body
            headers: Extra request headers

        Returns:
            HttpResponse

        Raises:
            NetworkError: If the request could not be completed
        """
        pass


class RequestsHttpClient(HttpClient):
    """HttpClient backed by a requests.Session."""

    def __init__(
        self,
        base_url: str,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Accept": CONTENT_TYPE_JSON, "User-Agent": user_agent}
        )

    def get(self, path: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        return self._request("GET", path, headers=headers or {})

    def post(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        request_headers = {"Content-Type": CONTENT_TYPE_JSON}
        request_headers.update(headers or {})
        return self._request(
            "POST", path, headers=request_headers, data=json.dumps(data or {})
        )

    def _request(self, method: str, path: str, **kwargs) -> HttpResponse:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Licensing service unreachable: %s %s - %s", method, path, e)
            raise NetworkError(
                f"Network error: {e}", error_payload={"url": url, "method": method}
            ) from e

        return HttpResponse(
            status=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )
