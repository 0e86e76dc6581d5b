"""
HTTP transport for the Squid routing service.

The transport is a thin request/response adapter: it never raises on an
HTTP status code, leaving status handling to the caller, and retries 5xx
responses at the session level.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Response surfaced to the core: decoded body, header map and status"""
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)
    status: int = 0

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup"""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


class HttpAdapter:
    """
    Session-backed HTTP adapter for the routing service.

    Args:
        base_url: Base URL every path is joined onto (must end with '/')
        headers: Default headers sent with every request
        timeout: Timeout for HTTP requests in seconds
        retry_count: Number of retries for 5xx responses and connection errors
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: int = 30,
        retry_count: int = 3
    ):
        self.base_url = base_url
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update(headers or {})
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
            other=retry_count
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip('/')

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> HttpResponse:
        """
        Send a GET request.

        Raises:
            TransportError: If the service cannot be reached
        """
        return self._request("GET", path, params=params, headers=headers)

    def post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> HttpResponse:
        """
        Send a POST request with a JSON body.

        Raises:
            TransportError: If the service cannot be reached
        """
        return self._request("POST", path, json=json, headers=headers)

    def _request(self, method: str, path: str, **kwargs) -> HttpResponse:
        url = self._url(path)
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {str(e)}") from e

        try:
            data = response.json()
        except ValueError:
            content_type = response.headers.get('Content-Type', '')
            logger.warning(f"Non-JSON response from {url} (Content-Type: {content_type})")
            data = {"error": response.text}

        logger.debug(f"{method} {url} -> {response.status_code}")
        return HttpResponse(data=data, headers=dict(response.headers), status=response.status_code)

    def close(self) -> None:
        self.session.close()
