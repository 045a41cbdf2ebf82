"""
Outgoing HTTP correlation for ``requests``.

CorrelatingHTTPAdapter stamps the ambient correlation id onto every request
sent through a session it is mounted on, so downstream services continue the
same correlation.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.config.models import CorrelateClientOptions
from ..core.correlation.accessor import CorrelationContextAccessor

logger = logging.getLogger(__name__)


class CorrelatingHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that adds the correlation id request header.

    The header is only added when a correlation context is active and the
    request does not already carry the header.
    """

    def __init__(
        self,
        accessor: Optional[CorrelationContextAccessor] = None,
        options: Optional[CorrelateClientOptions] = None,
        **kwargs,
    ):
        self.accessor = accessor or CorrelationContextAccessor()
        self.options = options or CorrelateClientOptions()
        super().__init__(**kwargs)

    def add_headers(self, request, **kwargs):
        super().add_headers(request, **kwargs)

        correlation_id = self.accessor.correlation_id
        header = self.options.request_header
        if correlation_id is not None and header not in request.headers:
            request.headers[header] = correlation_id


def create_session(
    accessor: Optional[CorrelationContextAccessor] = None,
    options: Optional[CorrelateClientOptions] = None,
    max_retries: int = 3,
    backoff_factor: float = 0.3,
) -> requests.Session:
    """Create a session that correlates every request it sends."""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["HEAD", "GET", "OPTIONS", "POST"],
    )

    adapter = CorrelatingHTTPAdapter(accessor, options, max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


class HttpClient:
    """Small HTTP client over a correlating session."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        accessor: Optional[CorrelationContextAccessor] = None,
        options: Optional[CorrelateClientOptions] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.session = session or create_session(accessor, options)

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> requests.Response:
        url = self._build_url(endpoint)
        self.logger.debug(f"GET {url}")

        kwargs.setdefault("timeout", self.timeout)
        response = self.session.get(url, params=params, headers=headers, **kwargs)

        self._log_response(response)
        return response

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> requests.Response:
        url = self._build_url(endpoint)
        self.logger.debug(f"POST {url}")

        kwargs.setdefault("timeout", self.timeout)
        response = self.session.post(url, data=data, json=json, headers=headers, **kwargs)

        self._log_response(response)
        return response

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if endpoint.startswith("http"):
            return endpoint
        return urljoin(self.base_url + "/", endpoint.lstrip("/"))

    def _log_response(self, response: requests.Response) -> None:
        self.logger.debug(
            f"Response: {response.status_code} - {len(response.content)} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()
