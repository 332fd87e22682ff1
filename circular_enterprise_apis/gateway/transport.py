"""
HTTP transport layer for Gateway communication.

All network access in the library goes through an HttpTransport
instance owned by (or injected into) an account, so tests can swap in
a scripted transport and no process-global HTTP client exists.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import NetworkConfig
from .exceptions import GatewayConnectionError, GatewayResponseError

logger = logging.getLogger(__name__)

# Truncation limit for response bodies quoted in error messages
_BODY_SNIPPET = 200


class HttpTransport(ABC):
    """
    Abstract base class for HTTP transports.

    Implementations return decoded JSON and raise GatewayConnectionError
    on transport failure or GatewayResponseError on a non-2xx status or
    an undecodable body.
    """

    @abstractmethod
    def get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        Issue a GET request and decode the JSON response.

        Args:
            url: Absolute request URL
            params: Optional query parameters

        Returns:
            Decoded JSON value
        """
        pass

    @abstractmethod
    def post_json(self, url: str, body: str) -> Any:
        """
        POST an already-serialized JSON document and decode the JSON response.

        Args:
            url: Absolute request URL
            body: JSON text sent verbatim as the request body

        Returns:
            Decoded JSON value
        """
        pass

    def close(self) -> None:
        """Close any open connections or resources."""
        pass


class RequestsTransport(HttpTransport):
    """
    HttpTransport backed by a requests.Session.

    Retries are disabled by default. Network errors are reported to the
    caller, and only the outcome poller repeats requests.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        retry_count: int = 0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds (defaults to NetworkConfig.http_timeout())
            retry_count: Number of retries for connection errors and 5xx responses
            session: Optional pre-configured session to use
            logger: Optional logger instance
        """
        self.timeout = timeout if timeout is not None else NetworkConfig.http_timeout()
        self.logger = logger or logging.getLogger(__name__)

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=retry_count,
                connect=retry_count,
                read=retry_count,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["GET", "POST"],
                raise_on_status=False
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session = session

    def get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        self.logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"GET {url} failed: {e}")
            raise GatewayConnectionError(f"request to {url} failed: {e}") from e
        return self._decode(response)

    def post_json(self, url: str, body: str) -> Any:
        self.logger.debug(f"POST {url} ({len(body)} bytes)")
        try:
            response = self.session.post(
                url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"POST {url} failed: {e}")
            raise GatewayConnectionError(f"request to {url} failed: {e}") from e
        return self._decode(response)

    def _decode(self, response: requests.Response) -> Any:
        if not 200 <= response.status_code < 300:
            snippet = (response.text or "")[:_BODY_SNIPPET]
            raise GatewayResponseError(
                f"request failed with status: {response.status_code}, body: {snippet}",
                status_code=response.status_code
            )

        content_type = response.headers.get("Content-Type", "")
        if content_type and "json" not in content_type:
            self.logger.warning(f"Unexpected Content-Type: {content_type} (expected application/json)")

        try:
            return json.loads(response.text)
        except ValueError as e:
            raise GatewayResponseError(
                f"invalid JSON in response: {e}",
                status_code=response.status_code
            ) from e

    def close(self) -> None:
        self.session.close()
