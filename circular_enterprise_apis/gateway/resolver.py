"""
Network Access Gateway (NAG) discovery.

The discovery service has answered in two shapes over time:

    {"status": "success", "url": "https://...", "message": "OK"}
    {"Result": 200, "Response": {"nagurl": "https://..."}}

Both are accepted.
"""
import logging
from typing import Any, Optional, Tuple

from ..config import NetworkConfig
from ..models import GatewayEndpoint
from .exceptions import GatewayError, GatewayResponseError, NetworkDiscoveryError, ResultCode
from .transport import HttpTransport, RequestsTransport

logger = logging.getLogger(__name__)

_NETWORK_QUERY = "?network="


def _result_code(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _extract_url(body: Any) -> str:
    """
    Pull the NAG URL out of either response shape.

    Raises:
        NetworkDiscoveryError: If the body reports an error or has no URL
    """
    if not isinstance(body, dict):
        raise NetworkDiscoveryError("failed to get valid NAG URL from response")

    status = body.get("status")
    if status == "error":
        message = body.get("message") or ""
        raise NetworkDiscoveryError(f"failed to get valid NAG URL from response: {message}")
    if status == "success":
        url = body.get("url")
        if isinstance(url, str) and url:
            return url

    # Legacy envelope
    if _result_code(body.get("Result")) == ResultCode.OK:
        response = body.get("Response")
        if isinstance(response, dict):
            url = response.get("nagurl") or response.get("url")
            if isinstance(url, str) and url:
                return url

    raise NetworkDiscoveryError("failed to get valid NAG URL from response")


class GatewayResolver:
    """Resolves network names to NAG endpoints via the discovery service."""

    def __init__(
        self,
        transport: HttpTransport,
        discovery_url: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.transport = transport
        url = discovery_url or NetworkConfig.discovery_url()
        # The network name is sent as a query parameter; drop an empty one left on the base URL
        if url.endswith(_NETWORK_QUERY):
            url = url[:-len(_NETWORK_QUERY)]
        self.discovery_url = url
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, network: str) -> GatewayEndpoint:
        """
        Resolve a network name to its NAG endpoint.

        Args:
            network: Network identifier ("mainnet", "testnet", "devnet", ...)

        Returns:
            The resolved GatewayEndpoint; nothing is cached here

        Raises:
            NetworkDiscoveryError: If the name is empty or resolution fails
        """
        if not network:
            raise NetworkDiscoveryError("network identifier cannot be empty")

        try:
            body = self.transport.get_json(self.discovery_url, params={"network": network})
        except GatewayResponseError as e:
            if e.status_code is not None and not 200 <= e.status_code < 300:
                raise NetworkDiscoveryError(f"network discovery failed with status: {e.status_code}") from e
            raise NetworkDiscoveryError(f"failed to unmarshal NAG response: {e}") from e
        except GatewayError as e:
            raise NetworkDiscoveryError(f"failed to fetch NAG URL: {e}") from e

        url = _extract_url(body)
        self.logger.info(f"Resolved network {network} to {url}")
        return GatewayEndpoint(url=url, network=network)


def get_nag(network: str, transport: Optional[HttpTransport] = None) -> Tuple[str, Optional[str]]:
    """
    Resolve a network's NAG URL, reporting failure as a value.

    Args:
        network: Network identifier
        transport: Optional transport; a short-lived RequestsTransport is used otherwise

    Returns:
        (url, None) on success, ("", error message) on failure
    """
    owned = transport is None
    transport = transport or RequestsTransport()
    try:
        endpoint = GatewayResolver(transport).resolve(network)
        return endpoint.url, None
    except NetworkDiscoveryError as e:
        return "", str(e)
    finally:
        if owned:
            transport.close()
