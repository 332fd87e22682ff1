"""
Network configuration for the Circular Enterprise APIs.

Protocol constants live here. Deployment-specific values can be
overridden through environment variables; explicit constructor
arguments on the client classes always take precedence over both.
"""
import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Version string sent in every request and transaction record
LIB_VERSION = "1.0.13"

# Default Circular Protocol blockchain identifier
DEFAULT_CHAIN = "0x8a20baa40c45dc5055aeb26197c203e576ef389d9acb171bd62da11dc5ad72b2"

# Default Network Access Gateway used until a network is resolved
DEFAULT_NAG = "https://nag.circularlabs.io/NAG.php?cep="

# Discovery service queried with ?network=<name>
NETWORK_URL = "https://circularlabs.io/network/getNAG"

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_POLL_INTERVAL = 2


class NetworkConfig:
    """Resolves configuration values from the environment with protocol defaults."""

    KNOWN_NETWORKS = ("mainnet", "testnet", "devnet")

    @staticmethod
    def _env(name: str) -> Optional[str]:
        value = os.environ.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    @classmethod
    def discovery_url(cls) -> str:
        """Base URL of the NAG discovery service."""
        return cls._env("CIRCULAR_NETWORK_URL") or NETWORK_URL

    @classmethod
    def default_nag(cls) -> str:
        """NAG URL used before set_network() is called."""
        return cls._env("CIRCULAR_NAG_URL") or DEFAULT_NAG

    @classmethod
    def default_chain(cls) -> str:
        """Blockchain identifier used unless the caller selects another one."""
        return cls._env("CIRCULAR_BLOCKCHAIN") or DEFAULT_CHAIN

    @classmethod
    def http_timeout(cls) -> float:
        """
        Per-request HTTP timeout in seconds.

        Returns:
            Value of CIRCULAR_HTTP_TIMEOUT, or the default when unset or invalid
        """
        raw = cls._env("CIRCULAR_HTTP_TIMEOUT")
        if raw is None:
            return DEFAULT_HTTP_TIMEOUT
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Invalid CIRCULAR_HTTP_TIMEOUT {raw!r}, using {DEFAULT_HTTP_TIMEOUT}")
            return DEFAULT_HTTP_TIMEOUT
        if value <= 0:
            logger.warning(f"CIRCULAR_HTTP_TIMEOUT must be positive, using {DEFAULT_HTTP_TIMEOUT}")
            return DEFAULT_HTTP_TIMEOUT
        return value

    @classmethod
    def poll_interval(cls) -> int:
        """Default interval in seconds between transaction outcome polls."""
        raw = cls._env("CIRCULAR_POLL_INTERVAL")
        if raw is None:
            return DEFAULT_POLL_INTERVAL
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid CIRCULAR_POLL_INTERVAL {raw!r}, using {DEFAULT_POLL_INTERVAL}")
            return DEFAULT_POLL_INTERVAL
        if value <= 0:
            logger.warning(f"CIRCULAR_POLL_INTERVAL must be positive, using {DEFAULT_POLL_INTERVAL}")
            return DEFAULT_POLL_INTERVAL
        return value
