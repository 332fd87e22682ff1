"""
Gateway module for the Circular Enterprise APIs.

This module handles NAG discovery, transaction submission and
transaction lookup over an injectable HTTP transport.
"""
from .client import GatewayClient
from .exceptions import (
    ResultCode, GatewayError, GatewayConnectionError, GatewayResponseError,
    NetworkDiscoveryError, TransactionRejectedError
)
from .resolver import GatewayResolver, get_nag
from .stub_transport import StubTransport
from .transport import HttpTransport, RequestsTransport

__all__ = [
    'GatewayClient',
    'GatewayResolver',
    'get_nag',
    'HttpTransport',
    'RequestsTransport',
    'StubTransport',
    'ResultCode',
    'GatewayError',
    'GatewayConnectionError',
    'GatewayResponseError',
    'NetworkDiscoveryError',
    'TransactionRejectedError',
]
