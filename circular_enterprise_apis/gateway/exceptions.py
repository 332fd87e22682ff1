"""
Exceptions for the Gateway module.
"""
from enum import IntEnum
from typing import Any, Optional

from ..exceptions import CircularError


class ResultCode(IntEnum):
    """
    Result codes carried in the "Result" field of gateway responses.
    """
    OK = 200
    INVALID_BLOCKCHAIN = 114
    INSUFFICIENT_BALANCE = 115


class GatewayError(CircularError):
    """Base exception for Gateway-related errors."""
    pass


class GatewayConnectionError(GatewayError):
    """Raised when the HTTP round trip to the Gateway fails."""
    pass


class GatewayResponseError(GatewayError):
    """Raised when the Gateway returns a non-2xx status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NetworkDiscoveryError(GatewayError):
    """Raised when a network name cannot be resolved to a NAG URL."""
    pass


class TransactionRejectedError(GatewayError):
    """Raised when a well-formed response carries a non-200 Result code."""

    def __init__(self, message: str, result_code: Optional[int] = None, detail: Any = None):
        self.result_code = result_code
        self.detail = detail
        super().__init__(message)
