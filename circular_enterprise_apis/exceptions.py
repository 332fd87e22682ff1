"""
Exceptions for the Circular Enterprise APIs.
"""


class CircularError(Exception):
    """Base exception for all library errors."""
    pass


class InputValidationError(CircularError):
    """Raised when a required input (address, payload, key, network) is missing."""
    pass


class InvalidPrivateKeyError(CircularError, ValueError):
    """
    Raised when private key material cannot be parsed.

    This indicates misuse by the caller rather than an environmental
    condition, so the account facade lets it propagate.
    """
    pass
