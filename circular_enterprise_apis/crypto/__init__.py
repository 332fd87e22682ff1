"""
Cryptographic operations for the Circular Enterprise APIs.
"""
from .signing import (
    SignatureEncoding,
    parse_private_key,
    sign_message,
    verify_signature,
    get_public_key,
)

__all__ = [
    'SignatureEncoding',
    'parse_private_key',
    'sign_message',
    'verify_signature',
    'get_public_key',
]
