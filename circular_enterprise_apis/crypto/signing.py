"""
secp256k1 ECDSA signing and verification.

Signatures are deterministic (RFC 6979 with HMAC-SHA256) and canonical
(low-S), so identical inputs always produce identical bytes.
"""
import re
import hashlib
import logging
from enum import Enum

from ecdsa import SigningKey, SECP256k1
from ecdsa.util import sigencode_der_canonize, sigencode_string_canonize
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, encode_dss_signature

from ..exceptions import InvalidPrivateKeyError
from ..utils import hex_fix
from .ec_constants import (
    SECP256K1_MIN, SECP256K1_MAX, SECP256K1_SCALAR_BYTES
)

logger = logging.getLogger(__name__)

_LOWER_HEX_RE = re.compile(r"[0-9a-f]+")


class SignatureEncoding(str, Enum):
    """
    Wire encoding of an (r, s) signature pair.

    DER is what the current reference gateway accepts. RAW (r || s,
    32 bytes each) is kept for deployments pinned to older peers.
    """
    DER = "der"
    RAW = "raw"


def parse_private_key(private_key_hex: str) -> int:
    """
    Parse a hex private key into a secp256k1 scalar.

    Args:
        private_key_hex: Private key hex, with or without 0x prefix

    Returns:
        Private scalar as an integer

    Raises:
        InvalidPrivateKeyError: If the key is empty, not hex, or out of range
    """
    if not isinstance(private_key_hex, str):
        raise InvalidPrivateKeyError(
            f"Invalid private key format: expected str, got {type(private_key_hex).__name__}"
        )

    normalized = hex_fix(private_key_hex.strip())
    if not normalized:
        raise InvalidPrivateKeyError("Invalid private key format: key is empty")
    if not _LOWER_HEX_RE.fullmatch(normalized):
        raise InvalidPrivateKeyError("Invalid private key format: key contains non-hex characters")

    scalar = int(normalized, 16)
    if not SECP256K1_MIN <= scalar <= SECP256K1_MAX:
        raise InvalidPrivateKeyError("Invalid private key format: scalar out of range for secp256k1")
    return scalar


def _digest(message: str) -> bytes:
    return hashlib.sha256(message.encode("utf-8")).digest()


def sign_message(
    private_key_hex: str,
    message: str,
    encoding: SignatureEncoding = SignatureEncoding.DER
) -> str:
    """
    Sign the SHA-256 digest of a message.

    Args:
        private_key_hex: Private key hex, with or without 0x prefix
        message: Text to sign (UTF-8 encoded before hashing)
        encoding: Signature wire encoding

    Returns:
        Lowercase hex signature without prefix

    Raises:
        InvalidPrivateKeyError: If the private key is malformed
    """
    scalar = parse_private_key(private_key_hex)
    signing_key = SigningKey.from_secret_exponent(scalar, curve=SECP256k1, hashfunc=hashlib.sha256)

    sigencode = sigencode_der_canonize
    if SignatureEncoding(encoding) is SignatureEncoding.RAW:
        sigencode = sigencode_string_canonize

    signature = signing_key.sign_digest_deterministic(
        _digest(message),
        hashfunc=hashlib.sha256,
        sigencode=sigencode
    )
    return signature.hex()


def verify_signature(
    public_key_hex: str,
    message: str,
    signature_hex: str,
    encoding: SignatureEncoding = SignatureEncoding.DER
) -> bool:
    """
    Verify a signature produced by sign_message.

    Never raises: malformed keys, points or signatures yield False.

    Args:
        public_key_hex: SEC1-encoded public key hex (uncompressed or compressed)
        message: Text that was signed
        signature_hex: Signature hex in the given encoding
        encoding: Signature wire encoding

    Returns:
        True if the signature is valid for the message and key
    """
    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(
            ec.SECP256K1(), bytes.fromhex(hex_fix(public_key_hex))
        )

        signature = bytes.fromhex(hex_fix(signature_hex))
        if SignatureEncoding(encoding) is SignatureEncoding.RAW:
            if len(signature) != 2 * SECP256K1_SCALAR_BYTES:
                return False
            r = int.from_bytes(signature[:SECP256K1_SCALAR_BYTES], "big")
            s = int.from_bytes(signature[SECP256K1_SCALAR_BYTES:], "big")
            signature = encode_dss_signature(r, s)

        public_key.verify(signature, _digest(message), ec.ECDSA(Prehashed(hashes.SHA256())))
        return True
    except InvalidSignature:
        return False
    except (ValueError, TypeError, AttributeError) as e:
        logger.debug(f"Signature verification input rejected: {e}")
        return False


def get_public_key(private_key_hex: str) -> str:
    """
    Derive the uncompressed public key for a private key.

    Returns:
        Lowercase hex of 0x04 || X || Y (130 characters), without 0x prefix

    Raises:
        InvalidPrivateKeyError: If the private key is malformed
    """
    scalar = parse_private_key(private_key_hex)
    private_key = ec.derive_private_key(scalar, ec.SECP256K1())
    point = private_key.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint
    )
    return point.hex()
