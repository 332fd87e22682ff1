"""
Canonical certificate transaction construction.

The transaction ID is the SHA-256 of the plain concatenation

    Blockchain + From + To + Payload + Nonce + Timestamp

over normalized (lowercase, unprefixed) hex fields, the decimal nonce and
the formatted timestamp. The ID string, not the concatenation, is what
gets signed.
"""
import logging
from typing import Optional, Union

from .config import LIB_VERSION
from .crypto.signing import SignatureEncoding, sign_message
from .exceptions import InputValidationError
from .models import CertificatePayload, TransactionRecord
from .utils import hex_fix, string_to_hex, sha256_hex, get_formatted_timestamp

logger = logging.getLogger(__name__)


def build_certificate_payload(pdata: str) -> str:
    """
    Build the wire Payload for certificate data.

    Args:
        pdata: Raw certificate data

    Returns:
        Uppercase hex of {"Action":"CP_CERTIFICATE","Data":"<hex of pdata>"}
    """
    payload = CertificatePayload(data=string_to_hex(pdata))
    return string_to_hex(payload.to_json())


def compute_transaction_id(
    blockchain: str,
    from_address: str,
    to_address: str,
    payload: str,
    nonce: Union[int, str],
    timestamp: str
) -> str:
    """
    Compute the content-addressed transaction ID.

    Callers must pass hex fields already normalized with hex_fix.

    Returns:
        64-character lowercase hex SHA-256
    """
    return sha256_hex(f"{blockchain}{from_address}{to_address}{payload}{nonce}{timestamp}")


class TransactionBuilder:
    """
    Builds signed certificate transactions for one address on one blockchain.

    The builder holds no mutable state; the nonce is supplied per call by
    the owner of the account state.
    """

    def __init__(
        self,
        blockchain: str,
        address: str,
        version: str = LIB_VERSION,
        signature_encoding: SignatureEncoding = SignatureEncoding.DER
    ):
        self.blockchain = blockchain
        self.address = address
        self.version = version
        self.signature_encoding = signature_encoding

    def build_certificate(
        self,
        pdata: str,
        private_key_hex: str,
        nonce: int,
        timestamp: Optional[str] = None
    ) -> TransactionRecord:
        """
        Build and sign a certificate transaction.

        Args:
            pdata: Certificate data to record
            private_key_hex: Signing key hex, with or without 0x prefix
            nonce: Current account nonce
            timestamp: Fixed timestamp; defaults to the current UTC time

        Returns:
            Immutable signed TransactionRecord

        Raises:
            InputValidationError: If the address, data or key is empty
            InvalidPrivateKeyError: If the key cannot be parsed
        """
        if not self.address:
            raise InputValidationError("Account is not open")
        if not pdata:
            raise InputValidationError("Certificate data cannot be empty")
        if not private_key_hex:
            raise InputValidationError("Private key cannot be empty")

        if timestamp is None:
            timestamp = get_formatted_timestamp()

        from_hex = hex_fix(self.address)
        to_hex = hex_fix(self.address)
        blockchain_hex = hex_fix(self.blockchain)
        payload_hex = build_certificate_payload(pdata)
        nonce_str = str(nonce)

        tx_id = compute_transaction_id(blockchain_hex, from_hex, to_hex, payload_hex, nonce_str, timestamp)
        signature = sign_message(private_key_hex, tx_id, self.signature_encoding)

        logger.debug(f"Built certificate transaction {tx_id} with nonce {nonce_str}")

        return TransactionRecord(
            id=tx_id,
            from_address=from_hex,
            to_address=to_hex,
            timestamp=timestamp,
            payload=payload_hex,
            nonce=nonce_str,
            signature=signature,
            blockchain=blockchain_hex,
            version=self.version
        )
