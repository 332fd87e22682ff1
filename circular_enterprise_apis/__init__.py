"""
Circular Enterprise APIs - Python client for certifying data on the
Circular Protocol blockchain.
"""
from .version import __version__
from .account import CEPAccount
from .config import LIB_VERSION, DEFAULT_CHAIN, DEFAULT_NAG, NETWORK_URL, NetworkConfig
from .crypto import SignatureEncoding
from .exceptions import CircularError, InputValidationError, InvalidPrivateKeyError
from .gateway import (
    GatewayClient, GatewayResolver, get_nag, HttpTransport, RequestsTransport,
    StubTransport, GatewayError, NetworkDiscoveryError, TransactionRejectedError
)
from .models import Certificate, TransactionRecord, CertificatePayload, GatewayEndpoint
from .poller import OutcomePoller, PollOutcome, PollState
from .transaction import TransactionBuilder, build_certificate_payload, compute_transaction_id
from .utils import (
    string_to_hex, hex_to_string, hex_fix, pad_number,
    get_formatted_timestamp, parse_formatted_timestamp, sha256_hex
)

__all__ = [
    "CEPAccount",
    "Certificate",
    "TransactionRecord",
    "CertificatePayload",
    "GatewayEndpoint",
    "TransactionBuilder",
    "build_certificate_payload",
    "compute_transaction_id",
    "GatewayClient",
    "GatewayResolver",
    "get_nag",
    "HttpTransport",
    "RequestsTransport",
    "StubTransport",
    "OutcomePoller",
    "PollOutcome",
    "PollState",
    "SignatureEncoding",
    "NetworkConfig",
    "CircularError",
    "InputValidationError",
    "InvalidPrivateKeyError",
    "GatewayError",
    "NetworkDiscoveryError",
    "TransactionRejectedError",
    "string_to_hex",
    "hex_to_string",
    "hex_fix",
    "pad_number",
    "get_formatted_timestamp",
    "parse_formatted_timestamp",
    "sha256_hex",
    "LIB_VERSION",
    "DEFAULT_CHAIN",
    "DEFAULT_NAG",
    "NETWORK_URL",
    "__version__",
]
