"""
Gateway client for the Circular Protocol Network Access Gateway.

Endpoints are formed as <nag_url>Circular_<Method>_<network>, where the
network suffix is empty until a network has been selected.
"""
import json
import logging
from typing import Any, Dict, Optional

from ..config import LIB_VERSION
from ..models import NonceRequest, TransactionLookupRequest, TransactionRecord
from ..utils import hex_fix
from .exceptions import GatewayResponseError, ResultCode, TransactionRejectedError
from .transport import HttpTransport

logger = logging.getLogger(__name__)


def _result_code(body: Dict[str, Any]) -> Optional[int]:
    try:
        return int(body["Result"])
    except (KeyError, TypeError, ValueError):
        return None


def _detail(body: Dict[str, Any], default: str = "Unknown error") -> str:
    detail = body.get("Response")
    if detail is None or detail == "":
        return default
    if isinstance(detail, str):
        return detail
    return json.dumps(detail, separators=(",", ":"))


class GatewayClient:
    """
    Client for one NAG endpoint and network.

    The client is stateless apart from its configuration. Nonce
    bookkeeping stays with the caller.
    """

    def __init__(
        self,
        nag_url: str,
        transport: HttpTransport,
        network_node: str = "",
        blockchain: str = "",
        version: str = LIB_VERSION,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the Gateway client.

        Args:
            nag_url: Base NAG URL the method name is appended to
            transport: HTTP transport used for every request
            network_node: Network name appended to method names
            blockchain: Blockchain identifier (any hex form)
            version: Library version sent with each request
            logger: Optional logger instance
        """
        self.nag_url = nag_url
        self.transport = transport
        self.network_node = network_node
        self.blockchain = blockchain
        self.version = version
        self.logger = logger or logging.getLogger(__name__)

    def endpoint(self, method: str) -> str:
        """Full URL for a gateway method."""
        return f"{self.nag_url}Circular_{method}_{self.network_node or ''}"

    def _post(self, method: str, body: str) -> Dict[str, Any]:
        response = self.transport.post_json(self.endpoint(method), body)
        if not isinstance(response, dict):
            raise GatewayResponseError(f"Invalid response format from server: expected object, got {type(response).__name__}")
        return response

    def get_wallet_nonce(self, address: str) -> int:
        """
        Fetch the last used nonce for an address.

        Args:
            address: Wallet address (any hex form)

        Returns:
            The nonce reported by the gateway; the next transaction uses this + 1

        Raises:
            TransactionRejectedError: For a non-200 Result code
            GatewayResponseError: If the nonce is missing or malformed
            GatewayError: For transport failures
        """
        request = NonceRequest(
            blockchain=hex_fix(self.blockchain),
            address=hex_fix(address),
            version=self.version
        )
        body = self._post("GetWalletNonce", request.to_json())

        code = _result_code(body)
        if code is None:
            raise GatewayResponseError("Unable to retrieve nonce from response")
        if code == ResultCode.INVALID_BLOCKCHAIN:
            raise TransactionRejectedError("Rejected: Invalid Blockchain", result_code=code)
        if code == ResultCode.INSUFFICIENT_BALANCE:
            raise TransactionRejectedError("Rejected: Insufficient balance", result_code=code)
        if code != ResultCode.OK:
            detail = _detail(body)
            raise TransactionRejectedError(f"Server error {code}: {detail}", result_code=code, detail=detail)

        response = body.get("Response")
        if not isinstance(response, dict):
            raise GatewayResponseError("Unable to retrieve nonce from response")

        nonce = response.get("Nonce", response.get("nonce"))
        if nonce is None:
            raise GatewayResponseError("Nonce field not found in response")
        if isinstance(nonce, bool):
            raise GatewayResponseError("Unexpected nonce type in response")
        if isinstance(nonce, int):
            return nonce
        if isinstance(nonce, str):
            try:
                return int(nonce.strip())
            except ValueError:
                raise GatewayResponseError("Invalid nonce format in response")
        raise GatewayResponseError("Unexpected nonce type in response")

    def submit_transaction(self, record: TransactionRecord) -> Dict[str, Any]:
        """
        Post a signed transaction.

        Args:
            record: Signed transaction record

        Returns:
            The gateway's response mapping (Result == 200)

        Raises:
            TransactionRejectedError: If the gateway rejects the transaction
            GatewayResponseError: If the response carries no Result field
            GatewayError: For transport failures
        """
        self.logger.info(f"Submitting transaction {record.id}")
        body = self._post("AddTransaction", record.to_json())

        code = _result_code(body)
        if code is None:
            raise GatewayResponseError("Invalid response format from server")
        if code != ResultCode.OK:
            detail = _detail(body)
            self.logger.warning(f"Transaction {record.id} rejected with code {code}: {detail}")
            raise TransactionRejectedError(
                f"Certificate submission failed (code {code}): {detail}",
                result_code=code,
                detail=detail
            )

        self.logger.info(f"Transaction {record.id} accepted")
        return body

    def get_transaction_by_id(self, tx_id: str, start: int, end: int) -> Dict[str, Any]:
        """
        Look up a transaction within a block range.

        Args:
            tx_id: Transaction ID (any hex form)
            start: Start block
            end: End block

        Returns:
            The raw response mapping

        Raises:
            GatewayError: For transport failures or unreadable responses
        """
        request = TransactionLookupRequest(
            blockchain=hex_fix(self.blockchain),
            id=hex_fix(tx_id),
            start=str(start),
            end=str(end),
            version=self.version
        )
        return self._post("GetTransactionbyID", request.to_json())
