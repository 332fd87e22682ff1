"""
CEPAccount - main client for certifying data on the Circular Protocol.

Expected failures never raise here. Each operation records a message in
``last_error`` and returns a sentinel ("", None or False), while
``last_error is None`` means the last operation succeeded. Only malformed
private key material (InvalidPrivateKeyError) propagates.
"""
import logging
import threading
from typing import Any, Dict, Optional

from .config import LIB_VERSION, NetworkConfig
from .crypto.signing import SignatureEncoding, sign_message, get_public_key
from .exceptions import InputValidationError
from .gateway.client import GatewayClient
from .gateway.exceptions import (
    GatewayError, NetworkDiscoveryError, TransactionRejectedError
)
from .gateway.resolver import GatewayResolver
from .gateway.transport import HttpTransport, RequestsTransport
from .models import GatewayEndpoint
from .poller import OutcomePoller, PollState
from .transaction import TransactionBuilder


class CEPAccount:
    """
    Account handle for certificate submission and transaction tracking.

    Typical flow::

        account = CEPAccount()
        account.open("0xYourWalletAddress")
        account.set_network("testnet")
        account.update_account()
        account.submit_certificate("data to certify", private_key_hex)
        outcome = account.get_transaction_outcome(account.latest_tx_id, 60)

    One account handles one transaction at a time. Separate accounts share
    no mutable state and can be used from separate threads.
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        network_url: Optional[str] = None,
        nag_url: Optional[str] = None,
        blockchain: Optional[str] = None,
        interval_sec: Optional[int] = None,
        signature_encoding: SignatureEncoding = SignatureEncoding.DER,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the account.

        Args:
            transport: HTTP transport; a RequestsTransport is created if omitted
            network_url: NAG discovery URL (defaults to NetworkConfig.discovery_url())
            nag_url: Initial NAG URL (defaults to NetworkConfig.default_nag())
            blockchain: Blockchain identifier (defaults to NetworkConfig.default_chain())
            interval_sec: Default polling interval for get_transaction_outcome
            signature_encoding: Signature wire encoding pinned for this deployment
            logger: Optional logger instance
        """
        self.transport = transport or RequestsTransport()
        self.network_url = network_url or NetworkConfig.discovery_url()
        self.signature_encoding = signature_encoding
        self.logger = logger or logging.getLogger(__name__)

        self._default_nag = nag_url or NetworkConfig.default_nag()
        self._default_chain = blockchain or NetworkConfig.default_chain()

        self.address = ""
        self.public_key = ""
        self.info: Optional[Any] = None
        self.code_version = LIB_VERSION
        self.last_error: Optional[str] = None
        self.nag_url = self._default_nag
        self.network_node = ""
        self.blockchain = self._default_chain
        self.latest_tx_id = ""
        self.nonce = 0
        self.interval_sec = interval_sec if interval_sec is not None else NetworkConfig.poll_interval()

    def _gateway(self) -> GatewayClient:
        return GatewayClient(
            self.nag_url,
            self.transport,
            network_node=self.network_node,
            blockchain=self.blockchain,
            version=self.code_version,
            logger=self.logger
        )

    def get_last_error(self) -> Optional[str]:
        return self.last_error

    def open(self, address: str) -> bool:
        """
        Set the account address.

        Args:
            address: Wallet address hex, with or without 0x prefix

        Returns:
            True on success, False if the address is empty
        """
        if not address:
            self.last_error = "invalid address format"
            return False

        self.address = address
        self.last_error = None
        return True

    def close(self) -> None:
        """Clear all account state back to defaults."""
        self.address = ""
        self.public_key = ""
        self.info = None
        self.last_error = None
        self.nag_url = self._default_nag
        self.network_node = ""
        self.blockchain = self._default_chain
        self.latest_tx_id = ""
        self.nonce = 0
        self.interval_sec = 0

    def set_blockchain(self, chain: str) -> None:
        self.blockchain = chain

    def set_network(self, network: str) -> str:
        """
        Resolve and cache the NAG URL for a network.

        Args:
            network: Network identifier ("mainnet", "testnet", "devnet")

        Returns:
            The NAG URL, or "" on failure (see last_error)
        """
        try:
            endpoint: GatewayEndpoint = GatewayResolver(
                self.transport, self.network_url, logger=self.logger
            ).resolve(network)
        except NetworkDiscoveryError as e:
            self.last_error = f"network discovery failed: {e}"
            return ""

        self.nag_url = endpoint.url
        self.network_node = endpoint.network
        self.last_error = None
        return self.nag_url

    def update_account(self) -> bool:
        """
        Refresh the nonce from the network.

        On success the local nonce becomes the reported nonce + 1.

        Returns:
            True on success, False otherwise (see last_error)
        """
        self.last_error = None

        if not self.address:
            self.last_error = "Account not open"
            return False
        if not self.nag_url:
            self.last_error = "Network not set"
            return False

        try:
            nonce = self._gateway().get_wallet_nonce(self.address)
        except TransactionRejectedError as e:
            self.last_error = str(e)
            return False
        except GatewayError as e:
            self.last_error = f"UpdateAccount failed: {e}"
            return False

        self.nonce = nonce + 1
        self.logger.debug(f"Account nonce updated to {self.nonce}")
        return True

    def sign_data(self, data: str, private_key_hex: str) -> str:
        """
        Sign arbitrary data with the account's key.

        Returns:
            Signature hex, or "" if data or key is empty

        Raises:
            InvalidPrivateKeyError: If the private key is malformed
        """
        if not data:
            self.last_error = "Data cannot be empty"
            return ""
        if not private_key_hex:
            self.last_error = "Private key cannot be empty"
            return ""

        self.last_error = None
        return sign_message(private_key_hex, data, self.signature_encoding)

    def submit_certificate(self, pdata: str, private_key_hex: str) -> None:
        """
        Build, sign and submit a certificate transaction.

        latest_tx_id is set as soon as the transaction is built; the
        nonce is incremented only when the gateway accepts it.

        Args:
            pdata: Certificate data (typically Certificate.get_json_certificate())
            private_key_hex: Signing key hex, with or without 0x prefix

        Raises:
            InvalidPrivateKeyError: If the private key is malformed
        """
        self.last_error = None

        builder = TransactionBuilder(
            self.blockchain,
            self.address,
            version=self.code_version,
            signature_encoding=self.signature_encoding
        )
        try:
            record = builder.build_certificate(pdata, private_key_hex, self.nonce)
        except InputValidationError as e:
            self.last_error = str(e)
            return

        self.latest_tx_id = record.id
        self.public_key = get_public_key(private_key_hex)

        try:
            self._gateway().submit_transaction(record)
        except TransactionRejectedError as e:
            self.last_error = str(e)
            return
        except GatewayError as e:
            self.last_error = f"SubmitCertificate failed: {e}"
            return

        self.nonce += 1

    def get_transaction(self, block_id: str, transaction_id: str) -> Optional[Dict[str, Any]]:
        """
        Look up a transaction in a single block.

        Returns:
            Raw response mapping, or None on failure (see last_error)
        """
        if not block_id:
            self.last_error = "blockID cannot be empty"
            return None
        if not transaction_id:
            self.last_error = "transactionID cannot be empty"
            return None

        try:
            block = int(str(block_id).strip())
        except ValueError:
            self.last_error = "invalid blockID format"
            return None

        return self.get_transaction_by_id(transaction_id, block, block)

    def get_transaction_by_id(self, transaction_id: str, start_block: int, end_block: int) -> Optional[Dict[str, Any]]:
        """
        Look up a transaction within a block range.

        Returns:
            Raw response mapping, or None on failure (see last_error)
        """
        if not self.nag_url:
            self.last_error = "network is not set"
            return None

        try:
            result = self._gateway().get_transaction_by_id(transaction_id, start_block, end_block)
        except GatewayError as e:
            self.last_error = f"getTransactionByID failed: {e}"
            return None

        self.last_error = None
        return result

    def get_transaction_outcome(
        self,
        transaction_id: str,
        timeout_sec: int,
        interval_sec: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Poll until a transaction leaves the "Pending" state.

        Args:
            transaction_id: Transaction ID to track
            timeout_sec: Total time budget in seconds
            interval_sec: Wait between polls (defaults to self.interval_sec);
                values <= 0 fall back to NetworkConfig.poll_interval()
            cancel_event: Optional event that stops polling when set

        Returns:
            The transaction's Response mapping once final, or None on
            timeout or cancellation (see last_error)
        """
        if not transaction_id:
            self.last_error = "Transaction ID cannot be empty"
            return None
        if not self.nag_url:
            self.last_error = "network is not set"
            return None

        if interval_sec is None:
            interval_sec = self.interval_sec
        if interval_sec is None or interval_sec <= 0:
            interval_sec = NetworkConfig.poll_interval()
            self.logger.debug(f"Non-positive poll interval, using {interval_sec}s")

        gateway = self._gateway()
        poller = OutcomePoller(gateway.get_transaction_by_id, logger=self.logger)
        outcome = poller.poll(transaction_id, timeout_sec, interval_sec, cancel_event=cancel_event)

        if outcome.state is PollState.FINALIZED:
            self.last_error = None
            return outcome.response

        self.last_error = outcome.error
        return None
