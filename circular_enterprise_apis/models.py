"""
Data models for the Circular Enterprise APIs.

Field declaration order is the serialization order, which keeps the
canonical JSON stable no matter how the caller builds the model.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .config import LIB_VERSION
from .utils import string_to_hex, hex_to_string

CERTIFICATE_ACTION = "CP_CERTIFICATE"
CERTIFICATE_TX_TYPE = "C_TYPE_CERTIFICATE"


class _WireModel(BaseModel):
    """Base for request/record models serialized with their wire names."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_json(self) -> str:
        """Compact JSON using wire field names in declaration order"""
        return self.model_dump_json(by_alias=True)


class CertificatePayload(_WireModel):
    """Inner payload wrapped into the transaction's Payload field"""
    action: str = Field(CERTIFICATE_ACTION, alias="Action")
    data: str = Field(..., alias="Data")


class TransactionRecord(_WireModel):
    """
    Signed certificate transaction as posted to the gateway.

    Nonce is a string on the wire; the gateway parses it as a string field.
    The record carries no PublicKey field.
    """
    id: str = Field(..., alias="ID")
    from_address: str = Field(..., alias="From")
    to_address: str = Field(..., alias="To")
    timestamp: str = Field(..., alias="Timestamp")
    payload: str = Field(..., alias="Payload")
    nonce: str = Field(..., alias="Nonce")
    signature: str = Field(..., alias="Signature")
    blockchain: str = Field(..., alias="Blockchain")
    type: str = Field(CERTIFICATE_TX_TYPE, alias="Type")
    version: str = Field(LIB_VERSION, alias="Version")


class NonceRequest(_WireModel):
    """Body of a Circular_GetWalletNonce request"""
    blockchain: str = Field(..., alias="Blockchain")
    address: str = Field(..., alias="Address")
    version: str = Field(LIB_VERSION, alias="Version")


class TransactionLookupRequest(_WireModel):
    """Body of a Circular_GetTransactionbyID request"""
    blockchain: str = Field(..., alias="Blockchain")
    id: str = Field(..., alias="ID")
    start: str = Field(..., alias="Start")
    end: str = Field(..., alias="End")
    version: str = Field(LIB_VERSION, alias="Version")


class GatewayEndpoint(BaseModel):
    """A resolved Network Access Gateway URL and the network it serves"""
    model_config = ConfigDict(frozen=True)

    url: str
    network: str


class Certificate(BaseModel):
    """
    Certificate data container.

    Data is held hex-encoded; set_data/get_data convert from and to text.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    data: str = Field("", alias="data")
    previous_tx_id: str = Field("", alias="previousTxID")
    previous_block: str = Field("", alias="previousBlock")
    version: str = Field(LIB_VERSION, alias="version")

    def set_data(self, data: Optional[str]) -> None:
        self.data = string_to_hex(data or "")

    def get_data(self) -> str:
        return hex_to_string(self.data)

    def set_previous_tx_id(self, tx_id: str) -> None:
        self.previous_tx_id = tx_id

    def get_previous_tx_id(self) -> str:
        return self.previous_tx_id

    def set_previous_block(self, block: str) -> None:
        self.previous_block = block

    def get_previous_block(self) -> str:
        return self.previous_block

    def get_json_certificate(self) -> str:
        return self.model_dump_json(by_alias=True)

    def get_certificate_size(self) -> int:
        """Size of the JSON certificate in UTF-8 bytes"""
        return len(self.get_json_certificate().encode("utf-8"))
