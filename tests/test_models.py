"""
Tests for wire models and the certificate container.
"""
import json
import pytest
from pydantic import ValidationError

from circular_enterprise_apis.config import LIB_VERSION
from circular_enterprise_apis.models import (
    Certificate,
    CertificatePayload,
    GatewayEndpoint,
    NonceRequest,
    TransactionLookupRequest,
    TransactionRecord,
)


def _record(**overrides):
    fields = dict(
        id="ab" * 32, from_address="1234", to_address="1234", timestamp="2024:01:02-03:04:05",
        payload="7B7D", nonce="0", signature="3006020101020101", blockchain="8a20"
    )
    fields.update(overrides)
    return TransactionRecord(**fields)


class TestWireModels:

    def test_certificate_payload_json(self):
        assert CertificatePayload(data="AB").to_json() == '{"Action":"CP_CERTIFICATE","Data":"AB"}'

    def test_record_populates_by_alias(self):
        record = TransactionRecord(
            ID="ab" * 32, From="1234", To="1234", Timestamp="2024:01:02-03:04:05",
            Payload="7B7D", Nonce="5", Signature="00", Blockchain="8a20"
        )
        assert record.nonce == "5"
        assert record.type == "C_TYPE_CERTIFICATE"
        assert record.version == LIB_VERSION

    def test_record_is_frozen(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.nonce = "1"

    def test_record_requires_fields(self):
        with pytest.raises(ValidationError):
            TransactionRecord(id="ab")

    def test_nonce_request(self):
        body = NonceRequest(blockchain="8a20", address="1234").to_json()
        assert body == f'{{"Blockchain":"8a20","Address":"1234","Version":"{LIB_VERSION}"}}'

    def test_lookup_request(self):
        body = json.loads(TransactionLookupRequest(blockchain="8a20", id="ff", start="0", end="10").to_json())
        assert body == {"Blockchain": "8a20", "ID": "ff", "Start": "0", "End": "10", "Version": LIB_VERSION}

    def test_gateway_endpoint(self):
        endpoint = GatewayEndpoint(url="https://nag.example.com/", network="testnet")
        assert endpoint.url == "https://nag.example.com/"
        with pytest.raises(ValidationError):
            endpoint.url = "other"


class TestCertificate:

    def test_defaults(self):
        cert = Certificate()
        assert cert.get_data() == ""
        assert cert.get_previous_tx_id() == ""
        assert cert.get_previous_block() == ""
        assert cert.version == LIB_VERSION

    def test_data_is_stored_hex_encoded(self):
        cert = Certificate()
        cert.set_data("Hello World")
        assert cert.data == "48656C6C6F20576F726C64"
        assert cert.get_data() == "Hello World"

    def test_set_data_none(self):
        cert = Certificate()
        cert.set_data(None)
        assert cert.data == ""

    def test_previous_links(self):
        cert = Certificate()
        cert.set_previous_tx_id("abc123")
        cert.set_previous_block("42")
        assert cert.get_previous_tx_id() == "abc123"
        assert cert.get_previous_block() == "42"

    def test_json_layout(self):
        cert = Certificate()
        cert.set_data("hi")
        cert.set_previous_tx_id("tx")
        cert.set_previous_block("blk")
        expected = f'{{"data":"6869","previousTxID":"tx","previousBlock":"blk","version":"{LIB_VERSION}"}}'
        assert cert.get_json_certificate() == expected

    def test_certificate_size(self):
        cert = Certificate()
        cert.set_data("你好")
        assert cert.get_certificate_size() == len(cert.get_json_certificate().encode("utf-8"))

    def test_populate_from_wire_names(self):
        cert = Certificate(data="6869", previousTxID="tx", previousBlock="blk")
        assert cert.get_data() == "hi"
        assert cert.previous_tx_id == "tx"
