"""
Tests for the in-memory stub transport.
"""
import pytest

from circular_enterprise_apis.gateway.stub_transport import StubTransport, StubRequest
from circular_enterprise_apis.gateway.exceptions import GatewayConnectionError


class TestStubTransport:
    """Tests for StubTransport scripting and recording."""

    def test_scripted_responses_in_order_last_repeats(self):
        stub = StubTransport().add_response("POST", "Nonce", {"n": 1}, {"n": 2})

        assert stub.post_json("https://nag/Circular_GetWalletNonce_", "{}") == {"n": 1}
        assert stub.post_json("https://nag/Circular_GetWalletNonce_", "{}") == {"n": 2}
        assert stub.post_json("https://nag/Circular_GetWalletNonce_", "{}") == {"n": 2}

    def test_method_must_match(self):
        stub = StubTransport().add_response("get", "getNAG", {"status": "success"})

        assert stub.get_json("https://d/getNAG", params={"network": "devnet"}) == {"status": "success"}
        with pytest.raises(GatewayConnectionError, match="No stub response for POST"):
            stub.post_json("https://d/getNAG", "{}")

    def test_exception_response_is_raised(self):
        error = GatewayConnectionError("down")
        stub = StubTransport().add_response("POST", "AddTransaction", error, {"Result": 200})

        with pytest.raises(GatewayConnectionError, match="down"):
            stub.post_json("https://nag/Circular_AddTransaction_", "{}")
        assert stub.post_json("https://nag/Circular_AddTransaction_", "{}") == {"Result": 200}

    def test_callable_response_receives_request(self):
        stub = StubTransport().add_response("POST", "Echo", lambda req: {"echo": req.json()})

        assert stub.post_json("https://nag/Echo", '{"a": 1}') == {"echo": {"a": 1}}

    def test_records_requests(self):
        stub = StubTransport()
        stub.add_response("GET", "getNAG", {})
        stub.add_response("POST", "Nonce", {})

        stub.get_json("https://d/getNAG", params={"network": "testnet"})
        stub.post_json("https://nag/Circular_GetWalletNonce_testnet", '{"x": 1}')

        assert len(stub.requests) == 2
        assert stub.requests[0] == StubRequest("GET", "https://d/getNAG", params={"network": "testnet"})
        assert stub.calls("Nonce")[0].json() == {"x": 1}
        assert stub.calls("missing") == []

    def test_requires_a_response(self):
        with pytest.raises(ValueError):
            StubTransport().add_response("GET", "x")

    def test_close(self):
        stub = StubTransport()
        assert not stub.closed
        stub.close()
        assert stub.closed
