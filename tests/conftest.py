"""
Pytest fixtures for the Circular Enterprise APIs tests.
"""
import time
import pytest

from circular_enterprise_apis import CEPAccount
from circular_enterprise_apis.config import DEFAULT_CHAIN
from circular_enterprise_apis.gateway.stub_transport import StubTransport
from circular_enterprise_apis.gateway._rate_limited_log import reset_rate_limits

# Constants for testing
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_ADDRESS = "0x1234567890abcdef1234567890abcdef12345678"
TEST_NAG_URL = "https://nag.example.com/NAG.php?cep="
TEST_NETWORK = "testnet"
TEST_DISCOVERY_URL = "https://discovery.example.com/network/getNAG"
TEST_CHAIN = DEFAULT_CHAIN


class FakeClock:
    """Monotonic clock that only advances when sleep() is called."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep CIRCULAR_* overrides from the developer's shell out of the tests."""
    for name in (
        "CIRCULAR_NETWORK_URL", "CIRCULAR_NAG_URL", "CIRCULAR_BLOCKCHAIN",
        "CIRCULAR_HTTP_TIMEOUT", "CIRCULAR_POLL_INTERVAL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def fake_clock(monkeypatch):
    """Replace time.monotonic/time.sleep with a deterministic clock"""
    clock = FakeClock()
    monkeypatch.setattr(time, "monotonic", clock.monotonic)
    monkeypatch.setattr(time, "sleep", clock.sleep)
    return clock


@pytest.fixture
def stub_transport():
    return StubTransport()


@pytest.fixture
def account(stub_transport):
    """An open account with a network already selected"""
    acct = CEPAccount(
        transport=stub_transport,
        network_url=TEST_DISCOVERY_URL,
        interval_sec=2
    )
    acct.open(TEST_ADDRESS)
    acct.nag_url = TEST_NAG_URL
    acct.network_node = TEST_NETWORK
    return acct
