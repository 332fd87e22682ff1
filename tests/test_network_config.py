"""
Tests for environment-driven network configuration.
"""
import logging
import pytest

from circular_enterprise_apis.config import (
    NetworkConfig,
    DEFAULT_CHAIN,
    DEFAULT_NAG,
    NETWORK_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    LIB_VERSION,
)


def test_protocol_constants():
    assert LIB_VERSION == "1.0.13"
    assert DEFAULT_CHAIN == "0x8a20baa40c45dc5055aeb26197c203e576ef389d9acb171bd62da11dc5ad72b2"
    assert DEFAULT_NAG == "https://nag.circularlabs.io/NAG.php?cep="
    assert NETWORK_URL == "https://circularlabs.io/network/getNAG"


def test_defaults_without_environment():
    assert NetworkConfig.discovery_url() == NETWORK_URL
    assert NetworkConfig.default_nag() == DEFAULT_NAG
    assert NetworkConfig.default_chain() == DEFAULT_CHAIN
    assert NetworkConfig.http_timeout() == DEFAULT_HTTP_TIMEOUT
    assert NetworkConfig.poll_interval() == DEFAULT_POLL_INTERVAL


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CIRCULAR_NETWORK_URL", "https://discovery.local/getNAG")
    monkeypatch.setenv("CIRCULAR_NAG_URL", " https://nag.local/NAG.php?cep= ")
    monkeypatch.setenv("CIRCULAR_BLOCKCHAIN", "0xabcd")
    monkeypatch.setenv("CIRCULAR_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("CIRCULAR_POLL_INTERVAL", "7")

    assert NetworkConfig.discovery_url() == "https://discovery.local/getNAG"
    assert NetworkConfig.default_nag() == "https://nag.local/NAG.php?cep="
    assert NetworkConfig.default_chain() == "0xabcd"
    assert NetworkConfig.http_timeout() == 5.5
    assert NetworkConfig.poll_interval() == 7


def test_blank_values_are_unset(monkeypatch):
    monkeypatch.setenv("CIRCULAR_NAG_URL", "   ")
    monkeypatch.setenv("CIRCULAR_HTTP_TIMEOUT", "")
    assert NetworkConfig.default_nag() == DEFAULT_NAG
    assert NetworkConfig.http_timeout() == DEFAULT_HTTP_TIMEOUT


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_timeout_falls_back(monkeypatch, caplog, raw):
    monkeypatch.setenv("CIRCULAR_HTTP_TIMEOUT", raw)
    with caplog.at_level(logging.WARNING):
        assert NetworkConfig.http_timeout() == DEFAULT_HTTP_TIMEOUT
    assert "CIRCULAR_HTTP_TIMEOUT" in caplog.text


@pytest.mark.parametrize("raw", ["fast", "1.5", "-1", "0"])
def test_invalid_poll_interval_falls_back(monkeypatch, caplog, raw):
    monkeypatch.setenv("CIRCULAR_POLL_INTERVAL", raw)
    with caplog.at_level(logging.WARNING):
        assert NetworkConfig.poll_interval() == DEFAULT_POLL_INTERVAL
    assert "CIRCULAR_POLL_INTERVAL" in caplog.text

