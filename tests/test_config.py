"""
Tests for environment-driven settings.
"""

from __future__ import annotations

import pytest

from wallet_chain_account.config.env import (
    MAINNET_DATA_API_URL,
    MAINNET_RPC_URL,
    TESTNET_DATA_API_URL,
    TESTNET_RPC_URL,
    mask_api_key,
)
from wallet_chain_account.config.settings import load_settings

_VARS = (
    "TON_NETWORK",
    "TON_RPC_URL",
    "TON_DATA_API_URL",
    "TON_API_KEY",
    "REQUEST_TIMEOUT_SEC",
    "API_HOST",
    "API_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_are_mainnet():
    settings = load_settings()
    assert settings.ton_network == "mainnet"
    assert settings.ton_rpc_url == MAINNET_RPC_URL
    assert settings.ton_data_api_url == MAINNET_DATA_API_URL
    assert settings.ton_api_key is None
    assert settings.request_timeout_sec == 30.0
    assert settings.api_port == 8000


def test_testnet_defaults(monkeypatch):
    monkeypatch.setenv("TON_NETWORK", "Testnet")
    settings = load_settings()
    assert settings.ton_network == "testnet"
    assert settings.ton_rpc_url == TESTNET_RPC_URL
    assert settings.ton_data_api_url == TESTNET_DATA_API_URL


def test_explicit_urls_and_key(monkeypatch):
    monkeypatch.setenv("TON_RPC_URL", "http://node:8081/jsonRPC")
    monkeypatch.setenv("TON_DATA_API_URL", "http://indexer:8082/api/v3/")
    monkeypatch.setenv("TON_API_KEY", "  key123 ")
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", "5")
    monkeypatch.setenv("API_PORT", "9000")
    settings = load_settings()
    assert settings.ton_rpc_url == "http://node:8081/jsonRPC"
    assert settings.ton_data_api_url == "http://indexer:8082/api/v3"
    assert settings.ton_api_key == "key123"
    assert settings.request_timeout_sec == 5.0
    assert settings.api_port == 9000


@pytest.mark.parametrize("name, value", [("REQUEST_TIMEOUT_SEC", "soon"), ("REQUEST_TIMEOUT_SEC", "0"), ("API_PORT", "http")])
def test_invalid_numbers_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings()


def test_mask_api_key():
    assert mask_api_key("https://x/jsonRPC?api_key=secret") == "https://x/jsonRPC?api_key=***"
    assert mask_api_key("https://x/jsonRPC") == "https://x/jsonRPC"
