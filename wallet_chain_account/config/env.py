"""
Environment variable loading and validation for the TON adaptor.

- TON_NETWORK: mainnet | testnet (default: mainnet)
- TON_RPC_URL: toncenter v2 JSON-RPC endpoint (node RPC)
- TON_DATA_API_URL: toncenter v3 indexer base URL (data API)
- TON_API_KEY: optional toncenter API key, sent as X-API-Key
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is wallet_chain_account/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

MAINNET_RPC_URL = "https://toncenter.com/api/v2/jsonRPC"
TESTNET_RPC_URL = "https://testnet.toncenter.com/api/v2/jsonRPC"
MAINNET_DATA_API_URL = "https://toncenter.com/api/v3"
TESTNET_DATA_API_URL = "https://testnet.toncenter.com/api/v3"


def load_chain_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def get_ton_network() -> str:
    """
    Return TON_NETWORK from env: mainnet | testnet.
    Default: mainnet.
    """
    load_chain_env()
    raw = (os.getenv("TON_NETWORK") or "mainnet").strip().lower()
    if raw in ("testnet", "test"):
        return "testnet"
    return "mainnet"


def get_ton_rpc_url() -> str:
    """Resolve node RPC URL: TON_RPC_URL > network default."""
    load_chain_env()
    url = (os.getenv("TON_RPC_URL") or "").strip()
    if url:
        return url
    return TESTNET_RPC_URL if get_ton_network() == "testnet" else MAINNET_RPC_URL


def get_ton_data_api_url() -> str:
    """Resolve data indexer URL: TON_DATA_API_URL > network default."""
    load_chain_env()
    url = (os.getenv("TON_DATA_API_URL") or "").strip()
    if url:
        return url.rstrip("/")
    return TESTNET_DATA_API_URL if get_ton_network() == "testnet" else MAINNET_DATA_API_URL


def get_ton_api_key() -> str | None:
    """Return TON_API_KEY or None when unset."""
    load_chain_env()
    key = (os.getenv("TON_API_KEY") or "").strip()
    return key or None


def mask_api_key(url: str) -> str:
    """Mask api_key query values so URLs can be logged."""
    if "api_key=" in url:
        return url.split("api_key=")[0] + "api_key=***"
    return url
