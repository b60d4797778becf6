"""
Application settings and environment configuration.

Typed settings (backend URLs, API key, network, timeout, API host/port)
shared by the adaptor factory, the API server and main.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from wallet_chain_account.config.env import (
    get_ton_api_key,
    get_ton_data_api_url,
    get_ton_network,
    get_ton_rpc_url,
    load_chain_env,
)


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once from the environment."""

    ton_network: str
    ton_rpc_url: str
    ton_data_api_url: str
    ton_api_key: str | None
    request_timeout_sec: float = 30.0
    api_host: str = "0.0.0.0"
    api_port: int = 8000


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def load_settings() -> Settings:
    """Build Settings from the current environment (no caching)."""
    load_chain_env()
    return Settings(
        ton_network=get_ton_network(),
        ton_rpc_url=get_ton_rpc_url(),
        ton_data_api_url=get_ton_data_api_url(),
        ton_api_key=get_ton_api_key(),
        request_timeout_sec=_float_env("REQUEST_TIMEOUT_SEC", 30.0),
        api_host=(os.getenv("API_HOST") or "0.0.0.0").strip(),
        api_port=_int_env("API_PORT", 8000),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings.

    Cached after first call; use load_settings() in tests that change env.
    """
    return load_settings()
