"""
Configuration management for the chain adaptor service.

Loads and validates settings from environment variables and an optional
.env file. Exposes a single source of truth for backend URLs and API options.
"""

from wallet_chain_account.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
