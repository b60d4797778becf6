"""
Structured logging for wallet-chain-account.

JSON logs with timestamp, event_type, chain and request fields.
Use get_logger() in all modules for aggregation-friendly output.
"""

from wallet_chain_account.chain_logging.logger import bind_chain, get_logger

__all__ = ["bind_chain", "get_logger"]
