"""
Chain adaptors package.

ChainAdaptorBase defines the uniform account interface; per-chain
subpackages implement it and ChainDispatcher routes requests by chain name.
"""

from wallet_chain_account.chain.adaptor import Capability, ChainAdaptorBase

__all__ = ["Capability", "ChainAdaptorBase"]
