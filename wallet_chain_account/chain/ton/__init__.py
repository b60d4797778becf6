"""
TON chain support.

Address codec, fee aggregation, record normalization, toncenter backend
clients, and the TonChainAdaptor that ties them together.
"""

from wallet_chain_account.chain.ton.adaptor import TON_CAPABILITIES, TonChainAdaptor
from wallet_chain_account.chain.ton.address import (
    CHAIN_NAME,
    Address,
    Network,
    derive_address,
    validate_address,
)

__all__ = [
    "CHAIN_NAME",
    "TON_CAPABILITIES",
    "Address",
    "Network",
    "TonChainAdaptor",
    "derive_address",
    "validate_address",
]
