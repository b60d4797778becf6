"""
wallet-chain-account — chain adaptor for TON wallet account queries.

Exposes a chain-agnostic account/transaction interface and routes each
operation to a TON node RPC client or the toncenter data indexer, normalizing
addresses, fees, and transaction records on the way back.
"""

__version__ = "0.1.0"
