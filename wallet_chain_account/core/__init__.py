"""
Core utilities — shared exceptions and cross-cutting concerns.

Provides the typed error taxonomy used by codecs, normalizers, backend
clients, adaptors, and the API server.
"""

from wallet_chain_account.core.exceptions import (
    BackendUnavailable,
    ChainAdaptorError,
    InvalidAddress,
    InvalidPublicKey,
    MalformedRecord,
    Unimplemented,
    Unsupported,
)

__all__ = [
    "BackendUnavailable",
    "ChainAdaptorError",
    "InvalidAddress",
    "InvalidPublicKey",
    "MalformedRecord",
    "Unimplemented",
    "Unsupported",
]
