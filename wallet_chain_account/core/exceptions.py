"""
Application-level exceptions.

One hierarchy for every failure the adaptor layer can report:
- codec errors (InvalidPublicKey, InvalidAddress) are recovered into
  error-coded responses by the adaptor;
- MalformedRecord aborts a normalization batch;
- BackendUnavailable always propagates to the caller;
- Unsupported / Unimplemented describe capabilities a chain lacks.

The API server maps each class to a response code and HTTP status.
"""

from __future__ import annotations

from typing import Any


class ChainAdaptorError(Exception):
    """Base exception for all chain adaptor errors."""

    def __init__(
        self,
        message: str,
        chain: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.chain = chain
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "chain": self.chain,
            "context": self.context,
        }

    def __str__(self) -> str:
        if self.chain:
            return f"{self.message} [chain={self.chain}]"
        return self.message


class InvalidPublicKey(ChainAdaptorError):
    """Public key is not valid hex or has the wrong length."""


class InvalidAddress(ChainAdaptorError):
    """Address string does not parse against the chain's grammar."""


class MalformedRecord(ChainAdaptorError):
    """Backend transaction record cannot be normalized."""

    def __init__(
        self,
        message: str,
        chain: str | None = None,
        tx_hash: str | None = None,
        index: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, chain, context)
        self.tx_hash = tx_hash
        self.index = index

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"tx_hash": self.tx_hash, "index": self.index})
        return data


class BackendUnavailable(ChainAdaptorError):
    """Node RPC or data API call could not be completed."""

    def __init__(
        self,
        message: str,
        chain: str | None = None,
        backend: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, chain, context)
        self.backend = backend
        self.status_code = status_code
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({
            "backend": self.backend,
            "status_code": self.status_code,
            "original_error": str(self.original_error) if self.original_error else None,
        })
        return data


class Unsupported(ChainAdaptorError):
    """Requested chain or capability is not served by any registered adaptor."""


class Unimplemented(ChainAdaptorError):
    """Operation is part of the uniform interface but has no implementation yet."""

    def __init__(
        self,
        operation: str,
        chain: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{operation} is not implemented", chain, context)
        self.operation = operation
