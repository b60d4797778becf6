"""
Chain dispatcher — routes uniform requests to the adaptor for request.chain.

Chain names are matched case-insensitively. Unknown chains raise
Unsupported; everything else is whatever the adaptor returns or raises.
"""

from __future__ import annotations

from typing import Any, Iterable

from wallet_chain_account.chain.adaptor import Capability, ChainAdaptorBase
from wallet_chain_account.chain_logging import get_logger
from wallet_chain_account.config import Settings
from wallet_chain_account.core.exceptions import Unsupported

logger = get_logger(__name__)


class ChainDispatcher:
    """Registry of chain adaptors keyed by lower-cased chain name."""

    def __init__(self, adaptors: Iterable[ChainAdaptorBase] = ()) -> None:
        self._adaptors: dict[str, ChainAdaptorBase] = {}
        for adaptor in adaptors:
            self.register(adaptor)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainDispatcher":
        from wallet_chain_account.chain.ton import TonChainAdaptor

        return cls([TonChainAdaptor.from_settings(settings)])

    def register(self, adaptor: ChainAdaptorBase) -> None:
        key = adaptor.chain_name.strip().lower()
        if not key:
            raise ValueError("adaptor has no chain_name")
        if key in self._adaptors:
            raise ValueError(f"chain already registered: {adaptor.chain_name}")
        self._adaptors[key] = adaptor
        logger.info(
            "chain_adaptor_registered",
            chain=adaptor.chain_name,
            capabilities=sorted(c.value for c in adaptor.capabilities),
        )

    @property
    def chains(self) -> list[str]:
        return [a.chain_name for a in self._adaptors.values()]

    def get(self, chain: str) -> ChainAdaptorBase:
        adaptor = self._adaptors.get((chain or "").strip().lower())
        if adaptor is None:
            raise Unsupported(f"Don't support this chain: {chain!r}", chain=chain)
        return adaptor

    async def dispatch(self, operation: Capability | str, req: Any) -> Any:
        """Call operation on the adaptor registered for req.chain."""
        adaptor = self.get(req.chain)
        handler = getattr(adaptor, Capability(operation).value)
        return await handler(req)

    async def aclose(self) -> None:
        for adaptor in self._adaptors.values():
            await adaptor.aclose()
