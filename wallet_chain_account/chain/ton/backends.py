"""
Backend interfaces the TON adaptor depends on.

The adaptor only talks to these narrow protocols, so tests (and other
deployments) can substitute fakes producing controlled record shapes.
TonClient and TonDataClient are the httpx implementations.
"""

from __future__ import annotations

from typing import Protocol

from wallet_chain_account.chain.ton.models import (
    AccountSnapshot,
    FeeBreakdown,
    TransactionPage,
)


class NodeBackend(Protocol):
    async def get_account_info(self, address: str) -> AccountSnapshot: ...

    async def aclose(self) -> None: ...


class DataBackend(Protocol):
    async def get_estimate_fee(self, address: str, raw_tx: str) -> FeeBreakdown: ...

    async def post_send_tx(self, raw_tx: str) -> str: ...

    async def get_tx_by_addr(self, address: str, page: int, page_size: int) -> TransactionPage: ...

    async def get_tx_by_tx_hash(self, tx_hash: str) -> TransactionPage: ...

    async def aclose(self) -> None: ...
