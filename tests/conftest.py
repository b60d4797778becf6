"""
Pytest fixtures for wallet-chain-account tests. Fake TON backends record
their calls and return controlled record shapes; no network is touched.
"""

from __future__ import annotations

from typing import Any

import pytest

from wallet_chain_account.chain.ton.models import (
    AccountSnapshot,
    BackendTransactionRecord,
    FeeBreakdown,
    TransactionPage,
)

# Known vector: default V5R1 wallet for this key
TEST_PUBLIC_KEY = "f7b418ebb5a0af910eab73aefd0c6cce147c6dea6dd87ec952eea75342f8a6a5"
TEST_MAINNET_ADDRESS = "UQAHVc9OI1kqgh68auUYhe2YziHXDjw8fgla5sqw4kOszeTK"
TEST_TESTNET_ADDRESS = "0QAHVc9OI1kqgh68auUYhe2YziHXDjw8fgla5sqw4kOszV9A"
TEST_RAW_ADDRESS = "0:0755cf4e23592a821ebc6ae51885ed98ce21d70e3c3c7e095ae6cab0e243accd"

COUNTERPART_RAW = "0:" + "ab" * 32


def make_message(
    source: str | None = COUNTERPART_RAW,
    destination: str | None = TEST_RAW_ADDRESS,
    value: Any = "1000",
    hash: str = "msg-hash",
    **extra: Any,
) -> dict[str, Any]:
    """Indexer-shaped message item."""
    item = {"hash": hash, "source": source, "destination": destination, "value": value}
    item.update(extra)
    return item


def make_record_item(
    hash: str | None = "tx-hash",
    lt: Any = "47000000000001",
    account: str | None = TEST_RAW_ADDRESS,
    in_msg: dict[str, Any] | None = None,
    out_msgs: list[dict[str, Any]] | None = None,
    total_fees: Any = "1500",
    description: dict[str, Any] | None = None,
    now: int = 1700000000,
    mc_block_seqno: int = 42,
) -> dict[str, Any]:
    """Indexer-shaped transaction item."""
    return {
        "account": account,
        "hash": hash,
        "lt": lt,
        "now": now,
        "total_fees": total_fees,
        "mc_block_seqno": mc_block_seqno,
        "description": description if description is not None else {
            "aborted": False,
            "compute_ph": {"success": True},
        },
        "in_msg": in_msg,
        "out_msgs": out_msgs or [],
    }


def make_receipt(**kwargs: Any) -> BackendTransactionRecord:
    """Internal inbound transfer to TEST_RAW_ADDRESS, no outbound messages."""
    kwargs.setdefault("in_msg", make_message())
    return BackendTransactionRecord.from_api_item(make_record_item(**kwargs))


def make_send(**kwargs: Any) -> BackendTransactionRecord:
    """External inbound (wallet-signed) with one outbound transfer."""
    kwargs.setdefault("in_msg", make_message(source=None, value=None, hash="ext-hash"))
    kwargs.setdefault(
        "out_msgs",
        [make_message(source=TEST_RAW_ADDRESS, destination=COUNTERPART_RAW, value="2500")],
    )
    return BackendTransactionRecord.from_api_item(make_record_item(**kwargs))


class FakeNodeBackend:
    """NodeBackend fake: returns snapshot or raises error; records calls."""

    def __init__(self, snapshot: AccountSnapshot | None = None, error: Exception | None = None) -> None:
        self.snapshot = snapshot or AccountSnapshot(balance=123456789, sequence=7)
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False

    async def get_account_info(self, address: str) -> AccountSnapshot:
        self.calls.append(("get_account_info", (address,)))
        if self.error:
            raise self.error
        return self.snapshot

    async def aclose(self) -> None:
        self.closed = True


class FakeDataBackend:
    """DataBackend fake with per-method canned results; records calls."""

    def __init__(
        self,
        fee: FeeBreakdown | None = None,
        tx_hash: str = "sent-hash",
        page: TransactionPage | None = None,
        hash_page: TransactionPage | None = None,
        error: Exception | None = None,
    ) -> None:
        self.fee = fee or FeeBreakdown(in_fwd_fee=1, storage_fee=2, gas_fee=3, fwd_fee=4)
        self.tx_hash = tx_hash
        self.page = page or TransactionPage(transactions=())
        self.hash_page = hash_page or TransactionPage(transactions=())
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.error:
            raise self.error

    async def get_estimate_fee(self, address: str, raw_tx: str) -> FeeBreakdown:
        self._record("get_estimate_fee", address, raw_tx)
        return self.fee

    async def post_send_tx(self, raw_tx: str) -> str:
        self._record("post_send_tx", raw_tx)
        return self.tx_hash

    async def get_tx_by_addr(self, address: str, page: int, page_size: int) -> TransactionPage:
        self._record("get_tx_by_addr", address, page, page_size)
        return self.page

    async def get_tx_by_tx_hash(self, tx_hash: str) -> TransactionPage:
        self._record("get_tx_by_tx_hash", tx_hash)
        return self.hash_page

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def node_backend():
    return FakeNodeBackend()


@pytest.fixture
def data_backend():
    return FakeDataBackend()


@pytest.fixture
def ton_adaptor(node_backend, data_backend):
    from wallet_chain_account.chain.ton import TonChainAdaptor

    return TonChainAdaptor(node_backend, data_backend)


@pytest.fixture
def dispatcher(ton_adaptor):
    from wallet_chain_account.chain.dispatcher import ChainDispatcher

    return ChainDispatcher([ton_adaptor])


@pytest.fixture
def client(dispatcher):
    """FastAPI TestClient over the fake-backed dispatcher."""
    from fastapi.testclient import TestClient

    from wallet_chain_account.api_server.server import create_app

    return TestClient(create_app(dispatcher))
