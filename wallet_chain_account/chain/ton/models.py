"""
Data models for TON backend payloads.

Typed, read-only views over toncenter responses:
- AccountSnapshot from the node RPC (balance + wallet seqno);
- FeeBreakdown from the indexer's estimateFee source_fees;
- BackendMessage / BackendTransactionRecord / TransactionPage from the
  indexer's transactions endpoint (records plus address_book).

Parsing here is structural only: missing optional fields become None and
the normalizer decides what is malformed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def to_int(value: Any) -> int | None:
    """Coerce indexer numerics (often decimal strings) to int; None if absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time balance (nanotons) and wallet seqno; never cached."""

    balance: int
    sequence: int


@dataclass(frozen=True)
class FeeBreakdown:
    """
    Fee components reported for a prospective or executed transaction.

    All values are non-negative nanotons.
    """

    in_fwd_fee: int = 0
    storage_fee: int = 0
    gas_fee: int = 0
    fwd_fee: int = 0

    def __post_init__(self) -> None:
        for name in ("in_fwd_fee", "storage_fee", "gas_fee", "fwd_fee"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "FeeBreakdown":
        """Build from estimateFee source_fees; raises KeyError/ValueError on bad shape."""
        values = {}
        for name in ("in_fwd_fee", "storage_fee", "gas_fee", "fwd_fee"):
            value = to_int(item[name])
            if value is None:
                raise ValueError(f"{name} is not numeric: {item[name]!r}")
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class BackendMessage:
    """One inbound or outbound message of an indexed transaction."""

    hash: str | None
    source: str | None  # None for external inbound messages
    destination: str | None
    value: int | None
    import_fee: int | None = None
    bounced: bool = False

    @property
    def is_external(self) -> bool:
        return not self.source

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "BackendMessage":
        return cls(
            hash=item.get("hash"),
            source=item.get("source") or None,
            destination=item.get("destination") or None,
            value=to_int(item.get("value")),
            import_fee=to_int(item.get("import_fee")),
            bounced=bool(item.get("bounced")),
        )


@dataclass(frozen=True)
class BackendTransactionRecord:
    """
    One toncenter v3 transaction item.

    description keeps the raw phase dicts (storage_ph, compute_ph, action);
    out_msgs keep backend order.
    """

    account: str | None
    hash: str | None
    lt: int | None
    now: int | None
    total_fees: int | None
    mc_block_seqno: int | None
    description: dict[str, Any] = field(default_factory=dict)
    in_msg: BackendMessage | None = None
    out_msgs: tuple[BackendMessage, ...] = ()

    def phase(self, *names: str) -> dict[str, Any]:
        """
        First present phase dict among names; {} when none is present.

        Raises ValueError when a phase is present but not an object.
        """
        for name in names:
            value = self.description.get(name)
            if value is None:
                continue
            if not isinstance(value, dict):
                raise ValueError(f"{name} must be an object, got {type(value).__name__}")
            return value
        return {}

    @property
    def aborted(self) -> bool:
        return bool(self.description.get("aborted"))

    @property
    def compute_success(self) -> bool | None:
        """Compute phase outcome; None if skipped or absent. Raises ValueError on a non-object phase."""
        compute = self.phase("compute_ph")
        if compute.get("skipped"):
            return None
        success = compute.get("success")
        return None if success is None else bool(success)

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "BackendTransactionRecord":
        in_msg = item.get("in_msg")
        out_msgs = item.get("out_msgs") or []
        description = item.get("description")
        if not isinstance(out_msgs, list) or not all(isinstance(m, dict) for m in out_msgs):
            raise ValueError("out_msgs must be a list of objects")
        return cls(
            account=item.get("account"),
            hash=item.get("hash"),
            lt=to_int(item.get("lt")),
            now=to_int(item.get("now")),
            total_fees=to_int(item.get("total_fees")),
            mc_block_seqno=to_int(item.get("mc_block_seqno")),
            description=description if isinstance(description, dict) else {},
            in_msg=BackendMessage.from_api_item(in_msg) if isinstance(in_msg, dict) else None,
            out_msgs=tuple(BackendMessage.from_api_item(m) for m in out_msgs),
        )


@dataclass(frozen=True)
class TransactionPage:
    """A page of records in backend order plus the raw -> user-friendly address book."""

    transactions: tuple[BackendTransactionRecord, ...]
    address_book: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "TransactionPage":
        raw_txs = data.get("transactions")
        if not isinstance(raw_txs, list):
            raise ValueError("response has no transactions list")
        raw_book = data.get("address_book") or {}
        if not isinstance(raw_book, dict):
            raise ValueError("address_book must be an object")
        book: dict[str, str] = {}
        for raw, entry in raw_book.items():
            if isinstance(entry, dict) and entry.get("user_friendly"):
                book[raw] = entry["user_friendly"]
        if not all(isinstance(t, dict) for t in raw_txs):
            raise ValueError("transactions list contains non-object items")
        return cls(
            transactions=tuple(BackendTransactionRecord.from_api_item(t) for t in raw_txs),
            address_book=book,
        )
