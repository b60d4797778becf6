"""
TON transaction normalizer — indexer records to CanonicalTransaction.

A toncenter record carries at most one inbound message and any number of
outbound messages. Two shapes are recognised:
- receipt: internal, non-bounced inbound message, no outbound messages;
- send: outbound messages, inbound absent or external (wallet signed it).
Anything else is malformed. Hash and lt are copied from the record as-is.

normalize_all() is all-or-nothing: one malformed record fails the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from wallet_chain_account.chain.ton.address import CHAIN_NAME, Address
from wallet_chain_account.chain.ton.fees import breakdown_from_description, normalize_fee
from wallet_chain_account.chain.ton.models import BackendTransactionRecord, TransactionPage
from wallet_chain_account.chain_logging import get_logger
from wallet_chain_account.core.exceptions import InvalidAddress, MalformedRecord
from wallet_chain_account.rpc.account import CanonicalTransaction, TxDirection, TxStatus

logger = get_logger(__name__)


@dataclass(frozen=True)
class QueryContext:
    """
    Address context for one query.

    observer_address is the address the caller asked about (None for
    by-hash lookups); address_book maps raw indexer addresses to the
    user-friendly form the indexer suggests.
    """

    observer_address: str | None = None
    address_book: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_page(cls, page: TransactionPage, observer_address: str | None = None) -> "QueryContext":
        return cls(observer_address=observer_address, address_book=dict(page.address_book))

    def render(self, raw: str) -> str:
        return self.address_book.get(raw, raw)


def _same_account(a: str, b: str) -> bool:
    if a == b:
        return True
    try:
        return Address.parse(a).same_account(Address.parse(b))
    except InvalidAddress:
        return False


def _own_address(account: str, context: QueryContext) -> str:
    """Render the record's own account, preferring the caller's spelling of it."""
    observer = context.observer_address
    if observer and _same_account(observer, account):
        return observer
    return context.render(account)


def _malformed(reason: str, record: BackendTransactionRecord) -> MalformedRecord:
    return MalformedRecord(reason, chain=CHAIN_NAME, tx_hash=record.hash)


def normalize(
    record: BackendTransactionRecord,
    context: QueryContext | None = None,
) -> CanonicalTransaction:
    """
    Map one indexer record to a CanonicalTransaction.

    Raises MalformedRecord if the record has no hash/lt, matches neither the
    receipt nor the send shape, lacks a counterpart address or amount,
    carries a negative amount or fee, or has an unreadable fee phase.
    """
    context = context or QueryContext()
    if not record.hash:
        raise _malformed("record has no hash", record)
    if record.lt is None or record.lt < 0:
        raise _malformed("record has no lt", record)
    account = record.account or context.observer_address
    if not account:
        raise _malformed("record has no account", record)

    in_msg = record.in_msg
    internal_in = in_msg is not None and not in_msg.is_external

    if record.out_msgs and not internal_in:
        first = record.out_msgs[0]
        if not first.destination:
            raise _malformed("outbound message has no destination", record)
        if any(m.value is None for m in record.out_msgs):
            raise _malformed("outbound message has no value", record)
        if any(m.value < 0 for m in record.out_msgs):
            raise _malformed("negative outbound value", record)
        direction = TxDirection.OUT
        from_address = _own_address(account, context)
        to_address = context.render(first.destination)
        value = sum(m.value for m in record.out_msgs)
    elif internal_in and not record.out_msgs:
        if in_msg.value is None:
            raise _malformed("inbound message has no value", record)
        if in_msg.value < 0:
            raise _malformed("negative inbound value", record)
        if in_msg.bounced:
            raise _malformed("inbound message bounced", record)
        direction = TxDirection.IN
        from_address = context.render(in_msg.source)
        to_address = _own_address(account, context)
        value = in_msg.value
    else:
        raise _malformed("record is neither a receipt nor a send", record)

    if record.total_fees is not None and record.total_fees < 0:
        raise _malformed("negative total_fees", record)

    # phase and model validation failures surface as ValueError (ValidationError included)
    try:
        if record.total_fees is not None:
            fee = record.total_fees
        else:
            fee = normalize_fee(breakdown_from_description(record))
        failed = record.aborted or record.compute_success is False
        return CanonicalTransaction(
            hash=record.hash,
            lt=record.lt,
            timestamp=record.now,
            height=record.mc_block_seqno,
            from_address=from_address,
            to_address=to_address,
            value=value,
            fee=fee,
            status=TxStatus.FAILED if failed else TxStatus.SUCCESS,
            direction=direction,
            payload_ref=in_msg.hash if in_msg is not None else None,
        )
    except ValueError as e:
        raise MalformedRecord(str(e), chain=CHAIN_NAME, tx_hash=record.hash) from e


def normalize_all(
    records: Iterable[BackendTransactionRecord],
    context: QueryContext | None = None,
) -> list[CanonicalTransaction]:
    """
    Normalize a page of records, preserving order.

    The first malformed record aborts the batch; callers never receive a
    partial page.
    """
    context = context or QueryContext()
    out: list[CanonicalTransaction] = []
    for index, record in enumerate(records):
        try:
            out.append(normalize(record, context))
        except MalformedRecord as e:
            logger.warning(
                "ton_record_malformed",
                index=index,
                tx_hash=record.hash,
                reason=e.message,
            )
            raise MalformedRecord(
                f"record {index} is malformed: {e.message}",
                chain=CHAIN_NAME,
                tx_hash=record.hash,
                index=index,
            ) from e
    return out
