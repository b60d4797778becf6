"""
Tests for the TON record normalizer: receipt/send shapes, malformed records,
fee fallback, status and address rendering.
"""

from __future__ import annotations

import pytest

from conftest import (
    COUNTERPART_RAW,
    TEST_MAINNET_ADDRESS,
    TEST_RAW_ADDRESS,
    make_message,
    make_receipt,
    make_record_item,
    make_send,
)
from wallet_chain_account.chain.ton.models import BackendTransactionRecord, TransactionPage
from wallet_chain_account.chain.ton.normalizer import QueryContext, normalize, normalize_all
from wallet_chain_account.core.exceptions import MalformedRecord
from wallet_chain_account.rpc.account import TxDirection, TxStatus


def test_receipt_maps_inbound_message():
    tx = normalize(make_receipt())
    assert tx.direction is TxDirection.IN
    assert tx.from_address == COUNTERPART_RAW
    assert tx.to_address == TEST_RAW_ADDRESS
    assert tx.value == 1000
    assert tx.fee == 1500
    assert tx.status is TxStatus.SUCCESS
    assert tx.payload_ref == "msg-hash"


def test_hash_and_lt_copied_verbatim():
    tx = normalize(make_receipt(hash="Zm9vYmFy+/=", lt="47000000000077"))
    assert tx.hash == "Zm9vYmFy+/="
    assert tx.lt == 47000000000077
    assert tx.timestamp == 1700000000
    assert tx.height == 42


def test_send_maps_outbound_messages():
    tx = normalize(make_send())
    assert tx.direction is TxDirection.OUT
    assert tx.from_address == TEST_RAW_ADDRESS
    assert tx.to_address == COUNTERPART_RAW
    assert tx.value == 2500
    assert tx.payload_ref == "ext-hash"


def test_send_with_several_outbound_messages_sums_values():
    second = "0:" + "cd" * 32
    record = make_send(out_msgs=[
        make_message(source=TEST_RAW_ADDRESS, destination=COUNTERPART_RAW, value="100"),
        make_message(source=TEST_RAW_ADDRESS, destination=second, value="250"),
    ])
    tx = normalize(record)
    assert tx.to_address == COUNTERPART_RAW
    assert tx.value == 350


def test_send_without_inbound_message():
    tx = normalize(make_send(in_msg=None))
    assert tx.direction is TxDirection.OUT
    assert tx.payload_ref is None


def test_observer_spelling_preferred_for_own_address():
    context = QueryContext(observer_address=TEST_MAINNET_ADDRESS)
    assert normalize(make_receipt(), context).to_address == TEST_MAINNET_ADDRESS
    assert normalize(make_send(), context).from_address == TEST_MAINNET_ADDRESS


def test_address_book_renders_counterpart():
    context = QueryContext(address_book={COUNTERPART_RAW: "EQcounterpart"})
    tx = normalize(make_receipt(), context)
    assert tx.from_address == "EQcounterpart"


def test_query_context_for_page_copies_address_book():
    page = TransactionPage(transactions=(), address_book={COUNTERPART_RAW: "EQx"})
    context = QueryContext.for_page(page, "obs")
    assert context.observer_address == "obs"
    assert context.render(COUNTERPART_RAW) == "EQx"
    assert context.render("unknown") == "unknown"


def test_fee_falls_back_to_phases():
    record = make_receipt(
        total_fees=None,
        description={
            "compute_ph": {"success": True, "gas_fees": "40"},
            "storage_ph": {"storage_fees_collected": "2"},
        },
    )
    assert normalize(record).fee == 42


@pytest.mark.parametrize(
    "description",
    [
        {"aborted": True, "compute_ph": {"success": True}},
        {"aborted": False, "compute_ph": {"success": False}},
    ],
)
def test_failed_status(description):
    assert normalize(make_receipt(description=description)).status is TxStatus.FAILED


def test_skipped_compute_is_success():
    record = make_receipt(description={"aborted": False, "compute_ph": {"skipped": True}})
    assert normalize(record).status is TxStatus.SUCCESS


@pytest.mark.parametrize(
    "record",
    [
        # no hash
        lambda: make_receipt(hash=None),
        # no lt
        lambda: make_receipt(lt=None),
        # inbound and outbound internal messages together
        lambda: make_send(in_msg=make_message()),
        # external inbound only (no transfer at all)
        lambda: make_receipt(in_msg=make_message(source=None)),
        # nothing at all
        lambda: BackendTransactionRecord.from_api_item(make_record_item()),
        # outbound without destination
        lambda: make_send(out_msgs=[make_message(destination=None)]),
        # outbound without value
        lambda: make_send(out_msgs=[make_message(value=None)]),
        # inbound without value
        lambda: make_receipt(in_msg=make_message(value=None)),
        # negative inbound value
        lambda: make_receipt(in_msg=make_message(value="-1000")),
        # bounced inbound message
        lambda: make_receipt(in_msg=make_message(bounced=True)),
        # negative outbound value is not netted against the others
        lambda: make_send(out_msgs=[
            make_message(source=TEST_RAW_ADDRESS, destination=COUNTERPART_RAW, value="-10"),
            make_message(source=TEST_RAW_ADDRESS, destination=COUNTERPART_RAW, value="20"),
        ]),
        # negative total_fees
        lambda: make_receipt(total_fees="-5"),
        # negative import fee in the phase fallback
        lambda: make_receipt(total_fees=None, in_msg=make_message(import_fee="-1")),
        # negative phase fee
        lambda: make_receipt(total_fees=None, description={"compute_ph": {"success": True, "gas_fees": "-40"}}),
        # phases that are not objects
        lambda: make_receipt(description={"compute_ph": "skipped"}),
        lambda: make_receipt(total_fees=None, description={"storage_ph": 7}),
        lambda: make_receipt(total_fees=None, description={"action": ["ok"]}),
    ],
)
def test_malformed_records(record):
    with pytest.raises(MalformedRecord) as exc_info:
        normalize(record())
    assert exc_info.value.chain == "Ton"


def test_record_without_account_uses_observer():
    record = make_receipt(account=None)
    with pytest.raises(MalformedRecord):
        normalize(record)
    tx = normalize(record, QueryContext(observer_address=TEST_MAINNET_ADDRESS))
    assert tx.to_address == TEST_MAINNET_ADDRESS


def test_normalize_all_preserves_order():
    records = [make_receipt(hash="a", lt="3"), make_send(hash="b", lt="2"), make_receipt(hash="c", lt="1")]
    txs = normalize_all(records)
    assert [t.hash for t in txs] == ["a", "b", "c"]
    assert [t.direction for t in txs] == [TxDirection.IN, TxDirection.OUT, TxDirection.IN]


def test_normalize_all_is_all_or_nothing():
    records = [make_receipt(hash="a"), make_receipt(hash="b"), make_receipt(hash=None)]
    with pytest.raises(MalformedRecord) as exc_info:
        normalize_all(records)
    assert exc_info.value.index == 2
    assert "record 2" in exc_info.value.message


def test_normalize_all_empty():
    assert normalize_all([]) == []


def test_normalize_all_rejects_page_with_unreadable_phase():
    records = [make_receipt(), make_send(total_fees=None, description={"action_ph": "done"})]
    with pytest.raises(MalformedRecord) as exc_info:
        normalize_all(records)
    assert exc_info.value.index == 1
