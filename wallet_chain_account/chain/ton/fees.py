"""
Fee aggregation for TON.

The data backend reports fees as four components (inbound forward/import,
storage, gas, outbound forward). normalize() is the one place that turns
them into a single scalar; any chain-specific fee rule belongs here.
"""

from __future__ import annotations

from wallet_chain_account.chain.ton.backends import DataBackend
from wallet_chain_account.chain.ton.models import (
    BackendTransactionRecord,
    FeeBreakdown,
    to_int,
)
from wallet_chain_account.chain_logging import get_logger

logger = get_logger(__name__)


def normalize_fee(breakdown: FeeBreakdown) -> int:
    """Exact sum of all four components (Python ints never overflow)."""
    return (
        breakdown.in_fwd_fee
        + breakdown.storage_fee
        + breakdown.gas_fee
        + breakdown.fwd_fee
    )


def breakdown_from_description(record: BackendTransactionRecord) -> FeeBreakdown:
    """
    Rebuild a FeeBreakdown from an executed transaction's phases.

    Used when the indexer omits total_fees. Missing phases count as zero;
    a non-object phase or a negative component raises ValueError.
    """
    storage = record.phase("storage_ph")
    compute = record.phase("compute_ph")
    action = record.phase("action", "action_ph")
    in_fwd = 0
    if record.in_msg is not None:
        in_fwd = record.in_msg.import_fee or 0
    return FeeBreakdown(
        in_fwd_fee=in_fwd,
        storage_fee=to_int(storage.get("storage_fees_collected")) or 0,
        gas_fee=to_int(compute.get("gas_fees")) or 0,
        fwd_fee=to_int(action.get("total_fwd_fees")) or 0,
    )


class FeeAggregator:
    """Fee estimation through the data backend plus normalization."""

    def __init__(self, data_client: DataBackend) -> None:
        self._data_client = data_client

    async def estimate_fee(self, address: str, raw_tx: str) -> FeeBreakdown:
        """Forward to the backend estimator; BackendUnavailable propagates."""
        breakdown = await self._data_client.get_estimate_fee(address, raw_tx)
        logger.debug(
            "ton_fee_estimated",
            address=address,
            in_fwd_fee=breakdown.in_fwd_fee,
            storage_fee=breakdown.storage_fee,
            gas_fee=breakdown.gas_fee,
            fwd_fee=breakdown.fwd_fee,
        )
        return breakdown

    @staticmethod
    def normalize(breakdown: FeeBreakdown) -> int:
        return normalize_fee(breakdown)
