"""
TON data API client (toncenter v3 indexer).

Fee estimation, broadcast of already-built messages, and transaction
history by account or by hash. Paging parameters are forwarded as given;
the indexer's own limits and rate limiting are not handled here.
"""

from __future__ import annotations

from typing import Any

import httpx

from wallet_chain_account.chain.ton.address import CHAIN_NAME
from wallet_chain_account.chain.ton.models import FeeBreakdown, TransactionPage
from wallet_chain_account.chain_logging import get_logger
from wallet_chain_account.config import Settings
from wallet_chain_account.core.exceptions import BackendUnavailable

logger = get_logger(__name__)

BACKEND_NAME = "ton-data-api"


def page_to_offset(page: int, page_size: int) -> tuple[int, int]:
    """1-based page/page_size -> indexer (limit, offset); page <= 0 reads the first page."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return page_size, max(page - 1, 0) * page_size


class TonDataClient:
    """Async client for the toncenter v3 REST API."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout_sec: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url.strip():
            raise ValueError("base_url must be non-empty")
        self._base_url = base_url.strip().rstrip("/")
        headers = {"X-API-Key": api_key} if api_key else {}
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout_sec),
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TonDataClient":
        return cls(
            settings.ton_data_api_url,
            api_key=settings.ton_api_key,
            timeout_sec=settings.request_timeout_sec,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send one request; return the JSON object or raise BackendUnavailable."""
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            detail = e.response.text[:200]
            logger.error(
                "ton_data_api_http_error",
                path=path,
                status_code=e.response.status_code,
                detail=detail,
            )
            raise BackendUnavailable(
                f"{path} failed with HTTP {e.response.status_code}: {detail}",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
                status_code=e.response.status_code,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            logger.error("ton_data_api_transport_error", path=path, error=str(e))
            raise BackendUnavailable(
                f"{path} failed: {e}",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
                original_error=e,
            ) from e
        except ValueError as e:
            logger.error("ton_data_api_invalid_json", path=path, error=str(e))
            raise BackendUnavailable(
                f"{path} returned invalid JSON",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
                original_error=e,
            ) from e
        if not isinstance(data, dict):
            raise BackendUnavailable(
                f"{path} returned a non-object response",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
            )
        return data

    def _malformed(self, path: str, e: Exception) -> BackendUnavailable:
        logger.error("ton_data_api_malformed_response", path=path, error=str(e))
        return BackendUnavailable(
            f"{path} returned a malformed response: {e}",
            chain=CHAIN_NAME,
            backend=BACKEND_NAME,
            original_error=e,
        )

    async def get_estimate_fee(self, address: str, raw_tx: str) -> FeeBreakdown:
        """Estimate fees for a message body (base64 BOC) sent to address."""
        data = await self._request(
            "POST",
            "/estimateFee",
            json={"address": address, "body": raw_tx, "ignore_chksig": True},
        )
        try:
            return FeeBreakdown.from_api_item(data["source_fees"])
        except (KeyError, TypeError, ValueError) as e:
            raise self._malformed("/estimateFee", e) from e

    async def post_send_tx(self, raw_tx: str) -> str:
        """Broadcast a signed external message (base64 BOC); return its hash."""
        data = await self._request("POST", "/message", json={"boc": raw_tx})
        tx_hash = data.get("message_hash")
        if not tx_hash or not isinstance(tx_hash, str):
            raise self._malformed("/message", ValueError("no message_hash"))
        logger.info("ton_message_sent", message_hash=tx_hash)
        return tx_hash

    async def get_tx_by_addr(self, address: str, page: int, page_size: int) -> TransactionPage:
        """One page of the account's transactions, newest first."""
        limit, offset = page_to_offset(page, page_size)
        data = await self._request(
            "GET",
            "/transactions",
            params={"account": address, "limit": limit, "offset": offset, "sort": "desc"},
        )
        try:
            return TransactionPage.from_api_response(data)
        except (TypeError, ValueError) as e:
            raise self._malformed("/transactions", e) from e

    async def get_tx_by_tx_hash(self, tx_hash: str) -> TransactionPage:
        """Transactions matching tx_hash (zero or one item)."""
        data = await self._request(
            "GET",
            "/transactions",
            params={"hash": tx_hash, "limit": 1, "offset": 0},
        )
        try:
            return TransactionPage.from_api_response(data)
        except (TypeError, ValueError) as e:
            raise self._malformed("/transactions", e) from e
