"""
TON node RPC client (toncenter v2 JSON-RPC).

Serves account reads for the adaptor: balance and wallet seqno via
getWalletInformation. One httpx.AsyncClient per instance, shared by all
in-flight requests. No retries here; a failed call surfaces immediately
as BackendUnavailable.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from wallet_chain_account.chain.ton.address import CHAIN_NAME
from wallet_chain_account.chain.ton.models import AccountSnapshot, to_int
from wallet_chain_account.chain_logging import get_logger
from wallet_chain_account.config import Settings
from wallet_chain_account.config.env import mask_api_key
from wallet_chain_account.core.exceptions import BackendUnavailable

logger = get_logger(__name__)

BACKEND_NAME = "ton-node-rpc"

_request_ids = itertools.count(1)


def _build_rpc_body(method: str, params: dict[str, Any]) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": next(_request_ids),
        "method": method,
        "params": params,
    }


class TonClient:
    """Async JSON-RPC client for a toncenter v2 endpoint."""

    def __init__(
        self,
        rpc_url: str,
        *,
        api_key: str | None = None,
        timeout_sec: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.strip()
        headers = {"X-API-Key": api_key} if api_key else {}
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_sec),
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TonClient":
        return cls(
            settings.ton_rpc_url,
            api_key=settings.ton_api_key,
            timeout_sec=settings.request_timeout_sec,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _rpc(self, method: str, params: dict[str, Any]) -> Any:
        """Perform one JSON-RPC call; raise BackendUnavailable on transport or RPC error."""
        body = _build_rpc_body(method, params)
        try:
            resp = await self._client.post(self._rpc_url, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "ton_rpc_http_error",
                method=method,
                status_code=e.response.status_code,
                rpc_url=mask_api_key(self._rpc_url),
            )
            raise BackendUnavailable(
                f"{method} failed with HTTP {e.response.status_code}",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
                status_code=e.response.status_code,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            logger.error("ton_rpc_transport_error", method=method, error=str(e))
            raise BackendUnavailable(
                f"{method} failed: {e}",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
                original_error=e,
            ) from e
        except ValueError as e:
            logger.error("ton_rpc_invalid_json", method=method, error=str(e))
            raise BackendUnavailable(
                f"{method} returned invalid JSON",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
                original_error=e,
            ) from e

        if not isinstance(data, dict):
            raise BackendUnavailable(
                f"{method} returned a non-object response",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
            )
        if data.get("error") or data.get("ok") is False:
            err = data.get("error")
            message = err.get("message", err) if isinstance(err, dict) else err
            logger.error("ton_rpc_error", method=method, error=str(message), code=data.get("code"))
            raise BackendUnavailable(
                f"TON RPC error: {message} (code={data.get('code')})",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
            )
        result = data.get("result")
        if result is None:
            raise BackendUnavailable(
                f"{method} returned no result",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
            )
        return result

    async def get_account_info(self, address: str) -> AccountSnapshot:
        """
        Return balance (nanotons) and wallet seqno for address.

        Non-wallet or uninitialized accounts report no seqno; their sequence is 0.
        """
        result = await self._rpc("getWalletInformation", {"address": address})
        if not isinstance(result, dict):
            raise BackendUnavailable(
                "getWalletInformation result is not an object",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
            )
        balance = to_int(result.get("balance"))
        if balance is None:
            raise BackendUnavailable(
                "getWalletInformation result has no balance",
                chain=CHAIN_NAME,
                backend=BACKEND_NAME,
            )
        sequence = to_int(result.get("seqno")) or 0
        logger.debug(
            "ton_account_fetched",
            address=address,
            account_state=result.get("account_state"),
            sequence=sequence,
        )
        return AccountSnapshot(balance=balance, sequence=sequence)
