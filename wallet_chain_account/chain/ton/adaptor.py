"""
TON chain adaptor — uniform account interface over TON backends.

Account reads go to the node RPC client; fees, broadcast and history go to
the data indexer. Codec failures and "not found" outcomes come back as
error-coded responses; backend and normalization failures are raised as
typed errors for the transport layer to map.
"""

from __future__ import annotations

from wallet_chain_account.chain.adaptor import Capability, ChainAdaptorBase
from wallet_chain_account.chain.ton.address import (
    CHAIN_NAME,
    Network,
    derive_address,
    validate_address,
)
from wallet_chain_account.chain.ton.backends import DataBackend, NodeBackend
from wallet_chain_account.chain.ton.client import TonClient
from wallet_chain_account.chain.ton.data_client import TonDataClient
from wallet_chain_account.chain.ton.fees import FeeAggregator
from wallet_chain_account.chain.ton.normalizer import QueryContext, normalize, normalize_all
from wallet_chain_account.chain_logging import bind_chain
from wallet_chain_account.config import Settings
from wallet_chain_account.core.exceptions import BackendUnavailable, InvalidPublicKey
from wallet_chain_account.rpc.account import (
    AccountRequest,
    AccountResponse,
    ConvertAddressRequest,
    ConvertAddressResponse,
    FeeRequest,
    FeeResponse,
    SendTxRequest,
    SendTxResponse,
    SupportChainsRequest,
    SupportChainsResponse,
    TxAddressRequest,
    TxAddressResponse,
    TxHashRequest,
    TxHashResponse,
    ValidAddressRequest,
    ValidAddressResponse,
)
from wallet_chain_account.rpc.common import ReturnCode

logger = bind_chain(CHAIN_NAME)

TON_CAPABILITIES = frozenset({
    Capability.GET_SUPPORT_CHAINS,
    Capability.CONVERT_ADDRESS,
    Capability.VALID_ADDRESS,
    Capability.GET_ACCOUNT,
    Capability.GET_FEE,
    Capability.SEND_TX,
    Capability.GET_TX_BY_ADDRESS,
    Capability.GET_TX_BY_HASH,
})


class TonChainAdaptor(ChainAdaptorBase):
    """
    ChainAdaptor for TON.

    Holds only the two backend handles; every call is an independent
    request/response cycle, safe to run concurrently.
    """

    chain_name = CHAIN_NAME

    def __init__(self, ton_client: NodeBackend, ton_data_client: DataBackend) -> None:
        super().__init__(TON_CAPABILITIES)
        self._ton_client = ton_client
        self._ton_data_client = ton_data_client
        self._fees = FeeAggregator(ton_data_client)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TonChainAdaptor":
        """Build the adaptor with httpx clients for the configured endpoints."""
        ton_client = TonClient.from_settings(settings)
        ton_data_client = TonDataClient.from_settings(settings)
        logger.info(
            "ton_adaptor_created",
            network=settings.ton_network,
            data_api_url=settings.ton_data_api_url,
        )
        return cls(ton_client, ton_data_client)

    async def aclose(self) -> None:
        await self._ton_client.aclose()
        await self._ton_data_client.aclose()

    async def get_support_chains(self, req: SupportChainsRequest) -> SupportChainsResponse:
        return SupportChainsResponse(
            code=ReturnCode.SUCCESS,
            msg="Support this chain",
            support=True,
        )

    async def convert_address(self, req: ConvertAddressRequest) -> ConvertAddressResponse:
        try:
            address = derive_address(req.public_key, Network.from_value(req.network))
        except InvalidPublicKey as e:
            return ConvertAddressResponse(code=ReturnCode.ERROR, msg=e.message)
        return ConvertAddressResponse(
            code=ReturnCode.SUCCESS,
            msg="convert address success",
            address=address.to_str(),
        )

    async def valid_address(self, req: ValidAddressRequest) -> ValidAddressResponse:
        if not validate_address(req.address):
            return ValidAddressResponse(code=ReturnCode.ERROR, msg="invalid address", valid=False)
        return ValidAddressResponse(code=ReturnCode.SUCCESS, msg="valid address", valid=True)

    async def get_account(self, req: AccountRequest) -> AccountResponse:
        try:
            snapshot = await self._ton_client.get_account_info(req.address)
        except BackendUnavailable as e:
            logger.error("ton_get_account_failed", address=req.address, error=e.message)
            raise
        return AccountResponse(
            code=ReturnCode.SUCCESS,
            msg="get account info success",
            network=req.network,
            balance=str(snapshot.balance),
            sequence=str(snapshot.sequence),
        )

    async def get_fee(self, req: FeeRequest) -> FeeResponse:
        breakdown = await self._fees.estimate_fee(req.address, req.raw_tx)
        return FeeResponse(
            code=ReturnCode.SUCCESS,
            msg="get fee success",
            normal_fee=str(self._fees.normalize(breakdown)),
        )

    async def send_tx(self, req: SendTxRequest) -> SendTxResponse:
        try:
            tx_hash = await self._ton_data_client.post_send_tx(req.raw_tx)
        except BackendUnavailable as e:
            logger.error("ton_send_tx_failed", error=e.message)
            raise
        return SendTxResponse(code=ReturnCode.SUCCESS, msg="send tx success", tx_hash=tx_hash)

    async def get_tx_by_address(self, req: TxAddressRequest) -> TxAddressResponse:
        page = await self._ton_data_client.get_tx_by_addr(req.address, req.page, req.pagesize)
        txs = normalize_all(page.transactions, QueryContext.for_page(page, req.address))
        return TxAddressResponse(
            code=ReturnCode.SUCCESS,
            msg="get transactions success",
            tx=txs,
        )

    async def get_tx_by_hash(self, req: TxHashRequest) -> TxHashResponse:
        page = await self._ton_data_client.get_tx_by_tx_hash(req.hash)
        if not page.transactions:
            return TxHashResponse(code=ReturnCode.ERROR, msg="transaction not found")
        tx = normalize(page.transactions[0], QueryContext.for_page(page))
        return TxHashResponse(
            code=ReturnCode.SUCCESS,
            msg="get transaction by hash success",
            tx=tx,
        )
