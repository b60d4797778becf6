"""
Uniform chain adaptor interface.

Every chain implements ChainAdaptorBase. Operations a chain's backends
cannot serve keep the default implementation here: a success-coded
response with an explanatory message and no backend call. Each adaptor
declares at construction which capabilities it really implements, so
callers can ask once via capabilities / supports() instead of probing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable

from wallet_chain_account.core.exceptions import Unimplemented
from wallet_chain_account.rpc.account import (
    AccountRequest,
    AccountResponse,
    BlockByRangeRequest,
    BlockByRangeResponse,
    BlockHashRequest,
    BlockHeaderHashRequest,
    BlockHeaderNumberRequest,
    BlockHeaderResponse,
    BlockNumberRequest,
    BlockResponse,
    ConvertAddressRequest,
    ConvertAddressResponse,
    DecodeTransactionRequest,
    DecodeTransactionResponse,
    ExtraDataRequest,
    ExtraDataResponse,
    FeeRequest,
    FeeResponse,
    NftAddressRequest,
    NftAddressResponse,
    SendTxRequest,
    SendTxResponse,
    SignedTransactionRequest,
    SignedTransactionResponse,
    SupportChainsRequest,
    SupportChainsResponse,
    TxAddressRequest,
    TxAddressResponse,
    TxHashRequest,
    TxHashResponse,
    UnSignTransactionRequest,
    UnSignTransactionResponse,
    ValidAddressRequest,
    ValidAddressResponse,
    VerifyTransactionRequest,
    VerifyTransactionResponse,
)
from wallet_chain_account.rpc.common import ReturnCode

UNSUPPORTED_RPC_MSG = "Do not support this rpc interface"
UNSUPPORTED_API_MSG = "Do not support this api"


class Capability(str, Enum):
    """Operations of the uniform account interface."""

    GET_SUPPORT_CHAINS = "get_support_chains"
    CONVERT_ADDRESS = "convert_address"
    VALID_ADDRESS = "valid_address"
    GET_BLOCK_BY_NUMBER = "get_block_by_number"
    GET_BLOCK_BY_HASH = "get_block_by_hash"
    GET_BLOCK_HEADER_BY_HASH = "get_block_header_by_hash"
    GET_BLOCK_HEADER_BY_NUMBER = "get_block_header_by_number"
    GET_BLOCK_BY_RANGE = "get_block_by_range"
    GET_ACCOUNT = "get_account"
    GET_FEE = "get_fee"
    SEND_TX = "send_tx"
    GET_TX_BY_ADDRESS = "get_tx_by_address"
    GET_TX_BY_HASH = "get_tx_by_hash"
    BUILD_UNSIGN_TRANSACTION = "build_unsign_transaction"
    BUILD_SIGNED_TRANSACTION = "build_signed_transaction"
    DECODE_TRANSACTION = "decode_transaction"
    VERIFY_SIGNED_TRANSACTION = "verify_signed_transaction"
    GET_EXTRA_DATA = "get_extra_data"
    GET_NFT_LIST_BY_ADDRESS = "get_nft_list_by_address"


class ChainAdaptorBase(ABC):
    """Abstract base for per-chain adaptors."""

    chain_name: str = ""

    def __init__(self, capabilities: Iterable[Capability]) -> None:
        self._capabilities = frozenset(capabilities)

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Operations this adaptor really serves (others are static stubs)."""
        return self._capabilities

    def supports(self, capability: Capability | str) -> bool:
        return Capability(capability) in self._capabilities

    async def aclose(self) -> None:
        """Release backend handles; default adaptors hold none."""

    # -- operations every chain must implement -------------------------------

    @abstractmethod
    async def get_support_chains(self, req: SupportChainsRequest) -> SupportChainsResponse: ...

    @abstractmethod
    async def convert_address(self, req: ConvertAddressRequest) -> ConvertAddressResponse: ...

    @abstractmethod
    async def valid_address(self, req: ValidAddressRequest) -> ValidAddressResponse: ...

    @abstractmethod
    async def get_account(self, req: AccountRequest) -> AccountResponse: ...

    @abstractmethod
    async def get_fee(self, req: FeeRequest) -> FeeResponse: ...

    @abstractmethod
    async def send_tx(self, req: SendTxRequest) -> SendTxResponse: ...

    @abstractmethod
    async def get_tx_by_address(self, req: TxAddressRequest) -> TxAddressResponse: ...

    @abstractmethod
    async def get_tx_by_hash(self, req: TxHashRequest) -> TxHashResponse: ...

    # -- statically unsupported unless overridden ----------------------------

    async def get_block_by_number(self, req: BlockNumberRequest) -> BlockResponse:
        return BlockResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def get_block_by_hash(self, req: BlockHashRequest) -> BlockResponse:
        return BlockResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def get_block_header_by_hash(self, req: BlockHeaderHashRequest) -> BlockHeaderResponse:
        return BlockHeaderResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def get_block_header_by_number(self, req: BlockHeaderNumberRequest) -> BlockHeaderResponse:
        return BlockHeaderResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def get_block_by_range(self, req: BlockByRangeRequest) -> BlockByRangeResponse:
        return BlockByRangeResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def build_unsign_transaction(self, req: UnSignTransactionRequest) -> UnSignTransactionResponse:
        return UnSignTransactionResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def build_signed_transaction(self, req: SignedTransactionRequest) -> SignedTransactionResponse:
        return SignedTransactionResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def decode_transaction(self, req: DecodeTransactionRequest) -> DecodeTransactionResponse:
        return DecodeTransactionResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def verify_signed_transaction(self, req: VerifyTransactionRequest) -> VerifyTransactionResponse:
        return VerifyTransactionResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_RPC_MSG)

    async def get_extra_data(self, req: ExtraDataRequest) -> ExtraDataResponse:
        return ExtraDataResponse(code=ReturnCode.SUCCESS, msg=UNSUPPORTED_API_MSG, value=req.chain)

    async def get_nft_list_by_address(self, req: NftAddressRequest) -> NftAddressResponse:
        raise Unimplemented(Capability.GET_NFT_LIST_BY_ADDRESS.value, chain=self.chain_name)
