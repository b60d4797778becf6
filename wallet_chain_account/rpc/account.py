"""
Account service request/response models (uniform across chains).

Pydantic models with snake_case attributes and camelCase wire aliases
(publicKey, rawTx, normalFee, txHash, ...). Responses always carry a
ReturnCode, independent of whether the call also raised.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wallet_chain_account.rpc.common import ReturnCode


class _RpcModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Response(_RpcModel):
    code: ReturnCode = ReturnCode.SUCCESS
    msg: str = ""


# -----------------------------------------------------------------------------
# Canonical transaction
# -----------------------------------------------------------------------------

class TxStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class TxDirection(str, Enum):
    IN = "IN"
    OUT = "OUT"


class CanonicalTransaction(_RpcModel):
    """
    Chain-agnostic transaction as returned to callers.

    hash and lt are copied from the backend record, never recomputed;
    lt is the per-account ordering key. value and fee are in the chain's
    smallest unit.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    hash: str
    lt: int = Field(..., ge=0)
    timestamp: int | None = None
    height: int | None = None
    from_address: str
    to_address: str
    value: int = Field(..., ge=0)
    fee: int = Field(0, ge=0)
    status: TxStatus = TxStatus.SUCCESS
    direction: TxDirection
    payload_ref: str | None = None


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class SupportChainsRequest(_RpcModel):
    chain: str
    network: str = ""


class ConvertAddressRequest(_RpcModel):
    chain: str
    network: str = ""
    type: str = ""
    public_key: str


class ValidAddressRequest(_RpcModel):
    chain: str
    network: str = ""
    address: str


class BlockNumberRequest(_RpcModel):
    chain: str
    height: int = 0
    view_tx: bool = False


class BlockHashRequest(_RpcModel):
    chain: str
    hash: str = ""
    view_tx: bool = False


class BlockHeaderHashRequest(_RpcModel):
    chain: str
    network: str = ""
    hash: str = ""


class BlockHeaderNumberRequest(_RpcModel):
    chain: str
    network: str = ""
    height: int = 0


class BlockByRangeRequest(_RpcModel):
    chain: str
    network: str = ""
    start: str = ""
    end: str = ""


class AccountRequest(_RpcModel):
    chain: str
    network: str = ""
    address: str
    contract_address: str = ""


class FeeRequest(_RpcModel):
    chain: str
    network: str = ""
    address: str = ""
    raw_tx: str = ""


class SendTxRequest(_RpcModel):
    chain: str
    network: str = ""
    raw_tx: str


class TxAddressRequest(_RpcModel):
    chain: str
    network: str = ""
    address: str
    contract_address: str = ""
    page: int = 1
    pagesize: int = Field(20, ge=1)


class TxHashRequest(_RpcModel):
    chain: str
    network: str = ""
    hash: str


class UnSignTransactionRequest(_RpcModel):
    chain: str
    network: str = ""
    base64_tx: str = ""


class SignedTransactionRequest(_RpcModel):
    chain: str
    network: str = ""
    base64_tx: str = ""
    signature: str = ""
    public_key: str = ""


class DecodeTransactionRequest(_RpcModel):
    chain: str
    network: str = ""
    raw_data: str = ""


class VerifyTransactionRequest(_RpcModel):
    chain: str
    network: str = ""
    public_key: str = ""
    signature: str = ""


class ExtraDataRequest(_RpcModel):
    chain: str
    network: str = ""
    address: str = ""
    coin: str = ""


class NftAddressRequest(_RpcModel):
    chain: str
    network: str = ""
    address: str = ""
    page: int = 1
    pagesize: int = 20


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------

class SupportChainsResponse(_Response):
    support: bool = False


class ConvertAddressResponse(_Response):
    address: str = ""


class ValidAddressResponse(_Response):
    valid: bool = False


class BlockResponse(_Response):
    height: int = 0
    hash: str = ""
    base_fee: str = ""
    transactions: list[CanonicalTransaction] = Field(default_factory=list)


class BlockHeaderResponse(_Response):
    block_header: dict | None = None


class BlockByRangeResponse(_Response):
    block_header: list[dict] = Field(default_factory=list)


class AccountResponse(_Response):
    network: str = ""
    account_number: str = ""
    sequence: str = ""
    balance: str = ""


class FeeResponse(_Response):
    slow_fee: str = ""
    normal_fee: str = ""
    fast_fee: str = ""


class SendTxResponse(_Response):
    tx_hash: str = ""


class TxAddressResponse(_Response):
    tx: list[CanonicalTransaction] = Field(default_factory=list)


class TxHashResponse(_Response):
    tx: CanonicalTransaction | None = None


class UnSignTransactionResponse(_Response):
    un_sign_tx: str = ""


class SignedTransactionResponse(_Response):
    signed_tx: str = ""


class DecodeTransactionResponse(_Response):
    base64_tx: str = ""


class VerifyTransactionResponse(_Response):
    verify: bool = False


class ExtraDataResponse(_Response):
    value: str = ""


class NftAddressResponse(_Response):
    nft_list: list[dict] = Field(default_factory=list)
