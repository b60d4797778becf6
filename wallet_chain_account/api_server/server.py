"""
FastAPI server — uniform account interface over HTTP.

Every operation is POST /api/v1/<operation> taking the request model as
JSON body (camelCase fields) and returning the response model. Typed
adaptor errors are mapped here, and only here, to {code: ERROR, msg} plus
an HTTP status:
    BackendUnavailable -> 502, MalformedRecord -> 422, Unimplemented -> 501,
    any other ChainAdaptorError -> 400.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from wallet_chain_account import __version__
from wallet_chain_account.chain.adaptor import Capability
from wallet_chain_account.chain.dispatcher import ChainDispatcher
from wallet_chain_account.chain_logging import get_logger
from wallet_chain_account.config import get_settings
from wallet_chain_account.core.exceptions import (
    BackendUnavailable,
    ChainAdaptorError,
    MalformedRecord,
    Unimplemented,
)
from wallet_chain_account.rpc import account as rpc
from wallet_chain_account.rpc.common import ReturnCode

logger = get_logger(__name__)

# operation -> (request model, response model)
OPERATIONS: dict[Capability, tuple[type, type]] = {
    Capability.GET_SUPPORT_CHAINS: (rpc.SupportChainsRequest, rpc.SupportChainsResponse),
    Capability.CONVERT_ADDRESS: (rpc.ConvertAddressRequest, rpc.ConvertAddressResponse),
    Capability.VALID_ADDRESS: (rpc.ValidAddressRequest, rpc.ValidAddressResponse),
    Capability.GET_BLOCK_BY_NUMBER: (rpc.BlockNumberRequest, rpc.BlockResponse),
    Capability.GET_BLOCK_BY_HASH: (rpc.BlockHashRequest, rpc.BlockResponse),
    Capability.GET_BLOCK_HEADER_BY_HASH: (rpc.BlockHeaderHashRequest, rpc.BlockHeaderResponse),
    Capability.GET_BLOCK_HEADER_BY_NUMBER: (rpc.BlockHeaderNumberRequest, rpc.BlockHeaderResponse),
    Capability.GET_BLOCK_BY_RANGE: (rpc.BlockByRangeRequest, rpc.BlockByRangeResponse),
    Capability.GET_ACCOUNT: (rpc.AccountRequest, rpc.AccountResponse),
    Capability.GET_FEE: (rpc.FeeRequest, rpc.FeeResponse),
    Capability.SEND_TX: (rpc.SendTxRequest, rpc.SendTxResponse),
    Capability.GET_TX_BY_ADDRESS: (rpc.TxAddressRequest, rpc.TxAddressResponse),
    Capability.GET_TX_BY_HASH: (rpc.TxHashRequest, rpc.TxHashResponse),
    Capability.BUILD_UNSIGN_TRANSACTION: (rpc.UnSignTransactionRequest, rpc.UnSignTransactionResponse),
    Capability.BUILD_SIGNED_TRANSACTION: (rpc.SignedTransactionRequest, rpc.SignedTransactionResponse),
    Capability.DECODE_TRANSACTION: (rpc.DecodeTransactionRequest, rpc.DecodeTransactionResponse),
    Capability.VERIFY_SIGNED_TRANSACTION: (rpc.VerifyTransactionRequest, rpc.VerifyTransactionResponse),
    Capability.GET_EXTRA_DATA: (rpc.ExtraDataRequest, rpc.ExtraDataResponse),
    Capability.GET_NFT_LIST_BY_ADDRESS: (rpc.NftAddressRequest, rpc.NftAddressResponse),
}


def _status_for(exc: ChainAdaptorError) -> int:
    if isinstance(exc, BackendUnavailable):
        return 502
    if isinstance(exc, MalformedRecord):
        return 422
    if isinstance(exc, Unimplemented):
        return 501
    return 400


def get_dispatcher(request: Request) -> ChainDispatcher:
    """Dependency: the app-scoped dispatcher (shared, read-only)."""
    return request.app.state.dispatcher


def _make_endpoint(operation: Capability, request_model: type):
    async def endpoint(
        body: request_model,  # type: ignore[valid-type]
        dispatcher: ChainDispatcher = Depends(get_dispatcher),
    ):
        return await dispatcher.dispatch(operation, body)

    endpoint.__name__ = operation.value
    return endpoint


def build_router() -> APIRouter:
    router = APIRouter()
    for operation, (request_model, response_model) in OPERATIONS.items():
        router.add_api_route(
            f"/{operation.value}",
            _make_endpoint(operation, request_model),
            methods=["POST"],
            response_model=response_model,
            name=operation.value,
        )

    @router.get("/capabilities/{chain}")
    def capabilities(chain: str, dispatcher: ChainDispatcher = Depends(get_dispatcher)) -> dict[str, Any]:
        adaptor = dispatcher.get(chain)
        return {
            "chain": adaptor.chain_name,
            "capabilities": sorted(c.value for c in adaptor.capabilities),
        }

    return router


async def _chain_error_handler(request: Request, exc: ChainAdaptorError) -> JSONResponse:
    status = _status_for(exc)
    log = logger.error if status >= 500 else logger.warning
    log(
        "api_chain_error",
        path=request.url.path,
        status_code=status,
        **exc.to_dict(),
    )
    return JSONResponse(
        status_code=status,
        content={"code": ReturnCode.ERROR.value, "msg": exc.message},
    )


def create_app(dispatcher: ChainDispatcher | None = None) -> FastAPI:
    """
    Build the ASGI app.

    With no dispatcher, one is built from settings at startup and closed
    on shutdown; a dispatcher passed in is owned by the caller.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "dispatcher", None) is None
        if owned:
            app.state.dispatcher = ChainDispatcher.from_settings(get_settings())
        logger.info("api_started", chains=app.state.dispatcher.chains)
        yield
        if owned:
            await app.state.dispatcher.aclose()
        logger.info("api_stopped")

    app = FastAPI(
        title="Wallet Chain Account API",
        description="Chain-agnostic account and transaction queries (TON backend).",
        version=__version__,
        lifespan=lifespan,
    )
    if dispatcher is not None:
        app.state.dispatcher = dispatcher

    app.add_exception_handler(ChainAdaptorError, _chain_error_handler)
    app.include_router(build_router(), prefix="/api/v1", tags=["Account"])

    @app.get("/health")
    def health(request: Request) -> dict[str, Any]:
        current = getattr(request.app.state, "dispatcher", None)
        return {"status": "ok", "chains": current.chains if current else []}

    return app
