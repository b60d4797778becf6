"""
Main entrypoint: FastAPI account server for the configured chains.

Settings come from env (see wallet_chain_account.config): TON_NETWORK,
TON_RPC_URL, TON_DATA_API_URL, TON_API_KEY, REQUEST_TIMEOUT_SEC, API_HOST,
API_PORT. The dispatcher and its HTTP clients are created on startup and
closed on shutdown.

Equivalent: uvicorn wallet_chain_account.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from wallet_chain_account.chain_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Load settings and run the API server in the main thread."""
    from wallet_chain_account.config import get_settings

    settings = get_settings()
    logger.info(
        "main_config_loaded",
        network=settings.ton_network,
        data_api_url=settings.ton_data_api_url,
        api_key_set=bool(settings.ton_api_key),
    )

    from wallet_chain_account.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
