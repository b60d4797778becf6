"""
Structured logging for the chain adaptor service.

Every record is one event: a snake_case name (emitted as event_type) plus
keyword fields such as chain, address, backend, status_code. JSON by
default (LOG_FORMAT=json), colored console output with LOG_FORMAT=console;
LOG_LEVEL picks the threshold.

httpx and httpcore log full request URLs through stdlib logging, and those
URLs may carry an api_key query value, so they are held at WARNING or above.

No wallet_chain_account imports here; every other module imports this one.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

SERVICE_NAME = "wallet-chain-account"

_QUIET_LOGGERS = ("httpx", "httpcore")


def _level_from_env() -> int:
    name = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _format_from_env() -> str:
    return (os.getenv("LOG_FORMAT") or "json").strip().lower()


def _add_service(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Emit the event name as event_type; mirror it into message if absent."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def _quiet_http_loggers(level: int) -> None:
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_structlog(level: int | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog.

    Arguments override LOG_LEVEL / LOG_FORMAT; called once at import with
    the environment values.
    """
    level = _level_from_env() if level is None else level
    fmt = _format_from_env() if fmt is None else fmt

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_service,
        _event_to_event_type,
    ]
    if fmt == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
    _quiet_http_loggers(level)


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger bound to the module name.

        logger = get_logger(__name__)
        logger.error("ton_rpc_http_error", method="getWalletInformation", status_code=502)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_chain(chain: str) -> structlog.BoundLogger:
    """Logger with chain bound, for adaptor-level events."""
    return get_logger("wallet_chain_account.chain").bind(chain=chain)
