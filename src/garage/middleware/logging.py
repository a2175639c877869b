"""structlog setup for the garage API.

Wallet addresses are logged on nearly every submission event; they are
shortened to ``0x1234…abcd`` so log lines stay readable.
"""

import logging

import structlog

from garage.config import Settings

SERVICE_NAME = "sui-garage-api"

_WALLET_KEYS = ("wallet_address", "address")

# Chatty third-party loggers that drown out request logs at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "aiosqlite")


def shorten_wallet(address: str) -> str:
    if len(address) <= 14:
        return address
    return f"{address[:6]}…{address[-4:]}"


def _shorten_wallets(_logger: object, _method: str, event_dict: structlog.types.EventDict) -> structlog.types.EventDict:
    for key in _WALLET_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = shorten_wallet(value)
    return event_dict


def _add_service(_logger: object, _method: str, event_dict: structlog.types.EventDict) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(settings: Settings) -> None:
    """Configure structlog; ``log_format`` picks JSON lines or the dev console."""
    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            _add_service,
            _shorten_wallets,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s")
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
