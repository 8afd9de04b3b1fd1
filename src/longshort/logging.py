"""Logging setup for the poller.

structlog events are rendered through the stdlib root handler, so uvicorn and
httpx records share one output stream with the refresh cycle logs.
"""

import logging
import os

import structlog

# Third-party loggers that emit one line per request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Install the root handler and route structlog through it.

    Args:
        log_level: Root level name, e.g. "INFO" or "DEBUG".
        log_format: "json" or "console". Falls back to the LOG_FORMAT
            environment variable, then to "console".

    Context bound with ``bound_contextvars`` (the scheduler binds ``cycle``)
    is merged into every event logged inside that block.
    """
    if log_format is None:
        log_format = os.environ.get("LOG_FORMAT", "console")
    log_format = log_format.lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Polling every 5s would otherwise log every CoinGecko request
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module-level logger, e.g. ``get_logger(__name__)``."""
    return structlog.get_logger(name)
