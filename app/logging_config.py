"""
structlog setup. Every event carries the service name and environment so
logs from several deployments can share one aggregator.
"""

import logging
import sys
from typing import Any

import structlog

from app.config import SERVICE_NAME, config

# Chatty transport libraries; they log each request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def add_service_context(_, __, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", config.ENVIRONMENT)
    return event_dict


def configure_logging(debug: bool = None, level: str = None):
    """JSON lines in production, colored console output when DEBUG is on."""
    debug = config.DEBUG if debug is None else debug
    level = (level or config.LOG_LEVEL).upper()

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, level, logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_context,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> Any:
    return structlog.get_logger(name)


configure_logging()

logger = get_logger(SERVICE_NAME)
