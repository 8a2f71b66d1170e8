"""Structured logging configuration with chain ID support.

This module sets up structured logging using structlog with JSON output
and automatic injection of the current execution chain ID, so log lines
emitted from concurrent forked branches can be told apart.
"""

import logging
import sys
from typing import Any

import structlog

from simplecontext.tracking import ROOT_CHAIN, current_chain


def add_chain_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the current chain ID to a log event when inside a forked chain.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with chain_id
    """
    chain = current_chain()
    if chain is not ROOT_CHAIN:
        event_dict.setdefault("chain_id", chain.id)
    return event_dict


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output logs in JSON format; otherwise use console format

    Example:
        >>> setup_logging(log_level="DEBUG", json_logs=False)
        >>> logger = get_logger(__name__)
        >>> logger.debug("context_forked", chain_id=3)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_chain_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=shared_processors + renderers,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
