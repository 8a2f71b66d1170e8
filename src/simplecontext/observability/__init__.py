"""Observability helpers: structured logging stamped with chain IDs."""

from simplecontext.observability.logging import add_chain_id, get_logger, setup_logging

__all__ = [
    "add_chain_id",
    "get_logger",
    "setup_logging",
]
