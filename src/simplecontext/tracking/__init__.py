"""Execution-chain tracking.

Answers "which logical chain of continuations is running right now" and
carries that answer across asyncio scheduling boundaries.
"""

from simplecontext.tracking.chain import (
    ROOT_CHAIN,
    ChainIdentity,
    ancestors,
    bind,
    chain_context,
    current_chain,
    enter_chain,
    exit_chain,
    run_in_chain,
    spawn_chain,
)

__all__ = [
    "ROOT_CHAIN",
    "ChainIdentity",
    "ancestors",
    "bind",
    "chain_context",
    "current_chain",
    "enter_chain",
    "exit_chain",
    "run_in_chain",
    "spawn_chain",
]
