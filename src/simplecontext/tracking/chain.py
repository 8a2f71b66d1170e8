"""Execution-chain tracking on top of contextvars.

asyncio copies the current ``contextvars.Context`` whenever it schedules a
handle (``call_soon``, ``call_later``, ``call_at``), creates a task or
registers a future callback. The active chain is kept in a ContextVar, so
every continuation observes the chain that scheduled it, transitively, back to
the last fork or the root chain.

Threads start with an empty context. Use ``bind`` (or ``asyncio.to_thread``,
which copies the context itself) when handing work to another thread.
"""

import contextvars
import functools
import itertools
from typing import Any, Callable, Iterator, Optional, TypeVar

T = TypeVar("T")

# itertools.count is advanced atomically under the GIL
_chain_ids = itertools.count()


class ChainIdentity:
    """Opaque handle for one logical chain of continuations.

    Chains are compared by identity. A chain is never reused and never
    changes parent; it is reclaimed once no execution context and no child
    chain refers to it.

    Attributes:
        id: Monotonically assigned chain number (0 is the root chain)
        parent: Chain this one was forked from, None for the root chain
        depth: Number of links between this chain and the root chain
    """

    __slots__ = ("id", "parent", "depth", "__weakref__")

    def __init__(self, parent: Optional["ChainIdentity"] = None) -> None:
        self.id = next(_chain_ids)
        self.parent = parent
        self.depth = parent.depth + 1 if parent is not None else 0

    def __repr__(self) -> str:
        parent_id = self.parent.id if self.parent is not None else None
        return f"ChainIdentity(id={self.id}, parent={parent_id}, depth={self.depth})"


ROOT_CHAIN = ChainIdentity()

_current_chain: contextvars.ContextVar[ChainIdentity] = contextvars.ContextVar(
    "simplecontext_chain", default=ROOT_CHAIN
)


def current_chain() -> ChainIdentity:
    """Return the chain the calling code belongs to.

    Returns:
        The active ChainIdentity, ROOT_CHAIN if nothing was ever forked here
    """
    return _current_chain.get()


def spawn_chain(parent: Optional[ChainIdentity] = None) -> ChainIdentity:
    """Allocate a fresh child chain without activating it.

    Args:
        parent: Chain to descend from (defaults to the current chain)

    Returns:
        The new ChainIdentity
    """
    return ChainIdentity(parent if parent is not None else current_chain())


def enter_chain(chain: ChainIdentity) -> contextvars.Token:
    """Activate a chain in the current execution context.

    Work scheduled afterwards from this context inherits ``chain``; work
    scheduled earlier keeps the chain it captured.

    Args:
        chain: Chain to activate

    Returns:
        Token accepted by exit_chain to restore the previous chain
    """
    return _current_chain.set(chain)


def exit_chain(token: contextvars.Token) -> None:
    """Restore the chain that was active before the matching enter_chain."""
    _current_chain.reset(token)


def chain_context(chain: ChainIdentity) -> contextvars.Context:
    """Build a copy of the current execution context with ``chain`` active.

    The caller's own context is left untouched.

    Args:
        chain: Chain to activate in the copy

    Returns:
        A new contextvars.Context
    """
    ctx = contextvars.copy_context()
    ctx.run(_current_chain.set, chain)
    return ctx


def run_in_chain(chain: ChainIdentity, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run ``func`` inside ``chain_context(chain)`` and return its result."""
    return chain_context(chain).run(func, *args, **kwargs)


def bind(func: Callable[..., T]) -> Callable[..., T]:
    """Pin ``func`` to the chain that is current right now.

    The returned callable can be invoked later, from any thread or chain, and
    always runs ``func`` in the captured chain.

    Args:
        func: Callable to bind

    Returns:
        Wrapper running ``func`` in the captured chain

    Example:
        >>> callback = bind(on_message)
        >>> threading.Thread(target=callback).start()
    """
    chain = current_chain()

    @functools.wraps(func)
    def bound(*args: Any, **kwargs: Any) -> T:
        return run_in_chain(chain, func, *args, **kwargs)

    return bound


def ancestors(chain: ChainIdentity) -> Iterator[ChainIdentity]:
    """Yield ``chain`` followed by each of its ancestors up to the root."""
    link: Optional[ChainIdentity] = chain
    while link is not None:
        yield link
        link = link.parent
