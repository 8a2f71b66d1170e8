"""Implicit, execution-chain-scoped key-value storage.

A SimpleContext owns a root store and a registry of per-chain override
stores. Every operation first resolves the visible store: the override of the
current chain (or of its nearest ancestor), else the root store.

Forking copies the visible store (shallow) onto a new child chain:

    context = create_simple_context()
    context.set("user", "alice")

    def handle():
        context.set("user", "bob")
        loop.call_later(0.1, report)   # report() still sees "bob"

    context.fork(handle)
    context.get("user")                # "alice"

Code that never forked shares the root store; concurrent writers to it race
like any shared mutable state. Fork to get isolation.
"""

import asyncio
import contextvars
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Coroutine, Iterator, Optional, TypeVar, overload

from simplecontext.config import ContextConfig, get_default_config
from simplecontext.observability.logging import get_logger
from simplecontext.registry import ScopedStoreRegistry, Store
from simplecontext.tracking import (
    ChainIdentity,
    bind,
    chain_context,
    current_chain,
    enter_chain,
    exit_chain,
    spawn_chain,
)
from simplecontext.validation import validate_key

log = get_logger(__name__)

T = TypeVar("T")


class SimpleContext:
    """Key-value store whose visible contents follow the execution chain.

    Attributes:
        config: Diagnostics settings for this context
    """

    def __init__(self, config: Optional[ContextConfig] = None) -> None:
        self.config = config or get_default_config()
        self._root: Store = {}
        self._registry = ScopedStoreRegistry(
            name=self.config.name,
            chain_depth_warning=self.config.chain_depth_warning,
        )

    # ------------------------------------------------------------------
    # Store resolution
    # ------------------------------------------------------------------

    def _visible_store(self) -> Store:
        store = self._registry.resolve(current_chain())
        return self._root if store is None else store

    def _fork_chain(self, in_place: bool = False) -> ChainIdentity:
        """Create a new chain carrying a copy of the visible store.

        An in-place fork from a chain this context forked itself supersedes
        that chain: the new chain becomes its sibling, so the old store lives
        only as long as the continuations that captured it.
        """
        current = current_chain()
        snapshot = dict(self._visible_store())
        parent = current
        if in_place and current.parent is not None and self._registry.lookup(current) is not None:
            parent = current.parent
        chain = spawn_chain(parent)
        self._registry.install(chain, snapshot)
        if self.config.log_fork_events:
            log.debug(
                "context_forked",
                context=self.config.name,
                chain_id=chain.id,
                parent_chain_id=parent.id,
                keys=len(snapshot),
            )
        return chain

    # ------------------------------------------------------------------
    # Key-value operations
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``.

        Args:
            key: Non-empty string key
            default: Returned when the key is absent

        Returns:
            The stored value (which may itself be None), or ``default``

        Raises:
            InvalidKeyError: If key is not a non-empty string
        """
        validate_key(key)
        return self._visible_store().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` in the visible store.

        Any value is accepted, None included; the key counts as present
        afterwards.

        Raises:
            InvalidKeyError: If key is not a non-empty string
        """
        validate_key(key)
        self._visible_store()[key] = value

    def delete(self, key: str) -> bool:
        """Remove ``key`` from the visible store.

        Returns:
            True if the key was present

        Raises:
            InvalidKeyError: If key is not a non-empty string
        """
        validate_key(key)
        store = self._visible_store()
        if key not in store:
            return False
        del store[key]
        return True

    def has(self, key: str) -> bool:
        """Return True if ``key`` is an entry of the visible store.

        Raises:
            InvalidKeyError: If key is not a non-empty string
        """
        validate_key(key)
        return key in self._visible_store()

    def clear(self) -> None:
        """Empty the visible store in place.

        Inside a fork only that fork's override is emptied; the parent's
        entries are untouched.
        """
        self._visible_store().clear()

    def get_all(self) -> dict[str, Any]:
        """Return a shallow copy of the visible store."""
        return dict(self._visible_store())

    def keys(self) -> list[str]:
        """Return the keys of the visible store."""
        return list(self._visible_store())

    def size(self) -> int:
        """Return the number of entries in the visible store."""
        return len(self._visible_store())

    # ------------------------------------------------------------------
    # Forking
    # ------------------------------------------------------------------

    @overload
    def fork(self) -> "SimpleContext": ...

    @overload
    def fork(self, callback: Callable[..., T], *args: Any, **kwargs: Any) -> T: ...

    def fork(self, callback: Optional[Callable[..., Any]] = None, *args: Any, **kwargs: Any) -> Any:
        """Fork the visible store into a new child chain.

        With a callback, the callback (and everything it schedules, however
        late it runs) sees a private copy of the visible store; the caller's
        view is unchanged once fork returns. The callback's return value is
        passed through. A returned coroutine is wrapped in a task bound to the
        forked chain so the copy stays visible across its awaits.

        Without a callback, the copy becomes the visible store for the rest of
        the current execution context and the context itself is returned:

            context.fork().set("foo", "tata")
            loop.call_later(0.4, report)

        There is no way to undo an in-place fork. Only use it when the caller
        owns everything that runs afterwards in this execution context (for
        example, when it schedules exactly one continuation per fork); prefer
        the callback form or ``scope()`` otherwise.

        Args:
            callback: Callable to run inside the fork
            *args: Positional arguments for callback
            **kwargs: Keyword arguments for callback

        Returns:
            The callback's result, or this context for the in-place form
        """
        if callback is None:
            enter_chain(self._fork_chain(in_place=True))
            return self

        chain = self._fork_chain()

        ctx = chain_context(chain)
        result = ctx.run(callback, *args, **kwargs)
        if asyncio.iscoroutine(result):
            return _run_coroutine_in(result, ctx)
        return result

    @contextmanager
    def scope(self) -> Iterator["SimpleContext"]:
        """Fork in place for the duration of a ``with`` block.

        Work scheduled inside the block keeps the forked store after the
        block exits; the code after the block sees the previous store again.

        Example:
            >>> with context.scope():
            ...     context.set("request_id", "r-1")
            ...     await handle_request()
        """
        token = enter_chain(self._fork_chain(in_place=True))
        try:
            yield self
        finally:
            exit_chain(token)

    def bind(self, func: Callable[..., T]) -> Callable[..., T]:
        """Pin ``func`` to the current chain, e.g. before handing it to a thread."""
        return bind(func)

    def __repr__(self) -> str:
        return f"SimpleContext(name={self.config.name!r}, size={self.size()})"


def _run_coroutine_in(
    coro: Coroutine[Any, Any, T], ctx: contextvars.Context
) -> Awaitable[T]:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return _await_in(coro, ctx)
    return loop.create_task(coro, context=ctx)


async def _await_in(coro: Coroutine[Any, Any, T], ctx: contextvars.Context) -> T:
    return await asyncio.get_running_loop().create_task(coro, context=ctx)


def create_simple_context(config: Optional[ContextConfig] = None) -> SimpleContext:
    """Create a new, empty context.

    Args:
        config: Optional diagnostics settings

    Returns:
        A SimpleContext with an empty root store
    """
    return SimpleContext(config)
