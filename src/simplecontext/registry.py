"""Scoped store registry: chain identity to override store.

A missing entry means "inherit": resolution walks from the current chain up
through its ancestors and falls back to the root store when no ancestor has
an override. Several contexts share one process-wide chain tracker, so a
chain forked by one context must still resolve to another context's override
installed on an ancestor chain.

Entries are held weakly by chain. Once every continuation of a chain (and
every chain descended from it) is gone, its override store is reclaimed.
"""

import weakref
from typing import Any, Optional

from simplecontext.observability.logging import get_logger
from simplecontext.tracking import ChainIdentity, ancestors

log = get_logger(__name__)

Store = dict[str, Any]


class ScopedStoreRegistry:
    """Maps chains to the override stores installed on them by fork."""

    def __init__(self, name: str = "default", chain_depth_warning: int = 1000) -> None:
        self.name = name
        self._chain_depth_warning = chain_depth_warning
        self._depth_warned = False
        self._stores: "weakref.WeakKeyDictionary[ChainIdentity, Store]" = (
            weakref.WeakKeyDictionary()
        )

    def install(self, chain: ChainIdentity, store: Store) -> None:
        """Install ``store`` as the override for ``chain``.

        Args:
            chain: Chain receiving the override
            store: Override store, owned by the registry from now on
        """
        if chain.depth >= self._chain_depth_warning and not self._depth_warned:
            self._depth_warned = True
            log.warning(
                "chain_depth_exceeded",
                context=self.name,
                chain_id=chain.id,
                depth=chain.depth,
                threshold=self._chain_depth_warning,
            )
        self._stores[chain] = store

    def lookup(self, chain: ChainIdentity) -> Optional[Store]:
        """Return the override installed on exactly ``chain``, if any."""
        return self._stores.get(chain)

    def resolve(self, chain: ChainIdentity) -> Optional[Store]:
        """Return the nearest override store visible from ``chain``.

        Args:
            chain: Chain to resolve from

        Returns:
            The override store of the closest ancestor (``chain`` included)
            that has one, or None when the root store is visible
        """
        if not self._stores:
            return None
        for link in ancestors(chain):
            store = self._stores.get(link)
            if store is not None:
                return store
        return None

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, chain: object) -> bool:
        return chain in self._stores
