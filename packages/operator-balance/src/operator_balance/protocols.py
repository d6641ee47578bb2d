"""
Protocol definitions for the collaborators of the balance core.

The balance decision core never talks to a concrete cluster, selector or
filter implementation. It depends only on these structural interfaces:

- ClusterProtocol: read-only snapshot of stores and regions, plus peer
  allocation
- SelectorProtocol: pluggable strategy that picks a source or target store
- FilterProtocol: predicate that admits or rejects a candidate store
"""

from typing import Protocol, runtime_checkable

from operator_balance.types import Peer, Region, Store, StoreId


@runtime_checkable
class FilterProtocol(Protocol):
    """
    Protocol for store filters.

    A filter narrows the candidate stores a selector may choose from.
    Filters may reject stores for any reason (taint, capacity, labels).
    """

    def admit(self, store: Store) -> bool:
        """Return True if the store may be selected."""
        ...


@runtime_checkable
class ClusterProtocol(Protocol):
    """
    Protocol for the cluster-state collaborator.

    Treated as an immutable, consistent view for the duration of one
    planning call. Only alloc_peer mutates shared state; implementations
    must make it atomic.
    """

    def get_stores(self) -> list[Store]:
        """Return all stores in the cluster."""
        ...

    def rand_follower_region(self, store_id: StoreId) -> Region | None:
        """Return a random region with a follower peer on store_id."""
        ...

    def rand_leader_region(self, store_id: StoreId) -> Region | None:
        """Return a random region whose leader peer is on store_id."""
        ...

    def alloc_peer(self, store_id: StoreId) -> Peer:
        """
        Allocate a new peer identity bound to store_id.

        Raises:
            PeerAllocationError: If no identifier can be allocated.
        """
        ...


@runtime_checkable
class SelectorProtocol(Protocol):
    """
    Protocol for store selection strategies.

    Implementations (round-robin, least-loaded, random with constraints)
    are supplied by the caller.
    """

    def select_source(
        self,
        cluster: ClusterProtocol,
        stores: list[Store],
        *filters: FilterProtocol,
    ) -> Store | None:
        """Pick a store to move a replica away from."""
        ...

    def select_target(
        self,
        cluster: ClusterProtocol,
        stores: list[Store],
        *filters: FilterProtocol,
    ) -> Store | None:
        """Pick a store to receive a new replica."""
        ...
