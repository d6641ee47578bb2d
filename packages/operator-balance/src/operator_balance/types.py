"""
Cluster data types consumed by the balance scheduler.

This module defines the read-only view of cluster state that the balance
decision core works with: stores (nodes), regions (replicated key ranges)
and peers (one replica of a region on one store).

These are internal types, not API models. The cluster-state collaborator
owns and mutates them; the scheduler only reads snapshots.

All types use @dataclass for simplicity.
"""

from dataclasses import dataclass, field
from enum import Enum

# Type aliases for common patterns
StoreId = int
"""Unique identifier for a store (node), unsigned 64-bit."""

RegionId = int
"""Unique identifier for a region (key range)."""

PeerId = int
"""Unique identifier for a peer (replica)."""

STORE_STATE_UP = "Up"


class ResourceKind(str, Enum):
    """Which per-store count is being balanced."""

    LEADER = "leader"
    REGION = "region"


class PeerRole(str, Enum):
    """Role of a peer within its region's Raft group."""

    LEADER = "leader"
    FOLLOWER = "follower"


@dataclass
class Store:
    """
    Represents a store (node) in the cluster.

    Attributes:
        id: Unique store identifier.
        state: Current store state - one of:
            - "Up": Store is healthy and serving requests
            - "Down": Store is unreachable or unhealthy
            - "Offline": Store is being drained/decommissioned
            - "Tombstone": Store has been removed from cluster
        weight: Relative capacity factor. A zero weight marks the store as
            unschedulable for incoming replicas.
        resource_counts: Count per ResourceKind (e.g. regions, leaders).
    """

    id: StoreId
    state: str = STORE_STATE_UP
    weight: float = 1.0
    resource_counts: dict[ResourceKind, int] = field(default_factory=dict)

    def is_up(self) -> bool:
        return self.state == STORE_STATE_UP

    def resource_count(self, kind: ResourceKind) -> int:
        """Count for the given kind, 0 if the store never reported it."""
        return self.resource_counts.get(kind, 0)

    def resource_score(self, kind: ResourceKind) -> float:
        """
        Weighted load for the given kind.

        Returns count / weight. A zero-weight store scores 0 when empty and
        infinity otherwise, so it always looks like the most loaded store.
        """
        count = self.resource_count(kind)
        if self.weight == 0:
            return float("inf") if count else 0.0
        return count / self.weight


@dataclass
class Peer:
    """
    One replica of a region, bound to exactly one store.

    Attributes:
        id: Unique peer identifier assigned by the allocator.
        store_id: Store hosting this replica.
        region_id: Region the replica belongs to. None for a freshly
            allocated peer that the caller has not attached yet.
        role: Leader or follower.
    """

    id: PeerId
    store_id: StoreId
    region_id: RegionId | None = None
    role: PeerRole = PeerRole.FOLLOWER


@dataclass
class Region:
    """
    Represents a region (replicated key range).

    Attributes:
        id: Unique region identifier.
        peers: Ordered replicas of the region, at most one per store.
        leader_store_id: Store holding the leader peer, None if no leader
            has been elected.
    """

    id: RegionId
    peers: list[Peer] = field(default_factory=list)
    leader_store_id: StoreId | None = None

    def __post_init__(self) -> None:
        store_ids = [p.store_id for p in self.peers]
        if len(store_ids) != len(set(store_ids)):
            raise ValueError(f"Region {self.id} has more than one peer on a store")

        # Peer roles must agree with leader_store_id
        if self.leader_store_id is not None and self.leader_store_id not in store_ids:
            raise ValueError(
                f"Region {self.id} leader store {self.leader_store_id} has no peer"
            )
        for peer in self.peers:
            expected = (
                PeerRole.LEADER
                if peer.store_id == self.leader_store_id
                else PeerRole.FOLLOWER
            )
            if peer.role != expected:
                raise ValueError(
                    f"Region {self.id} peer {peer.id} on store {peer.store_id} "
                    f"has role {peer.role.value}, expected {expected.value}"
                )

    def get_store_peer(self, store_id: StoreId) -> Peer | None:
        """Return the peer of this region residing on store_id, if any."""
        for peer in self.peers:
            if peer.store_id == store_id:
                return peer
        return None

    def get_leader(self) -> Peer | None:
        if self.leader_store_id is None:
            return None
        return self.get_store_peer(self.leader_store_id)

    def get_followers(self) -> list[Peer]:
        return [p for p in self.peers if p.store_id != self.leader_store_id]

    def store_ids(self) -> set[StoreId]:
        return {p.store_id for p in self.peers}
