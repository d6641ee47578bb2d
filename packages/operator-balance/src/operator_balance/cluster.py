"""
In-memory cluster snapshot.

ClusterSnapshot implements ClusterProtocol over plain lists of stores and
regions. It is the collaborator used by tests and by callers that build
their snapshot from an external source (e.g. the PD HTTP API) before
planning.

Only alloc_peer mutates state; it is serialized with a lock so concurrent
planners never receive the same peer id.
"""

import random
import threading
from dataclasses import dataclass, field

from operator_balance.exceptions import PeerAllocationError
from operator_balance.types import (
    Peer,
    PeerId,
    PeerRole,
    Region,
    RegionId,
    Store,
    StoreId,
)

MAX_PEER_ID = 2**64 - 1


@dataclass
class ClusterSnapshot:
    """
    Read view of stores and regions with a peer id allocator.

    Attributes:
        stores: All stores in the cluster.
        regions: All regions in the cluster.
        next_peer_id: Next id handed out by alloc_peer.
        max_peer_id: Largest id alloc_peer may hand out.
        rng: Random source for region picking, injectable for tests.

    Example:
        cluster = ClusterSnapshot(
            stores=[Store(id=1), Store(id=2)],
            regions=[
                Region(
                    id=10,
                    peers=[Peer(id=100, store_id=1, role=PeerRole.LEADER)],
                    leader_store_id=1,
                )
            ],
        )
        region, peer = plan_evacuation(cluster, "balance-region", selector)
    """

    stores: list[Store] = field(default_factory=list)
    regions: list[Region] = field(default_factory=list)
    next_peer_id: PeerId = 1
    max_peer_id: PeerId = MAX_PEER_ID
    rng: random.Random = field(default_factory=random.Random)
    _alloc_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def get_stores(self) -> list[Store]:
        return list(self.stores)

    def get_store(self, store_id: StoreId) -> Store | None:
        for store in self.stores:
            if store.id == store_id:
                return store
        return None

    def get_region(self, region_id: RegionId) -> Region | None:
        for region in self.regions:
            if region.id == region_id:
                return region
        return None

    def rand_follower_region(self, store_id: StoreId) -> Region | None:
        """Return a random region with a follower peer on store_id."""
        candidates = [
            r
            for r in self.regions
            if store_id in r.store_ids() and r.leader_store_id != store_id
        ]
        return self._pick(candidates)

    def rand_leader_region(self, store_id: StoreId) -> Region | None:
        """Return a random region whose leader is on store_id."""
        candidates = [
            r
            for r in self.regions
            if r.leader_store_id == store_id and store_id in r.store_ids()
        ]
        return self._pick(candidates)

    def alloc_peer(self, store_id: StoreId) -> Peer:
        """
        Allocate a new, unattached follower peer on store_id.

        Raises:
            PeerAllocationError: If the store is unknown or the id space
                is exhausted.
        """
        if self.get_store(store_id) is None:
            raise PeerAllocationError(store_id, "store not found")

        with self._alloc_lock:
            if self.next_peer_id > self.max_peer_id:
                raise PeerAllocationError(store_id, "peer id space exhausted")
            peer_id = self.next_peer_id
            self.next_peer_id += 1

        return Peer(id=peer_id, store_id=store_id, role=PeerRole.FOLLOWER)

    def _pick(self, regions: list[Region]) -> Region | None:
        if not regions:
            return None
        return self.rng.choice(regions)
