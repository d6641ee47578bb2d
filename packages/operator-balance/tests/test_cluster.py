"""Tests for the in-memory cluster snapshot and data types."""

import random
import threading

import pytest

from operator_balance.cluster import ClusterSnapshot
from operator_balance.exceptions import PeerAllocationError
from operator_balance.types import Peer, PeerRole, Region, ResourceKind, Store


@pytest.fixture
def cluster():
    """Store 1 leads region 10 and follows region 20; store 3 hosts nothing."""
    return ClusterSnapshot(
        stores=[Store(id=1), Store(id=2), Store(id=3)],
        regions=[
            Region(
                id=10,
                peers=[
                    Peer(id=100, store_id=1, region_id=10, role=PeerRole.LEADER),
                    Peer(id=101, store_id=2, region_id=10),
                ],
                leader_store_id=1,
            ),
            Region(
                id=20,
                peers=[
                    Peer(id=200, store_id=2, region_id=20, role=PeerRole.LEADER),
                    Peer(id=201, store_id=1, region_id=20),
                ],
                leader_store_id=2,
            ),
        ],
        rng=random.Random(0),
    )


class TestRegion:
    """Tests for Region helpers."""

    def test_duplicate_store_peer_rejected(self):
        with pytest.raises(ValueError, match="more than one peer"):
            Region(id=1, peers=[Peer(id=1, store_id=1), Peer(id=2, store_id=1)])

    def test_leader_peer_must_have_leader_role(self):
        """Peer on the leader store marked as follower is rejected."""
        with pytest.raises(ValueError, match="expected leader"):
            Region(
                id=1,
                peers=[Peer(id=1, store_id=1), Peer(id=2, store_id=2)],
                leader_store_id=1,
            )

    def test_follower_peer_must_have_follower_role(self):
        """Second peer claiming leadership is rejected."""
        with pytest.raises(ValueError, match="expected follower"):
            Region(
                id=1,
                peers=[
                    Peer(id=1, store_id=1, role=PeerRole.LEADER),
                    Peer(id=2, store_id=2, role=PeerRole.LEADER),
                ],
                leader_store_id=1,
            )

    def test_leaderless_region_rejects_leader_role(self):
        with pytest.raises(ValueError, match="expected follower"):
            Region(id=1, peers=[Peer(id=1, store_id=1, role=PeerRole.LEADER)])

    def test_leader_store_must_host_a_peer(self):
        with pytest.raises(ValueError, match="has no peer"):
            Region(id=1, peers=[Peer(id=1, store_id=1)], leader_store_id=9)

    def test_follower_region_peer_is_follower(self, cluster):
        """Regions picked as follower regions expose a follower peer."""
        for store_id in (1, 2):
            region = cluster.rand_follower_region(store_id)
            assert region.get_store_peer(store_id).role == PeerRole.FOLLOWER

    def test_leader_and_followers(self, cluster):
        region = cluster.get_region(10)

        assert region.get_leader().id == 100
        assert [p.id for p in region.get_followers()] == [101]
        assert region.get_store_peer(3) is None

    def test_leaderless_region(self):
        region = Region(id=1, peers=[Peer(id=1, store_id=1)])
        assert region.get_leader() is None
        assert len(region.get_followers()) == 1


class TestStore:
    """Tests for Store helpers."""

    def test_missing_kind_counts_as_zero(self):
        assert Store(id=1).resource_count(ResourceKind.LEADER) == 0

    def test_resource_score(self):
        store = Store(id=1, weight=2.0, resource_counts={ResourceKind.REGION: 10})
        assert store.resource_score(ResourceKind.REGION) == 5.0

    def test_zero_weight_score(self):
        store = Store(id=1, weight=0, resource_counts={ResourceKind.REGION: 10})
        assert store.resource_score(ResourceKind.REGION) == float("inf")
        assert store.resource_score(ResourceKind.LEADER) == 0.0


class TestRandRegion:
    """Tests for rand_follower_region() and rand_leader_region()."""

    def test_follower_region(self, cluster):
        assert cluster.rand_follower_region(1).id == 20
        assert cluster.rand_follower_region(2).id == 10

    def test_leader_region(self, cluster):
        assert cluster.rand_leader_region(1).id == 10
        assert cluster.rand_leader_region(2).id == 20

    def test_store_without_regions(self, cluster):
        assert cluster.rand_follower_region(3) is None
        assert cluster.rand_leader_region(3) is None


class TestAllocPeer:
    """Tests for alloc_peer()."""

    def test_allocates_sequential_ids(self, cluster):
        first = cluster.alloc_peer(3)
        second = cluster.alloc_peer(3)

        assert (first.id, second.id) == (1, 2)
        assert first.store_id == 3
        assert first.region_id is None

    def test_unknown_store(self, cluster):
        with pytest.raises(PeerAllocationError) as exc_info:
            cluster.alloc_peer(99)

        assert exc_info.value.store_id == 99
        assert exc_info.value.reason == "store not found"

    def test_id_space_exhausted(self, cluster):
        cluster.next_peer_id = cluster.max_peer_id
        cluster.alloc_peer(1)

        with pytest.raises(PeerAllocationError, match="exhausted"):
            cluster.alloc_peer(1)

    def test_concurrent_allocation_ids_are_unique(self, cluster):
        ids: list[int] = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                peer = cluster.alloc_peer(1)
                with lock:
                    ids.append(peer.id)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ids) == 800
        assert len(set(ids)) == 800
