"""
Peer migration planning.

Turns a selector's choice of store into a concrete peer to act on:
- plan_evacuation: pick a region on an overloaded source store and the peer
  to remove from it
- plan_admission: pick a target store and allocate a new peer on it

"No candidate" is a normal outcome: both functions return None rather than
raising, and the next scheduling tick tries again with a fresh snapshot.
"""

import logging

from operator_balance.exceptions import PeerAllocationError
from operator_balance.metrics import record_scheduler_event
from operator_balance.protocols import (
    ClusterProtocol,
    FilterProtocol,
    SelectorProtocol,
)
from operator_balance.types import Peer, Region

logger = logging.getLogger(__name__)


def plan_evacuation(
    cluster: ClusterProtocol,
    scheduler_name: str,
    selector: SelectorProtocol,
    *filters: FilterProtocol,
) -> tuple[Region, Peer] | tuple[None, None]:
    """
    Select a region to move a peer away from.

    Prefers a region where the source store holds a follower, to avoid
    leadership churn, and falls back to one where it holds the leader.

    Args:
        cluster: Snapshot of cluster state
        scheduler_name: Label for the scheduler outcome counter
        selector: Strategy that picks the source store
        *filters: Filters narrowing the candidate stores

    Returns:
        (region, peer on the source store), or (None, None) if no store or
        no region qualifies
    """
    stores = cluster.get_stores()

    source = selector.select_source(cluster, stores, *filters)
    if source is None:
        record_scheduler_event(scheduler_name, "no_store")
        return None, None

    region = cluster.rand_follower_region(source.id)
    if region is None:
        region = cluster.rand_leader_region(source.id)
    if region is None:
        record_scheduler_event(scheduler_name, "no_region")
        return None, None

    peer = region.get_store_peer(source.id)
    if peer is None:
        # Snapshot returned a region that does not live on the source
        record_scheduler_event(scheduler_name, "no_region")
        return None, None

    return region, peer


def plan_admission(
    cluster: ClusterProtocol,
    selector: SelectorProtocol,
    *filters: FilterProtocol,
) -> Peer | None:
    """
    Select a target store and allocate a new peer on it.

    The returned peer is not attached to any region; attaching it (or
    discarding it) is the caller's responsibility.

    Args:
        cluster: Snapshot of cluster state
        selector: Strategy that picks the target store
        *filters: Filters narrowing the candidate stores

    Returns:
        The new peer, or None if no target qualifies or allocation fails
    """
    stores = cluster.get_stores()

    target = selector.select_target(cluster, stores, *filters)
    if target is None:
        return None

    try:
        return cluster.alloc_peer(target.id)
    except PeerAllocationError as e:
        logger.error("failed to allocate peer: %s", e)
        return None
