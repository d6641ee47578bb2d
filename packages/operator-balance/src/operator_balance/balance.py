"""
Balance feasibility and concurrency sizing.

- should_balance: decides whether moving load from one store to another
  improves balance without overshooting
- adjust_balance_limit: sizes the number of concurrent balance operations
  from the spread of a resource count across live stores
"""

import statistics

from operator_balance.protocols import ClusterProtocol
from operator_balance.types import ResourceKind


def should_balance(
    source_size: float,
    source_weight: float,
    target_size: float,
    target_weight: float,
    move_size: float,
) -> bool:
    """
    Check whether moving move_size from source to target is worthwhile.

    Args:
        source_size: Current load on the source store
        source_weight: Capacity factor of the source store
        target_size: Current load on the target store
        target_weight: Capacity factor of the target store
        move_size: Amount of load the move would transfer

    Returns:
        False if the target is unschedulable (zero weight), True if the
        source has zero weight, otherwise whether the source would still
        score higher than the target after the move.
    """
    if target_weight == 0:
        return False
    if source_weight == 0:
        return True
    # Make sure after move, source score is still greater than target score.
    return (source_size - move_size) / source_weight > (
        target_size + move_size
    ) / target_weight


def adjust_balance_limit(cluster: ClusterProtocol, kind: ResourceKind) -> int:
    """
    Compute how many concurrent balance operations to allow.

    Uses the population standard deviation of the resource count across
    stores that are Up. Skewed clusters get a higher limit, evenly spread
    ones a limit close to 1.

    Args:
        cluster: Snapshot to sample stores from
        kind: Resource count to sample

    Returns:
        max(1, int(stddev)), so the scheduler always makes progress
    """
    counts = [
        float(store.resource_count(kind))
        for store in cluster.get_stores()
        if store.is_up()
    ]
    # pstdev needs at least one data point
    limit = statistics.pstdev(counts) if counts else 0.0
    return max(1, int(limit))
