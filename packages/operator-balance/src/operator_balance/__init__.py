"""
Balance decision core for the placement scheduler.

This package decides which replicas to move and how aggressively to move
them. It includes:

- Peer migration planning (plan_evacuation, plan_admission)
- Balance feasibility check (should_balance)
- Dynamic concurrency limit (adjust_balance_limit)
- Taint cache for stores that recently failed scheduling
- Protocols for the cluster, selector and filter collaborators
"""

from operator_balance.balance import adjust_balance_limit, should_balance
from operator_balance.cluster import ClusterSnapshot
from operator_balance.config import BalanceSettings
from operator_balance.exceptions import PeerAllocationError
from operator_balance.filters import StateFilter, TaintFilter, admits
from operator_balance.planner import plan_admission, plan_evacuation
from operator_balance.protocols import (
    ClusterProtocol,
    FilterProtocol,
    SelectorProtocol,
)
from operator_balance.taint import TaintCache, new_taint_cache
from operator_balance.types import (
    Peer,
    PeerId,
    PeerRole,
    Region,
    RegionId,
    ResourceKind,
    Store,
    StoreId,
)

__all__ = [
    # Planning
    "plan_evacuation",
    "plan_admission",
    "should_balance",
    "adjust_balance_limit",
    # Taint
    "TaintCache",
    "new_taint_cache",
    "TaintFilter",
    "StateFilter",
    "admits",
    # Protocols
    "ClusterProtocol",
    "SelectorProtocol",
    "FilterProtocol",
    # Data types
    "ClusterSnapshot",
    "Store",
    "Region",
    "Peer",
    "PeerRole",
    "ResourceKind",
    "StoreId",
    "RegionId",
    "PeerId",
    # Config / errors
    "BalanceSettings",
    "PeerAllocationError",
]
