"""
Exception classes for the balance scheduler.

Per project patterns:
- Inherit from Exception for base exception type
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""

from operator_balance.types import StoreId


class PeerAllocationError(Exception):
    """
    Raised when the cluster cannot allocate a new peer identity.

    Causes include identifier space exhaustion, an unknown target store
    or a transient storage failure in the allocator.

    Attributes:
        store_id: The store the peer was requested for
        reason: Why allocation failed
    """

    def __init__(self, store_id: StoreId, reason: str) -> None:
        self.store_id = store_id
        self.reason = reason
        super().__init__(f"Cannot allocate peer on store {store_id}: {reason}")
