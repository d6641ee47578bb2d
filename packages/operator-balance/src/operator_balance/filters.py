"""
Store filters for selector implementations.

Each filter implements FilterProtocol.admit(). Selectors apply a chain of
filters and only consider stores that every filter admits.
"""

from dataclasses import dataclass

from operator_balance.protocols import FilterProtocol
from operator_balance.taint import TaintCache
from operator_balance.types import Store


@dataclass
class TaintFilter:
    """
    Rejects stores that recently failed a scheduling attempt.

    Attributes:
        cache: The TaintCache shared with whoever records failures.
    """

    cache: TaintCache

    def admit(self, store: Store) -> bool:
        return not self.cache.is_tainted(store.id)


@dataclass
class StateFilter:
    """Rejects stores that are not Up."""

    def admit(self, store: Store) -> bool:
        return store.is_up()


def admits(store: Store, *filters: FilterProtocol) -> bool:
    """Return True if every filter admits the store."""
    return all(f.admit(store) for f in filters)
