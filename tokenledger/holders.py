"""
holders.py - Registry of accounts that have ever held a positive balance

Global mode toggles resynchronize voting power for every account here.
Iteration follows first-credit order, so resyncs are deterministic.
"""

from __future__ import annotations
from typing import Iterator, List, Set

from .core import AccountId


class HolderRegistry:
    """
    Deduplicated, insertion-ordered set of account ids.

    Stored as a dense list for stable iteration plus a set for O(1)
    membership checks. Entries are never removed: an account whose balance
    returns to zero stays registered with zero voting power.
    """

    def __init__(self):
        self._order: List[AccountId] = []
        self._members: Set[AccountId] = set()

    def add(self, account: AccountId) -> bool:
        """Register an account. Returns True if it was not already present."""
        if account in self._members:
            return False
        self._members.add(account)
        self._order.append(account)
        return True

    def __contains__(self, account: object) -> bool:
        return account in self._members

    def __iter__(self) -> Iterator[AccountId]:
        # Iterate over a snapshot so callers may register during a resync.
        return iter(list(self._order))

    def __len__(self) -> int:
        return len(self._order)

    def as_list(self) -> List[AccountId]:
        return list(self._order)

    def copy(self) -> HolderRegistry:
        cloned = HolderRegistry()
        cloned._order = list(self._order)
        cloned._members = set(self._members)
        return cloned

    def __repr__(self):
        return f"HolderRegistry({len(self)} holders)"
