"""
allowances.py - In-memory owner -> spender approvals

Consumed by TokenLedger.burn_from and TokenLedger.transfer_from.
"""

from __future__ import annotations
from typing import Dict, Tuple

from .core import AccountId, InsufficientAllowance, InvalidAccount, InvalidAmount, is_null_account


# An allowance at this value is never decremented.
UNLIMITED_ALLOWANCE = 2 ** 256 - 1


class InMemoryAllowances:
    """Allowance table keyed by (owner, spender)."""

    def __init__(self):
        self._allowances: Dict[Tuple[AccountId, AccountId], int] = {}

    def allowance(self, owner: AccountId, spender: AccountId) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: AccountId, spender: AccountId, amount: int) -> None:
        if is_null_account(owner):
            raise InvalidAccount("approver", owner)
        if is_null_account(spender):
            raise InvalidAccount("spender", spender)
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            raise InvalidAmount(amount)
        self._allowances[(owner, spender)] = amount

    def spend_allowance(self, owner: AccountId, spender: AccountId, amount: int) -> None:
        """Decrement the allowance. Nothing changes when it is too small."""
        current = self.allowance(owner, spender)
        if current == UNLIMITED_ALLOWANCE:
            return
        if current < amount:
            raise InsufficientAllowance(spender, current, amount)
        self._allowances[(owner, spender)] = current - amount

    def copy(self) -> InMemoryAllowances:
        cloned = InMemoryAllowances()
        cloned._allowances = dict(self._allowances)
        return cloned

    def __repr__(self):
        return f"InMemoryAllowances({len(self._allowances)} approvals)"
