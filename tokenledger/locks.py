"""
locks.py - Locked-balance bookkeeping

A lock excludes part of an account's balance from ordinary transfers.
These functions take explicit inputs and return the new locked amount;
the ledger applies the result.
"""

from __future__ import annotations
from typing import Tuple

from .core import AccountId, LockExceedsUnlocked, UnlockExceedsLocked


def compute_lock(account: AccountId, balance: int, locked: int, amount: int) -> int:
    """
    Lock amount more units.

    Zero is always rejected, as is anything above the unlocked balance.

    Returns:
        New locked amount

    Raises:
        LockExceedsUnlocked: carrying the requested and unlocked amounts
    """
    unlocked = balance - locked
    if amount <= 0 or amount > unlocked:
        raise LockExceedsUnlocked(account, amount, unlocked)
    return locked + amount


def compute_unlock(account: AccountId, locked: int, amount: int) -> int:
    """
    Release amount locked units.

    Returns:
        New locked amount

    Raises:
        UnlockExceedsLocked: for zero or more than the locked amount
    """
    if amount <= 0 or amount > locked:
        raise UnlockExceedsLocked(account, amount, locked)
    return locked - amount


def reconcile_locked(balance: int, locked: int) -> Tuple[int, int]:
    """
    Clamp locked down to balance after funds left the account unchecked.

    Only the forced-transfer path can leave locked above balance.

    Returns:
        (new locked amount, amount implicitly unlocked)
    """
    if locked <= balance:
        return locked, 0
    return balance, locked - balance
