"""
voting.py - Voting power derivation

Voting power mirrors an account's compliant, spendable balance:

    target = 0                      if frozen
    target = 0                      if allow-list mode is on and not whitelisted
    target = max(balance - locked, 0) otherwise

The ledger reconciles each affected account to its target after every
operation with a single signed delta. Delegation is not a capability of
this ledger; reject_delegation is the one place that says so.
"""

from __future__ import annotations
from typing import NoReturn, Optional

from .core import AccountId, DelegationDisabled, LedgerView


def voting_target(
    balance: int,
    locked: int,
    frozen: bool,
    whitelisted: bool,
    allow_list_mode: bool,
) -> int:
    """Voting power an account should hold given its compliance state."""
    if frozen:
        return 0
    if allow_list_mode and not whitelisted:
        return 0
    return max(balance - locked, 0)


def target_for(view: LedgerView, account: AccountId) -> int:
    """voting_target() evaluated against live ledger state."""
    return voting_target(
        balance=view.balance_of(account),
        locked=view.locked_balance_of(account),
        frozen=view.is_frozen(account),
        whitelisted=view.is_whitelisted(account),
        allow_list_mode=view.allow_list_mode,
    )


def voting_delta(current: int, target: int) -> int:
    """Signed adjustment that brings current to target (0 means no-op)."""
    return target - current


def reject_delegation(account: Optional[AccountId] = None) -> NoReturn:
    raise DelegationDisabled(account)
