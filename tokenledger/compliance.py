"""
compliance.py - Transfer gating rules

Pure functions that decide whether a balance movement may proceed. They
read state through a LedgerView and a RoleRegistry and return the first
failure as a typed LedgerError instance, or None when the movement is
allowed. The ledger raises what these functions return.

Check order is fixed so that the reported failure is deterministic:

    1. pause        - every mutating path, including forced transfer
    2. freeze       - source, then dest            (skipped on bypass)
    3. lock         - amount vs unlocked source    (skipped on bypass)
    4. mode         - transfer role / allow-list   (skipped on bypass)
    5. balance      - amount vs source balance     (always)

Mint checks only the dest side; burn checks only the source side.
"""

from __future__ import annotations
from typing import Optional

from .core import (
    AccountId, LedgerView, RoleRegistry, LedgerError,
    TRANSFER_ROLE,
    LedgerPaused, AccountFrozen, AccountNotWhitelisted, TransferRoleRequired,
    InsufficientBalance, InsufficientUnlockedBalance,
)


def check_not_paused(view: LedgerView) -> Optional[LedgerError]:
    if view.paused:
        return LedgerPaused()
    return None


def check_not_frozen(view: LedgerView, *accounts: AccountId) -> Optional[LedgerError]:
    """Return AccountFrozen for the first frozen account, in argument order."""
    for account in accounts:
        if view.is_frozen(account):
            return AccountFrozen(account)
    return None


def check_unlocked(view: LedgerView, account: AccountId, amount: int) -> Optional[LedgerError]:
    unlocked = view.balance_of(account) - view.locked_balance_of(account)
    if amount > unlocked:
        return InsufficientUnlockedBalance(account, amount, unlocked)
    return None


def check_whitelisted(
    view: LedgerView,
    roles: RoleRegistry,
    caller: AccountId,
    *accounts: AccountId,
) -> Optional[LedgerError]:
    """
    Allow-list check for the given parties.

    No-op outside allow-list mode. Inside it, a caller holding the transfer
    role bypasses the check; otherwise every account must be whitelisted and
    the first one that is not is reported.
    """
    if not view.allow_list_mode:
        return None
    if roles.has_role(TRANSFER_ROLE, caller):
        return None
    for account in accounts:
        if not view.is_whitelisted(account):
            return AccountNotWhitelisted(account)
    return None


def check_mode(
    view: LedgerView,
    roles: RoleRegistry,
    caller: AccountId,
    source: AccountId,
    dest: AccountId,
) -> Optional[LedgerError]:
    """
    Role-gated mode: caller must hold the transfer role.
    Allow-list mode: see check_whitelisted.
    """
    if not view.allow_list_mode:
        if not roles.has_role(TRANSFER_ROLE, caller):
            return TransferRoleRequired(caller)
        return None
    return check_whitelisted(view, roles, caller, source, dest)


def check_balance(view: LedgerView, account: AccountId, amount: int) -> Optional[LedgerError]:
    balance = view.balance_of(account)
    if amount > balance:
        return InsufficientBalance(account, balance, amount)
    return None


def check_transfer(
    view: LedgerView,
    roles: RoleRegistry,
    caller: AccountId,
    source: AccountId,
    dest: AccountId,
    amount: int,
    bypass: bool = False,
) -> Optional[LedgerError]:
    """
    Evaluate a paired movement of amount from source to dest.

    Args:
        view: Read-only ledger state
        roles: Role registry consulted for the transfer role
        caller: Account initiating the movement
        source: Debited account (non-null)
        dest: Credited account (non-null)
        amount: Units to move
        bypass: True on the forced-transfer path; skips freeze, lock and mode

    Returns:
        The first failing check as a LedgerError, or None if allowed.
    """
    failure = check_not_paused(view)
    if failure is None and not bypass:
        failure = (
            check_not_frozen(view, source, dest)
            or check_unlocked(view, source, amount)
            or check_mode(view, roles, caller, source, dest)
        )
    return failure or check_balance(view, source, amount)


def check_mint(
    view: LedgerView,
    roles: RoleRegistry,
    caller: AccountId,
    dest: AccountId,
) -> Optional[LedgerError]:
    """Evaluate a credit of new units to dest."""
    return (
        check_not_paused(view)
        or check_not_frozen(view, dest)
        or check_whitelisted(view, roles, caller, dest)
    )


def check_burn(
    view: LedgerView,
    roles: RoleRegistry,
    caller: AccountId,
    source: AccountId,
    amount: int,
) -> Optional[LedgerError]:
    """Evaluate destruction of amount units held by source."""
    return (
        check_not_paused(view)
        or check_not_frozen(view, source)
        or check_unlocked(view, source, amount)
        or check_whitelisted(view, roles, caller, source)
        or check_balance(view, source, amount)
    )
