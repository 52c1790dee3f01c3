"""
Core types and protocols for the permissioned token ledger.

This module provides the foundational data structures and protocols:
1. Protocols: LedgerView for read-only access, plus the collaborator
   interfaces the ledger consumes (RoleRegistry, AllowanceProvider, RecordSink)
2. Data structures: the mutable Account record and immutable LedgerRecord audit entries
3. Exceptions: LedgerError and the typed failure taxonomy
4. Constants: role identifiers and the null account

Nothing in this module mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable


# ============================================================================
# CONSTANTS
# ============================================================================

# Role identifiers. Strings, not an enum, so that collaborators can define
# additional roles without touching this module.
DEFAULT_ADMIN_ROLE = "DEFAULT_ADMIN"
TRANSFER_ROLE = "TRANSFER"
MINTER_ROLE = "MINTER"
BURNER_ROLE = "BURNER"
PAUSER_ROLE = "PAUSER"
WHITELIST_MANAGER_ROLE = "WHITELIST_MANAGER"
TRANSFER_RESTRICTION_ROLE = "TRANSFER_RESTRICTION"

ALL_ROLES = (
    DEFAULT_ADMIN_ROLE,
    TRANSFER_ROLE,
    MINTER_ROLE,
    BURNER_ROLE,
    PAUSER_ROLE,
    WHITELIST_MANAGER_ROLE,
    TRANSFER_RESTRICTION_ROLE,
)

# The null account. Mint credits from it, burn debits to it.
NULL_ACCOUNT = ""


# ============================================================================
# TYPE ALIASES
# ============================================================================

# Account identifier. Any non-blank string.
AccountId = str

# Logical point in time used to key checkpoints.
Timepoint = datetime


def is_null_account(account: Optional[AccountId]) -> bool:
    """True for None, non-string ids and empty or blank strings."""
    return not isinstance(account, str) or not account.strip()


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    The compliance gate and the voting synchronizer accept a LedgerView so
    that they declare their read-only intent. TokenLedger implements this
    protocol; tests use FakeView.
    """

    @property
    def current_time(self) -> datetime:
        ...

    @property
    def paused(self) -> bool:
        ...

    @property
    def allow_list_mode(self) -> bool:
        ...

    def balance_of(self, account: AccountId) -> int:
        """Return the balance of an account (0 if never seen)."""
        ...

    def locked_balance_of(self, account: AccountId) -> int:
        ...

    def is_frozen(self, account: AccountId) -> bool:
        ...

    def is_whitelisted(self, account: AccountId) -> bool:
        ...


@runtime_checkable
class RoleRegistry(Protocol):
    """Maps a role identifier to the set of accounts holding it."""

    def has_role(self, role: str, account: AccountId) -> bool:
        ...


@runtime_checkable
class AllowanceProvider(Protocol):
    """
    Spending approvals between an owner and a spender.

    Signature (permit) verification and nonce tracking live behind this
    interface and are not the ledger's concern.
    """

    def allowance(self, owner: AccountId, spender: AccountId) -> int:
        ...

    def approve(self, owner: AccountId, spender: AccountId, amount: int) -> None:
        ...

    def spend_allowance(self, owner: AccountId, spender: AccountId, amount: int) -> None:
        ...


# A sink receives every record after the operation that produced it commits.
RecordSink = Callable[['LedgerRecord'], None]


# ============================================================================
# ENUMS
# ============================================================================

class RecordType(Enum):
    """Kinds of audit records emitted by the ledger."""
    TRANSFER = "transfer"
    FORCED_TRANSFER = "forced_transfer"
    LOCK = "lock"
    UNLOCK = "unlock"
    IMPLICIT_UNLOCK = "implicit_unlock"
    FROZEN = "frozen"
    WHITELISTED = "whitelisted"
    ALLOW_LIST_MODE = "allow_list_mode"
    PAUSED = "paused"
    UNPAUSED = "unpaused"
    APPROVAL = "approval"
    VOTING_POWER = "voting_power"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class AuthorizationError(LedgerError):
    """The caller lacks a role the operation requires."""
    pass


class ComplianceViolation(LedgerError):
    """A compliance control (freeze, allow-list, transfer role) blocks the movement."""
    pass


class CapacityError(LedgerError):
    """The requested amount exceeds what is available."""
    pass


class InvalidInput(LedgerError):
    """Malformed arguments: null account, negative amount, empty evidence."""
    pass


class StateError(LedgerError):
    """The operation is not allowed in the ledger's current state."""
    pass


class MissingRole(AuthorizationError):
    """Raised when an account does not hold the role required for an operation."""

    def __init__(self, role: str, account: AccountId):
        self.role = role
        self.account = account
        super().__init__(f"{account!r} is missing role {role}")


class AccountFrozen(ComplianceViolation):
    """Raised when a movement touches a frozen account."""

    def __init__(self, account: AccountId):
        self.account = account
        super().__init__(f"Account {account!r} is frozen")


class AccountNotWhitelisted(ComplianceViolation):
    """Raised in allow-list mode when a party is not whitelisted."""

    def __init__(self, account: AccountId):
        self.account = account
        super().__init__(f"Account {account!r} is not whitelisted")


class TransferRoleRequired(ComplianceViolation):
    """Raised in role-gated mode when the caller does not hold the transfer role."""

    def __init__(self, caller: AccountId):
        self.caller = caller
        super().__init__(f"{caller!r} needs {TRANSFER_ROLE} to move funds in role-gated mode")


class InsufficientBalance(CapacityError):
    """Raised when an account's balance is below the requested amount."""

    def __init__(self, account: AccountId, available: int, requested: int):
        self.account = account
        self.available = available
        self.requested = requested
        super().__init__(f"{account!r}: balance {available} < requested {requested}")


class InsufficientUnlockedBalance(CapacityError):
    """Raised when a movement would touch the locked part of a balance."""

    def __init__(self, account: AccountId, requested: int, unlocked: int):
        self.account = account
        self.requested = requested
        self.unlocked = unlocked
        super().__init__(f"{account!r}: requested {requested} > unlocked {unlocked}")


class LockExceedsUnlocked(CapacityError):
    """Raised when a lock request is zero or larger than the unlocked balance."""

    def __init__(self, account: AccountId, requested: int, unlocked: int):
        self.account = account
        self.requested = requested
        self.unlocked = unlocked
        super().__init__(f"Cannot lock {requested} for {account!r}: unlocked {unlocked}")


class UnlockExceedsLocked(CapacityError):
    """Raised when an unlock request is zero or larger than the locked amount."""

    def __init__(self, account: AccountId, requested: int, locked: int):
        self.account = account
        self.requested = requested
        self.locked = locked
        super().__init__(f"Cannot unlock {requested} for {account!r}: locked {locked}")


class InsufficientAllowance(CapacityError):
    """Raised when a spender's allowance does not cover the amount."""

    def __init__(self, spender: AccountId, allowance: int, requested: int):
        self.spender = spender
        self.allowance = allowance
        self.requested = requested
        super().__init__(f"{spender!r}: allowance {allowance} < requested {requested}")


class InvalidAccount(InvalidInput):
    """Raised when a real account is required but the null account was given."""

    def __init__(self, side: str, account: Optional[AccountId]):
        self.side = side
        self.account = account
        super().__init__(f"Invalid {side} account: {account!r}")


class InvalidAmount(InvalidInput):
    """Raised for negative or non-integer amounts."""

    def __init__(self, amount: Any):
        self.amount = amount
        super().__init__(f"Amount must be a non-negative integer, got {amount!r}")


class EmptyEvidence(InvalidInput):
    """Raised when a forced transfer carries no evidence payload."""

    def __init__(self):
        super().__init__("Forced transfer requires a non-empty evidence payload")


class FutureLookup(InvalidInput):
    """Raised when a historical query asks for a timepoint not yet in the past."""

    def __init__(self, timepoint: Timepoint, current: Timepoint):
        self.timepoint = timepoint
        self.current = current
        super().__init__(f"Timepoint {timepoint} is not before current time {current}")


class LedgerPaused(StateError):
    """Raised when a balance-mutating operation is attempted while paused."""

    def __init__(self):
        super().__init__("Ledger is paused")


class LedgerNotPaused(StateError):
    """Raised when unpause() is called on a ledger that is not paused."""

    def __init__(self):
        super().__init__("Ledger is not paused")


class DelegationDisabled(StateError):
    """Raised on any delegation attempt. Every account is its own delegate."""

    def __init__(self, account: Optional[AccountId] = None):
        self.account = account
        super().__init__("Delegation is disabled: voting power always stays with the holder")


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(slots=True)
class Account:
    """
    Mutable per-account record owned by the ledger.

    Only TokenLedger writes these fields. Callers read accounts through
    the query methods, which return plain values.

    Attributes:
        balance: Total units held (spendable plus locked).
        locked: Portion of balance excluded from ordinary transfers.
        frozen: Blocks incoming and outgoing ordinary transfers.
        whitelisted: Consulted only while allow-list mode is on.
        voting_power: Derived value, mirrored into the checkpoint history.
        known_holder: Set once the balance first becomes positive.
    """
    balance: int = 0
    locked: int = 0
    frozen: bool = False
    whitelisted: bool = False
    voting_power: int = 0
    known_holder: bool = False

    @property
    def unlocked(self) -> int:
        return self.balance - self.locked


@dataclass(frozen=True, slots=True)
class LedgerRecord:
    """
    Immutable audit record of a single state change.

    Attributes:
        record_type: What kind of change this is
        sequence: Monotonic position within the ledger's record log
        timestamp: Ledger logical time when the change was applied
        actor: Account that initiated the operation (NULL_ACCOUNT for internal)
        fields: Change-specific parameters as a frozen tuple of (key, value) pairs
    """
    record_type: RecordType
    sequence: int
    timestamp: datetime
    actor: AccountId
    fields: Tuple[Tuple[str, Any], ...] = ()

    @property
    def fields_dict(self) -> Dict[str, Any]:
        """Get fields as a dictionary for convenience."""
        return dict(self.fields)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.fields)
        return f"Record#{self.sequence}({self.record_type.value} by {self.actor!r}: {params})"
