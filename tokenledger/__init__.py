"""
tokenledger - Permissioned Token Ledger

Integer unit balances with compliance controls (role gating, allow-list
mode, freezing, partial locks, operator forced transfers) and a checkpointed
voting power that mirrors each account's compliant, spendable balance.

Usage:
    from tokenledger import (
        TokenLedger, InMemoryRoleRegistry,
        MINTER_ROLE, TRANSFER_ROLE, TRANSFER_RESTRICTION_ROLE,
    )

    roles = InMemoryRoleRegistry(admin="admin")
    roles.grant_roles("admin", "issuer", [MINTER_ROLE, TRANSFER_ROLE])
    roles.grant_role("admin", TRANSFER_RESTRICTION_ROLE, "compliance")

    ledger = TokenLedger("main", roles, verbose=False)
    ledger.mint("issuer", "alice", 300)
    ledger.lock("compliance", "alice", 200)
    ledger.unlocked_balance_of("alice")    # 100
    ledger.voting_power_of("alice")        # 100
"""

# Core types
from .core import (
    LedgerView,
    RoleRegistry,
    AllowanceProvider,
    RecordSink,
    Account,
    LedgerRecord,
    RecordType,
    AccountId,
    Timepoint,
    is_null_account,
    # Constants
    NULL_ACCOUNT,
    DEFAULT_ADMIN_ROLE,
    TRANSFER_ROLE,
    MINTER_ROLE,
    BURNER_ROLE,
    PAUSER_ROLE,
    WHITELIST_MANAGER_ROLE,
    TRANSFER_RESTRICTION_ROLE,
    ALL_ROLES,
    # Exceptions
    LedgerError,
    AuthorizationError,
    ComplianceViolation,
    CapacityError,
    InvalidInput,
    StateError,
    MissingRole,
    AccountFrozen,
    AccountNotWhitelisted,
    TransferRoleRequired,
    InsufficientBalance,
    InsufficientUnlockedBalance,
    LockExceedsUnlocked,
    UnlockExceedsLocked,
    InsufficientAllowance,
    InvalidAccount,
    InvalidAmount,
    EmptyEvidence,
    FutureLookup,
    LedgerPaused,
    LedgerNotPaused,
    DelegationDisabled,
)

# Ledger
from .ledger import TokenLedger

# Collaborators
from .roles import InMemoryRoleRegistry
from .allowances import InMemoryAllowances, UNLIMITED_ALLOWANCE

# Building blocks
from .checkpoints import Checkpoints
from .holders import HolderRegistry

# Compliance gate
from .compliance import (
    check_transfer,
    check_mint,
    check_burn,
)

# Locks
from .locks import (
    compute_lock,
    compute_unlock,
    reconcile_locked,
)

# Voting power
from .voting import (
    voting_target,
    target_for,
    voting_delta,
    reject_delegation,
)

__all__ = [
    # Core
    'LedgerView', 'RoleRegistry', 'AllowanceProvider', 'RecordSink',
    'Account', 'LedgerRecord', 'RecordType', 'AccountId', 'Timepoint',
    'is_null_account',
    'NULL_ACCOUNT', 'DEFAULT_ADMIN_ROLE', 'TRANSFER_ROLE', 'MINTER_ROLE',
    'BURNER_ROLE', 'PAUSER_ROLE', 'WHITELIST_MANAGER_ROLE',
    'TRANSFER_RESTRICTION_ROLE', 'ALL_ROLES',
    # Exceptions
    'LedgerError', 'AuthorizationError', 'ComplianceViolation', 'CapacityError',
    'InvalidInput', 'StateError', 'MissingRole', 'AccountFrozen',
    'AccountNotWhitelisted', 'TransferRoleRequired', 'InsufficientBalance',
    'InsufficientUnlockedBalance', 'LockExceedsUnlocked', 'UnlockExceedsLocked',
    'InsufficientAllowance', 'InvalidAccount', 'InvalidAmount', 'EmptyEvidence',
    'FutureLookup', 'LedgerPaused', 'LedgerNotPaused', 'DelegationDisabled',
    # Ledger
    'TokenLedger',
    # Collaborators
    'InMemoryRoleRegistry', 'InMemoryAllowances', 'UNLIMITED_ALLOWANCE',
    # Building blocks
    'Checkpoints', 'HolderRegistry',
    # Compliance
    'check_transfer', 'check_mint', 'check_burn',
    # Locks
    'compute_lock', 'compute_unlock', 'reconcile_locked',
    # Voting
    'voting_target', 'target_for', 'voting_delta', 'reject_delegation',
]

__version__ = '1.0.0'
