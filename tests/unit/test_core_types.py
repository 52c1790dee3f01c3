"""
test_core_types.py - Unit tests for core.py

Tests:
- Null account detection
- Account record and unlocked balance
- LedgerRecord immutability and representation
- Exception hierarchy and carried parameters
- Protocol conformance
"""

import pytest
from datetime import datetime

from tokenledger import (
    Account, LedgerRecord, RecordType, LedgerView, RoleRegistry, AllowanceProvider,
    TokenLedger, InMemoryRoleRegistry, InMemoryAllowances,
    is_null_account, NULL_ACCOUNT, ALL_ROLES, DEFAULT_ADMIN_ROLE, TRANSFER_ROLE,
    LedgerError, AuthorizationError, ComplianceViolation, CapacityError,
    InvalidInput, StateError,
    MissingRole, AccountFrozen, AccountNotWhitelisted, TransferRoleRequired,
    InsufficientBalance, InsufficientUnlockedBalance, LockExceedsUnlocked,
    UnlockExceedsLocked, InsufficientAllowance, InvalidAccount, InvalidAmount,
    EmptyEvidence, FutureLookup, LedgerPaused, LedgerNotPaused, DelegationDisabled,
)


class TestNullAccount:

    @pytest.mark.parametrize("account", [None, "", "   ", NULL_ACCOUNT, 0, b"alice"])
    def test_null_forms(self, account):
        assert is_null_account(account)

    @pytest.mark.parametrize("account", ["alice", " bob ", "0x0"])
    def test_real_accounts(self, account):
        assert not is_null_account(account)


class TestAccount:

    def test_defaults(self):
        acct = Account()
        assert acct.balance == 0
        assert acct.locked == 0
        assert not acct.frozen
        assert not acct.whitelisted
        assert acct.voting_power == 0
        assert not acct.known_holder

    def test_unlocked(self):
        assert Account(balance=300, locked=200).unlocked == 100


class TestLedgerRecord:

    def _record(self):
        return LedgerRecord(
            record_type=RecordType.LOCK,
            sequence=3,
            timestamp=datetime(2025, 1, 1),
            actor="compliance",
            fields=(("account", "alice"), ("amount", 200), ("locked", 200)),
        )

    def test_fields_dict(self):
        assert self._record().fields_dict == {"account": "alice", "amount": 200, "locked": 200}

    def test_record_is_immutable(self):
        record = self._record()
        with pytest.raises(AttributeError):
            record.sequence = 4

    def test_repr(self):
        text = repr(self._record())
        assert text.startswith("Record#3(lock by 'compliance'")
        assert "amount=200" in text


class TestExceptionHierarchy:
    """Every failure is a LedgerError, grouped by category."""

    @pytest.mark.parametrize("error, category", [
        (MissingRole(TRANSFER_ROLE, "bob"), AuthorizationError),
        (AccountFrozen("bob"), ComplianceViolation),
        (AccountNotWhitelisted("bob"), ComplianceViolation),
        (TransferRoleRequired("bob"), ComplianceViolation),
        (InsufficientBalance("bob", 1, 2), CapacityError),
        (InsufficientUnlockedBalance("bob", 2, 1), CapacityError),
        (LockExceedsUnlocked("bob", 2, 1), CapacityError),
        (UnlockExceedsLocked("bob", 2, 1), CapacityError),
        (InsufficientAllowance("bob", 1, 2), CapacityError),
        (InvalidAccount("sender", None), InvalidInput),
        (InvalidAmount(-1), InvalidInput),
        (EmptyEvidence(), InvalidInput),
        (FutureLookup(datetime(2025, 1, 2), datetime(2025, 1, 1)), InvalidInput),
        (LedgerPaused(), StateError),
        (LedgerNotPaused(), StateError),
        (DelegationDisabled("bob"), StateError),
    ])
    def test_category(self, error, category):
        assert isinstance(error, category)
        assert isinstance(error, LedgerError)

    def test_parameters_are_carried(self):
        error = InsufficientUnlockedBalance("alice", 101, 100)
        assert (error.account, error.requested, error.unlocked) == ("alice", 101, 100)
        assert "101" in str(error) and "100" in str(error)

    def test_missing_role_message(self):
        error = MissingRole(DEFAULT_ADMIN_ROLE, "mallory")
        assert error.role == DEFAULT_ADMIN_ROLE
        assert "mallory" in str(error)


class TestProtocols:

    def test_ledger_is_a_view(self):
        ledger = TokenLedger("t", InMemoryRoleRegistry(), verbose=False)
        assert isinstance(ledger, LedgerView)

    def test_collaborators_satisfy_protocols(self):
        assert isinstance(InMemoryRoleRegistry(), RoleRegistry)
        assert isinstance(InMemoryAllowances(), AllowanceProvider)

    def test_role_identifiers_are_distinct(self):
        assert len(set(ALL_ROLES)) == len(ALL_ROLES) == 7
