"""
test_compliance_gate.py - Unit tests for compliance.py

The gate functions are pure: they read a FakeView and return the first
failing check (or None). Tests cover each check in isolation and the
fixed ordering when several checks would fail at once.
"""

import pytest

from tokenledger import (
    LedgerView, TRANSFER_ROLE,
    check_transfer, check_mint, check_burn,
    LedgerPaused, AccountFrozen, AccountNotWhitelisted, TransferRoleRequired,
    InsufficientBalance, InsufficientUnlockedBalance,
)
from tests.fake_view import FakeView, FakeRoles


ROLES = FakeRoles({TRANSFER_ROLE: {"operator", "alice"}})
NO_ROLES = FakeRoles()


def test_fake_view_satisfies_protocol():
    assert isinstance(FakeView(), LedgerView)


class TestIndividualChecks:

    def test_allowed_transfer_returns_none(self):
        view = FakeView(balances={"alice": 300})
        assert check_transfer(view, ROLES, "alice", "alice", "bob", 300) is None

    def test_paused(self):
        view = FakeView(balances={"alice": 300}, paused=True)
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 1)
        assert isinstance(failure, LedgerPaused)

    def test_frozen_source(self):
        view = FakeView(balances={"alice": 300}, frozen={"alice"})
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 1)
        assert isinstance(failure, AccountFrozen)
        assert failure.account == "alice"

    def test_frozen_dest(self):
        view = FakeView(balances={"alice": 300}, frozen={"bob"})
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 1)
        assert isinstance(failure, AccountFrozen)
        assert failure.account == "bob"

    def test_source_reported_before_dest_when_both_frozen(self):
        view = FakeView(balances={"alice": 300}, frozen={"alice", "bob"})
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 1)
        assert failure.account == "alice"

    def test_lock_reports_unlocked_amount(self):
        view = FakeView(balances={"alice": 300}, locked={"alice": 200})
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 101)
        assert isinstance(failure, InsufficientUnlockedBalance)
        assert (failure.account, failure.requested, failure.unlocked) == ("alice", 101, 100)

    def test_role_gated_mode_requires_transfer_role(self):
        view = FakeView(balances={"bob": 300})
        failure = check_transfer(view, ROLES, "bob", "bob", "carol", 0)
        assert isinstance(failure, TransferRoleRequired)
        assert failure.caller == "bob"

    def test_role_gated_mode_ignores_whitelist(self):
        view = FakeView(balances={"alice": 300})
        assert check_transfer(view, ROLES, "alice", "alice", "bob", 10) is None

    def test_allow_list_mode_names_source_first(self):
        view = FakeView(balances={"bob": 300}, allow_list_mode=True)
        failure = check_transfer(view, NO_ROLES, "bob", "bob", "carol", 10)
        assert isinstance(failure, AccountNotWhitelisted)
        assert failure.account == "bob"

    def test_allow_list_mode_names_dest(self):
        view = FakeView(balances={"bob": 300}, allow_list_mode=True, whitelisted={"bob"})
        failure = check_transfer(view, NO_ROLES, "bob", "bob", "carol", 10)
        assert failure.account == "carol"

    def test_allow_list_mode_transfer_role_bypasses_whitelist(self):
        view = FakeView(balances={"bob": 300}, allow_list_mode=True)
        assert check_transfer(view, ROLES, "operator", "bob", "carol", 10) is None

    def test_allow_list_mode_both_whitelisted_no_role_needed(self):
        view = FakeView(balances={"bob": 300}, allow_list_mode=True, whitelisted={"bob", "carol"})
        assert check_transfer(view, NO_ROLES, "bob", "bob", "carol", 10) is None

    def test_insufficient_balance(self):
        view = FakeView(balances={"alice": 50}, locked={"alice": 0})
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 80, bypass=True)
        assert isinstance(failure, InsufficientBalance)
        assert (failure.account, failure.available, failure.requested) == ("alice", 50, 80)


class TestCheckOrder:
    """When several checks fail, the earliest in the fixed order wins."""

    def test_pause_beats_everything(self):
        view = FakeView(
            balances={"bob": 10}, locked={"bob": 10},
            frozen={"bob"}, paused=True, allow_list_mode=True,
        )
        failure = check_transfer(view, NO_ROLES, "bob", "bob", "carol", 100)
        assert isinstance(failure, LedgerPaused)

    def test_freeze_beats_lock(self):
        view = FakeView(balances={"bob": 10}, locked={"bob": 10}, frozen={"carol"})
        failure = check_transfer(view, NO_ROLES, "bob", "bob", "carol", 5)
        assert isinstance(failure, AccountFrozen)

    def test_lock_beats_mode(self):
        view = FakeView(balances={"bob": 10}, locked={"bob": 10})
        failure = check_transfer(view, NO_ROLES, "bob", "bob", "carol", 5)
        assert isinstance(failure, InsufficientUnlockedBalance)

    def test_mode_beats_balance(self):
        view = FakeView(balances={"bob": 10})
        failure = check_transfer(view, NO_ROLES, "bob", "bob", "carol", 5)
        assert isinstance(failure, TransferRoleRequired)

    def test_lock_check_fires_before_balance_check(self):
        # nothing locked, so unlocked == balance and the lock check reports first
        view = FakeView(balances={"alice": 10})
        failure = check_transfer(view, ROLES, "alice", "alice", "bob", 50)
        assert isinstance(failure, InsufficientUnlockedBalance)


class TestBypass:

    def test_bypass_skips_freeze_lock_and_mode(self):
        view = FakeView(
            balances={"bob": 100}, locked={"bob": 90},
            frozen={"bob", "carol"}, allow_list_mode=True,
        )
        assert check_transfer(view, NO_ROLES, "operator", "bob", "carol", 100, bypass=True) is None

    def test_bypass_still_respects_pause(self):
        view = FakeView(balances={"bob": 100}, paused=True)
        failure = check_transfer(view, ROLES, "operator", "bob", "carol", 1, bypass=True)
        assert isinstance(failure, LedgerPaused)

    def test_bypass_still_checks_balance(self):
        view = FakeView(balances={"bob": 100})
        failure = check_transfer(view, ROLES, "operator", "bob", "carol", 101, bypass=True)
        assert isinstance(failure, InsufficientBalance)


class TestMintAndBurn:

    def test_mint_checks_dest_freeze(self):
        view = FakeView(frozen={"alice"})
        failure = check_mint(view, NO_ROLES, "issuer", "alice")
        assert isinstance(failure, AccountFrozen)

    def test_mint_needs_no_transfer_role_in_role_gated_mode(self):
        assert check_mint(FakeView(), NO_ROLES, "issuer", "alice") is None

    def test_mint_checks_whitelist_in_allow_list_mode(self):
        view = FakeView(allow_list_mode=True)
        failure = check_mint(view, NO_ROLES, "issuer", "alice")
        assert isinstance(failure, AccountNotWhitelisted)

    def test_mint_respects_pause(self):
        failure = check_mint(FakeView(paused=True), NO_ROLES, "issuer", "alice")
        assert isinstance(failure, LedgerPaused)

    def test_burn_checks_lock_then_balance(self):
        view = FakeView(balances={"alice": 100}, locked={"alice": 60})
        failure = check_burn(view, NO_ROLES, "alice", "alice", 50)
        assert isinstance(failure, InsufficientUnlockedBalance)
        assert failure.unlocked == 40
        assert check_burn(view, NO_ROLES, "alice", "alice", 40) is None

    def test_burn_checks_source_freeze(self):
        view = FakeView(balances={"alice": 100}, frozen={"alice"})
        assert isinstance(check_burn(view, NO_ROLES, "alice", "alice", 1), AccountFrozen)

    def test_burn_checks_whitelist_in_allow_list_mode(self):
        view = FakeView(balances={"alice": 100}, allow_list_mode=True)
        failure = check_burn(view, NO_ROLES, "issuer", "alice", 1)
        assert isinstance(failure, AccountNotWhitelisted)
        assert check_burn(view, ROLES, "operator", "alice", 1) is None
