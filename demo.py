#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Token Ledger Step by Step

This is a pedagogical demonstration of the permissioned token ledger.
Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3:  Foundation   - Roles, minting, role-gated transfers
  4-6:  Restrictions - Locks, freezing, allow-list mode
  7-8:  Overrides    - Forced transfers and implicit unlocks
  9-10: History      - Voting checkpoints, invariants

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
import sys

from tokenledger import (
    TokenLedger, InMemoryRoleRegistry, LedgerError,
    MINTER_ROLE, BURNER_ROLE, TRANSFER_ROLE, PAUSER_ROLE,
    WHITELIST_MANAGER_ROLE, TRANSFER_RESTRICTION_ROLE,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    start_time: datetime = datetime(2025, 1, 1, 9, 0, 0)
    alice_initial: int = 300
    bob_initial: int = 100_000
    alice_lock: int = 200
    bob_lock: int = 90_000
    seizure_amount: int = 10_001


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


def attempt(description: str, action):
    """Run an action that may be rejected and report the outcome."""
    print(f">>> {description}")
    try:
        action()
    except LedgerError as e:
        print(f"    -> rejected with {type(e).__name__}")


def show(ledger: TokenLedger, *accounts: str):
    for account in accounts:
        print(
            f"    {account:<8} balance={ledger.balance_of(account):>7}  "
            f"locked={ledger.locked_balance_of(account):>7}  "
            f"voting={ledger.voting_power_of(account):>7}"
        )


# ============================================================================
# PHASE 1: FOUNDATION (Steps 1-3)
# ============================================================================

def step_01_roles() -> InMemoryRoleRegistry:
    step_header(1, "Roles",
        "Every privileged action is tied to a role held by a specific account.")

    roles = InMemoryRoleRegistry(admin="admin")
    roles.grant_roles("admin", "issuer", [MINTER_ROLE, BURNER_ROLE])
    roles.grant_role("admin", TRANSFER_ROLE, "operator")
    roles.grant_role("admin", TRANSFER_RESTRICTION_ROLE, "compliance")
    roles.grant_role("admin", WHITELIST_MANAGER_ROLE, "gatekeeper")
    roles.grant_role("admin", PAUSER_ROLE, "guardian")

    for role, holder in [
        (MINTER_ROLE, "issuer"), (TRANSFER_ROLE, "operator"),
        (TRANSFER_RESTRICTION_ROLE, "compliance"),
        (WHITELIST_MANAGER_ROLE, "gatekeeper"), (PAUSER_ROLE, "guardian"),
    ]:
        print(f"    {role:<22} -> {holder}")
    return roles


def step_02_mint(roles: InMemoryRoleRegistry) -> TokenLedger:
    step_header(2, "Minting",
        "New units enter through mint; voting power follows immediately.")

    ledger = TokenLedger("tutorial", roles, initial_time=CONFIG.start_time, verbose=True)
    ledger.mint("issuer", "alice", CONFIG.alice_initial)
    ledger.mint("issuer", "bob", CONFIG.bob_initial)

    section_header("State")
    show(ledger, "alice", "bob")
    print(f"\n    total supply = {ledger.total_supply()}")
    return ledger


def step_03_role_gated(ledger: TokenLedger, roles: InMemoryRoleRegistry) -> TokenLedger:
    step_header(3, "Role-Gated Mode",
        "By default only holders of the transfer role may move funds, even zero.")

    attempt("ledger.transfer('alice', 'carol', 0)",
            lambda: ledger.transfer("alice", "carol", 0))
    roles.grant_role("admin", TRANSFER_ROLE, "alice")
    print(">>> roles.grant_role('admin', TRANSFER_ROLE, 'alice')")
    ledger.transfer("alice", "carol", 0)
    return ledger


# ============================================================================
# PHASE 2: RESTRICTIONS (Steps 4-6)
# ============================================================================

def step_04_locks(ledger: TokenLedger) -> TokenLedger:
    step_header(4, "Partial Locks",
        "Locked units stay in the balance but cannot move and do not vote.")

    ledger.lock("compliance", "alice", CONFIG.alice_lock)
    show(ledger, "alice")
    unlocked = ledger.unlocked_balance_of("alice")
    attempt(f"ledger.transfer('alice', 'carol', {unlocked + 1})",
            lambda: ledger.transfer("alice", "carol", unlocked + 1))
    ledger.transfer("alice", "carol", unlocked)
    show(ledger, "alice", "carol")
    return ledger


def step_05_freeze(ledger: TokenLedger) -> TokenLedger:
    step_header(5, "Freezing",
        "A frozen account keeps its balance but loses all voting power.")

    ledger.set_frozen("compliance", "carol", True)
    show(ledger, "carol")
    ledger.set_frozen("compliance", "carol", False)
    show(ledger, "carol")
    return ledger


def step_06_allow_list(ledger: TokenLedger) -> TokenLedger:
    step_header(6, "Allow-List Mode",
        "Switching modes resynchronizes every holder's voting power at once.")

    ledger.set_whitelisted("gatekeeper", "carol", True)
    ledger.set_allow_list_mode("admin", True)
    show(ledger, "alice", "bob", "carol")
    ledger.set_allow_list_mode("admin", False)
    return ledger


# ============================================================================
# PHASE 3: OVERRIDES (Steps 7-8)
# ============================================================================

def step_07_forced_transfer(ledger: TokenLedger) -> TokenLedger:
    step_header(7, "Forced Transfer",
        "An operator may move funds past freezes and locks, with evidence.")

    ledger.advance_time(CONFIG.start_time + timedelta(days=1))
    ledger.lock("compliance", "bob", CONFIG.bob_lock)
    show(ledger, "bob")
    attempt("force_transfer without evidence",
            lambda: ledger.force_transfer("operator", "bob", "escrow", 1, b""))
    ledger.force_transfer("operator", "bob", "escrow", CONFIG.seizure_amount, b"warrant #42")
    return ledger


def step_08_implicit_unlock(ledger: TokenLedger) -> TokenLedger:
    step_header(8, "Implicit Unlock",
        "After a seizure the lock is clamped so it never exceeds the balance.")

    show(ledger, "bob", "escrow")
    assert ledger.locked_balance_of("bob") <= ledger.balance_of("bob")
    return ledger


# ============================================================================
# PHASE 4: HISTORY (Steps 9-10)
# ============================================================================

def step_09_checkpoints(ledger: TokenLedger) -> TokenLedger:
    step_header(9, "Voting Checkpoints",
        "Past voting power and supply are queryable once time has moved on.")

    ledger.advance_time(CONFIG.start_time + timedelta(days=2))
    for day in range(2):
        t = CONFIG.start_time + timedelta(days=day)
        print(f"    {t:%Y-%m-%d}  bob={ledger.voting_power_at('bob', t):>7}  "
              f"supply={ledger.total_supply_at(t)}")
    attempt("ledger.voting_power_at('bob', ledger.current_time)",
            lambda: ledger.voting_power_at("bob", ledger.current_time))
    return ledger


def step_10_invariants(ledger: TokenLedger) -> TokenLedger:
    step_header(10, "Invariants",
        "Supply, lock bounds and voting mirror hold after every operation.")

    result = ledger.verify_invariants()
    print(f"    valid={result['valid']}  total_supply={result['total_supply']}")
    print(f"    records logged: {len(ledger.record_log)}")
    print(f"    holders: {ledger.get_holders()}")
    return ledger


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       TOKEN LEDGER - INTERACTIVE TUTORIAL")
    print("=" * 70)
    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    wait_for_enter()

    roles = step_01_roles()
    wait_for_enter()
    ledger = step_02_mint(roles)
    wait_for_enter()
    ledger = step_03_role_gated(ledger, roles)
    wait_for_enter()
    ledger = step_04_locks(ledger)
    wait_for_enter()
    ledger = step_05_freeze(ledger)
    wait_for_enter()
    ledger = step_06_allow_list(ledger)
    wait_for_enter()
    ledger = step_07_forced_transfer(ledger)
    wait_for_enter()
    ledger = step_08_implicit_unlock(ledger)
    wait_for_enter()
    ledger = step_09_checkpoints(ledger)
    wait_for_enter()
    step_10_invariants(ledger)

    print("""
    Next steps:
      - See tokenledger/compliance.py for the transfer gate
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
