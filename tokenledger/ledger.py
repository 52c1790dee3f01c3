"""
ledger.py - Stateful Permissioned Token Ledger

The TokenLedger class is the central state manager for the token ledger.
It is the only module that mutates state, ensuring controlled and auditable
changes.

Key responsibilities:
    - Implements LedgerView protocol for the pure compliance and voting rules
    - Applies balance movements atomically: every check runs before any write
    - Maintains balances, locks, freeze/whitelist flags and the holder registry
    - Keeps checkpointed voting power equal to each account's compliant,
      spendable balance after every operation
    - Always records: every state change lands in the record log
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .allowances import InMemoryAllowances
from .checkpoints import Checkpoints
from .compliance import check_not_paused, check_transfer, check_mint, check_burn
from .core import (
    # Types
    Account, AccountId, AllowanceProvider, LedgerRecord, RecordSink, RecordType,
    RoleRegistry, Timepoint,
    # Constants
    NULL_ACCOUNT, DEFAULT_ADMIN_ROLE, TRANSFER_ROLE, MINTER_ROLE, BURNER_ROLE,
    PAUSER_ROLE, WHITELIST_MANAGER_ROLE, TRANSFER_RESTRICTION_ROLE,
    # Exceptions
    LedgerError, MissingRole, InvalidAccount, InvalidAmount, EmptyEvidence,
    InsufficientAllowance, FutureLookup, LedgerPaused, LedgerNotPaused,
    # Helpers
    is_null_account,
)
from .holders import HolderRegistry
from .locks import compute_lock, compute_unlock, reconcile_locked
from .voting import target_for, voting_delta, reject_delegation


class TokenLedger:
    """
    Permissioned token ledger with compliance gating and voting checkpoints.

    Implements the LedgerView protocol, allowing the ledger to be passed to
    the pure functions in compliance.py and voting.py.

    Design Principles:
        - Always validates: every movement passes the compliance gate (or the
          explicit forced-transfer bypass) before any state is written.
        - Always records: every state change is appended to record_log and
          handed to the optional sink once the operation commits.

    Thread Safety:
        Not thread-safe. Operations run one at a time, to completion.

    Example:
        roles = InMemoryRoleRegistry(admin="admin")
        roles.grant_roles("admin", "treasury", [MINTER_ROLE, TRANSFER_ROLE])
        ledger = TokenLedger("main", roles)
        ledger.mint("treasury", "alice", 1000)
        ledger.transfer("treasury", "bob", 0)
    """

    def __init__(
        self,
        name: str,
        roles: RoleRegistry,
        allowances: Optional[AllowanceProvider] = None,
        initial_time: Optional[datetime] = None,
        verbose: bool = True,
        sink: Optional[RecordSink] = None,
        allow_list_mode: bool = False,
    ):
        """
        Create a ledger.

        Args:
            name: Ledger identifier
            roles: Role registry answering has_role(role, account)
            allowances: Allowance provider (default: fresh InMemoryAllowances)
            initial_time: Starting logical time (default: 1970-01-01)
            verbose: Print operation results and rejections (default: True)
            sink: Optional callable receiving each committed LedgerRecord
            allow_list_mode: Start in allow-list mode instead of role-gated mode
        """
        self.name = name
        self.roles = roles
        self.allowances = allowances if allowances is not None else InMemoryAllowances()
        self.accounts: Dict[AccountId, Account] = {}
        self.holders = HolderRegistry()
        self.record_log: List[LedgerRecord] = []
        self.verbose = verbose
        self.sink = sink
        # Committed records the sink has not accepted yet.
        self.undelivered: List[LedgerRecord] = []
        self._current_time: datetime = initial_time or datetime(1970, 1, 1)
        self._total_supply: int = 0
        self._supply_history = Checkpoints()
        self._voting_history: Dict[AccountId, Checkpoints] = {}
        self._paused = False
        self._allow_list_mode = allow_list_mode
        # Set only for the duration of a forced transfer.
        self._compliance_bypassed = False

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    @property
    def current_time(self) -> datetime:
        """Current logical time of the ledger."""
        return self._current_time

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def allow_list_mode(self) -> bool:
        return self._allow_list_mode

    def _get(self, account: AccountId) -> Account:
        """Account record, or a blank one for accounts never seen. Never stores."""
        return self.accounts.get(account) or Account()

    def balance_of(self, account: AccountId) -> int:
        return self._get(account).balance

    def locked_balance_of(self, account: AccountId) -> int:
        return self._get(account).locked

    def unlocked_balance_of(self, account: AccountId) -> int:
        """Balance available to ordinary transfers."""
        return max(self._get(account).unlocked, 0)

    def is_frozen(self, account: AccountId) -> bool:
        return self._get(account).frozen

    def is_whitelisted(self, account: AccountId) -> bool:
        return self._get(account).whitelisted

    # ========================================================================
    # SUPPLY AND VOTING QUERIES
    # ========================================================================

    def total_supply(self) -> int:
        return self._total_supply

    def voting_power_of(self, account: AccountId) -> int:
        """Current checkpointed voting power."""
        history = self._voting_history.get(account)
        return history.latest() if history else 0

    def _require_past(self, timepoint: Timepoint) -> None:
        # Checkpoints at the current time can still change.
        if timepoint >= self._current_time:
            raise FutureLookup(timepoint, self._current_time)

    def voting_power_at(self, account: AccountId, timepoint: Timepoint) -> int:
        """
        Voting power as of a past timepoint.

        Raises:
            FutureLookup: If timepoint is not strictly before current_time
        """
        self._require_past(timepoint)
        history = self._voting_history.get(account)
        return history.upper_lookup(timepoint) if history else 0

    def total_supply_at(self, timepoint: Timepoint) -> int:
        """
        Total supply as of a past timepoint.

        Raises:
            FutureLookup: If timepoint is not strictly before current_time
        """
        self._require_past(timepoint)
        return self._supply_history.upper_lookup(timepoint)

    def num_checkpoints(self, account: AccountId) -> int:
        history = self._voting_history.get(account)
        return len(history) if history else 0

    def checkpoint_at(self, account: AccountId, position: int) -> Tuple[datetime, int]:
        """Return the (timepoint, voting power) checkpoint at a position."""
        history = self._voting_history.get(account)
        if history is None:
            raise IndexError(f"{account!r} has no voting checkpoints")
        return history.at(position)

    def delegates(self, account: AccountId) -> AccountId:
        """Every account is its own delegate."""
        return account

    def get_holders(self) -> List[AccountId]:
        """Accounts that ever held a positive balance, in first-credit order."""
        return self.holders.as_list()

    def list_accounts(self) -> List[AccountId]:
        return sorted(self.accounts)

    def verify_invariants(self) -> Dict[str, Any]:
        """
        Verify the ledger's standing invariants.

        Checks:
        1. Supply conservation: total supply equals the sum of all balances
        2. Lock bound: 0 <= locked <= balance for every account
        3. Voting mirror: voting power equals its compliance target
        4. Holder registry: every positively funded account is registered

        Returns:
            Dict with keys:
            - 'valid': bool - True if every invariant holds
            - 'total_supply': int - Tracked total supply
            - 'discrepancies': List[Dict] - One entry per violation

        Example:
            result = ledger.verify_invariants()
            assert result['valid'], f"Invariant violated: {result['discrepancies']}"
        """
        discrepancies = []

        balance_sum = sum(self.accounts[a].balance for a in sorted(self.accounts))
        if balance_sum != self._total_supply:
            discrepancies.append({
                'invariant': 'supply',
                'expected': self._total_supply,
                'actual': balance_sum,
            })
        if self._supply_history.latest() != self._total_supply:
            discrepancies.append({
                'invariant': 'supply_checkpoint',
                'expected': self._total_supply,
                'actual': self._supply_history.latest(),
            })

        for account in sorted(self.accounts):
            acct = self.accounts[account]
            if not 0 <= acct.locked <= acct.balance:
                discrepancies.append({
                    'invariant': 'lock',
                    'account': account,
                    'locked': acct.locked,
                    'balance': acct.balance,
                })
            target = target_for(self, account)
            committed = self.voting_power_of(account)
            if committed != target or acct.voting_power != target:
                discrepancies.append({
                    'invariant': 'voting',
                    'account': account,
                    'expected': target,
                    'actual': committed,
                })
            if acct.balance > 0 and account not in self.holders:
                discrepancies.append({
                    'invariant': 'holder',
                    'account': account,
                })

        return {
            'valid': len(discrepancies) == 0,
            'total_supply': self._total_supply,
            'discrepancies': discrepancies,
        }

    # ========================================================================
    # TIME MANAGEMENT
    # ========================================================================

    def advance_time(self, new_time: datetime) -> None:
        """
        Advance the ledger's logical clock to a new time.

        Time can only move forward, never backward.

        Raises:
            ValueError: If new_time is before the current time
        """
        if new_time < self._current_time:
            raise ValueError(
                f"Cannot move time backwards: {new_time} < {self._current_time}"
            )
        self._current_time = new_time

    # ========================================================================
    # VALIDATION HELPERS
    # ========================================================================

    def _reject(self, failure: LedgerError) -> None:
        if self.verbose:
            print(f"✗ REJECTED: {failure}")
        raise failure

    def _raise_if(self, failure: Optional[LedgerError]) -> None:
        if failure is not None:
            self._reject(failure)

    def _apply_rule(self, rule: Callable[..., int], *args: Any) -> int:
        """Run a raising compute_* rule, reporting its failure like any other rejection."""
        try:
            return rule(*args)
        except LedgerError as failure:
            self._reject(failure)

    def _require_role(self, role: str, caller: AccountId) -> None:
        if not self.roles.has_role(role, caller):
            self._reject(MissingRole(role, caller))

    def _require_account(self, side: str, account: Optional[AccountId]) -> None:
        if is_null_account(account):
            self._reject(InvalidAccount(side, account))

    def _require_amount(self, amount: Any) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            self._reject(InvalidAmount(amount))

    def _require_allowance(self, owner: AccountId, spender: AccountId, amount: int) -> None:
        current = self.allowances.allowance(owner, spender)
        if current < amount:
            self._reject(InsufficientAllowance(spender, current, amount))

    # ========================================================================
    # RECORDING
    # ========================================================================

    def _record(self, record_type: RecordType, actor: AccountId, **fields: Any) -> None:
        record = LedgerRecord(
            record_type=record_type,
            sequence=len(self.record_log),
            timestamp=self._current_time,
            actor=actor,
            fields=tuple(fields.items()),
        )
        self.record_log.append(record)
        if self.verbose:
            print(f"✓ {record!r}")

    @contextmanager
    def _operation(self) -> Iterator[None]:
        """Hand the records of a committed operation to the sink."""
        start = len(self.record_log)
        yield
        if self.sink is not None:
            self.undelivered.extend(self.record_log[start:])
            self.flush_sink()

    def flush_sink(self) -> int:
        """
        Deliver queued records to the sink, oldest first.

        The operation that produced a record has already committed, so a
        failing sink never fails it. Delivery stops at the first error and
        the remaining records stay queued in `undelivered` for the next
        operation or an explicit flush_sink() call.

        Returns:
            Number of records delivered by this call
        """
        delivered = 0
        while self.sink is not None and self.undelivered:
            record = self.undelivered[0]
            try:
                self.sink(record)
            except Exception as e:
                if self.verbose:
                    print(f"✗ SINK FAILED at Record#{record.sequence}: {e!r} "
                          f"({len(self.undelivered)} queued)")
                break
            self.undelivered.pop(0)
            delivered += 1
        return delivered

    @contextmanager
    def _compliance_bypass(self) -> Iterator[None]:
        """Scope the forced-transfer bypass to a single call, on every exit path."""
        self._compliance_bypassed = True
        try:
            yield
        finally:
            self._compliance_bypassed = False

    # ========================================================================
    # STATE PRIMITIVES (Mutating)
    # ========================================================================

    def _account_for_update(self, account: AccountId) -> Account:
        acct = self.accounts.get(account)
        if acct is None:
            acct = Account()
            self.accounts[account] = acct
        return acct

    def _restore_voting_power(self, account: AccountId, required: int) -> None:
        """
        Lift the working voting power back to the full balance when it is
        below what is about to leave the account.

        Freeze, whitelist and lock state can hold voting power below the
        balance; the outgoing units must be covered before they move.
        """
        acct = self._account_for_update(account)
        if acct.voting_power < required:
            acct.voting_power = acct.balance

    def _update(self, actor: AccountId, source: AccountId, dest: AccountId, amount: int) -> None:
        """
        Move amount from source to dest. The null account on either side
        means mint (source) or burn (dest).

        Voting units follow the balance. Callers reconcile voting power
        afterwards with _sync_voting_power.
        """
        if is_null_account(source):
            self._total_supply += amount
        else:
            self._restore_voting_power(source, amount)
            src = self._account_for_update(source)
            src.balance -= amount
            src.voting_power -= amount

        if is_null_account(dest):
            self._total_supply -= amount
        else:
            dst = self._account_for_update(dest)
            dst.balance += amount
            dst.voting_power += amount
            if dst.balance > 0 and not dst.known_holder:
                dst.known_holder = True
                self.holders.add(dest)

        if is_null_account(source) or is_null_account(dest):
            self._supply_history.push(self._current_time, self._total_supply)

        self._record(
            RecordType.TRANSFER, actor,
            source=source or NULL_ACCOUNT, dest=dest or NULL_ACCOUNT, amount=amount,
        )

    def _sync_voting_power(self, actor: AccountId, account: AccountId) -> None:
        """
        Reconcile an account's voting power to its target with one
        checkpointed delta. No-op when already equal.
        """
        if is_null_account(account):
            return
        acct = self._account_for_update(account)
        target = target_for(self, account)
        acct.voting_power = target
        history = self._voting_history.get(account)
        committed = history.latest() if history else 0
        delta = voting_delta(committed, target)
        if delta == 0:
            return
        if history is None:
            history = self._voting_history[account] = Checkpoints()
        history.push(self._current_time, target)
        self._record(
            RecordType.VOTING_POWER, actor,
            account=account, previous=committed, current=target, delta=delta,
        )

    def _resync_holders(self, actor: AccountId) -> None:
        for account in self.holders:
            self._sync_voting_power(actor, account)

    # ========================================================================
    # BALANCE MOVEMENTS (Mutating)
    # ========================================================================

    def _transfer(self, caller: AccountId, source: AccountId, dest: AccountId, amount: int) -> None:
        self._require_amount(amount)
        self._require_account("sender", source)
        self._require_account("receiver", dest)
        self._raise_if(check_transfer(self, self.roles, caller, source, dest, amount))
        with self._operation():
            self._update(caller, source, dest, amount)
            self._sync_voting_power(caller, source)
            self._sync_voting_power(caller, dest)

    def transfer(self, caller: AccountId, dest: AccountId, amount: int) -> None:
        """
        Move amount of the caller's own units to dest.

        Raises:
            LedgerError subclass for the first failing compliance check
        """
        self._transfer(caller, caller, dest, amount)

    def transfer_from(self, spender: AccountId, source: AccountId, dest: AccountId, amount: int) -> None:
        """
        Move amount from source to dest on the spender's allowance.

        The spender is the caller for role and allow-list purposes.
        """
        self._require_amount(amount)
        self._require_account("sender", source)
        self._require_account("receiver", dest)
        self._raise_if(check_not_paused(self))
        self._require_allowance(source, spender, amount)
        self._raise_if(check_transfer(self, self.roles, spender, source, dest, amount))
        with self._operation():
            self.allowances.spend_allowance(source, spender, amount)
            self._update(spender, source, dest, amount)
            self._sync_voting_power(spender, source)
            self._sync_voting_power(spender, dest)

    def mint(self, caller: AccountId, dest: AccountId, amount: int) -> None:
        """Create amount new units in dest. Requires the minter role."""
        self._require_role(MINTER_ROLE, caller)
        self._require_amount(amount)
        self._require_account("receiver", dest)
        self._raise_if(check_mint(self, self.roles, caller, dest))
        with self._operation():
            self._update(caller, NULL_ACCOUNT, dest, amount)
            self._sync_voting_power(caller, dest)

    def burn(self, caller: AccountId, amount: int) -> None:
        """Destroy amount of the caller's own units. Requires the burner role."""
        self._require_role(BURNER_ROLE, caller)
        self._require_amount(amount)
        self._require_account("sender", caller)
        self._burn(caller, caller, amount)

    def burn_from(self, caller: AccountId, source: AccountId, amount: int) -> None:
        """Destroy amount of source's units on the caller's allowance."""
        self._require_role(BURNER_ROLE, caller)
        self._require_amount(amount)
        self._require_account("sender", source)
        self._raise_if(check_not_paused(self))
        self._require_allowance(source, caller, amount)
        self._burn(caller, source, amount, spend_from=source)

    def _burn(
        self,
        caller: AccountId,
        source: AccountId,
        amount: int,
        spend_from: Optional[AccountId] = None,
    ) -> None:
        self._raise_if(check_burn(self, self.roles, caller, source, amount))
        with self._operation():
            if spend_from is not None:
                self.allowances.spend_allowance(spend_from, caller, amount)
            self._update(caller, source, NULL_ACCOUNT, amount)
            self._sync_voting_power(caller, source)

    def force_transfer(
        self,
        caller: AccountId,
        source: AccountId,
        dest: AccountId,
        amount: int,
        evidence: bytes,
    ) -> None:
        """
        Operator transfer for compliance events (court orders, recoveries).

        Bypasses the freeze, lock and allow-list checks. Still requires the
        transfer role, respects pause, and cannot exceed the source balance.
        Locked units taken by the transfer are released implicitly so that
        locked never exceeds balance once the call returns.

        Args:
            caller: Operator holding the transfer role
            source: Debited account
            dest: Credited account
            amount: Units to move
            evidence: Non-empty opaque payload justifying the transfer

        Raises:
            MissingRole, InvalidAccount, EmptyEvidence, LedgerPaused,
            InsufficientBalance
        """
        self._require_role(TRANSFER_ROLE, caller)
        self._require_amount(amount)
        self._require_account("sender", source)
        self._require_account("receiver", dest)
        if not evidence:
            self._reject(EmptyEvidence())

        with self._compliance_bypass():
            self._raise_if(check_transfer(
                self, self.roles, caller, source, dest, amount,
                bypass=self._compliance_bypassed,
            ))
            with self._operation():
                src = self._account_for_update(source)
                self._restore_voting_power(source, src.balance)
                self._update(caller, source, dest, amount)

                new_locked, released = reconcile_locked(src.balance, src.locked)
                if released:
                    src.locked = new_locked
                    self._record(
                        RecordType.IMPLICIT_UNLOCK, caller,
                        account=source, amount=released, locked=new_locked,
                    )

                self._sync_voting_power(caller, source)
                self._sync_voting_power(caller, dest)
                self._record(
                    RecordType.FORCED_TRANSFER, caller,
                    operator=caller, source=source, dest=dest, amount=amount,
                    evidence=evidence,
                )

    # ========================================================================
    # LOCKS (Mutating)
    # ========================================================================

    def lock(self, caller: AccountId, account: AccountId, amount: int) -> None:
        """
        Exclude amount more of account's balance from ordinary transfers.

        Raises:
            MissingRole: caller lacks the transfer-restriction role
            LockExceedsUnlocked: amount is zero or above the unlocked balance
        """
        self._require_role(TRANSFER_RESTRICTION_ROLE, caller)
        self._require_account("account", account)
        self._require_amount(amount)
        acct = self._get(account)
        new_locked = self._apply_rule(compute_lock, account, acct.balance, acct.locked, amount)
        with self._operation():
            self._account_for_update(account).locked = new_locked
            self._record(RecordType.LOCK, caller, account=account, amount=amount, locked=new_locked)
            self._sync_voting_power(caller, account)

    def unlock(self, caller: AccountId, account: AccountId, amount: int) -> None:
        """
        Return amount locked units to the transferable balance.

        Raises:
            MissingRole: caller lacks the transfer-restriction role
            UnlockExceedsLocked: amount is zero or above the locked amount
        """
        self._require_role(TRANSFER_RESTRICTION_ROLE, caller)
        self._require_account("account", account)
        self._require_amount(amount)
        new_locked = self._apply_rule(compute_unlock, account, self._get(account).locked, amount)
        with self._operation():
            self._account_for_update(account).locked = new_locked
            self._record(RecordType.UNLOCK, caller, account=account, amount=amount, locked=new_locked)
            self._sync_voting_power(caller, account)

    # ========================================================================
    # COMPLIANCE TOGGLES (Mutating)
    # ========================================================================

    def set_frozen(self, caller: AccountId, account: AccountId, frozen: bool) -> None:
        """Freeze or unfreeze an account. Repeating the current value is a no-op."""
        self._require_role(TRANSFER_RESTRICTION_ROLE, caller)
        self._require_account("account", account)
        if self.is_frozen(account) == bool(frozen):
            return
        with self._operation():
            self._account_for_update(account).frozen = bool(frozen)
            self._record(RecordType.FROZEN, caller, account=account, frozen=bool(frozen))
            self._sync_voting_power(caller, account)

    def set_whitelisted(self, caller: AccountId, account: AccountId, whitelisted: bool) -> None:
        """Add or remove an account from the allow-list. Repeating is a no-op."""
        self._require_role(WHITELIST_MANAGER_ROLE, caller)
        self._require_account("account", account)
        if self.is_whitelisted(account) == bool(whitelisted):
            return
        with self._operation():
            self._account_for_update(account).whitelisted = bool(whitelisted)
            self._record(RecordType.WHITELISTED, caller, account=account, whitelisted=bool(whitelisted))
            self._sync_voting_power(caller, account)

    def set_allow_list_mode(self, caller: AccountId, enabled: bool) -> None:
        """
        Switch between role-gated and allow-list semantics.

        Resynchronizes voting power for every known holder, so the cost is
        proportional to the holder count.
        """
        self._require_role(DEFAULT_ADMIN_ROLE, caller)
        if self._allow_list_mode == bool(enabled):
            return
        with self._operation():
            self._allow_list_mode = bool(enabled)
            self._record(RecordType.ALLOW_LIST_MODE, caller, enabled=bool(enabled))
            self._resync_holders(caller)

    def pause(self, caller: AccountId) -> None:
        """Block every balance-mutating operation, forced transfers included."""
        self._require_role(PAUSER_ROLE, caller)
        if self._paused:
            self._reject(LedgerPaused())
        with self._operation():
            self._paused = True
            self._record(RecordType.PAUSED, caller)
            self._resync_holders(caller)

    def unpause(self, caller: AccountId) -> None:
        self._require_role(PAUSER_ROLE, caller)
        if not self._paused:
            self._reject(LedgerNotPaused())
        with self._operation():
            self._paused = False
            self._record(RecordType.UNPAUSED, caller)
            self._resync_holders(caller)

    # ========================================================================
    # ALLOWANCES AND DELEGATION
    # ========================================================================

    def approve(self, owner: AccountId, spender: AccountId, amount: int) -> None:
        """Let spender move or burn up to amount of owner's units."""
        self._require_account("approver", owner)
        self._require_account("spender", spender)
        self._require_amount(amount)
        with self._operation():
            self.allowances.approve(owner, spender, amount)
            self._record(RecordType.APPROVAL, owner, owner=owner, spender=spender, amount=amount)

    def allowance(self, owner: AccountId, spender: AccountId) -> int:
        return self.allowances.allowance(owner, spender)

    def delegate(self, caller: AccountId, delegatee: AccountId) -> None:
        """Always rejected: voting power cannot be delegated, not even to self."""
        reject_delegation(caller)

    def delegate_by_sig(
        self,
        delegatee: AccountId,
        nonce: int,
        expiry: int,
        signature: bytes,
    ) -> None:
        """Always rejected, whoever the delegatee is and whatever the signature."""
        reject_delegation(delegatee)

    # ========================================================================
    # LEDGER OPERATIONS
    # ========================================================================

    def clone(self) -> TokenLedger:
        """
        Create a deep copy of this ledger.

        Balances, flags, checkpoints, holders, allowances (when the provider
        supports copy()) and the record log are independent of the original.
        The role registry is an external collaborator and stays shared.
        The sink is not carried over.

        Returns:
            A new TokenLedger instance with identical state
        """
        cloned = TokenLedger.__new__(TokenLedger)
        cloned.name = self.name
        cloned.roles = self.roles
        copier = getattr(self.allowances, "copy", None)
        cloned.allowances = copier() if copier is not None else self.allowances
        cloned.accounts = {a: replace(acct) for a, acct in self.accounts.items()}
        cloned.holders = self.holders.copy()
        cloned.record_log = list(self.record_log)
        cloned.verbose = self.verbose
        cloned.sink = None
        cloned.undelivered = []
        cloned._current_time = self._current_time
        cloned._total_supply = self._total_supply
        cloned._supply_history = self._supply_history.copy()
        cloned._voting_history = {a: h.copy() for a, h in self._voting_history.items()}
        cloned._paused = self._paused
        cloned._allow_list_mode = self._allow_list_mode
        cloned._compliance_bypassed = False
        return cloned

    def __repr__(self):
        mode = "allow-list" if self._allow_list_mode else "role-gated"
        state = ", paused" if self._paused else ""
        return (
            f"TokenLedger({self.name!r}, supply={self._total_supply}, "
            f"{len(self.holders)} holders, {mode}{state})"
        )
