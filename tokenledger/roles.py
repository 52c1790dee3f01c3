"""
roles.py - Minimal in-memory role registry

The ledger only ever asks has_role(role, account). This registry is the
simplest collaborator that answers it, with grants and revocations governed
by the DEFAULT_ADMIN role.
"""

from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, Optional, Set

from .core import AccountId, DEFAULT_ADMIN_ROLE, MissingRole, is_null_account, InvalidAccount


class InMemoryRoleRegistry:
    """
    Role -> members mapping.

    Example:
        roles = InMemoryRoleRegistry(admin="admin")
        roles.grant_role("admin", TRANSFER_ROLE, "alice")
        roles.has_role(TRANSFER_ROLE, "alice")   # True
    """

    def __init__(self, admin: Optional[AccountId] = None):
        self._members: Dict[str, Set[AccountId]] = defaultdict(set)
        if admin is not None:
            if is_null_account(admin):
                raise InvalidAccount("admin", admin)
            self._members[DEFAULT_ADMIN_ROLE].add(admin)

    def has_role(self, role: str, account: AccountId) -> bool:
        return account in self._members.get(role, ())

    def members(self, role: str) -> Set[AccountId]:
        return set(self._members.get(role, ()))

    def _require_admin(self, caller: AccountId) -> None:
        if not self.has_role(DEFAULT_ADMIN_ROLE, caller):
            raise MissingRole(DEFAULT_ADMIN_ROLE, caller)

    def grant_role(self, caller: AccountId, role: str, account: AccountId) -> bool:
        """Grant role to account. Returns False if it was already held."""
        self._require_admin(caller)
        if is_null_account(account):
            raise InvalidAccount("grantee", account)
        if account in self._members[role]:
            return False
        self._members[role].add(account)
        return True

    def grant_roles(self, caller: AccountId, account: AccountId, roles: Iterable[str]) -> None:
        for role in roles:
            self.grant_role(caller, role, account)

    def revoke_role(self, caller: AccountId, role: str, account: AccountId) -> bool:
        """Revoke role from account. Returns False if it was not held."""
        self._require_admin(caller)
        if account not in self._members.get(role, ()):
            return False
        self._members[role].discard(account)
        return True

    def __repr__(self):
        held = sum(len(m) for m in self._members.values())
        return f"InMemoryRoleRegistry({len(self._members)} roles, {held} grants)"
