"""
conftest.py - Shared pytest fixtures for token ledger tests

Provides common fixtures used across unit, functional and conformance tests:
- Role registry with one account per role
- Empty and funded ledgers
"""

import pytest

from tests.factories import build_roles, build_ledger


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def roles():
    """Role registry: admin, issuer, operator, compliance, gatekeeper, guardian."""
    return build_roles()


@pytest.fixture
def ledger(roles):
    """Empty quiet ledger in role-gated mode."""
    return build_ledger(roles=roles)


@pytest.fixture
def funded_ledger(roles):
    """Ledger with alice holding 1000 and bob holding 500."""
    return build_ledger({"alice": 1000, "bob": 500}, roles=roles)


@pytest.fixture
def records():
    """List that collects records delivered to a ledger sink."""
    return []
