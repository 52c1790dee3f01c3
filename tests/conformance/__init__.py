"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the token ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. invariants.py - Lock bound and voting power mirror
2. conservation.py - Total supply equals the sum of balances
3. atomicity.py - Rejected operations change nothing
4. idempotency.py - Repeated toggles are no-ops
5. determinism.py - Reproducible behavior
6. temporal.py - Checkpoint history and time ordering

These tests use hypothesis for property-based testing over generated
operation sequences.
"""
