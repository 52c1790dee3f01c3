"""
test_checkpoints.py - Unit tests for checkpoints.py

Tests:
- push ordering and same-timepoint overwrite
- upper_lookup at, between, before and after checkpoints
- copy independence
"""

import pytest
from datetime import datetime, timedelta

from tokenledger import Checkpoints


T0 = datetime(2025, 1, 1)
T1 = T0 + timedelta(days=1)
T2 = T0 + timedelta(days=2)


class TestPush:

    def test_empty_history_reads_zero(self):
        history = Checkpoints()
        assert len(history) == 0
        assert history.latest() == 0
        assert history.upper_lookup(T0) == 0

    def test_push_returns_previous_and_new(self):
        history = Checkpoints()
        assert history.push(T0, 100) == (0, 100)
        assert history.push(T1, 40) == (100, 40)
        assert len(history) == 2

    def test_same_timepoint_overwrites(self):
        history = Checkpoints()
        history.push(T0, 100)
        history.push(T0, 250)
        assert len(history) == 1
        assert history.latest() == 250
        assert history.at(0) == (T0, 250)

    def test_out_of_order_rejected(self):
        history = Checkpoints()
        history.push(T1, 10)
        with pytest.raises(ValueError, match="out of order"):
            history.push(T0, 20)

    def test_negative_value_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            Checkpoints().push(T0, -1)


class TestLookup:

    @pytest.fixture
    def history(self):
        h = Checkpoints()
        h.push(T0, 100)
        h.push(T2, 300)
        return h

    def test_before_first_checkpoint(self, history):
        assert history.upper_lookup(T0 - timedelta(seconds=1)) == 0

    def test_exact_timepoint(self, history):
        assert history.upper_lookup(T0) == 100
        assert history.upper_lookup(T2) == 300

    def test_between_checkpoints(self, history):
        assert history.upper_lookup(T1) == 100

    def test_after_last(self, history):
        assert history.upper_lookup(T2 + timedelta(days=30)) == 300

    def test_copy_is_independent(self, history):
        cloned = history.copy()
        cloned.push(T2 + timedelta(days=1), 5)
        assert len(history) == 2
        assert len(cloned) == 3
        assert history.latest() == 300
