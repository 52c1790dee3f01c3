"""
checkpoints.py - Point-in-time history of a derived integer value

Voting power per account and total supply are both kept as an append-only
sequence of (timepoint, value) pairs. Lookups return the most recent value
at or before the requested time.

Writes at the timepoint of the last checkpoint overwrite it in place, so an
operation that touches the same value several times leaves exactly one
checkpoint for that time.
"""

from __future__ import annotations
from bisect import bisect_right
from datetime import datetime
from typing import List, Tuple


class Checkpoints:
    """
    Sorted sequence of (timepoint, value) checkpoints.

    Timepoints must be pushed in non-decreasing order; the ledger clock
    only moves forward, so this holds by construction.

    Example:
        history = Checkpoints()
        history.push(t0, 100)
        history.push(t1, 40)
        history.upper_lookup(t0)   # 100
        history.latest()           # 40
    """

    def __init__(self):
        self._timepoints: List[datetime] = []
        self._values: List[int] = []

    def __len__(self) -> int:
        return len(self._timepoints)

    def push(self, timepoint: datetime, value: int) -> Tuple[int, int]:
        """
        Record value as of timepoint.

        Returns:
            (previous latest value, new value)

        Raises:
            ValueError: If timepoint precedes the last checkpoint
        """
        if value < 0:
            raise ValueError(f"Checkpoint value cannot be negative: {value}")
        previous = self.latest()
        if self._timepoints:
            last = self._timepoints[-1]
            if timepoint < last:
                raise ValueError(f"Checkpoint out of order: {timepoint} < {last}")
            if timepoint == last:
                self._values[-1] = value
                return previous, value
        self._timepoints.append(timepoint)
        self._values.append(value)
        return previous, value

    def latest(self) -> int:
        """Most recent value, or 0 if nothing was ever recorded."""
        return self._values[-1] if self._values else 0

    def upper_lookup(self, timepoint: datetime) -> int:
        """
        Value at or before timepoint.

        Uses binary search for O(log n) lookup. Returns 0 if the first
        checkpoint is after timepoint.
        """
        idx = bisect_right(self._timepoints, timepoint)
        if idx == 0:
            return 0
        return self._values[idx - 1]

    def at(self, position: int) -> Tuple[datetime, int]:
        """Return the checkpoint stored at a position (0 = oldest)."""
        return self._timepoints[position], self._values[position]

    def copy(self) -> Checkpoints:
        cloned = Checkpoints()
        cloned._timepoints = list(self._timepoints)
        cloned._values = list(self._values)
        return cloned

    def __repr__(self):
        return f"Checkpoints({len(self)} entries, latest={self.latest()})"
