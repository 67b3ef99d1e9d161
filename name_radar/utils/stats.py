"""
Execution statistics for pipeline runs.

Counters are updated from coroutines running on a single event loop, so no
locking is needed.
"""

from collections import Counter
from typing import Any


class ExecutionStats:
    """
    Named counters collected during a run.

    Example:
        stats = ExecutionStats(names=0)
        stats.increment("names")
        stats.increment("records", 12)
        stats.to_dict()  # {"names": 1, "records": 12}
    """

    def __init__(self, **initial_values: int):
        self._counts: Counter[str] = Counter(initial_values)

    def increment(self, key: str, amount: int = 1) -> None:
        """Add amount to a counter, creating it at zero if missing."""
        self._counts[key] += amount

    def get(self, key: str, default: int = 0) -> int:
        """Get the current value of a counter."""
        return self._counts.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of all counters."""
        return dict(self._counts)

    def summary(self) -> str:
        """One-line human readable summary, e.g. ``names=3, failed=1``."""
        return ", ".join(f"{k}={v}" for k, v in sorted(self._counts.items()))
