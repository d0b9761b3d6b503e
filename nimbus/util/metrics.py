"""Rolling sample windows behind timing metrics and the frame clock."""

from __future__ import annotations

import numpy as np

PERCENTILES = (50, 95, 99)


class SampleWindow:
    """Keeps the most recent ``capacity`` samples of a measurement.

    Samples land in a preallocated ring buffer, so recording never allocates.
    Summaries are computed over the samples in the window only.
    """

    def __init__(self, capacity: int = 1000) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._buffer = np.zeros(capacity, dtype=np.float64)
        self._recorded = 0

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    @property
    def sample_count(self) -> int:
        return min(self._recorded, self.capacity)

    def record(self, value: float) -> None:
        self._buffer[self._recorded % self.capacity] = value
        self._recorded += 1

    def values(self) -> np.ndarray:
        """Samples in the window, oldest first."""
        if self._recorded <= self.capacity:
            return self._buffer[: self._recorded].copy()
        return np.roll(self._buffer, -(self._recorded % self.capacity))

    @property
    def last(self) -> float | None:
        if not self._recorded:
            return None
        return float(self._buffer[(self._recorded - 1) % self.capacity])

    @property
    def mean(self) -> float:
        if not self._recorded:
            return 0.0
        return float(self.values().mean())

    def percentiles(self) -> tuple[float, float, float]:
        """(p50, p95, p99) of the window, zeros when empty."""
        if not self._recorded:
            return (0.0, 0.0, 0.0)
        p50, p95, p99 = np.percentile(self.values(), PERCENTILES)
        return (float(p50), float(p95), float(p99))

    def summary(self) -> str:
        p50, p95, p99 = self.percentiles()
        return f"p50={p50:.2f} p95={p95:.2f} p99={p99:.2f}"
