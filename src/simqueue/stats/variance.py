"""
Variance statistics class.

Extends the running mean with the sample variance of the values seen.
"""

from __future__ import annotations

import math

from simqueue.stats.mean import Mean


class Variance(Mean):
    """Running variance calculation."""

    def __init__(self) -> None:
        super().__init__()
        self._sum_sq: float = 0.0

    def reset(self) -> None:
        """Reset all statistics."""
        super().reset()
        self._sum_sq = 0.0

    def set_value(self, value: float) -> None:
        """Add a sample value."""
        super().set_value(value)
        self._sum_sq += value * value

    @property
    def variance(self) -> float:
        """
        Sample variance.

        Uses n-1 denominator (Bessel's correction).
        """
        if self._number < 2:
            return 0.0
        # Cancellation can leave a tiny negative remainder for constant samples
        return max(0.0, (self._sum_sq - (self._sum * self._sum) / self._number) / (self._number - 1))

    @property
    def std_dev(self) -> float:
        """Sample standard deviation."""
        return math.sqrt(self.variance)

    def __str__(self) -> str:
        lines = [
            f"Variance          : {self.variance}",
            f"Standard Deviation: {self.std_dev}",
        ]
        lines.append(super().__str__())
        return "\n".join(lines)
