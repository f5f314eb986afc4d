"""
Exception types raised by simqueue.

Every validation failure is a ValueError subclass tagged with the kind of
parameter that was rejected and the offending value(s).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any


class ParameterKind(Enum):
    """Which component rejected its parameters."""

    QUEUE_SIZE = auto()
    EXPONENTIAL = auto()
    TRIANGULAR = auto()


class InvalidParameterError(ValueError):
    """Base class for construction-time validation failures."""

    kind: ParameterKind

    def __init__(self, value: Any, message: str) -> None:
        super().__init__(message)
        self.value = value


class InvalidQueueSizeError(InvalidParameterError):
    """Number of clients to simulate is not a positive integer."""

    kind = ParameterKind.QUEUE_SIZE

    def __init__(self, n: Any) -> None:
        super().__init__(n, f"queue size must be a positive integer, got {n!r}")


class InvalidExponentialParameterError(InvalidParameterError):
    """Exponential rate is not strictly positive."""

    kind = ParameterKind.EXPONENTIAL

    def __init__(self, lam: float) -> None:
        super().__init__(lam, f"exponential rate must be > 0, got {lam!r}")


class InvalidTriangularParameterError(InvalidParameterError):
    """Triangular bounds violate a <= m <= b and a < b."""

    kind = ParameterKind.TRIANGULAR

    def __init__(self, a: float, m: float, b: float) -> None:
        super().__init__(
            (a, m, b),
            f"triangular parameters must satisfy a <= m <= b and a < b, got ({a!r}, {m!r}, {b!r})",
        )


class SimulationStateError(RuntimeError):
    """run() called on a queue whose history is already filled."""


class ConfigError(ValueError):
    """Configuration file could not be interpreted."""
