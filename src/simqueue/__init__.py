"""
simqueue - stochastic single-server FIFO queue simulator.

Exponential inter-arrival times, triangular service times, next-event time
advance, and simulated-versus-theoretical statistics.
"""

from simqueue.errors import (
    ConfigError,
    InvalidExponentialParameterError,
    InvalidParameterError,
    InvalidQueueSizeError,
    InvalidTriangularParameterError,
    ParameterKind,
    SimulationStateError,
)
from simqueue.random import (
    ExponentialVariable,
    Moments,
    RandomStream,
    RandomVariable,
    TriangularVariable,
    UniformStream,
    reset_prng_cache,
)
from simqueue.history import EventHistory, HistoryRow
from simqueue.stats import (
    BasicStatistics,
    Comparison,
    Mean,
    StatisticsSnapshot,
    Variance,
    compute_statistics,
)
from simqueue.simulator import INFINITY, SimQueue, SimulationParameters, SimulationState
from simqueue.process import ProcessQueue, simulate_process

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ConfigError",
    "InvalidExponentialParameterError",
    "InvalidParameterError",
    "InvalidQueueSizeError",
    "InvalidTriangularParameterError",
    "ParameterKind",
    "SimulationStateError",
    # Random
    "RandomStream",
    "UniformStream",
    "RandomVariable",
    "ExponentialVariable",
    "TriangularVariable",
    "Moments",
    "reset_prng_cache",
    # History
    "EventHistory",
    "HistoryRow",
    # Statistics
    "Mean",
    "Variance",
    "BasicStatistics",
    "Comparison",
    "StatisticsSnapshot",
    "compute_statistics",
    # Simulation
    "INFINITY",
    "SimQueue",
    "SimulationParameters",
    "SimulationState",
    "ProcessQueue",
    "simulate_process",
]
