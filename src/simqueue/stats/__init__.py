"""Statistics collection classes."""

from simqueue.stats.mean import Mean
from simqueue.stats.variance import Variance
from simqueue.stats.basic import BasicStatistics, absolute_error, percent_error
from simqueue.stats.snapshot import Comparison, StatisticsSnapshot, compute_statistics

__all__ = [
    "Mean",
    "Variance",
    "BasicStatistics",
    "absolute_error",
    "percent_error",
    "Comparison",
    "StatisticsSnapshot",
    "compute_statistics",
]
