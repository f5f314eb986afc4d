"""
Theoretical versus simulated statistics of one run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from simqueue.stats.basic import BasicStatistics, absolute_error, percent_error
from simqueue.stats.variance import Variance

if TYPE_CHECKING:
    from simqueue.history import EventHistory
    from simqueue.random import ExponentialVariable, TriangularVariable


@dataclass(frozen=True)
class Comparison:
    """A theoretical value, its simulated counterpart, and their distance."""

    theoretical: float
    simulated: float
    absolute_error: float
    percent_error: float

    @classmethod
    def of(cls, theoretical: float, simulated: float) -> Comparison:
        return cls(
            theoretical,
            simulated,
            absolute_error(theoretical, simulated),
            percent_error(theoretical, simulated),
        )


@dataclass(frozen=True)
class StatisticsSnapshot:
    """
    Statistics of a completed run.

    ``var_*`` / ``sd_*`` are the moment-matched figures; ``sample_*`` are the
    Bessel-corrected sample variance and standard deviation of the same
    series.
    """

    number_of_clients: int
    mean_arrival: Comparison
    var_arrival: Comparison
    sd_arrival: Comparison
    min_service: Comparison
    max_service: Comparison
    mean_service: Comparison
    var_service: Comparison
    sd_service: Comparison
    sample_var_arrival: float
    sample_sd_arrival: float
    sample_var_service: float
    sample_sd_service: float

    def comparisons(self) -> dict[str, Comparison]:
        return {
            "mean_arrival": self.mean_arrival,
            "var_arrival": self.var_arrival,
            "sd_arrival": self.sd_arrival,
            "min_service": self.min_service,
            "max_service": self.max_service,
            "mean_service": self.mean_service,
            "var_service": self.var_service,
            "sd_service": self.sd_service,
        }


def compute_statistics(
    history: EventHistory,
    arrivals: ExponentialVariable,
    services: TriangularVariable,
) -> StatisticsSnapshot:
    """Compute a fresh snapshot of ``history`` against the generators' moments."""
    stats = BasicStatistics()
    stats.compute(history)

    gaps = Variance()
    gaps.extend(history.inter_arrival_times())
    durations = Variance()
    durations.extend(history.service_times())

    return StatisticsSnapshot(
        number_of_clients=len(history),
        mean_arrival=Comparison.of(arrivals.mean, stats.mean_arrival_time),
        var_arrival=Comparison.of(arrivals.variance, stats.var_arrival_time),
        sd_arrival=Comparison.of(arrivals.std_dev, stats.sd_arrival_time),
        min_service=Comparison.of(services.minimum, stats.min_service_time),
        max_service=Comparison.of(services.maximum, stats.max_service_time),
        mean_service=Comparison.of(services.mean, stats.mean_service_time),
        var_service=Comparison.of(services.variance, stats.var_service_time),
        sd_service=Comparison.of(services.std_dev, stats.sd_service_time),
        sample_var_arrival=gaps.variance,
        sample_sd_arrival=gaps.std_dev,
        sample_var_service=durations.variance,
        sample_sd_service=durations.std_dev,
    )
