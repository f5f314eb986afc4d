"""
Statistics of a simulated queue history.

The simulated variance figures are not sample variances. They are recovered
from an assumed distribution shape:

- inter-arrival gaps are taken to be exponential, so the variance is the
  square of the mean gap;
- service times are taken to be triangular, with the mode recovered from
  the mean, minimum and maximum (mode = 3 * mean - min - max).

Use ``Variance`` for the sample variance of the same series.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from simqueue.stats.mean import Mean

if TYPE_CHECKING:
    from simqueue.history import EventHistory


def absolute_error(exact: float, simulated: float) -> float:
    return abs(exact - simulated)


def percent_error(exact: float, simulated: float) -> float:
    """100 * |exact - simulated| / exact, NaN when ``exact`` is zero."""
    if exact == 0:
        return math.nan
    return absolute_error(exact, simulated) * 100.0 / exact


class BasicStatistics:
    """
    Simulated statistics computed from an event history.

    Each setter runs once: a statistic that is already nonzero is left as
    is, so setters may call each other freely. Call ``reset()`` before
    computing from another history.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Reset the statistics and the stored errors."""
        self.mean_arrival_time = 0.0
        self.var_arrival_time = 0.0
        self.sd_arrival_time = 0.0
        self.min_service_time = 0.0
        self.max_service_time = 0.0
        self.mean_service_time = 0.0
        self.var_service_time = 0.0
        self.sd_service_time = 0.0
        self.errors: dict[str, float] = {}

    # Setters

    def set_mean_arrival_time(self, history: EventHistory) -> None:
        """Mean gap between successive arrivals. Unset for a single client."""
        if self.mean_arrival_time != 0:
            return
        gaps = history.inter_arrival_times()
        if not gaps:
            return
        mean = Mean()
        mean.extend(gaps)
        self.mean_arrival_time = mean.mean

    def set_var_arrival_time(self, history: EventHistory) -> None:
        if self.var_arrival_time != 0:
            return
        self.set_mean_arrival_time(history)
        if self.mean_arrival_time == 0:
            return
        rate = 1.0 / self.mean_arrival_time
        self.var_arrival_time = 1.0 / (rate * rate)

    def set_sd_arrival_time(self, history: EventHistory) -> None:
        if self.sd_arrival_time != 0:
            return
        self.set_var_arrival_time(history)
        self.sd_arrival_time = math.sqrt(self.var_arrival_time)

    def _service_times(self, history: EventHistory) -> Mean | None:
        if len(history) == 0:
            return None
        times = Mean()
        times.extend(history.service_times())
        return times

    def set_min_service_time(self, history: EventHistory) -> None:
        if self.min_service_time != 0:
            return
        times = self._service_times(history)
        if times is not None:
            self.min_service_time = times.min

    def set_max_service_time(self, history: EventHistory) -> None:
        if self.max_service_time != 0:
            return
        times = self._service_times(history)
        if times is not None:
            self.max_service_time = times.max

    def set_mean_service_time(self, history: EventHistory) -> None:
        if self.mean_service_time != 0:
            return
        times = self._service_times(history)
        if times is not None:
            self.mean_service_time = times.mean

    def set_var_service_time(self, history: EventHistory) -> None:
        if self.var_service_time != 0:
            return
        self.set_mean_service_time(history)
        self.set_min_service_time(history)
        self.set_max_service_time(history)
        lo = self.min_service_time
        hi = self.max_service_time
        mode = 3.0 * self.mean_service_time - lo - hi
        self.var_service_time = ((hi - lo) * (hi - lo) - (mode - lo) * (hi - mode)) / 18.0

    def set_sd_service_time(self, history: EventHistory) -> None:
        if self.sd_service_time != 0:
            return
        self.set_var_service_time(history)
        self.sd_service_time = math.sqrt(self.var_service_time)

    def compute(self, history: EventHistory) -> None:
        """Run every setter."""
        self.set_mean_arrival_time(history)
        self.set_var_arrival_time(history)
        self.set_sd_arrival_time(history)
        self.set_max_service_time(history)
        self.set_min_service_time(history)
        self.set_mean_service_time(history)
        self.set_var_service_time(history)
        self.set_sd_service_time(history)

    # Errors against exact values

    def _error(self, name: str, exact: float, simulated: float) -> float:
        error = absolute_error(exact, simulated)
        self.errors[name] = error
        return error

    def mean_arrival_time_error(self, exact: float) -> float:
        return self._error("mean_arrival_time", exact, self.mean_arrival_time)

    def var_arrival_time_error(self, exact: float) -> float:
        return self._error("var_arrival_time", exact, self.var_arrival_time)

    def sd_arrival_time_error(self, exact: float) -> float:
        return self._error("sd_arrival_time", exact, self.sd_arrival_time)

    def min_service_time_error(self, exact: float) -> float:
        return self._error("min_service_time", exact, self.min_service_time)

    def max_service_time_error(self, exact: float) -> float:
        return self._error("max_service_time", exact, self.max_service_time)

    def mean_service_time_error(self, exact: float) -> float:
        return self._error("mean_service_time", exact, self.mean_service_time)

    def var_service_time_error(self, exact: float) -> float:
        return self._error("var_service_time", exact, self.var_service_time)

    def sd_service_time_error(self, exact: float) -> float:
        return self._error("sd_service_time", exact, self.sd_service_time)
