"""
Pytest configuration and fixtures for simqueue.
"""

from typing import Callable, Iterable, Iterator

import pytest
import simpy

from simqueue.history import EventHistory


@pytest.fixture
def env() -> simpy.Environment:
    """Create a fresh SimPy environment."""
    return simpy.Environment()


@pytest.fixture
def uniforms() -> Callable[[Iterable[float]], Callable[[], float]]:
    """Build a uniform source that replays the given values in order."""

    def _make(values: Iterable[float]) -> Callable[[], float]:
        it: Iterator[float] = iter(values)
        return lambda: next(it)

    return _make


def make_history(arrival: list[float], service_start: list[float], departure: list[float]) -> EventHistory:
    """Fill a history from explicit series."""
    history = EventHistory(len(arrival))
    for i, (a, s, d) in enumerate(zip(arrival, service_start, departure)):
        history.record_arrival(i, a)
        history.record_service_start(i, s)
        history.record_departure(i, d)
    return history


def assert_valid_history(history: EventHistory) -> None:
    """
    Check the invariants of a single-server FIFO history.

    Arrivals are ordered, nobody is served before arriving or before the
    previous client left, and service intervals never overlap.
    """
    arrival, start, departure = history.columns()
    n = len(history)
    assert len(arrival) == len(start) == len(departure) == n
    for i in range(n):
        assert start[i] >= arrival[i]
        assert departure[i] > start[i]
        if i > 0:
            assert arrival[i] >= arrival[i - 1]
            assert start[i] == max(arrival[i], departure[i - 1])
            assert start[i] >= departure[i - 1]
    intervals = sorted(zip(start, departure))
    for (s0, d0), (s1, _) in zip(intervals, intervals[1:]):
        assert s1 >= d0
