"""
Event history of a simulated queue.

Three parallel time series indexed by client ordinal: when each client
arrived, when its service started, and when it left.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class HistoryRow:
    """One client's times."""

    client: int
    arrival: float
    service_start: float
    departure: float

    @property
    def waiting_time(self) -> float:
        return self.service_start - self.arrival

    @property
    def service_time(self) -> float:
        return self.departure - self.service_start


class EventHistory:
    """
    Fixed-capacity record of arrival, service-start and departure times.

    All slots start at zero and are filled by ordinal while a simulation
    runs. ``clear()`` zero-fills them again.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._arrival = [0.0] * capacity
        self._service_start = [0.0] * capacity
        self._departure = [0.0] * capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._capacity

    def clear(self) -> None:
        for series in (self._arrival, self._service_start, self._departure):
            for i in range(self._capacity):
                series[i] = 0.0

    # Recording (used by the simulators)

    def record_arrival(self, client: int, time: float) -> None:
        self._arrival[client] = time

    def record_service_start(self, client: int, time: float) -> None:
        self._service_start[client] = time

    def record_departure(self, client: int, time: float) -> None:
        self._departure[client] = time

    # Accessors

    @property
    def arrival(self) -> tuple[float, ...]:
        return tuple(self._arrival)

    @property
    def service_start(self) -> tuple[float, ...]:
        return tuple(self._service_start)

    @property
    def departure(self) -> tuple[float, ...]:
        return tuple(self._departure)

    def columns(self) -> tuple[tuple[float, ...], tuple[float, ...], tuple[float, ...]]:
        """The three series, in (arrival, service_start, departure) order."""
        return self.arrival, self.service_start, self.departure

    def rows(self) -> Iterator[HistoryRow]:
        for i in range(self._capacity):
            yield HistoryRow(i, self._arrival[i], self._service_start[i], self._departure[i])

    def __iter__(self) -> Iterator[HistoryRow]:
        return self.rows()

    def inter_arrival_times(self) -> list[float]:
        """Gaps between successive arrivals (``capacity - 1`` values)."""
        return [self._arrival[i] - self._arrival[i - 1] for i in range(1, self._capacity)]

    def service_times(self) -> list[float]:
        return [self._departure[i] - self._service_start[i] for i in range(self._capacity)]

    def waiting_times(self) -> list[float]:
        return [self._service_start[i] - self._arrival[i] for i in range(self._capacity)]

    def __repr__(self) -> str:
        return f"EventHistory(capacity={self._capacity})"
