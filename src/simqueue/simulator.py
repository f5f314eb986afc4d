"""
Single-server FIFO queue simulated by next-event time advance.

Clients arrive with exponential inter-arrival times and are served, one at a
time and in arrival order, for a triangular service time. A run simulates a
closed population of ``n`` clients: exactly ``n`` arrivals are scheduled and
the run ends when the last of them has departed.

Scheduling Architecture
-----------------------
Two pending events are tracked: the next arrival and the departure of the
client in service. Whichever comes first is executed; an arrival wins only
if it is strictly earlier. ``INFINITY`` marks "no such event pending", so an
idle server has an infinite departure time, and the run is over once both
times are infinite.

    state = SimulationState()
    while step(state):
        pass

The generators own their uniform sources, so each kind of draw is consumed
in a fixed order regardless of how arrivals and departures interleave.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from simqueue.errors import (
    InvalidExponentialParameterError,
    InvalidQueueSizeError,
    InvalidTriangularParameterError,
    SimulationStateError,
)
from simqueue.history import EventHistory
from simqueue.random import (
    DEFAULT_MG_SEED,
    ExponentialVariable,
    TriangularVariable,
    UniformSource,
    UniformStream,
)
from simqueue.stats import StatisticsSnapshot, compute_statistics

# Sentinel for "no pending event"
INFINITY = math.inf

ARRIVAL_STREAM = 0
SERVICE_STREAM = 1


@dataclass(frozen=True)
class SimulationParameters:
    """
    Validated inputs of one simulation.

    Attributes:
        n: Number of clients to simulate
        lam: Exponential arrival rate (clients per time unit)
        a: Shortest service time
        m: Most common service time
        b: Longest service time
    """

    n: int
    lam: float
    a: float
    m: float
    b: float

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n <= 0:
            raise InvalidQueueSizeError(self.n)
        if not self.lam > 0:
            raise InvalidExponentialParameterError(self.lam)
        if not (self.a <= self.m <= self.b and self.a < self.b):
            raise InvalidTriangularParameterError(self.a, self.m, self.b)


@dataclass
class SimulationState:
    """
    Mutable state of one run.

    Attributes:
        n1: Ordinal of the last client to arrive (-1: none yet)
        n2: Ordinal of the last client to start service (-1: none yet)
        clock: Current simulated time
        t_arrival_next: Time of the next arrival
        t_departure_next: Departure time of the client in service
    """

    n1: int = -1
    n2: int = -1
    clock: float = 0.0
    t_arrival_next: float = 0.0
    t_departure_next: float = INFINITY

    @property
    def server_idle(self) -> bool:
        return self.t_departure_next == INFINITY

    @property
    def finished(self) -> bool:
        return self.t_arrival_next == INFINITY and self.t_departure_next == INFINITY

    @property
    def waiting(self) -> int:
        """Clients that have arrived and not yet started service."""
        return self.n1 - self.n2


class SimQueue:
    """
    Stochastic single-server FIFO queue.

    Example:
        queue = SimQueue(100, lam=0.416, a=0.0, m=3.5, b=10.0)
        queue.run()
        stats = queue.statistics

    Arrival and service draws come from two independent ``UniformStream``s
    unless explicit uniform sources are given.
    """

    def __init__(
        self,
        n: int,
        lam: float,
        a: float,
        m: float,
        b: float,
        *,
        arrival_stream: UniformSource | None = None,
        service_stream: UniformSource | None = None,
        mg_seed: int = DEFAULT_MG_SEED,
    ) -> None:
        self._params = SimulationParameters(n, lam, a, m, b)
        if arrival_stream is None:
            arrival_stream = UniformStream(0.0, 1.0, ARRIVAL_STREAM, mg_seed)
        if service_stream is None:
            service_stream = UniformStream(0.0, 1.0, SERVICE_STREAM, mg_seed)
        self._arrivals = ExponentialVariable(lam, uniform=arrival_stream)
        self._services = TriangularVariable(a, m, b, uniform=service_stream)
        self._history = EventHistory(n)
        self._state = SimulationState()
        self._completed = False
        self._runs = 0
        self._snapshot: StatisticsSnapshot | None = None
        self._snapshot_run = -1

    @classmethod
    def from_parameters(cls, params: SimulationParameters, **kwargs) -> SimQueue:
        return cls(params.n, params.lam, params.a, params.m, params.b, **kwargs)

    # Accessors

    @property
    def parameters(self) -> SimulationParameters:
        return self._params

    @property
    def n(self) -> int:
        return self._params.n

    @property
    def arrivals(self) -> ExponentialVariable:
        """Inter-arrival time generator."""
        return self._arrivals

    @property
    def services(self) -> TriangularVariable:
        """Service time generator."""
        return self._services

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def history(self) -> EventHistory:
        return self._history

    @property
    def arrival(self) -> tuple[float, ...]:
        return self._history.arrival

    @property
    def service_start(self) -> tuple[float, ...]:
        return self._history.service_start

    @property
    def departure(self) -> tuple[float, ...]:
        return self._history.departure

    @property
    def completed(self) -> bool:
        return self._completed

    # Simulation

    def reset(self) -> None:
        """Zero the history and restore the initial state."""
        self._history.clear()
        self._state = SimulationState()
        self._completed = False
        self._snapshot = None
        self._snapshot_run = -1

    def step(self) -> bool:
        """
        Execute the next event.

        Returns False, without changing anything, once every client has
        arrived and the server is idle.
        """
        s = self._state
        if s.t_arrival_next < s.t_departure_next:
            # A new client arrives
            s.clock = s.t_arrival_next
            s.n1 += 1
            self._history.record_arrival(s.n1, s.clock)
            if s.n1 == self._params.n - 1:
                s.t_arrival_next = INFINITY
            else:
                s.t_arrival_next = s.clock + self._arrivals.next()
            if s.t_departure_next == INFINITY:
                self._admit_next()
            return True

        if s.t_departure_next == INFINITY:
            return False

        # The client in service leaves
        s.clock = s.t_departure_next
        self._history.record_departure(s.n2, s.clock)
        if s.n1 > s.n2:
            self._admit_next()
        else:
            s.t_departure_next = INFINITY
        return True

    def _admit_next(self) -> None:
        s = self._state
        s.n2 += 1
        self._history.record_service_start(s.n2, s.clock)
        s.t_departure_next = s.clock + self._services.next()

    def run(self) -> EventHistory:
        """
        Simulate all ``n`` clients and return the filled history.

        Raises:
            SimulationStateError: if the queue already ran and was not reset
        """
        self._begin()
        while self.step():
            pass
        return self._finish()

    def run_independent_arrays(self) -> EventHistory:
        """
        Alternative construction that does not use the event loop.

        All arrival times are drawn first, then all service times, and
        service is laid out back to back in arrival order starting with the
        first arrival. Idle periods are discarded: a client's service starts
        as soon as the previous client leaves, even if that is before the
        client arrived. Statistics therefore differ from ``run()`` whenever
        the server would have idled.
        """
        self._begin()
        n = self._params.n
        history = self._history

        t = 0.0
        history.record_arrival(0, t)
        for i in range(1, n):
            t += self._arrivals.next()
            history.record_arrival(i, t)

        durations = [self._services.next() for _ in range(n)]
        start = history.arrival[0]
        for i, duration in enumerate(durations):
            history.record_service_start(i, start)
            start += duration
            history.record_departure(i, start)

        s = self._state
        s.n1 = s.n2 = n - 1
        s.clock = start
        s.t_arrival_next = INFINITY
        s.t_departure_next = INFINITY
        return self._finish()

    def _begin(self) -> None:
        if self._completed:
            raise SimulationStateError("queue already simulated; call reset() first")

    def _finish(self) -> EventHistory:
        self._completed = True
        self._runs += 1
        return self._history

    # Statistics

    @property
    def statistics(self) -> StatisticsSnapshot:
        """
        Simulated versus theoretical statistics of the last completed run.

        Computed on first access after each run.
        """
        if not self._completed:
            raise SimulationStateError("no completed run to compute statistics from")
        if self._snapshot is None or self._snapshot_run != self._runs:
            self._snapshot = compute_statistics(self._history, self._arrivals, self._services)
            self._snapshot_run = self._runs
        return self._snapshot

    def __repr__(self) -> str:
        p = self._params
        return f"SimQueue(n={p.n}, lam={p.lam}, a={p.a}, m={p.m}, b={p.b})"
