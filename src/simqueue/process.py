"""
Process-interaction rendition of the queue, with SimPy as the engine.

Each client is a SimPy process that records its arrival, waits for the
single server (a ``simpy.Resource`` of capacity 1, which grants requests in
FIFO order), holds it for one service draw, and records its departure. A
source process spawns the clients, one inter-arrival draw apart.

Given generators that own their uniform sources, this reproduces the
history built by ``SimQueue.run()`` draw for draw, which makes it a useful
cross-check of the event loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generator

import simpy

from simqueue.history import EventHistory

if TYPE_CHECKING:
    from simqueue.random import ExponentialVariable, TriangularVariable
    from simqueue.simulator import SimulationParameters


class ProcessQueue:
    """
    Single-server FIFO queue built from SimPy processes.

    Example:
        model = ProcessQueue(params, arrivals, services)
        history = model.run()
    """

    def __init__(
        self,
        params: SimulationParameters,
        arrivals: ExponentialVariable,
        services: TriangularVariable,
        env: simpy.Environment | None = None,
    ) -> None:
        self._params = params
        self._arrivals = arrivals
        self._services = services
        self._env = env if env is not None else simpy.Environment()
        self._server = simpy.Resource(self._env, capacity=1)
        self._history = EventHistory(params.n)

    @property
    def env(self) -> simpy.Environment:
        return self._env

    @property
    def history(self) -> EventHistory:
        return self._history

    def client(self, ordinal: int) -> Generator[simpy.Event, None, None]:
        env = self._env
        self._history.record_arrival(ordinal, env.now)
        with self._server.request() as req:
            yield req
            self._history.record_service_start(ordinal, env.now)
            yield env.timeout(self._services.next())
            self._history.record_departure(ordinal, env.now)

    def source(self) -> Generator[simpy.Event, None, None]:
        last = self._params.n - 1
        for ordinal in range(self._params.n):
            self._env.process(self.client(ordinal))
            if ordinal < last:
                yield self._env.timeout(self._arrivals.next())

    def run(self) -> EventHistory:
        self._env.process(self.source())
        self._env.run()
        return self._history


def simulate_process(
    params: SimulationParameters,
    arrivals: ExponentialVariable,
    services: TriangularVariable,
) -> EventHistory:
    """Run a fresh ``ProcessQueue`` and return its history."""
    return ProcessQueue(params, arrivals, services).run()
