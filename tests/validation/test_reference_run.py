"""
Validation of the event loop against a direct recursion.

Replays the same uniform streams the simulator uses and rebuilds the
history with Lindley's recursion:

    arrival[i]       = arrival[i-1] + gap[i]
    service_start[i] = max(arrival[i], departure[i-1])
    departure[i]     = service_start[i] + service[i]

Parameters are the reference run: 100 clients, 0.416 clients per minute,
service times triangular on (0, 3.5, 10) minutes.
"""

import pytest

from simqueue.random import (
    ExponentialVariable,
    TriangularVariable,
    UniformStream,
    reset_prng_cache,
)
from simqueue.simulator import ARRIVAL_STREAM, SERVICE_STREAM, SimQueue

N = 100
LAM = 0.416
A, M, B = 0.0, 3.5, 10.0


def lindley(n: int, mg_seed: int) -> tuple[list[float], list[float], list[float]]:
    gaps = ExponentialVariable(LAM, uniform=UniformStream(0.0, 1.0, ARRIVAL_STREAM, mg_seed))
    services = TriangularVariable(A, M, B, uniform=UniformStream(0.0, 1.0, SERVICE_STREAM, mg_seed))
    arrival, start, departure = [0.0], [0.0], [services()]
    for _ in range(1, n):
        arrival.append(arrival[-1] + gaps())
        start.append(max(arrival[-1], departure[-1]))
        departure.append(start[-1] + services())
    return arrival, start, departure


class TestReferenceRun:
    """Event loop versus Lindley's recursion."""

    def setup_method(self) -> None:
        reset_prng_cache()

    @pytest.mark.parametrize("mg_seed", [772531, 13, 40001])
    def test_history_matches_recursion(self, mg_seed: int) -> None:
        queue = SimQueue(N, LAM, A, M, B, mg_seed=mg_seed)
        history = queue.run()

        reset_prng_cache()
        arrival, start, departure = lindley(N, mg_seed)

        assert list(history.arrival) == pytest.approx(arrival, rel=1e-12)
        assert list(history.service_start) == pytest.approx(start, rel=1e-12)
        assert list(history.departure) == pytest.approx(departure, rel=1e-12)

    def test_statistics_match_recursion(self) -> None:
        queue = SimQueue(N, LAM, A, M, B)
        queue.run()
        snap = queue.statistics

        reset_prng_cache()
        arrival, start, departure = lindley(N, 772531)
        gaps = [b - a for a, b in zip(arrival, arrival[1:])]
        durations = [d - s for s, d in zip(start, departure)]
        mean_gap = sum(gaps) / len(gaps)
        mean_service = sum(durations) / len(durations)
        lo, hi = min(durations), max(durations)
        mode = 3 * mean_service - lo - hi

        assert snap.mean_arrival.simulated == pytest.approx(mean_gap)
        assert snap.var_arrival.simulated == pytest.approx(mean_gap**2)
        assert snap.mean_service.simulated == pytest.approx(mean_service)
        assert snap.max_service.simulated == pytest.approx(hi)
        assert snap.min_service.simulated == pytest.approx(lo)
        assert snap.var_service.simulated == pytest.approx(((hi - lo) ** 2 - (mode - lo) * (hi - mode)) / 18)
