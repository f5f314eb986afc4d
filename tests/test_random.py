"""
Tests for the uniform stream and the exponential / triangular variates.
"""

import itertools
import math

import pytest

from simqueue.errors import (
    InvalidExponentialParameterError,
    InvalidParameterError,
    InvalidTriangularParameterError,
    ParameterKind,
)
from simqueue.random import (
    ExponentialVariable,
    TriangularVariable,
    UniformStream,
    reset_prng_cache,
)
from simqueue.stats import Variance


class TestUniformStream:
    """Tests for UniformStream."""

    def setup_method(self) -> None:
        """Reset PRNG cache before each test."""
        reset_prng_cache()

    def test_range(self) -> None:
        """Values should be within (0, 1)."""
        stream = UniformStream()
        for _ in range(1000):
            v = stream()
            assert 0.0 < v < 1.0

    def test_custom_range(self) -> None:
        stream = UniformStream(10.0, 20.0)
        for _ in range(1000):
            v = stream()
            assert 10.0 <= v <= 20.0

    def test_reproducibility(self) -> None:
        """Same seeds should produce same sequence."""
        stream1 = UniformStream()
        values1 = [stream1() for _ in range(100)]

        reset_prng_cache()
        stream2 = UniformStream()
        values2 = [stream2() for _ in range(100)]

        assert values1 == values2

    def test_cached_series_matches_fresh(self) -> None:
        """A stream built from the cache equals one built from scratch."""
        fresh = UniformStream()
        cached = UniformStream()
        assert [fresh() for _ in range(50)] == [cached() for _ in range(50)]

    def test_stream_select_differs(self) -> None:
        s0 = UniformStream(stream_select=0)
        s1 = UniformStream(stream_select=1)
        assert [s0() for _ in range(10)] != [s1() for _ in range(10)]

    def test_stream_select_skips_1000(self) -> None:
        skipped = UniformStream(stream_select=1)
        manual = UniformStream()
        for _ in range(1000):
            manual()
        assert skipped() == manual()

    def test_seed_changes_sequence(self) -> None:
        default = UniformStream()
        seeded = UniformStream(mg_seed=12345)
        assert [default() for _ in range(10)] != [seeded() for _ in range(10)]

    def test_even_seed_made_odd(self) -> None:
        even = UniformStream(mg_seed=1000)
        odd = UniformStream(mg_seed=999)
        assert [even() for _ in range(10)] == [odd() for _ in range(10)]

    def test_mean(self) -> None:
        stream = UniformStream()
        values = [stream() for _ in range(10000)]
        assert abs(sum(values) / len(values) - 0.5) < 0.02


class TestExponentialVariable:
    """Tests for ExponentialVariable."""

    def setup_method(self) -> None:
        reset_prng_cache()

    def test_half_uniform(self) -> None:
        """u = 0.5, lambda = 1 gives -ln(0.5)."""
        var = ExponentialVariable(1.0, uniform=lambda: 0.5)
        assert var.next() == pytest.approx(0.693147, abs=1e-6)
        assert var() == pytest.approx(-math.log(0.5))

    def test_zero_uniform(self) -> None:
        var = ExponentialVariable(2.0, uniform=lambda: 0.0)
        assert var.next() == 0.0

    def test_rate_scales(self) -> None:
        var = ExponentialVariable(4.0, uniform=lambda: 0.5)
        assert var.next() == pytest.approx(math.log(2.0) / 4.0)

    def test_moments(self) -> None:
        var = ExponentialVariable(0.5)
        assert var.mean == 2.0
        assert var.variance == 4.0
        assert var.std_dev == 2.0
        assert var.moments.mean == var.mean
        assert var.minimum == 0.0
        assert var.maximum == math.inf

    def test_moments_computed_once(self) -> None:
        var = ExponentialVariable(0.5)
        assert var.moments is var.moments

    @pytest.mark.parametrize("lam", [0.0, -1.0, float("nan")])
    def test_invalid_rate(self, lam: float) -> None:
        with pytest.raises(InvalidExponentialParameterError) as excinfo:
            ExponentialVariable(lam)
        assert excinfo.value.kind is ParameterKind.EXPONENTIAL
        assert isinstance(excinfo.value, InvalidParameterError)
        assert isinstance(excinfo.value, ValueError)

    def test_invalid_rate_carries_value(self) -> None:
        with pytest.raises(InvalidExponentialParameterError) as excinfo:
            ExponentialVariable(-3.0)
        assert excinfo.value.value == -3.0

    def test_one_uniform_per_draw(self) -> None:
        calls = []

        def uniform() -> float:
            calls.append(1)
            return 0.25

        var = ExponentialVariable(1.0, uniform=uniform)
        for _ in range(7):
            var.next()
        assert len(calls) == 7

    def test_samples_lazy_and_restartable(self) -> None:
        counter = itertools.count()
        var = ExponentialVariable(1.0, uniform=lambda: next(counter) / 10.0)
        first = list(itertools.islice(var.samples(), 3))
        second = list(itertools.islice(var.samples(), 2))
        assert first == [-math.log(1.0 - u) for u in (0.0, 0.1, 0.2)]
        assert second == [-math.log(1.0 - u) for u in (0.3, 0.4)]

    def test_sample_mean(self) -> None:
        var = ExponentialVariable(0.5)
        acc = Variance()
        acc.extend(itertools.islice(var.samples(), 20000))
        assert abs(acc.mean - 2.0) < 0.1
        assert abs(acc.variance - 4.0) < 0.5


class TestTriangularVariable:
    """Tests for TriangularVariable."""

    def setup_method(self) -> None:
        reset_prng_cache()

    def test_half_uniform_at_mode(self) -> None:
        """u equal to (m-a)/(b-a) returns the mode."""
        var = TriangularVariable(0.0, 5.0, 10.0, uniform=lambda: 0.5)
        assert var.next() == 5.0

    def test_left_branch(self) -> None:
        var = TriangularVariable(0.0, 5.0, 10.0, uniform=lambda: 0.1)
        assert var.next() == pytest.approx(math.sqrt(10.0 * 5.0 * 0.1))

    def test_right_branch(self) -> None:
        var = TriangularVariable(0.0, 5.0, 10.0, uniform=lambda: 0.9)
        assert var.next() == pytest.approx(10.0 - math.sqrt(10.0 * 5.0 * 0.1))

    def test_mode_at_lower_limit(self) -> None:
        var = TriangularVariable(2.0, 2.0, 4.0, uniform=lambda: 0.0)
        assert var.next() == 2.0

    def test_mode_at_upper_limit(self) -> None:
        var = TriangularVariable(2.0, 4.0, 4.0, uniform=lambda: 0.75)
        assert var.next() == pytest.approx(2.0 + math.sqrt(2.0 * 2.0 * 0.75))

    def test_moments(self) -> None:
        var = TriangularVariable(1.0, 3.5, 10.0)
        variance = (81.0 - 2.5 * 6.5) / 18.0
        assert var.mean == pytest.approx(14.5 / 3.0)
        assert var.variance == pytest.approx(variance)
        assert var.std_dev == pytest.approx(math.sqrt(variance))
        assert var.minimum == 1.0
        assert var.maximum == 10.0

    @pytest.mark.parametrize(
        "a, m, b",
        [
            (5.0, 3.0, 10.0),  # m < a
            (0.0, 11.0, 10.0),  # m > b
            (3.0, 3.0, 3.0),  # a == b
            (10.0, 5.0, 0.0),
        ],
    )
    def test_invalid_parameters(self, a: float, m: float, b: float) -> None:
        with pytest.raises(InvalidTriangularParameterError) as excinfo:
            TriangularVariable(a, m, b)
        assert excinfo.value.kind is ParameterKind.TRIANGULAR
        assert excinfo.value.value == (a, m, b)

    def test_range(self) -> None:
        var = TriangularVariable(0.0, 3.5, 10.0)
        for _ in range(1000):
            v = var()
            assert 0.0 <= v <= 10.0

    def test_sample_mean(self) -> None:
        var = TriangularVariable(0.0, 3.5, 10.0)
        acc = Variance()
        acc.extend(itertools.islice(var.samples(), 20000))
        assert abs(acc.mean - var.mean) < 0.1
        assert abs(acc.variance - var.variance) < 0.3
