"""
Random number streams and random variates for the queue simulator.

The uniform source is the C++SIM generator: a multiplicative generator
feeding a Maclaren-Marsaglia shuffle table over a linear congruential
generator. Exponential and triangular variates are produced from it by
inverse-CDF sampling, one uniform value per draw.

Any zero-argument callable returning floats in [0, 1) can stand in for the
uniform source, which is how the tests pin draws to known values.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator

from simqueue.errors import InvalidExponentialParameterError, InvalidTriangularParameterError

UniformSource = Callable[[], float]

# Constants of the C++SIM generator
TWO_26 = 67108864  # 2**26
M = 100000000
B = 31415821
M1 = 10000

DEFAULT_MG_SEED = 772531  # Must be odd
DEFAULT_LCG_SEED = 1878892440

# Initial shuffle series for the default seeds. Each stream gets its own copy.
_initial_series_cache: list[float] | None = None
_initial_mseed_after_series: int = 0


def reset_prng_cache() -> None:
    """Reset the module-level PRNG cache. Call between simulation runs."""
    global _initial_series_cache, _initial_mseed_after_series
    _initial_series_cache = None
    _initial_mseed_after_series = 0


class RandomStream(ABC):
    """
    Base class for streams driven by the C++SIM dual generator.

    - Multiplicative generator (MGen) for shuffle table updates
    - Linear congruential generator with Maclaren-Marsaglia shuffle
    """

    def __init__(
        self,
        mg_seed: int = DEFAULT_MG_SEED,
        lcg_seed: int = DEFAULT_LCG_SEED,
    ) -> None:
        global _initial_series_cache, _initial_mseed_after_series

        # MGSeed must be odd and positive
        if mg_seed % 2 == 0:
            mg_seed -= 1
        if mg_seed < 0:
            mg_seed = -mg_seed
        if lcg_seed < 0:
            lcg_seed = -lcg_seed

        self._mseed = mg_seed
        self._lseed = lcg_seed

        is_default = mg_seed == DEFAULT_MG_SEED and lcg_seed == DEFAULT_LCG_SEED

        if is_default and _initial_series_cache is not None:
            self._series = _initial_series_cache.copy()
            self._mseed = _initial_mseed_after_series
        else:
            self._series = [self._mgen() for _ in range(128)]

            if is_default:
                _initial_series_cache = self._series.copy()
                _initial_mseed_after_series = self._mseed

    def _mgen(self) -> float:
        """
        Multiplicative generator.

        Y[i+1] = Y[i] * 5^5 mod 2^26
        Period: 2^24, initial seed must be odd.
        """
        self._mseed = (self._mseed * 25) % TWO_26
        self._mseed = (self._mseed * 25) % TWO_26
        self._mseed = (self._mseed * 5) % TWO_26
        return self._mseed / TWO_26

    def _uniform(self) -> float:
        """Linear congruential generator with Maclaren-Marsaglia shuffle."""
        # LCG step with overflow prevention
        p0 = self._lseed % M1
        p1 = self._lseed // M1
        q0 = B % M1
        q1 = B // M1

        self._lseed = (((((p0 * q1 + p1 * q0) % M1) * M1 + p0 * q0) % M) + 1) % M

        choose = self._lseed % 128
        result = self._series[choose]
        self._series[choose] = self._mgen()

        return result

    def skip(self, count: int) -> None:
        """Discard ``count`` values."""
        for _ in range(count):
            self._uniform()

    @abstractmethod
    def __call__(self) -> float:
        """Generate next random value from the distribution."""
        ...


class UniformStream(RandomStream):
    """
    Uniform distribution on [lo, hi].

    ``stream_select`` skips 1000 values per step so that streams built from
    the same seeds do not overlap.
    """

    def __init__(
        self,
        lo: float = 0.0,
        hi: float = 1.0,
        stream_select: int = 0,
        mg_seed: int = DEFAULT_MG_SEED,
        lcg_seed: int = DEFAULT_LCG_SEED,
    ) -> None:
        super().__init__(mg_seed, lcg_seed)
        self._lo = lo
        self._hi = hi
        self._range = hi - lo
        self.skip(stream_select * 1000)

    def __call__(self) -> float:
        return self._lo + (self._range * self._uniform())


@dataclass(frozen=True)
class Moments:
    """Theoretical moments of a distribution."""

    mean: float
    variance: float
    std_dev: float


class RandomVariable(ABC):
    """
    A random variate drawn by inversion from a uniform source.

    Theoretical moments are computed once, at construction.
    """

    def __init__(self, uniform: UniformSource | None = None, stream_select: int = 0) -> None:
        self._uniform = uniform if uniform is not None else UniformStream(0.0, 1.0, stream_select)
        self._moments = self._theoretical_moments()

    @abstractmethod
    def _theoretical_moments(self) -> Moments:
        ...

    @abstractmethod
    def _invert(self, u: float) -> float:
        """Inverse CDF at ``u``."""
        ...

    @property
    def moments(self) -> Moments:
        return self._moments

    @property
    def mean(self) -> float:
        return self._moments.mean

    @property
    def variance(self) -> float:
        return self._moments.variance

    @property
    def std_dev(self) -> float:
        return self._moments.std_dev

    @property
    @abstractmethod
    def minimum(self) -> float:
        """Lower end of the support."""
        ...

    @property
    @abstractmethod
    def maximum(self) -> float:
        """Upper end of the support."""
        ...

    def next(self) -> float:
        """Draw one value, consuming one uniform."""
        return self._invert(self._uniform())

    def __call__(self) -> float:
        return self.next()

    def samples(self) -> Iterator[float]:
        """Unbounded lazy sequence of draws. Each call starts a new iterator."""
        while True:
            yield self.next()


class ExponentialVariable(RandomVariable):
    """Exponential distribution with rate ``lam`` (mean 1/lam)."""

    def __init__(
        self,
        lam: float,
        uniform: UniformSource | None = None,
        stream_select: int = 0,
    ) -> None:
        if not lam > 0:
            raise InvalidExponentialParameterError(lam)
        self._lam = lam
        super().__init__(uniform, stream_select)

    @property
    def lam(self) -> float:
        return self._lam

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    def _theoretical_moments(self) -> Moments:
        variance = 1.0 / (self._lam * self._lam)
        return Moments(1.0 / self._lam, variance, math.sqrt(variance))

    def _invert(self, u: float) -> float:
        return -math.log(1.0 - u) / self._lam

    def __repr__(self) -> str:
        return f"ExponentialVariable(lam={self._lam!r})"


class TriangularVariable(RandomVariable):
    """
    Triangular distribution with lower limit a, mode m, and upper limit b.

    Requires: a <= m <= b and a < b.
    """

    def __init__(
        self,
        a: float,
        m: float,
        b: float,
        uniform: UniformSource | None = None,
        stream_select: int = 0,
    ) -> None:
        if not (a <= m <= b and a < b):
            raise InvalidTriangularParameterError(a, m, b)
        self._a = a
        self._m = m
        self._b = b
        super().__init__(uniform, stream_select)

    @property
    def a(self) -> float:
        return self._a

    @property
    def m(self) -> float:
        return self._m

    @property
    def b(self) -> float:
        return self._b

    @property
    def minimum(self) -> float:
        return self._a

    @property
    def maximum(self) -> float:
        return self._b

    def _theoretical_moments(self) -> Moments:
        a, m, b = self._a, self._m, self._b
        variance = ((b - a) * (b - a) - (m - a) * (b - m)) / 18.0
        return Moments((a + m + b) / 3.0, variance, math.sqrt(variance))

    def _invert(self, u: float) -> float:
        a, m, b = self._a, self._m, self._b
        if u < (m - a) / (b - a):
            return a + math.sqrt((b - a) * (m - a) * u)
        return b - math.sqrt((b - a) * (b - m) * (1.0 - u))

    def __repr__(self) -> str:
        return f"TriangularVariable(a={self._a!r}, m={self._m!r}, b={self._b!r})"
