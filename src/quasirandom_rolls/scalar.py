import math
import random
from typing import Iterator, Optional, Tuple


# Matches the default seed of a freshly constructed MT19937.
DEFAULT_SEED = 5489

# Irrational increments for 1D additive recurrences.
GOLDEN_RATIO_CONJUGATE = 0.61803398875
PI_FRACT = 0.14159265359
SQRT2_FRACT = 0.41421356237


def fract(x: float) -> float:
    """
    Fractional part of x. Accumulators here only ever hold non-negative
    sums of positive increments, so floor() is the right rounding.
    """
    return x - math.floor(x)


class WhiteNoise:
    """
    Seedable pseudorandom stream of uniform floats in [0, 1).

    The default seed is fixed so that two runs produce the same sequence.
    Passing seed=None seeds from system entropy instead.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED):
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()

    def next_point(self) -> Tuple[float, float]:
        """
        Two consecutive draws as a 2D point (x first).
        """
        x = self._rng.random()
        y = self._rng.random()
        return (x, y)

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next()


class AdditiveRecurrence:
    """
    1D additive recurrence: value <- fract(value + increment).

    next() advances first and then returns, so the start value itself is
    never emitted.
    """

    def __init__(self, increment: float, start: float = 0.0):
        if increment < 0:
            raise ValueError("increment must be >= 0")
        if not 0.0 <= start < 1.0:
            raise ValueError("start must be in [0, 1)")

        self.increment = float(increment)
        self.value = float(start)

    def next(self) -> float:
        self.value = fract(self.value + self.increment)
        return self.value

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next()
