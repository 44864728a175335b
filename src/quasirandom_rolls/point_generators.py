from typing import Iterator, List, Tuple

from .scalar import fract


Point = Tuple[float, float]

# Generalized golden ratio: the real root of g^3 = g + 1. See
# http://extremelearning.com.au/unreasonable-effectiveness-of-quasirandom-sequences/
G = 1.32471795724474602596
A1 = 1.0 / G
A2 = 1.0 / (G * G)

SOBOL_BITS = 32
SOBOL_SCALE = float(1 << SOBOL_BITS)
MAX_SOBOL_VALUES = 1 << SOBOL_BITS


# ------------------------------------------------------------
# R2
# ------------------------------------------------------------

def r2_additive(point: Point) -> Point:
    """
    Advance a point of the R2 sequence by one step.
    """
    x, y = point
    return (fract(x + A1), fract(y + A2))


def r2(index: int) -> Point:
    """
    The index-th point of the R2 sequence, evaluated directly. r2(0) is the
    origin, matching an additive walk that starts there.
    """
    if index < 0:
        raise ValueError("index must be >= 0")
    return (fract(A1 * index), fract(A2 * index))


class R2Additive:
    """
    Walk-forward cursor over the R2 sequence.

    next() returns the current point and then advances, so the first point
    produced is the start point and point k lines up with r2(k) when
    starting from the origin.
    """

    def __init__(self, start: Point = (0.0, 0.0)):
        x, y = start
        if not (0.0 <= x < 1.0 and 0.0 <= y < 1.0):
            raise ValueError("start must lie in [0, 1)^2")
        self.point: Point = (float(x), float(y))

    def next(self) -> Point:
        current = self.point
        self.point = r2_additive(current)
        return current

    def __iter__(self) -> Iterator[Point]:
        return self

    def __next__(self) -> Point:
        return self.next()


# ------------------------------------------------------------
# Sobol
# ------------------------------------------------------------

def ruler(n: int) -> int:
    """
    Number of trailing zero bits of n (0 for n == 0).
    """
    if n == 0:
        return 0
    return (n & -n).bit_length() - 1


def sobol_direction_numbers(num_values: int) -> List[int]:
    """
    Direction numbers for the second Sobol dimension. Enough entries are
    produced to cover ruler(i + 1) for every i in [0, num_values).
    """
    if num_values < 0:
        raise ValueError("num_values must be >= 0")

    # ceil(log2(num_values + 1))
    size = num_values.bit_length()
    if size == 0:
        return []

    v = [0] * size
    v[0] = 1 << (SOBOL_BITS - 1)
    for k in range(1, size):
        v[k] = v[k - 1] ^ (v[k - 1] >> 1)
    return v


def _check_sobol_count(num_values: int) -> None:
    if num_values < 0:
        raise ValueError("num_values must be >= 0")
    if num_values >= MAX_SOBOL_VALUES:
        raise ValueError(f"num_values must be < 2**{SOBOL_BITS}")


def sobol(num_values: int) -> List[Point]:
    """
    First num_values points of the 2D Sobol sequence.

    The x axis is the bit-reversed (Van der Corput) sequence and the y axis
    uses the direction numbers from sobol_direction_numbers(). Each axis is
    an XOR accumulator driven by the ruler function of i + 1, so the output
    only depends on num_values and any prefix matches a shorter request.
    """
    _check_sobol_count(num_values)

    xs = [0.0] * num_values
    sample_int = 0
    for i in range(num_values):
        direction = 1 << (SOBOL_BITS - 1 - ruler(i + 1))
        sample_int ^= direction
        xs[i] = sample_int / SOBOL_SCALE

    v = sobol_direction_numbers(num_values)
    ys = [0.0] * num_values
    sample_int = 0
    for i in range(num_values):
        sample_int ^= v[ruler(i + 1)]
        ys[i] = sample_int / SOBOL_SCALE

    return list(zip(xs, ys))


def sobol_at_index(index: int) -> Point:
    """
    The index-th Sobol point without generating the ones before it.

    After n = index + 1 XOR steps the accumulators hold the XOR of the
    direction numbers selected by the set bits of the Gray code of n.
    """
    if index < 0:
        raise ValueError("index must be >= 0")
    _check_sobol_count(index + 1)

    n = index + 1
    gray = n ^ (n >> 1)
    v = sobol_direction_numbers(n)

    x_int = 0
    y_int = 0
    bit = 0
    while gray:
        if gray & 1:
            x_int ^= 1 << (SOBOL_BITS - 1 - bit)
            y_int ^= v[bit]
        gray >>= 1
        bit += 1

    return (x_int / SOBOL_SCALE, y_int / SOBOL_SCALE)
