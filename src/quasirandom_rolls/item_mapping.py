import math
from typing import List, Sequence


class InvalidWeights(ValueError):
    """
    The weight vector violates the pmf contract: it is empty, or it holds
    a negative or non-finite value.
    """
    pass


def check_weights(weights: Sequence[float]) -> None:
    if len(weights) == 0:
        raise InvalidWeights("weights must be non-empty")
    for i, w in enumerate(weights):
        if not math.isfinite(w):
            raise InvalidWeights(f"weight {i} is not finite: {w!r}")
        if w < 0:
            raise InvalidWeights(f"weight {i} is negative: {w!r}")


def normalize_weights(weights: Sequence[float]) -> List[float]:
    """
    Scale weights so they sum to 1 and can be used as a pmf.
    """
    check_weights(weights)

    total = 0.0
    for w in weights:
        total += w
    if total <= 0:
        raise InvalidWeights("weights must have a positive total")

    return [float(w) / total for w in weights]


def linear_weights(num_items: int) -> List[float]:
    """
    Synthetic pmf where item i has weight proportional to i + 1.
    """
    if num_items <= 0:
        raise ValueError("num_items must be > 0")
    return normalize_weights([float(i + 1) for i in range(num_items)])


def float_to_item(f: float, num_items: int) -> int:
    """
    Remap f in [0, 1] to an item index in [0, num_items - 1].

    f == 1.0 (or rounding just above it) saturates to the last item.
    """
    if num_items <= 0:
        raise ValueError("num_items must be > 0")

    item = int(math.floor(f * num_items))
    if item >= num_items:
        return num_items - 1
    if item < 0:
        return 0
    return item


def float_to_weighted_item(f: float, weights: Sequence[float]) -> int:
    """
    Pick an item by walking the cumulative distribution of a normalized
    weight vector: subtract each weight from f until it drops to <= 0.

    If rounding leaves a positive residual after the last weight, the last
    item is returned.
    Negative or non-finite weights raise InvalidWeights.
    """
    check_weights(weights)
    n = len(weights)

    for i, w in enumerate(weights):
        f -= w
        if f <= 0.0:
            return i

    # Numerical fallback
    return n - 1
