# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import time

from quasirandom_rolls.scalar import DEFAULT_SEED


DEFAULT_NUM_ITEMS = 10
DEFAULT_ROLLS_SHOW = 80
DEFAULT_HISTOGRAM_ROLLS: Tuple[int, ...] = (10, 100, 1000, 10000, 100000, 1000000)
DEFAULT_BASE_CHARACTER = "0"


@dataclass(frozen=True)
class ExperimentSpec:
    """
    Parameters shared by every sampling scheme in a run.

    verbose turns on the extra "one minus" sequences. deterministic=False
    seeds the white noise streams from system entropy instead of seed.
    """
    num_items: int = DEFAULT_NUM_ITEMS
    rolls_show: int = DEFAULT_ROLLS_SHOW
    histogram_rolls: Tuple[int, ...] = DEFAULT_HISTOGRAM_ROLLS
    base_character: str = DEFAULT_BASE_CHARACTER
    verbose: bool = False
    deterministic: bool = True
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        if self.num_items <= 0:
            raise ValueError("num_items must be > 0")
        if self.rolls_show < 0:
            raise ValueError("rolls_show must be >= 0")
        if not self.histogram_rolls:
            raise ValueError("histogram_rolls must be non-empty")
        for count in self.histogram_rolls:
            if count <= 0:
                raise ValueError("histogram_rolls must all be > 0")
        if list(self.histogram_rolls) != sorted(self.histogram_rolls):
            raise ValueError("histogram_rolls must be in increasing order")
        if len(self.base_character) != 1:
            raise ValueError("base_character must be a single character")

    @property
    def total_rolls(self) -> int:
        return max(max(self.histogram_rolls), self.rolls_show)

    @property
    def rng_seed(self) -> Optional[int]:
        return self.seed if self.deterministic else None


def histogram(sequence: Sequence[int], count: int, num_items: int) -> List[float]:
    """
    Normalized frequency of each item over the first count draws.
    """
    if count <= 0:
        raise ValueError("count must be > 0")
    if count > len(sequence):
        raise ValueError(
            f"count {count} exceeds sequence length {len(sequence)}"
        )

    counts = [0] * num_items
    for i in range(count):
        counts[sequence[i]] += 1
    return [c / count for c in counts]


def l1_distance(a: Sequence[float], b: Sequence[float]) -> float:
    if len(a) != len(b):
        raise ValueError("vectors must have the same length")
    total = 0.0
    for x, y in zip(a, b):
        total += abs(x - y)
    return total


@dataclass
class ExperimentResult:
    """
    Common return type for all sampling schemes: the item index drawn at
    each roll, in order.
    """
    method: str
    label: str
    spec: ExperimentSpec
    sequence: List[int]

    runtime_s: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        expected = self.spec.total_rolls
        if len(self.sequence) != expected:
            raise ValueError(
                f"sequence length mismatch: expected {expected}, got {len(self.sequence)}"
            )

    def histogram(self, count: int) -> List[float]:
        return histogram(self.sequence, count, self.spec.num_items)

    def l1_error(self, target: Sequence[float], count: int) -> float:
        return l1_distance(self.histogram(count), target)


class Timer:
    """
    Tiny timing helper for simulations.
    Usage:
        with Timer() as t:
            ...
        elapsed = t.elapsed_s
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.perf_counter() - self._start


def format_sequence(sequence: Sequence[int], count: int, base_character: str) -> str:
    """
    Render the first count items as characters offset from base_character.
    """
    base = ord(base_character)
    return "".join(chr(base + item) for item in sequence[:count])


def format_error_line(r: ExperimentResult, target: Sequence[float]) -> str:
    """
    Human-friendly one-liner: L1 error against target at each checkpoint.
    """
    parts = [
        f"{count}={r.l1_error(target, count):.5f}"
        for count in r.spec.histogram_rolls
    ]
    return (
        f"{r.label}: L1 " + ", ".join(parts)
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )
