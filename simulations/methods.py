# simulations/methods.py

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .common import ExperimentSpec, ExperimentResult, Timer

from quasirandom_rolls.alias_table import make_alias_table
from quasirandom_rolls.item_mapping import float_to_item, float_to_weighted_item
from quasirandom_rolls.point_generators import R2Additive, r2, sobol
from quasirandom_rolls.scalar import (
    GOLDEN_RATIO_CONJUGATE,
    PI_FRACT,
    SQRT2_FRACT,
    AdditiveRecurrence,
    WhiteNoise,
)


LOG = logging.getLogger(__name__)

SimFn = Callable[..., ExperimentResult]

UNWEIGHTED = "unweighted"
WEIGHTED = "weighted"


def _check_weights(spec: ExperimentSpec, weights: Optional[Sequence[float]]) -> None:
    if weights is not None and len(weights) != spec.num_items:
        raise ValueError(
            f"expected {spec.num_items} weights, got {len(weights)}"
        )


def _map_scalars(
    method: str,
    spec: ExperimentSpec,
    next_value: Callable[[], float],
    weights: Optional[Sequence[float]],
    meta: Dict,
) -> ExperimentResult:
    """
    Draw total_rolls scalars and map each one to an item: uniformly when
    weights is None, otherwise through the cumulative weights.
    """
    n = spec.total_rolls
    num_items = spec.num_items
    sequence: List[int] = [0] * n

    with Timer() as t:
        if weights is None:
            for i in range(n):
                sequence[i] = float_to_item(next_value(), num_items)
        else:
            for i in range(n):
                sequence[i] = float_to_weighted_item(next_value(), weights)

    return ExperimentResult(
        method=method,
        label=LABELS[method],
        spec=spec,
        sequence=sequence,
        runtime_s=t.elapsed_s,
        meta=dict(meta, weighted=weights is not None),
    )


def _recurrence(
    method: str,
    increment: float,
    spec: ExperimentSpec,
    weights: Optional[Sequence[float]],
) -> ExperimentResult:
    _check_weights(spec, weights)
    source = AdditiveRecurrence(increment)
    return _map_scalars(method, spec, source.next, weights, {"increment": increment})


# --- Scalar schemes (weighted or unweighted) -----------------------------------

def simulate_sequential(
    spec: ExperimentSpec, weights: Optional[Sequence[float]] = None
) -> ExperimentResult:
    """
    Step through [0, 1) by the width of the narrowest item, starting half
    a step in so values never land exactly on an item boundary.
    """
    _check_weights(spec, weights)
    if weights is None:
        delta = 1.0 / spec.num_items
    else:
        positive = [w for w in weights if w > 0]
        if not positive:
            raise ValueError("weights must contain a positive value")
        delta = min(positive)

    source = AdditiveRecurrence(delta, start=delta / 2.0)
    return _map_scalars("sequential", spec, source.next, weights, {"increment": delta})


def simulate_white_noise(
    spec: ExperimentSpec, weights: Optional[Sequence[float]] = None
) -> ExperimentResult:
    """
    IID uniform values from a seeded pseudorandom stream.
    """
    _check_weights(spec, weights)
    noise = WhiteNoise(spec.rng_seed)
    return _map_scalars("white_noise", spec, noise.next, weights, {"seed": spec.rng_seed})


def simulate_golden_ratio(spec, weights=None):
    return _recurrence("golden_ratio", GOLDEN_RATIO_CONJUGATE, spec, weights)


def simulate_one_minus_golden_ratio(spec, weights=None):
    return _recurrence("one_minus_golden_ratio", 1.0 - GOLDEN_RATIO_CONJUGATE, spec, weights)


def simulate_pi(spec, weights=None):
    return _recurrence("pi", PI_FRACT, spec, weights)


def simulate_one_minus_pi(spec, weights=None):
    return _recurrence("one_minus_pi", 1.0 - PI_FRACT, spec, weights)


def simulate_sqrt2(spec, weights=None):
    return _recurrence("sqrt2", SQRT2_FRACT, spec, weights)


# --- Alias table schemes (weighted only) ---------------------------------------

def _sample_points(
    method: str,
    spec: ExperimentSpec,
    weights: Sequence[float],
    next_point: Callable[[int], Sequence[float]],
    meta: Dict,
) -> ExperimentResult:
    """
    Build the alias table once and feed it one 2D point per roll.
    next_point receives the roll index.
    """
    if weights is None:
        raise ValueError(f"method '{method}' needs weights")
    _check_weights(spec, weights)

    table = make_alias_table(weights)
    n = spec.total_rolls
    sequence: List[int] = [0] * n

    with Timer() as t:
        for i in range(n):
            x, y = next_point(i)
            sequence[i] = table.sample(x, y)

    return ExperimentResult(
        method=method,
        label=LABELS[method],
        spec=spec,
        sequence=sequence,
        runtime_s=t.elapsed_s,
        meta=dict(meta, weighted=True),
    )


def simulate_alias_white_noise(spec: ExperimentSpec, weights: Sequence[float]) -> ExperimentResult:
    noise = WhiteNoise(spec.rng_seed)
    return _sample_points(
        "alias_white_noise", spec, weights,
        lambda i: noise.next_point(),
        {"seed": spec.rng_seed},
    )


def simulate_alias_r2(spec: ExperimentSpec, weights: Sequence[float]) -> ExperimentResult:
    return _sample_points("alias_r2", spec, weights, r2, {})


def simulate_alias_r2_additive(spec: ExperimentSpec, weights: Sequence[float]) -> ExperimentResult:
    cursor = R2Additive()
    return _sample_points(
        "alias_r2_additive", spec, weights,
        lambda i: cursor.next(),
        {},
    )


def simulate_alias_gr_sqrt2(spec: ExperimentSpec, weights: Sequence[float]) -> ExperimentResult:
    """
    Two independent 1D recurrences as the axes: golden ratio for the
    column, sqrt(2) for the accept test.
    """
    golden = AdditiveRecurrence(GOLDEN_RATIO_CONJUGATE)
    root2 = AdditiveRecurrence(SQRT2_FRACT)
    return _sample_points(
        "alias_gr_sqrt2", spec, weights,
        lambda i: (golden.next(), root2.next()),
        {},
    )


def simulate_alias_sobol(spec: ExperimentSpec, weights: Sequence[float]) -> ExperimentResult:
    """
    Sobol points generated up front for the full roll count.
    """
    points = sobol(spec.total_rolls)
    return _sample_points(
        "alias_sobol", spec, weights,
        lambda i: points[i],
        {},
    )


# --- Registry / dispatch -----------------------------------------------------

LABELS: Dict[str, str] = {
    "sequential": "Sequential",
    "white_noise": "White Noise",
    "golden_ratio": "Golden Ratio",
    "one_minus_golden_ratio": "One Minus Golden Ratio",
    "pi": "Pi",
    "one_minus_pi": "One Minus Pi",
    "sqrt2": "Sqrt2",
    "alias_white_noise": "Alias White Noise",
    "alias_r2": "Alias R2",
    "alias_r2_additive": "Alias R2 (Additive)",
    "alias_gr_sqrt2": "Alias GR / Sqrt2",
    "alias_sobol": "Alias Sobol",
}

SCALAR_METHODS: Dict[str, SimFn] = {
    "sequential": simulate_sequential,
    "white_noise": simulate_white_noise,
    "golden_ratio": simulate_golden_ratio,
    "one_minus_golden_ratio": simulate_one_minus_golden_ratio,
    "pi": simulate_pi,
    "one_minus_pi": simulate_one_minus_pi,
    "sqrt2": simulate_sqrt2,
}

ALIAS_METHODS: Dict[str, SimFn] = {
    "alias_white_noise": simulate_alias_white_noise,
    "alias_r2": simulate_alias_r2,
    "alias_r2_additive": simulate_alias_r2_additive,
    "alias_gr_sqrt2": simulate_alias_gr_sqrt2,
    "alias_sobol": simulate_alias_sobol,
}

# METHODS maps mode -> method name -> function. Weighted functions take the
# pmf as their second argument.
METHODS: Dict[str, Dict[str, SimFn]] = {
    UNWEIGHTED: dict(SCALAR_METHODS),
    WEIGHTED: dict(SCALAR_METHODS, **ALIAS_METHODS),
}

# Shown only in verbose runs.
VERBOSE_ONLY = ("one_minus_golden_ratio", "one_minus_pi")


def get_method(mode: str, name: str) -> SimFn:
    mode = mode.strip().lower()
    name = name.strip().lower()
    if mode not in METHODS:
        raise ValueError(f"unknown mode '{mode}'. Available: {sorted(METHODS.keys())}")
    if name not in METHODS[mode]:
        raise ValueError(
            f"unknown {mode} method '{name}'. Available: {sorted(METHODS[mode].keys())}"
        )
    return METHODS[mode][name]


def methods_for(mode: str, spec: ExperimentSpec) -> List[str]:
    """
    Method names to run for a mode, in report order.
    """
    mode = mode.strip().lower()
    if mode not in METHODS:
        raise ValueError(f"unknown mode '{mode}'. Available: {sorted(METHODS.keys())}")

    names = [n for n in SCALAR_METHODS if n not in VERBOSE_ONLY]
    if mode == WEIGHTED:
        names.extend(ALIAS_METHODS)
    if spec.verbose:
        names.extend(VERBOSE_ONLY)
    return names
