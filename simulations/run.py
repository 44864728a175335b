# simulations/run.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .common import ExperimentSpec, ExperimentResult
from .methods import UNWEIGHTED, get_method, methods_for

from quasirandom_rolls.item_mapping import linear_weights


LOG = logging.getLogger(__name__)


def resolve_weights(
    mode: str,
    spec: ExperimentSpec,
    weights: Optional[Sequence[float]] = None,
) -> Optional[List[float]]:
    """
    Unweighted runs take no weights. Weighted runs default to the linear
    pmf where item i has weight proportional to i + 1.
    """
    if mode == UNWEIGHTED:
        if weights is not None:
            raise ValueError("unweighted runs do not take weights")
        return None
    if weights is None:
        return linear_weights(spec.num_items)
    return list(weights)


def run_experiment(
    mode: str,
    method: str,
    spec: ExperimentSpec,
    weights: Optional[Sequence[float]] = None,
) -> ExperimentResult:
    """
    Run a single sampling scheme and return an ExperimentResult.

    Parameters
    ----------
    mode:
        'unweighted' or 'weighted'.
    method:
        Name of the scheme (e.g., 'golden_ratio', 'alias_sobol').
    spec:
        Shared run parameters.
    weights:
        Normalized pmf for weighted runs. Defaults to linear weights.

    Returns
    -------
    ExperimentResult
    """
    mode = mode.strip().lower()
    fn = get_method(mode, method)
    resolved = resolve_weights(mode, spec, weights)

    if resolved is None:
        result = fn(spec)
    else:
        result = fn(spec, resolved)

    LOG.debug(
        "%s/%s: %d rolls in %.3fs",
        mode, result.method, len(result.sequence), result.runtime_s or 0.0,
    )
    return result


def run_suite(
    mode: str,
    spec: ExperimentSpec,
    weights: Optional[Sequence[float]] = None,
) -> List[ExperimentResult]:
    """
    Run every scheme enabled for mode under the same spec.
    """
    mode = mode.strip().lower()
    names = methods_for(mode, spec)
    resolved = resolve_weights(mode, spec, weights)
    LOG.info("running %d %s schemes, %d rolls each", len(names), mode, spec.total_rolls)

    return [
        run_experiment(mode, name, spec, resolved)
        for name in names
    ]
