# simulations/compare.py

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from .common import (
    DEFAULT_HISTOGRAM_ROLLS,
    DEFAULT_NUM_ITEMS,
    DEFAULT_ROLLS_SHOW,
    ExperimentResult,
    ExperimentSpec,
    format_error_line,
)
from .methods import UNWEIGHTED, WEIGHTED
from .report import save_histograms, show_sequences
from .run import resolve_weights, run_suite

from quasirandom_rolls.scalar import DEFAULT_SEED


LOG = logging.getLogger(__name__)

DEFAULT_OUT_DIR = "out"


def plot_convergence(
    results_by_mode: Sequence[tuple],
    spec: ExperimentSpec,
    path: str,
) -> None:
    """
    Save a log-log plot of L1 error against roll count, one panel per mode.
    """
    fig, axes = plt.subplots(1, len(results_by_mode), figsize=(6 * len(results_by_mode), 4))
    if len(results_by_mode) == 1:
        axes = [axes]

    xs = list(spec.histogram_rolls)
    for ax, (title, results, target) in zip(axes, results_by_mode):
        for r in results:
            # Floor at a tiny value so exact hits still show on a log axis.
            ys = [max(r.l1_error(target, c), 1e-9) for c in xs]
            ax.plot(xs, ys, marker="o", label=r.label)
        ax.set_xscale("log")
        ax.set_yscale("log")
        ax.set_title(title)
        ax.set_xlabel("Rolls")
        ax.set_ylabel("L1 error")
        ax.legend(fontsize="small")

    fig.suptitle(f"Convergence (items={spec.num_items})")
    fig.tight_layout(rect=[0, 0.02, 1, 0.92])
    fig.savefig(path)
    plt.close(fig)
    LOG.info("saved convergence plot to %s", path)


def _print_errors(results: List[ExperimentResult], target: Sequence[float]) -> None:
    for r in results:
        print(format_error_line(r, target))
    print("")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare item roll schemes by how fast their histograms converge."
    )
    parser.add_argument("--items", type=int, default=DEFAULT_NUM_ITEMS, help="number of items")
    parser.add_argument(
        "--rolls", type=int, nargs="+", default=list(DEFAULT_HISTOGRAM_ROLLS),
        help="histogram checkpoints, increasing",
    )
    parser.add_argument("--show", type=int, default=DEFAULT_ROLLS_SHOW, help="rolls to print per scheme")
    parser.add_argument("--out", default=DEFAULT_OUT_DIR, help="directory for histogram CSVs")
    parser.add_argument("--verbose", action="store_true", help="include the one-minus sequences")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="white noise seed")
    parser.add_argument(
        "--random-seed", action="store_true",
        help="seed white noise from system entropy instead of --seed",
    )
    parser.add_argument("--plot", default=None, help="save a convergence plot to this file")
    parser.add_argument("--log-level", default="WARNING", help="e.g. DEBUG | INFO | WARNING")

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    spec = ExperimentSpec(
        num_items=args.items,
        rolls_show=args.show,
        histogram_rolls=tuple(args.rolls),
        verbose=args.verbose,
        deterministic=not args.random_seed,
        seed=args.seed,
    )

    uniform_target = [1.0 / spec.num_items] * spec.num_items
    unweighted = run_suite(UNWEIGHTED, spec)
    show_sequences("Unweighted", unweighted, spec)
    _print_errors(unweighted, uniform_target)
    save_histograms(unweighted, spec, UNWEIGHTED, args.out)

    weights = resolve_weights(WEIGHTED, spec)
    weighted = run_suite(WEIGHTED, spec, weights)
    show_sequences("Weighted", weighted, spec)
    _print_errors(weighted, weights)
    save_histograms(weighted, spec, WEIGHTED, args.out, target=weights)

    if args.plot:
        plot_convergence(
            [
                ("Unweighted", unweighted, uniform_target),
                ("Weighted", weighted, weights),
            ],
            spec,
            args.plot,
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
