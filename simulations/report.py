# simulations/report.py

from __future__ import annotations

import csv
import logging
import os
import sys
from typing import List, Optional, Sequence, TextIO

from .common import ExperimentSpec, ExperimentResult, format_sequence


LOG = logging.getLogger(__name__)

Row = List[str]


def show_sequences(
    title: str,
    results: Sequence[ExperimentResult],
    spec: ExperimentSpec,
    out: Optional[TextIO] = None,
) -> None:
    """
    Print a banner and the first rolls_show items of every scheme, one
    character per item.
    """
    out = out if out is not None else sys.stdout
    print(f"=================== {title} ===================\n", file=out)
    for r in results:
        print(f"  {r.label}:", file=out)
        print("    " + format_sequence(r.sequence, spec.rolls_show, spec.base_character), file=out)
        print("", file=out)


def histogram_rows(
    results: Sequence[ExperimentResult],
    count: int,
    target: Optional[Sequence[float]] = None,
) -> List[Row]:
    """
    One row per scheme: label followed by the normalized frequency of each
    item over the first count rolls. A "Weights" row with the target pmf
    comes first when target is given.
    """
    rows: List[Row] = []
    if target is not None:
        rows.append(["Weights"] + ["%f" % w for w in target])
    for r in results:
        rows.append([r.label] + ["%f" % f for f in r.histogram(count)])
    return rows


def write_histogram_csv(rows: Sequence[Row], kind: str, count: int, out_dir: str) -> str:
    """
    Write rows to out_dir/histogram_{kind}_{count}.csv with every cell
    quoted. Returns the path written.
    """
    path = os.path.join(out_dir, f"histogram_{kind}_{count}.csv")
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(rows)
    LOG.debug("wrote %s (%d rows)", path, len(rows))
    return path


def save_histograms(
    results: Sequence[ExperimentResult],
    spec: ExperimentSpec,
    kind: str,
    out_dir: str,
    target: Optional[Sequence[float]] = None,
) -> List[str]:
    """
    Write one histogram CSV per checkpoint in spec.histogram_rolls.
    """
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for count in spec.histogram_rolls:
        rows = histogram_rows(results, count, target)
        paths.append(write_histogram_csv(rows, kind, count, out_dir))
    LOG.info("wrote %d %s histograms to %s", len(paths), kind, out_dir)
    return paths
