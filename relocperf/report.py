"""
Rendering of evaluation results.

The table goes to stderr so that stdout only carries the score read by the
parameter search in validation mode.
"""

import json
import os
import sys
from typing import Mapping, Sequence

from relocperf.sequence import SequenceResult, Stage
from relocperf.summary import EvaluationSummary

NAME_WIDTH = 15
COLUMN_WIDTH = 8
CSV_SEPARATOR = "; "

CSV_HEADER = ["FrameIdx", "FramePct"] + [
    f"{stage.label} {column}" for stage in Stage for column in ("Success", "Sum", "Pct")]


def _format_row(name, count, values) -> str:
    cells = [f"{name:<{NAME_WIDTH}}", f"{count:>{COLUMN_WIDTH}}"]
    cells += [f"{value:>{COLUMN_WIDTH}.2f}" for value in values]
    return "".join(cells)


def format_table(results: Mapping[str, SequenceResult], sequence_names: Sequence[str],
                 summary: EvaluationSummary) -> str:
    """
    Build the results table, percentages with two decimals.

    Sequences listed in ``sequence_names`` but missing from ``results`` (their
    evaluation failed) are shown with zero poses.
    """
    header = f"{'Sequence':<{NAME_WIDTH}}{'Poses':>{COLUMN_WIDTH}}" + "".join(
        f"{stage.label:>{COLUMN_WIDTH}}" for stage in Stage)
    lines = [header]

    for name in sequence_names:
        res = results.get(name, SequenceResult())
        lines.append(_format_row(
            name, res.pose_count, [res.success_rate(stage) * 100.0 for stage in Stage]))

    lines.append("")
    lines.append(_format_row(
        "Average", summary.sequence_count,
        [summary[stage].unweighted * 100.0 for stage in Stage]))
    lines.append(_format_row(
        "Average (W)", summary.pose_count,
        [summary[stage].weighted * 100.0 for stage in Stage]))
    return "\n".join(lines)


def print_table(results, sequence_names, summary, file=None) -> None:
    print(format_table(results, sequence_names, summary), file=file or sys.stderr)


def write_online_csv(path: str, result: SequenceResult) -> None:
    """
    Write the per-frame trace of a sequence, with running sums and rates.

    Running rates are over the frames seen so far, current frame included.
    """
    sums = {stage: 0 for stage in Stage}
    with open(path, "w") as f:
        f.write(CSV_SEPARATOR.join(CSV_HEADER) + "\n")
        for idx in range(result.pose_count):
            row = [idx, idx / result.pose_count]
            for stage in Stage:
                success = result.matches(stage)[idx]
                sums[stage] += success
                row += [int(success), sums[stage], sums[stage] / (idx + 1)]
            f.write(CSV_SEPARATOR.join(str(value) for value in row) + "\n")


def write_online_csvs(csv_dir: str, reloc_tag: str,
                      results: Mapping[str, SequenceResult],
                      sequence_names: Sequence[str]) -> None:
    os.makedirs(csv_dir, exist_ok=True)
    for name in sequence_names:
        out_path = os.path.join(csv_dir, f"{reloc_tag}_{name}.csv")
        write_online_csv(out_path, results.get(name, SequenceResult()))
        print(f"[report] Online results saved to {out_path}", file=sys.stderr)


def summary_to_dict(results: Mapping[str, SequenceResult],
                    summary: EvaluationSummary) -> dict:
    return {
        'sequences': {
            name: {
                'pose_count': res.pose_count,
                'match_counts': {stage.label: res.match_count(stage) for stage in Stage},
                'success_rates': {stage.label: res.success_rate(stage) for stage in Stage},
            }
            for name, res in results.items()
        },
        'summary': {
            'sequence_count': summary.sequence_count,
            'pose_count': summary.pose_count,
            'unweighted': {stage.label: summary[stage].unweighted for stage in Stage},
            'weighted': {stage.label: summary[stage].weighted for stage in Stage},
        },
    }


def write_summary_json(path: str, results: Mapping[str, SequenceResult],
                       summary: EvaluationSummary) -> None:
    """Save per-sequence counts and the dataset summary as JSON."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "w") as f:
        json.dump(summary_to_dict(results, summary), f, indent=2)
    print(f"[report] Summary saved to {path}", file=sys.stderr)
