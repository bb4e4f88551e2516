#!/usr/bin/env python3
"""
Relocalisation performance evaluation.

For every sequence of a dataset, compares the poses produced by a
relocaliser (raw, after ICP, after ICP + verification) with the ground truth
using the 7-scenes criterion (<= 5 cm and <= 5 deg), then reports the
percentage of relocalised frames per sequence together with unweighted
(per-sequence) and weighted (per-frame) averages.

Expected layout:
    <dataset>/<sequence>/{train,test,validation}/frame-XXXXXX.pose.txt
    <reloc_base>/<tag>_<sequence>/pose-XXXXXX.{reloc,icp,final}.txt

Usage:
    relocperf -d /data/7scenes -r /results -t experiment1
    relocperf -d /data/7scenes -r /results -t experiment1 --use-validation
    relocperf -d /data/7scenes -r /results -t experiment1 --online-evaluation --csv-dir csv/
"""

import argparse
import os
import sys
from typing import Dict, Iterable, Optional

from relocperf.dataset import find_sequence_names, gt_folder, reloc_folder
from relocperf.errors import RelocEvalError
from relocperf.metrics import PoseMatcher, SEVEN_SCENES
from relocperf.report import print_table, write_online_csvs, write_summary_json
from relocperf.sequence import SequenceEvaluator, SequenceResult, Stage
from relocperf.summary import summarize


def evaluate_dataset(dataset_folder: str, reloc_base_folder: str, reloc_tag: str,
                     sequence_names: Iterable[str], use_validation: bool = False,
                     evaluator: Optional[SequenceEvaluator] = None) -> Dict[str, SequenceResult]:
    """
    Evaluate every sequence, isolating failures.

    A sequence whose evaluation raises is reported and left out of the
    returned mapping; the remaining sequences are still evaluated.
    """
    evaluator = evaluator or SequenceEvaluator(PoseMatcher(SEVEN_SCENES))
    results = {}
    for sequence in sequence_names:
        gt_path = gt_folder(dataset_folder, sequence, use_validation)
        reloc_path = reloc_folder(reloc_base_folder, reloc_tag, sequence)
        print(f"[eval] Processing sequence {sequence} in: {gt_path}\t - {reloc_path}",
              file=sys.stderr)
        try:
            results[sequence] = evaluator.evaluate(gt_path, reloc_path)
        except (RelocEvalError, OSError) as e:
            print(f"[eval] \tSequence has not been evaluated: {e}", file=sys.stderr)
    return results


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Evaluate relocalisation results against ground truth poses (7-scenes criterion)."
    )
    parser.add_argument("--dataset-folder", "-d", required=True,
                        help="The path to the dataset.")
    parser.add_argument("--reloc-base-folder", "-r", required=True,
                        help="The path to the folder where the relocalised poses are stored.")
    parser.add_argument("--reloc-tag", "-t", required=True,
                        help="The tag assigned to the experiment to evaluate.")
    parser.add_argument("--use-validation", "-v", action="store_true",
                        help="Evaluate on the validation split and print the weighted ICP score to stdout.")
    parser.add_argument("--online-evaluation", "-o", action="store_true",
                        help="Save a per-frame CSV for the evaluation of online relocalisation.")
    parser.add_argument("--csv-dir", default=".",
                        help="Output directory for the online evaluation CSVs (default: current directory).")
    parser.add_argument("--json", default=None,
                        help="Optional path of a JSON file receiving the results.")
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)

    if not os.path.isdir(args.dataset_folder):
        print(f"Error: Dataset folder {args.dataset_folder} does not exist", file=sys.stderr)
        return 1

    sequence_names = find_sequence_names(args.dataset_folder)
    results = evaluate_dataset(
        args.dataset_folder,
        args.reloc_base_folder,
        args.reloc_tag,
        sequence_names,
        use_validation=args.use_validation,
    )
    summary = summarize(results)

    print_table(results, sequence_names, summary)

    # Score read by the parameter search.
    if args.use_validation:
        print(summary[Stage.ICP].weighted * 100.0)

    if args.online_evaluation:
        write_online_csvs(args.csv_dir, args.reloc_tag, results, sequence_names)

    if args.json:
        write_summary_json(args.json, results, summary)

    return 0


if __name__ == "__main__":
    sys.exit(main())
