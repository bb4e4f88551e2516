"""Aggregation of per-sequence results into dataset-level statistics."""

from dataclasses import dataclass
from typing import Dict, Mapping

from relocperf.sequence import SequenceResult, Stage


@dataclass(frozen=True)
class StageSummary:
    unweighted: float  # mean of per-sequence success rates
    weighted: float    # relocalised frames / total frames


@dataclass(frozen=True)
class EvaluationSummary:
    sequence_count: int  # sequences with at least one frame
    pose_count: int
    stages: Dict[Stage, StageSummary]

    def __getitem__(self, stage: Stage) -> StageSummary:
        return self.stages[stage]


def summarize(results: Mapping[str, SequenceResult]) -> EvaluationSummary:
    """
    Fold sequence results into unweighted and weighted averages per stage.

    The unweighted average gives every sequence the same weight, the weighted
    one every frame. Sequences without frames have no success rate and are
    left out of the unweighted average; they add nothing to the weighted one.
    """
    non_empty = [res for res in results.values() if res.pose_count > 0]
    pose_count = sum(res.pose_count for res in non_empty)

    stages = {}
    for stage in Stage:
        if non_empty:
            unweighted = sum(res.success_rate(stage) for res in non_empty) / len(non_empty)
            weighted = sum(res.match_count(stage) for res in non_empty) / pose_count
        else:
            unweighted = weighted = 0.0
        stages[stage] = StageSummary(unweighted=unweighted, weighted=weighted)

    return EvaluationSummary(
        sequence_count=len(non_empty),
        pose_count=pose_count,
        stages=stages,
    )
