"""
Per-sequence evaluation of relocalisation results.

Ground-truth poses of a sequence live in one folder, the poses produced by
the relocaliser in another. Frames are indexed from 0 and the sequence ends
at the first index without a ground-truth file.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

import numpy as np

from relocperf.errors import SequenceNotFoundError
from relocperf.metrics import PoseMatcher
from relocperf.poses import read_pose_file

GT_POSE_TEMPLATE = "frame-{:06d}.pose.txt"


class Stage(Enum):
    """Stages of the relocalisation pipeline, in pipeline order."""
    RELOC = ("Reloc", "pose-{:06d}.reloc.txt")
    ICP = ("ICP", "pose-{:06d}.icp.txt")
    FINAL = ("Final", "pose-{:06d}.final.txt")

    def __init__(self, label, template):
        self.label = label
        self.template = template


@dataclass
class StageResults:
    match_count: int = 0
    matches: List[bool] = field(default_factory=list)


@dataclass
class SequenceResult:
    """Relocalisation outcome of every frame of one sequence."""
    pose_count: int = 0
    stages: Dict[Stage, StageResults] = field(
        default_factory=lambda: {stage: StageResults() for stage in Stage})

    def record(self, frame_matches: Dict[Stage, bool]) -> None:
        """Append the outcome of the next frame for every stage."""
        for stage in Stage:
            valid = bool(frame_matches[stage])
            stage_results = self.stages[stage]
            stage_results.matches.append(valid)
            stage_results.match_count += valid
        self.pose_count += 1

    def match_count(self, stage: Stage) -> int:
        return self.stages[stage].match_count

    def matches(self, stage: Stage) -> List[bool]:
        return self.stages[stage].matches

    def success_rate(self, stage: Stage) -> float:
        """Fraction of frames relocalised at ``stage`` (0 for an empty sequence)."""
        if self.pose_count == 0:
            return 0.0
        return self.stages[stage].match_count / self.pose_count


@dataclass(frozen=True)
class SequenceLayout:
    """Paths of the pose files of one sequence."""
    gt_folder: str
    reloc_folder: str

    def gt_path(self, index: int) -> str:
        return os.path.join(self.gt_folder, GT_POSE_TEMPLATE.format(index))

    def stage_path(self, stage: Stage, index: int) -> str:
        return os.path.join(self.reloc_folder, stage.template.format(index))


def frame_indices(is_present: Callable[[int], bool], start: int = 0) -> Iterator[int]:
    """Yield start, start+1, ... until ``is_present`` fails for an index."""
    index = start
    while is_present(index):
        yield index
        index += 1


class SequenceEvaluator:
    """Scores the three pipeline stages of a sequence against ground truth."""

    def __init__(self, matcher: Optional[PoseMatcher] = None,
                 is_file: Callable[[str], bool] = os.path.isfile,
                 read_pose: Callable[[str], np.ndarray] = read_pose_file,
                 is_dir: Callable[[str], bool] = os.path.isdir):
        self.matcher = matcher or PoseMatcher()
        self.is_file = is_file
        self.is_dir = is_dir
        self.read_pose = read_pose

    def evaluate_frame(self, layout: SequenceLayout, index: int) -> Dict[Stage, bool]:
        # The ground truth was seen on disk: failing to read it is fatal.
        gt_pose = self.read_pose(layout.gt_path(index))
        return {
            stage: self.matcher.file_matches(
                gt_pose, layout.stage_path(stage, index),
                is_file=self.is_file, read_pose=self.read_pose)
            for stage in Stage
        }

    def evaluate(self, gt_folder: str, reloc_folder: str) -> SequenceResult:
        """
        Evaluate one sequence.

        Args:
            gt_folder: Folder holding ``frame-XXXXXX.pose.txt`` files
            reloc_folder: Folder holding ``pose-XXXXXX.{reloc,icp,final}.txt`` files

        Returns:
            The SequenceResult of the sequence. A ground-truth folder without
            frame 0 gives an empty result.

        Raises:
            SequenceNotFoundError: if ``gt_folder`` is not a directory.
        """
        if not self.is_dir(gt_folder):
            raise SequenceNotFoundError(f"Ground truth folder not found: {gt_folder}")

        layout = SequenceLayout(gt_folder, reloc_folder)
        result = SequenceResult()
        for index in frame_indices(lambda i: self.is_file(layout.gt_path(i))):
            result.record(self.evaluate_frame(layout, index))
        return result
