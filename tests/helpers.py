import os

import numpy as np
from scipy.spatial.transform import Rotation as R

from relocperf.poses import write_pose_file
from relocperf.sequence import GT_POSE_TEMPLATE, SequenceResult, Stage


def make_pose(rotvec_deg=(0.0, 0.0, 0.0), translation=(0.0, 0.0, 0.0)):
    """4x4 transform from a rotation vector (degrees) and a translation."""
    pose = np.eye(4)
    pose[:3, :3] = R.from_rotvec(rotvec_deg, degrees=True).as_matrix()
    pose[:3, 3] = translation
    return pose


def gt_pose(idx):
    return make_pose((0.0, 10.0 * idx, 0.0), (0.1 * idx, 0.0, 1.0))


def write_sequence(gt_dir, reloc_dir, frame_count, matching=None, skip=()):
    """
    Write ground truth frames 0..frame_count-1 (except ``skip``) and, for each
    stage in ``matching``, a result equal to the ground truth for the listed
    frame indices. Other result files are left absent.
    """
    os.makedirs(gt_dir, exist_ok=True)
    os.makedirs(reloc_dir, exist_ok=True)
    matching = matching or {}
    for idx in range(frame_count):
        if idx in skip:
            continue
        gt = gt_pose(idx)
        write_pose_file(os.path.join(gt_dir, GT_POSE_TEMPLATE.format(idx)), gt)
        for stage, frames in matching.items():
            if idx in frames:
                write_pose_file(os.path.join(reloc_dir, stage.template.format(idx)), gt)


def make_result(pose_count, reloc=0, icp=0, final=0):
    """Result whose first frames of each stage (``reloc``, ``icp``, ``final`` of them) are relocalised."""
    result = SequenceResult()
    for idx in range(pose_count):
        result.record({Stage.RELOC: idx < reloc, Stage.ICP: idx < icp, Stage.FINAL: idx < final})
    return result
