"""
Pose accuracy criterion used to score relocalisation results.

A relocalised pose is accepted when it is within 5 cm and 5 degrees of the
ground truth (the "7-scenes" criterion). Both limits must hold; there is no
partial credit.
"""

import os
from dataclasses import dataclass

import numpy as np

from relocperf.poses import read_pose_file


@dataclass(frozen=True)
class MatchThresholds:
    """
    Limits a pose must respect to count as relocalised.

    Both limits are widened by ``tolerance``: an error is accepted when it is
    <= limit + tolerance, so 0.0500000005 m passes the default 0.05 m limit.
    """
    max_translation_error: float  # meters
    max_angle_error: float        # radians
    # Round-off allowed when an error lands exactly on a limit.
    tolerance: float = 1e-9


SEVEN_SCENES = MatchThresholds(
    max_translation_error=0.05,
    max_angle_error=np.deg2rad(5.0),
)


def translation_error(gt_pose: np.ndarray, test_pose: np.ndarray) -> float:
    """Euclidean distance between the translations of two 4x4 transforms."""
    return float(np.linalg.norm(gt_pose[:3, 3] - test_pose[:3, 3]))


def angular_separation(r1: np.ndarray, r2: np.ndarray) -> float:
    """
    Angle (radians, in [0, pi]) of the rotation mapping r1 onto r2.

    This is the angle of the angle-axis decomposition of ``r2 @ r1.T``. The
    cosine is clamped so round-off on near-identical or opposite rotations
    cannot push it outside arccos' domain.
    """
    dr = r2 @ r1.T
    cos_angle = (np.trace(dr) - 1.0) / 2.0
    return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)))


class PoseMatcher:
    """Decides whether relocalised poses agree with the ground truth."""

    def __init__(self, thresholds: MatchThresholds = SEVEN_SCENES):
        self.thresholds = thresholds

    def errors(self, gt_pose: np.ndarray, test_pose: np.ndarray):
        """Return (translation error [m], angle error [rad])."""
        return (translation_error(gt_pose, test_pose),
                angular_separation(gt_pose[:3, :3], test_pose[:3, :3]))

    def matches(self, gt_pose: np.ndarray, test_pose: np.ndarray) -> bool:
        t_err, r_err = self.errors(gt_pose, test_pose)
        th = self.thresholds
        return (t_err <= th.max_translation_error + th.tolerance
                and r_err <= th.max_angle_error + th.tolerance)

    def file_matches(self, gt_pose: np.ndarray, pose_file: str,
                     is_file=os.path.isfile, read_pose=read_pose_file) -> bool:
        """
        Check the pose stored in ``pose_file`` against ``gt_pose``.

        A missing file means the stage produced no pose for this frame and
        counts as a failure. A file that exists but cannot be parsed raises.
        """
        if not is_file(pose_file):
            return False
        return self.matches(gt_pose, read_pose(pose_file))
