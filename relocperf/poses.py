"""
Reader for rigid camera poses stored as text.

A pose file holds 16 whitespace-separated numbers: the 4x4 camera-to-world
transform in row-major order (row 0 first), without any header.
"""

import os

import numpy as np

from relocperf.errors import MissingFileError, PoseFormatError


def read_pose_file(path: str) -> np.ndarray:
    """
    Read a 4x4 rigid transform from disk.

    The matrix is returned as-is: no orthonormality check, no normalisation.
    The returned array is read-only.

    Raises:
        MissingFileError: if ``path`` is not a regular file.
        PoseFormatError: if the file is not ASCII text holding exactly 16 numbers.
    """
    if not os.path.isfile(path):
        raise MissingFileError(f"File not found: {path}")

    try:
        with open(path, "r", encoding="ascii") as f:
            tokens = f.read().split()
    except UnicodeDecodeError as e:
        raise PoseFormatError(f"{path}: not an ASCII pose file ({e})") from e

    if len(tokens) != 16:
        raise PoseFormatError(
            f"{path}: expected 16 values for a 4x4 pose, found {len(tokens)}")
    try:
        values = np.array([float(tok) for tok in tokens], dtype=np.float64)
    except ValueError as e:
        raise PoseFormatError(f"{path}: {e}") from e

    pose = values.reshape(4, 4)
    pose.setflags(write=False)
    return pose


def write_pose_file(path: str, pose: np.ndarray) -> None:
    """Write a 4x4 transform in the row-major layout read by read_pose_file."""
    pose = np.asarray(pose, dtype=np.float64)
    if pose.shape != (4, 4):
        raise PoseFormatError(f"{path}: wrong shape {pose.shape}, expected (4, 4)")
    np.savetxt(path, pose, fmt="%.9f")
