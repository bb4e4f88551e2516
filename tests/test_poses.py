import numpy as np
import pytest

from relocperf.errors import MissingFileError, PoseFormatError
from relocperf.poses import read_pose_file, write_pose_file


def test_read_pose_row_major(tmp_path):
    path = tmp_path / "frame-000000.pose.txt"
    path.write_text("1 2 3 4\n5 6 7 8\n9 10 11 12\n13 14 15 16\n")

    pose = read_pose_file(str(path))

    assert pose.shape == (4, 4)
    assert pose[0, 3] == 4.0
    assert pose[1, 0] == 5.0
    assert pose[3, 3] == 16.0


def test_read_pose_any_whitespace(tmp_path):
    path = tmp_path / "pose.txt"
    path.write_text(" ".join(str(v) for v in np.eye(4).ravel()))

    np.testing.assert_array_equal(read_pose_file(str(path)), np.eye(4))


def test_read_pose_is_read_only(tmp_path):
    path = tmp_path / "pose.txt"
    write_pose_file(str(path), np.eye(4))

    pose = read_pose_file(str(path))
    with pytest.raises(ValueError):
        pose[0, 0] = 2.0


def test_missing_file(tmp_path):
    with pytest.raises(MissingFileError):
        read_pose_file(str(tmp_path / "nope.txt"))


def test_directory_is_not_a_pose(tmp_path):
    with pytest.raises(MissingFileError):
        read_pose_file(str(tmp_path))


def test_wrong_value_count(tmp_path):
    path = tmp_path / "pose.txt"
    path.write_text("1 0 0 0\n0 1 0 0\n0 0 1 0\n")

    with pytest.raises(PoseFormatError):
        read_pose_file(str(path))


def test_non_numeric_value(tmp_path):
    path = tmp_path / "pose.txt"
    path.write_text("1 0 0 0\n0 1 0 0\n0 0 1 0\n0 0 0 x\n")

    with pytest.raises(PoseFormatError):
        read_pose_file(str(path))


def test_write_then_read(tmp_path):
    pose = np.arange(16, dtype=np.float64).reshape(4, 4) / 8.0
    path = tmp_path / "pose.txt"
    write_pose_file(str(path), pose)

    np.testing.assert_allclose(read_pose_file(str(path)), pose)


def test_undecodable_file(tmp_path):
    path = tmp_path / "pose.txt"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(PoseFormatError):
        read_pose_file(str(path))
