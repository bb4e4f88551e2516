import pytest


@pytest.fixture
def sequence_dirs(tmp_path):
    return str(tmp_path / "gt"), str(tmp_path / "reloc")
