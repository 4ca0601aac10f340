from pathlib import Path

import pytest

SAMPLEDATA = Path(__file__).parent.parent / "sampledata"


@pytest.fixture
def racing_task_path():
    return SAMPLEDATA / "racing-task.tsk"


@pytest.fixture
def aat_task_path():
    return SAMPLEDATA / "aat-task.tsk"


@pytest.fixture
def all_oz_types_path():
    return SAMPLEDATA / "all-oz-types.tsk"


@pytest.fixture(params=["racing-task.tsk", "aat-task.tsk", "all-oz-types.tsk"])
def sample_task_path(request):
    return SAMPLEDATA / request.param
