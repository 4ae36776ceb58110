"""
测试公共配置
"""

import matplotlib

# 测试中不打开交互窗口
matplotlib.use("Agg")

import pytest

from event_display.testing import create_simple_gdml, create_step_records


@pytest.fixture
def gdml_file(tmp_path):
    """简化几何GDML文件"""
    return create_simple_gdml(tmp_path / "simple.gdml")


@pytest.fixture
def step_records():
    """打乱顺序的步数据 (3个事例, 每个4条径迹, 每条5步)"""
    return create_step_records(n_events=3, tracks_per_event=4, steps_per_track=5, shuffle=True, seed=1)
