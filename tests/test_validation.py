"""
验证工具的单元测试
"""

import numpy as np
import pytest

from event_display.core import Polyline, StepTable, assemble_step_tracks, track_style
from event_display.testing import (
    create_step_table,
    expected_track_points,
    run_quick_test,
    summarize_polylines,
    validate_against_table,
    validate_polylines,
)


class TestValidatePolylines:
    """测试径迹检查"""

    def test_valid(self):
        table = create_step_table(n_events=2, seed=4)
        valid, message = validate_polylines(list(assemble_step_tracks(table)))
        assert valid
        assert "Valid (8 tracks)" in message

    def test_duplicate_key(self):
        line = Polyline("0_1_e-", track_style(11), np.zeros((2, 3)), 0, 1, 11)
        valid, message = validate_polylines([line, line])
        assert not valid
        assert "emitted twice" in message

    def test_nan(self):
        points = np.array([[0, 0, 0], [np.nan, 0, 0]])
        line = Polyline("0_1_e-", track_style(11), points, 0, 1, 11)
        assert not validate_polylines([line])[0]

    def test_bad_shape(self):
        line = Polyline("0_1_e-", track_style(11), np.zeros((2, 2)), 0, 1, 11)
        assert not validate_polylines([line])[0]


class TestValidateAgainstTable:
    """测试与步数据表比较"""

    def test_expected_points(self):
        table = create_step_table(n_events=1, tracks_per_event=1, steps_per_track=3)
        expected = expected_track_points(table, 0, 1)
        assert expected.shape == (4, 3)
        assert expected_track_points(table, 0, 9).shape == (0, 3)

    def test_mismatch(self):
        table = create_step_table(n_events=1, tracks_per_event=2)
        lines = list(assemble_step_tracks(table))
        lines[1].points = lines[1].points[::-1]
        matches, mismatches = validate_against_table(lines, table)
        assert not matches
        assert mismatches == [lines[1].name]

    def test_summary(self):
        table = create_step_table(n_events=1, tracks_per_event=2, steps_per_track=2)
        assert summarize_polylines(assemble_step_tracks(table)) == [((0, 1), 3), ((0, 2), 3)]


class TestQuickTest:
    """测试快速自检"""

    def test_run_quick_test(self, capsys):
        assert run_quick_test(n_events=2, verbose=True)
        assert "All track points match" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
