#!/usr/bin/env python
"""
Event Display - Main Runner Script

This script opens a GDML geometry and, optionally, the Monte Carlo truth
tracks of a simulation output file.

Usage:
    python run_event_display.py detector.gdml
    python run_event_display.py detector.gdml run.root -e 2 -vis 3 -s
    python run_event_display.py cms2018.gdml run.root -cms --save Figures/run

Without arguments a synthetic geometry and step table are generated in
Data/ and event 0 is drawn.
"""

from pathlib import Path
import sys

# 添加项目根目录到路径（确保可以导入 event_display）
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from event_display.runner import main as runner_main
from event_display.testing import create_simple_gdml, create_step_records, write_step_csv


def main():
    """脚本入口点"""
    if len(sys.argv) > 1:
        # 如果有命令行参数，使用 argparse 处理
        return runner_main()

    # 默认运行 - 使用合成数据
    data_dir = project_dir / "Data"
    gdml = create_simple_gdml(data_dir / "demo.gdml")
    steps = write_step_csv(create_step_records(n_events=3), data_dir / "demo_steps.csv")
    return runner_main([str(gdml), str(steps), "-e", "0", "-vis", "2", "-s"])


if __name__ == "__main__":
    sys.exit(main())
