#!filepath: spending_planner/observability/timeline_reporter.py
from typing import Dict
from spending_planner.utils.logger import logs


class TimelineReporter:
    """
    计时报告：
    - timer 名称 → 耗时秒数
    """

    def __init__(self, timeline: Dict[str, float], label: str):
        self.timeline = timeline
        self.label = label

    def print(self):
        logs.info(f"[Timing] ===== {self.label} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timing] {str(name):<30} {sec:>8.6f}s")
            total += sec

        logs.info(f"[Timing] Total{'':<27} {total:>8.6f}s")
