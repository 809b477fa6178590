#!filepath: spending_planner/observability/instrumentation.py
from __future__ import annotations

from dataclasses import dataclass
from contextlib import contextmanager
from collections import OrderedDict
from typing import Dict

from spending_planner.observability.timer import Timer
from spending_planner.observability.metrics import MetricRecorder
from spending_planner.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Instrumentation（timer + metrics）

    规则：
    1. timeline 只记录 record=True 的叶子计时
    2. record=False 的 timer 只定义时间边界，不产生副作用
    3. enabled=False 时全部 no-op
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        同名计时重复进入时累加耗时（缓存未命中的多次计算）。
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = inst.timeline.get(name, 0.0) + elapsed

        return _ctx()

    def generate_timeline_report(self, label: str):
        TimelineReporter(self.timeline, label).print()
