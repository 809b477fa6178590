#!filepath: spending_planner/planner.py
from __future__ import annotations

from collections import OrderedDict
from dataclasses import replace
from datetime import datetime
from typing import Hashable, List, Optional, Sequence, Tuple

from spending_planner.config.planner_config import PlannerConfig
from spending_planner.core.types import (
    CurrencyIncome,
    DateLike,
    SpendingEvent,
    TimelineData,
)
from spending_planner.engine.timeline_engine import calculate_timeline
from spending_planner.observability.instrumentation import Instrumentation
from spending_planner.persistence.state_adapter import PlannerState
from spending_planner.utils.datetime_utils import WeekUtils
from spending_planner.utils.logger import logs


class TimelinePlanner:
    """
    TimelinePlanner（host 侧封装）

    职责：
      - 按输入 hash 缓存 calculate_timeline 结果（LRU）
      - 日志 / 计时 / metrics
      - 从 PlannerState 推导 start_date 与 week 0 折算比例
      - 每次返回新的 TimelineData 容器，调用方修改结果不会影响缓存

    calculate_timeline 本身保持纯函数；缓存策略只存在于这里。
    """

    def __init__(self, cfg: PlannerConfig | None = None, inst: Instrumentation | None = None):
        self.cfg = cfg if cfg is not None else PlannerConfig()
        self.inst = inst if inst is not None else Instrumentation(enabled=False)
        self._cache: "OrderedDict[Hashable, TimelineData]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    # --------------------------------------------------
    # cache
    # --------------------------------------------------
    @staticmethod
    def _cache_key(
        incomes: Sequence[CurrencyIncome],
        events: Sequence[SpendingEvent],
        weeks: int,
        start_date: DateLike,
        week0_proration_factor: float,
    ) -> Tuple:
        # frozen dataclass 可 hash
        return (tuple(incomes), tuple(events), weeks, start_date, week0_proration_factor)

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    # --------------------------------------------------
    # calculation
    # --------------------------------------------------
    def calculate(
        self,
        incomes: Sequence[CurrencyIncome],
        events: Sequence[SpendingEvent],
        weeks: Optional[int] = None,
        *,
        start_date: DateLike,
        week0_proration_factor: float = 1.0,
    ) -> TimelineData:
        if weeks is None:
            weeks = self.cfg.default_weeks

        key = self._cache_key(incomes, events, weeks, start_date, week0_proration_factor)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.hits += 1
            self.inst.metrics.increment("cache_hits")
            logs.debug(f"[Planner] cache hit weeks={weeks} events={len(events)}")
            return cached.copy()

        self.misses += 1
        self.inst.metrics.increment("cache_misses")

        with self.inst.timer("calculate_timeline"):
            data = calculate_timeline(
                incomes,
                events,
                weeks,
                start_date=start_date,
                week0_proration_factor=week0_proration_factor,
            )

        self.inst.metrics.record("events_triggered", len(data.events))
        self.inst.metrics.record("events_unaffordable", len(data.unaffordable_events))
        logs.info(
            f"[Planner] weeks={weeks} triggered={len(data.events)} "
            f"unaffordable={len(data.unaffordable_events)}"
        )
        for e in data.unaffordable_events:
            logs.debug(f"[Planner] unaffordable: {e.name} ({e.currency_id.value} {e.amount})")

        # 日志 / metrics 成功之后才写入缓存
        self._cache[key] = data
        while len(self._cache) > self.cfg.cache_size:
            self._cache.popitem(last=False)

        return data.copy()

    def plan_state(
        self,
        state: PlannerState,
        *,
        now: Optional[DateLike] = None,
        weeks: Optional[int] = None,
    ) -> TimelineData:
        """
        Run a normalised PlannerState.

        - start_date = start of the current (Sunday-based) week
        - week 0 income prorated by the days left in that week
        - only enabled currencies take part; locks to events of a disabled
          currency are dropped for this run
        """
        if now is None:
            now = datetime.now()

        enabled = set(state.enabled_currencies)
        incomes = [i for i in state.incomes if i.currency_id in enabled]
        events = _events_for_currencies(state.events, enabled)

        return self.calculate(
            incomes,
            events,
            weeks if weeks is not None else state.weeks,
            start_date=WeekUtils.get_week_start(now),
            week0_proration_factor=WeekUtils.current_week_proration_factor(now),
        )


def _events_for_currencies(events: Sequence[SpendingEvent], enabled: set) -> List[SpendingEvent]:
    kept = [e for e in events if e.currency_id in enabled]
    kept_ids = {e.id for e in kept}
    return [
        replace(e, locked_to_event_id=None)
        if e.locked_to_event_id is not None and e.locked_to_event_id not in kept_ids
        else e
        for e in kept
    ]


def can_afford(data: TimelineData, event_id: str) -> bool:
    """True when the event triggers inside the simulated horizon."""
    return data.find(event_id) is not None
