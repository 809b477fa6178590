from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union
# spending_planner/core/types.py

DateLike = Union[date, datetime]


# -------------------------
# Currency
# -------------------------
class CurrencyId(str, Enum):
    COINS = "coins"
    STONES = "stones"
    REROLL_SHARDS = "rerollShards"
    GEMS = "gems"


@dataclass(frozen=True)
class CurrencyIncome:
    currency_id: CurrencyId
    current_balance: float = 0.0
    # week 0 的收入（增长前）
    weekly_income: float = 0.0
    # 每周复利增长率，5 表示 5%
    growth_rate_percent: float = 0.0


# -------------------------
# Spending event
# -------------------------
@dataclass(frozen=True)
class SpendingEvent:
    id: str
    name: str
    currency_id: CurrencyId
    amount: float
    priority: int
    duration_days: Optional[float] = None      # labs 等持续型事件，仅用于 end_date
    locked_to_event_id: Optional[str] = None   # 前驱事件 id（chain）


# -------------------------
# Engine output
# -------------------------
@dataclass(frozen=True)
class TimelineEvent:
    event: SpendingEvent
    trigger_week: int
    trigger_date: DateLike
    balance_at_trigger: float                  # 扣款之后的余额
    end_date: Optional[DateLike] = None


@dataclass(frozen=True)
class TimelineData:
    """
    TimelineData (FINAL / FROZEN)

    calculate_timeline() 的不可变结果：
      - events              : 已触发事件，按全局 priority 排序
      - balances_by_week    : currency -> 每周末余额（所有触发之后）
      - income_by_week      : currency -> 每周实际入账（week 0 已折算）
      - unaffordable_events : 时间窗口内无法触发的事件，按 priority 排序
    """

    events: List[TimelineEvent]
    balances_by_week: Dict[CurrencyId, List[float]]
    income_by_week: Dict[CurrencyId, List[float]]
    unaffordable_events: List[SpendingEvent]

    def copy(self) -> "TimelineData":
        """新的 list / dict 容器（元素本身是不可变的）"""
        return TimelineData(
            events=list(self.events),
            balances_by_week={c: list(v) for c, v in self.balances_by_week.items()},
            income_by_week={c: list(v) for c, v in self.income_by_week.items()},
            unaffordable_events=list(self.unaffordable_events),
        )

    def find(self, event_id: str) -> Optional[TimelineEvent]:
        for te in self.events:
            if te.event.id == event_id:
                return te
        return None
