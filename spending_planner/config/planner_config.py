from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Dict, Literal

TimelineWeeks = Literal[4, 8, 12, 26, 52]

ALLOWED_TIMELINE_WEEKS = (4, 8, 12, 26, 52)


class PlannerConfig(BaseModel):
    """
    PlannerConfig

    语义：
      - timeline 默认跨度（周）
      - 计算结果缓存大小（TimelinePlanner 使用）
      - 新建 income 时的默认增长率（按 currency id）
    """

    default_weeks: TimelineWeeks = 12

    cache_size: int = Field(32, ge=1)

    # currency id -> growth rate percent；未列出的 currency 为 0
    default_growth_rate_percent: Dict[str, float] = Field(
        default_factory=lambda: {"coins": 5.0}
    )
