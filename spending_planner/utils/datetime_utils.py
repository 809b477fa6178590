#!filepath: spending_planner/utils/datetime_utils.py
from __future__ import annotations
import math
from datetime import datetime, timedelta, date, time
from typing import List, Union

DateLike = Union[date, datetime]

DAYS_PER_WEEK = 7


class WeekUtils:
    """
    Planner 时间工具（周粒度）

    约定：
      - 一周从周日开始（与游戏周重置一致）
      - week N 的起点 = start + 7 * N 天
      - date / datetime 均可输入，返回类型与输入一致
    """

    # ================================================================
    # 基础加减
    # ================================================================
    @classmethod
    def add_days(cls, d: DateLike, days: float) -> DateLike:
        return d + timedelta(days=days)

    @classmethod
    def add_weeks(cls, d: DateLike, weeks: int) -> DateLike:
        return d + timedelta(days=weeks * DAYS_PER_WEEK)

    @classmethod
    def days_between(cls, start: DateLike, end: DateLike) -> int:
        return (end - start).days

    # ================================================================
    # week index <-> date
    # ================================================================
    @classmethod
    def week_number(cls, d: DateLike, start: DateLike) -> int:
        """相对 start 的周序号（向下取整，start 之前为负数）"""
        return cls.days_between(start, d) // DAYS_PER_WEEK

    @classmethod
    def week_start_date(cls, week: int, start: DateLike) -> DateLike:
        return cls.add_weeks(start, week)

    @classmethod
    def generate_week_dates(cls, start: DateLike, weeks: int) -> List[DateLike]:
        return [cls.add_weeks(start, w) for w in range(weeks)]

    # ================================================================
    # 当前周（周日起）
    # ================================================================
    @classmethod
    def _days_since_sunday(cls, d: DateLike) -> int:
        # weekday(): Monday=0 ... Sunday=6
        return (d.weekday() + 1) % DAYS_PER_WEEK

    @classmethod
    def get_week_start(cls, d: DateLike) -> DateLike:
        """上一个（或当天）周日，datetime 输入会归零到午夜"""
        start = d - timedelta(days=cls._days_since_sunday(d))
        if isinstance(start, datetime):
            return datetime.combine(start.date(), time.min, tzinfo=start.tzinfo)
        return start

    @classmethod
    def is_date_in_week(cls, d: DateLike, week_start: DateLike) -> bool:
        return 0 <= cls.days_between(week_start, d) < DAYS_PER_WEEK

    @classmethod
    def days_remaining_in_week(cls, d: DateLike) -> int:
        """包含当天：周日 -> 7，周六 -> 1"""
        return DAYS_PER_WEEK - cls._days_since_sunday(d)

    @classmethod
    def current_week_proration_factor(cls, d: DateLike) -> float:
        """week 0 收入折算比例 ∈ (0, 1]"""
        return cls.days_remaining_in_week(d) / DAYS_PER_WEEK

    # ---------------------------------------------------------------
    # duration / display
    # ---------------------------------------------------------------
    @classmethod
    def duration_to_weeks(cls, days: float) -> int:
        if days <= 0:
            return 0
        return math.ceil(days / DAYS_PER_WEEK)

    @classmethod
    def format_date_range(cls, start: DateLike, end: DateLike) -> str:
        return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}"
