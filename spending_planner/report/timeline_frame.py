# spending_planner/report/timeline_frame.py
from __future__ import annotations

import pandas as pd

from spending_planner.core.types import DateLike, TimelineData
from spending_planner.utils.datetime_utils import WeekUtils

PROJECTION_COLUMNS = ["week", "week_start", "currency", "income", "balance"]
EVENT_COLUMNS = [
    "priority", "id", "name", "currency", "amount",
    "trigger_week", "trigger_date", "end_date", "balance_at_trigger",
]


def timeline_to_frame(data: TimelineData, start_date: DateLike) -> pd.DataFrame:
    """
    Long-format projection: one row per (currency, week).

    Columns: week, week_start, currency, income, balance
    """
    rows = []
    for currency_id, balances in data.balances_by_week.items():
        incomes = data.income_by_week.get(currency_id, [])
        for week, balance in enumerate(balances):
            rows.append(
                dict(
                    week=week,
                    week_start=WeekUtils.week_start_date(week, start_date),
                    currency=currency_id.value,
                    income=incomes[week] if week < len(incomes) else 0.0,
                    balance=balance,
                )
            )

    return pd.DataFrame(rows, columns=PROJECTION_COLUMNS)


def events_to_frame(data: TimelineData) -> pd.DataFrame:
    """Triggered events in priority order, then unaffordable ones (trigger_week = NA)."""
    rows = []
    for te in data.events:
        e = te.event
        rows.append(
            dict(
                priority=e.priority,
                id=e.id,
                name=e.name,
                currency=e.currency_id.value,
                amount=e.amount,
                trigger_week=te.trigger_week,
                trigger_date=te.trigger_date,
                end_date=te.end_date,
                balance_at_trigger=te.balance_at_trigger,
            )
        )

    for e in data.unaffordable_events:
        rows.append(
            dict(
                priority=e.priority,
                id=e.id,
                name=e.name,
                currency=e.currency_id.value,
                amount=e.amount,
                trigger_week=None,
                trigger_date=None,
                end_date=None,
                balance_at_trigger=None,
            )
        )

    df = pd.DataFrame(rows, columns=EVENT_COLUMNS)
    df["trigger_week"] = df["trigger_week"].astype("Int64")
    return df


def balance_pivot(data: TimelineData) -> pd.DataFrame:
    """week x currency balance table"""
    return pd.DataFrame(
        {c.value: balances for c, balances in data.balances_by_week.items()}
    ).rename_axis("week")
