from __future__ import annotations
from typing import Dict, List, Sequence

from spending_planner.core.chains import validate_chain_links
from spending_planner.core.priority import sort_by_priority
from spending_planner.core.types import (
    CurrencyId,
    CurrencyIncome,
    DateLike,
    SpendingEvent,
    TimelineData,
    TimelineEvent,
)
from spending_planner.income.projection import income_at_week
from spending_planner.income.validation import MIN_GROWTH_RATE
from spending_planner.utils.datetime_utils import WeekUtils
from spending_planner.utils.errors import TimelineValidationError

"""
{#!filepath: spending_planner/engine/timeline_engine.py}

Timeline Calculation Engine (FINAL / FROZEN)

Role:
- Given starting balances, weekly income and a priority-ordered queue of
  spending events, find the week each event becomes affordable.

Week semantics (week = 0 .. weeks-1):
  1. credit income_at_week(week) to every currency
     (week 0 scaled by week0_proration_factor)
  2. waterfall: scan untriggered events in priority order, trigger every
     eligible event with balance >= amount, repeat until a pass triggers
     nothing
  3. record end-of-week balances

Eligibility:
- unchained, OR predecessor already triggered (this week or earlier)

Invariants:
- Pure: no IO, no logging, no shared state; same input -> equal output.
- Balances never go negative (trigger requires balance >= amount).
- Currencies never exchange value.
- triggered dependents never precede their predecessor.
"""


def _check_income(income: CurrencyIncome) -> None:
    """
    只拒绝会让余额变负的输入；增长率上限属于表单层（income.validation）
    """
    errors: List[str] = []

    if income.current_balance < 0:
        errors.append("Current balance cannot be negative")
    if income.weekly_income < 0:
        errors.append("Weekly income cannot be negative")
    if income.growth_rate_percent < MIN_GROWTH_RATE:
        errors.append("Growth rate cannot be less than -100%")

    if errors:
        raise TimelineValidationError(
            f"invalid income for {income.currency_id.value}: {'; '.join(errors)}"
        )


def _validate_inputs(
    incomes: Sequence[CurrencyIncome],
    events: Sequence[SpendingEvent],
    weeks: int,
    week0_proration_factor: float,
) -> None:
    if weeks < 0:
        raise TimelineValidationError(f"weeks must be >= 0, got {weeks}")

    if not (0 < week0_proration_factor <= 1):
        raise TimelineValidationError(
            f"week0_proration_factor must be in (0, 1], got {week0_proration_factor}"
        )

    seen_currencies = set()
    for income in incomes:
        if not isinstance(income.currency_id, CurrencyId):
            raise TimelineValidationError(f"unknown currency: {income.currency_id!r}")
        if income.currency_id in seen_currencies:
            raise TimelineValidationError(f"duplicate income for {income.currency_id.value}")
        seen_currencies.add(income.currency_id)

        _check_income(income)

    seen_ids = set()
    for e in events:
        if e.id in seen_ids:
            raise TimelineValidationError(f"duplicate event id: {e.id!r}")
        seen_ids.add(e.id)

        if not isinstance(e.currency_id, CurrencyId) or e.currency_id not in seen_currencies:
            raise TimelineValidationError(
                f"event {e.id!r} uses unknown currency {e.currency_id!r}"
            )
        if e.amount < 0:
            raise TimelineValidationError(f"event {e.id!r} has negative amount {e.amount}")
        if e.duration_days is not None and e.duration_days <= 0:
            raise TimelineValidationError(
                f"event {e.id!r} duration_days must be > 0, got {e.duration_days}"
            )

    validate_chain_links(events)


def _is_eligible(event: SpendingEvent, triggered: Dict[str, TimelineEvent]) -> bool:
    return event.locked_to_event_id is None or event.locked_to_event_id in triggered


def _run_week(
    week: int,
    ordered: List[SpendingEvent],
    balances: Dict[CurrencyId, float],
    triggered: Dict[str, TimelineEvent],
    start_date: DateLike,
) -> None:
    """waterfall：直到一整轮没有新的触发为止"""
    trigger_date = WeekUtils.add_weeks(start_date, week)

    fired = True
    while fired:
        fired = False
        for event in ordered:
            if event.id in triggered or not _is_eligible(event, triggered):
                continue

            if balances[event.currency_id] < event.amount:
                continue

            balances[event.currency_id] -= event.amount

            end_date = None
            if event.duration_days:
                end_date = WeekUtils.add_days(trigger_date, event.duration_days)

            triggered[event.id] = TimelineEvent(
                event=event,
                trigger_week=week,
                trigger_date=trigger_date,
                balance_at_trigger=balances[event.currency_id],
                end_date=end_date,
            )
            fired = True


def calculate_timeline(
    incomes: Sequence[CurrencyIncome],
    events: Sequence[SpendingEvent],
    weeks: int,
    *,
    start_date: DateLike,
    week0_proration_factor: float = 1.0,
) -> TimelineData:
    """
    Simulate `weeks` weeks and schedule every event.

    Raises
    ------
    TimelineValidationError
        invalid weeks / proration / incomes / events
    CorruptChainError
        chain links violate priority monotonicity
    """
    _validate_inputs(incomes, events, weeks, week0_proration_factor)

    ordered = sort_by_priority(events)

    income_by_currency: Dict[CurrencyId, CurrencyIncome] = {i.currency_id: i for i in incomes}
    balances: Dict[CurrencyId, float] = {
        c: float(i.current_balance) for c, i in income_by_currency.items()
    }
    balances_by_week: Dict[CurrencyId, List[float]] = {c: [] for c in income_by_currency}
    income_by_week: Dict[CurrencyId, List[float]] = {c: [] for c in income_by_currency}

    triggered: Dict[str, TimelineEvent] = {}

    for week in range(weeks):
        # ① 入账
        for currency_id, income in income_by_currency.items():
            credit = income_at_week(income, week)
            if week == 0:
                credit *= week0_proration_factor
            balances[currency_id] += credit
            income_by_week[currency_id].append(credit)

        # ② 触发
        _run_week(week, ordered, balances, triggered, start_date)

        # ③ 周末余额
        for currency_id in income_by_currency:
            balances_by_week[currency_id].append(balances[currency_id])

    return TimelineData(
        events=[triggered[e.id] for e in ordered if e.id in triggered],
        balances_by_week=balances_by_week,
        income_by_week=income_by_week,
        unaffordable_events=[e for e in ordered if e.id not in triggered],
    )
