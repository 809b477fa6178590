from __future__ import annotations
from typing import List, Optional, Sequence

from spending_planner.core.types import CurrencyIncome
# spending_planner/income/projection.py


def income_at_week(income: CurrencyIncome, week: int) -> float:
    """
    weekly_income * (1 + g/100) ** week

    复利作用于基础周收入，而不是余额。
    """
    return income.weekly_income * (1 + income.growth_rate_percent / 100) ** week


def project_incomes(
    income: CurrencyIncome, weeks: int, week0_proration_factor: float = 1.0
) -> List[float]:
    """每周实际入账（index 0 = week 0，已按比例折算）"""
    out: List[float] = []
    for week in range(weeks):
        credit = income_at_week(income, week)
        if week == 0:
            credit *= week0_proration_factor
        out.append(credit)
    return out


def project_balances(
    income: CurrencyIncome, weeks: int, week0_proration_factor: float = 1.0
) -> List[float]:
    """
    No-spending balance curve.

    index 0 = current balance, index w + 1 = balance after week w's income.
    """
    balances = [income.current_balance]
    for credit in project_incomes(income, weeks, week0_proration_factor):
        balances.append(balances[-1] + credit)
    return balances


def find_affordable_week(balances: Sequence[float], amount: float) -> Optional[int]:
    for week, balance in enumerate(balances):
        if balance >= amount:
            return week
    return None
