from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from spending_planner.core.types import CurrencyIncome
from spending_planner.currencies.currency_config import StoneIncomeBreakdown
# spending_planner/income/validation.py

MIN_GROWTH_RATE = -100.0
MAX_GROWTH_RATE = 1000.0


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def clamp_number(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def ensure_non_negative(value: float) -> float:
    return max(0.0, value)


def clamp_growth_rate(value: float) -> float:
    return clamp_number(value, MIN_GROWTH_RATE, MAX_GROWTH_RATE)


def validate_currency_income(income: CurrencyIncome) -> ValidationResult:
    """收集所有错误，而不是遇到第一个就返回"""
    errors: List[str] = []

    if income.current_balance < 0:
        errors.append("Current balance cannot be negative")
    if income.weekly_income < 0:
        errors.append("Weekly income cannot be negative")
    if income.growth_rate_percent < MIN_GROWTH_RATE:
        errors.append("Growth rate cannot be less than -100%")
    if income.growth_rate_percent > MAX_GROWTH_RATE:
        errors.append("Growth rate cannot exceed 1000%")

    return ValidationResult(is_valid=not errors, errors=errors)


def validate_stone_breakdown(breakdown: StoneIncomeBreakdown) -> ValidationResult:
    errors: List[str] = []

    if breakdown.weekly_challenges < 0:
        errors.append("Weekly challenges cannot be negative")
    if breakdown.event_store < 0:
        errors.append("Event store cannot be negative")
    if breakdown.tournament_results < 0:
        errors.append("Tournament results cannot be negative")
    if breakdown.purchased_with_money < 0:
        errors.append("Purchased stones cannot be negative")

    return ValidationResult(is_valid=not errors, errors=errors)
