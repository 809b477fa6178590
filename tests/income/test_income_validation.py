#!filepath: tests/income/test_income_validation.py
import pytest

from spending_planner.currencies.currency_config import StoneIncomeBreakdown
from spending_planner.income.validation import (
    clamp_growth_rate,
    clamp_number,
    ensure_non_negative,
    validate_currency_income,
    validate_stone_breakdown,
)


def test_valid_income(make_income):
    result = validate_currency_income(make_income(balance=0, weekly=10, growth=1000))
    assert result.is_valid
    assert result.errors == []


def test_income_collects_every_error(make_income):
    result = validate_currency_income(make_income(balance=-1, weekly=-2, growth=-101))

    assert not result.is_valid
    assert result.errors == [
        "Current balance cannot be negative",
        "Weekly income cannot be negative",
        "Growth rate cannot be less than -100%",
    ]


def test_growth_rate_upper_bound(make_income):
    result = validate_currency_income(make_income(growth=1000.5))
    assert result.errors == ["Growth rate cannot exceed 1000%"]


def test_stone_breakdown():
    assert validate_stone_breakdown(StoneIncomeBreakdown(weekly_challenges=5)).is_valid

    result = validate_stone_breakdown(
        StoneIncomeBreakdown(weekly_challenges=-1, event_store=-1, tournament_results=-1, purchased_with_money=-1)
    )
    assert result.errors == [
        "Weekly challenges cannot be negative",
        "Event store cannot be negative",
        "Tournament results cannot be negative",
        "Purchased stones cannot be negative",
    ]


@pytest.mark.parametrize(
    "value,expected",
    [(-500, -100), (-100, -100), (12.5, 12.5), (1000, 1000), (5000, 1000)],
)
def test_clamp_growth_rate(value, expected):
    assert clamp_growth_rate(value) == expected


def test_clamp_helpers():
    assert clamp_number(5, 0, 3) == 3
    assert clamp_number(-5, 0, 3) == 0
    assert ensure_non_negative(-0.1) == 0
    assert ensure_non_negative(2) == 2
