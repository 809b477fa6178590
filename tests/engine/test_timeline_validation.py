#!filepath: tests/engine/test_timeline_validation.py
import pytest

from spending_planner.core.types import CurrencyId
from spending_planner.engine.timeline_engine import calculate_timeline
from spending_planner.utils.errors import (
    CorruptChainError,
    TimelineValidationError,
    UserInputError,
)


def test_negative_weeks_rejected(make_income, start_date):
    with pytest.raises(TimelineValidationError):
        calculate_timeline([make_income()], [], -1, start_date=start_date)


@pytest.mark.parametrize("factor", [0, -0.5, 1.01])
def test_proration_factor_out_of_range(make_income, start_date, factor):
    with pytest.raises(TimelineValidationError):
        calculate_timeline([make_income()], [], 4, start_date=start_date, week0_proration_factor=factor)


def test_proration_factor_one_is_accepted(make_income, start_date):
    data = calculate_timeline([make_income(weekly=7)], [], 1, start_date=start_date, week0_proration_factor=1)
    assert data.income_by_week[CurrencyId.COINS] == [7]


def test_unknown_income_currency(make_income, start_date):
    with pytest.raises(TimelineValidationError):
        calculate_timeline([make_income("dollars")], [], 4, start_date=start_date)


def test_duplicate_income_rejected(make_income, start_date):
    with pytest.raises(TimelineValidationError, match="duplicate income"):
        calculate_timeline([make_income(), make_income(balance=5)], [], 4, start_date=start_date)


def test_invalid_income_values(make_income, start_date):
    with pytest.raises(TimelineValidationError, match="Weekly income cannot be negative"):
        calculate_timeline([make_income(weekly=-1)], [], 4, start_date=start_date)


def test_event_currency_without_income(make_income, make_event, start_date):
    events = [make_event("g", 10, currency=CurrencyId.GEMS)]
    with pytest.raises(TimelineValidationError, match="unknown currency"):
        calculate_timeline([make_income()], events, 4, start_date=start_date)


def test_negative_amount(make_income, make_event, start_date):
    with pytest.raises(TimelineValidationError, match="negative amount"):
        calculate_timeline([make_income()], [make_event("x", -5)], 4, start_date=start_date)


def test_duplicate_event_id(make_income, make_event, start_date):
    events = [make_event("x", priority=0), make_event("x", priority=1)]
    with pytest.raises(TimelineValidationError, match="duplicate event id"):
        calculate_timeline([make_income()], events, 4, start_date=start_date)


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_duration(make_income, make_event, start_date, days):
    with pytest.raises(TimelineValidationError):
        calculate_timeline([make_income()], [make_event("x", duration_days=days)], 4, start_date=start_date)


def test_validation_error_is_user_input_error(make_income, start_date):
    # CLI 统一按 UserInputError 处理
    with pytest.raises(UserInputError):
        calculate_timeline([make_income()], [], -3, start_date=start_date)


def test_corrupt_chain_is_hard_failure(make_income, make_event, start_date):
    events = [
        make_event("a", priority=1),
        make_event("b", priority=0, locked_to="a"),
    ]
    with pytest.raises(CorruptChainError):
        calculate_timeline([make_income()], events, 4, start_date=start_date)


def test_dangling_lock_is_hard_failure(make_income, make_event, start_date):
    with pytest.raises(CorruptChainError):
        calculate_timeline(
            [make_income()], [make_event("a", priority=1, locked_to="gone")], 4, start_date=start_date
        )


def test_growth_below_minus_100_rejected(make_income, start_date):
    with pytest.raises(TimelineValidationError, match="less than -100%"):
        calculate_timeline([make_income(weekly=10, growth=-150)], [], 4, start_date=start_date)


def test_event_currency_must_be_currency_id(make_income, make_event, start_date):
    # 与 income 一致：普通字符串 "coins" 不被接受
    with pytest.raises(TimelineValidationError, match="unknown currency"):
        calculate_timeline([make_income()], [make_event("a", 10, currency="coins")], 4, start_date=start_date)
