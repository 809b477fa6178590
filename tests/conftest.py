# tests/conftest.py
from __future__ import annotations

from datetime import date

import pytest
from loguru import logger

from spending_planner.core.types import CurrencyId, CurrencyIncome, SpendingEvent


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture(scope="session")
def start_date() -> date:
    # 2025-01-05 是周日
    return date(2025, 1, 5)


@pytest.fixture
def make_event():
    """
    Factory fixture for SpendingEvent.

    Usage:
        e = make_event("a", 100)
        e = make_event("b", 50, priority=1, locked_to="a")
    """

    def _make(
        event_id: str,
        amount: float = 100,
        *,
        priority: int = 0,
        currency: CurrencyId = CurrencyId.COINS,
        locked_to: str | None = None,
        duration_days: float | None = None,
        name: str | None = None,
    ) -> SpendingEvent:
        return SpendingEvent(
            id=event_id,
            name=name or f"Event {event_id}",
            currency_id=currency,
            amount=amount,
            priority=priority,
            duration_days=duration_days,
            locked_to_event_id=locked_to,
        )

    return _make


@pytest.fixture
def make_income():
    def _make(
        currency: CurrencyId = CurrencyId.COINS,
        balance: float = 0.0,
        weekly: float = 0.0,
        growth: float = 0.0,
    ) -> CurrencyIncome:
        return CurrencyIncome(
            currency_id=currency,
            current_balance=balance,
            weekly_income=weekly,
            growth_rate_percent=growth,
        )

    return _make


@pytest.fixture
def chain_queue(make_event):
    """
    [free1, head, member(->head), free2]
    """
    return [
        make_event("free1", 100, priority=0),
        make_event("head", 200, priority=1),
        make_event("member", 300, priority=2, locked_to="head"),
        make_event("free2", 400, priority=3),
    ]
