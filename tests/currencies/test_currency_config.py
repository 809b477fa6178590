#!filepath: tests/currencies/test_currency_config.py
import pytest

from spending_planner.core.types import CurrencyId
from spending_planner.currencies.currency_config import (
    CURRENCY_ORDER,
    GemIncomeBreakdown,
    StoneIncomeBreakdown,
    apply_breakdown,
    calculate_gem_income,
    calculate_stone_income,
    create_default_income,
    get_all_currency_configs,
    get_currency_config,
    get_enabled_currencies_in_order,
    is_currency_enabled,
    is_valid_currency_id,
    toggle_currency_enabled,
)


def test_currency_configs():
    coins = get_currency_config(CurrencyId.COINS)
    assert coins.abbreviation == "c"
    assert coins.has_unit_selector

    shards = get_currency_config("rerollShards")
    assert shards.display_name == "Reroll Shards"
    assert shards.short_name == "Shards"

    assert get_currency_config(CurrencyId.GEMS).short_name == "Gems"
    assert [c.id for c in get_all_currency_configs()] == CURRENCY_ORDER


def test_unknown_currency_config():
    with pytest.raises(ValueError):
        get_currency_config("dollars")


def test_is_valid_currency_id():
    assert is_valid_currency_id("stones")
    assert is_valid_currency_id(CurrencyId.GEMS)
    assert not is_valid_currency_id("dollars")


def test_create_default_income():
    coins = create_default_income(CurrencyId.COINS)
    assert coins.current_balance == 0
    assert coins.weekly_income == 0
    assert coins.growth_rate_percent == 5.0

    assert create_default_income("gems").growth_rate_percent == 0.0


def test_create_default_income_with_configured_growth():
    income = create_default_income(CurrencyId.STONES, {"stones": 2.5})
    assert income.growth_rate_percent == 2.5
    # 未列出的 currency -> 0
    assert create_default_income(CurrencyId.COINS, {"stones": 2.5}).growth_rate_percent == 0.0


def test_breakdown_totals():
    stones = StoneIncomeBreakdown(weekly_challenges=10, event_store=5, tournament_results=20, purchased_with_money=1)
    assert calculate_stone_income(stones) == 36

    gems = GemIncomeBreakdown(ad_gems=14, store_daily_gems=7, offer_walls=3)
    assert calculate_gem_income(gems) == 24
    assert calculate_gem_income(GemIncomeBreakdown()) == 0


def test_apply_breakdown():
    incomes = [create_default_income(c) for c in CURRENCY_ORDER]

    result = apply_breakdown(incomes, CurrencyId.STONES, 36)

    assert [i.weekly_income for i in result] == [0, 36, 0, 0]
    assert incomes[1].weekly_income == 0


def test_enabled_currencies_keep_canonical_order():
    enabled = [CurrencyId.GEMS, CurrencyId.COINS]
    assert get_enabled_currencies_in_order(enabled) == [CurrencyId.COINS, CurrencyId.GEMS]
    assert is_currency_enabled(enabled, CurrencyId.GEMS)
    assert not is_currency_enabled(enabled, CurrencyId.STONES)


def test_toggle_currency_enabled():
    enabled = [CurrencyId.COINS, CurrencyId.GEMS]

    assert toggle_currency_enabled(enabled, CurrencyId.STONES) == [
        CurrencyId.COINS, CurrencyId.STONES, CurrencyId.GEMS,
    ]
    assert toggle_currency_enabled(enabled, CurrencyId.COINS) == [CurrencyId.GEMS]


def test_last_enabled_currency_cannot_be_disabled():
    assert toggle_currency_enabled([CurrencyId.GEMS], CurrencyId.GEMS) == [CurrencyId.GEMS]
