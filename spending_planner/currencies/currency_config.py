from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from spending_planner.core.types import CurrencyId, CurrencyIncome
# spending_planner/currencies/currency_config.py


@dataclass(frozen=True)
class CurrencyConfig:
    id: CurrencyId
    display_name: str
    abbreviation: str
    # 是否需要 K / M / B / T 单位输入
    has_unit_selector: bool
    # timeline 上的短名，缺省为 display_name
    timeline_name: Optional[str] = None

    @property
    def short_name(self) -> str:
        return self.timeline_name or self.display_name


CURRENCY_CONFIGS: Dict[CurrencyId, CurrencyConfig] = {
    CurrencyId.COINS: CurrencyConfig(
        id=CurrencyId.COINS,
        display_name="Coins",
        abbreviation="c",
        has_unit_selector=True,
    ),
    CurrencyId.STONES: CurrencyConfig(
        id=CurrencyId.STONES,
        display_name="Stones",
        abbreviation="st",
        has_unit_selector=False,
    ),
    CurrencyId.REROLL_SHARDS: CurrencyConfig(
        id=CurrencyId.REROLL_SHARDS,
        display_name="Reroll Shards",
        timeline_name="Shards",
        abbreviation="rs",
        has_unit_selector=True,
    ),
    CurrencyId.GEMS: CurrencyConfig(
        id=CurrencyId.GEMS,
        display_name="Gems",
        abbreviation="g",
        has_unit_selector=False,
    ),
}

CURRENCY_ORDER: List[CurrencyId] = [
    CurrencyId.COINS,
    CurrencyId.STONES,
    CurrencyId.REROLL_SHARDS,
    CurrencyId.GEMS,
]

DEFAULT_GROWTH_RATE_PERCENT: Dict[CurrencyId, float] = {
    CurrencyId.COINS: 5.0,
}


def get_currency_config(currency_id: CurrencyId) -> CurrencyConfig:
    return CURRENCY_CONFIGS[CurrencyId(currency_id)]


def get_all_currency_configs() -> List[CurrencyConfig]:
    return [CURRENCY_CONFIGS[c] for c in CURRENCY_ORDER]


def is_valid_currency_id(value) -> bool:
    try:
        CurrencyId(value)
    except ValueError:
        return False
    return True


def create_default_income(
    currency_id: CurrencyId,
    growth_rates: Optional[Mapping[str, float]] = None,
) -> CurrencyIncome:
    """
    零余额、零收入；增长率来自 growth_rates（PlannerConfig），缺省 coins=5%
    """
    currency_id = CurrencyId(currency_id)
    if growth_rates is None:
        growth = DEFAULT_GROWTH_RATE_PERCENT.get(currency_id, 0.0)
    else:
        growth = float(growth_rates.get(currency_id.value, 0.0))

    return CurrencyIncome(
        currency_id=currency_id,
        current_balance=0.0,
        weekly_income=0.0,
        growth_rate_percent=growth,
    )


# =============================================================================
# Manual income breakdowns
# =============================================================================
@dataclass(frozen=True)
class StoneIncomeBreakdown:
    weekly_challenges: float = 0.0
    event_store: float = 0.0
    tournament_results: float = 0.0
    purchased_with_money: float = 0.0


@dataclass(frozen=True)
class GemIncomeBreakdown:
    ad_gems: float = 0.0
    floating_gems: float = 0.0
    store_daily_gems: float = 0.0
    store_weekly_gems: float = 0.0
    missions_daily_completion: float = 0.0
    missions_weekly_chests: float = 0.0
    tournaments: float = 0.0
    biweekly_event_shop: float = 0.0
    guild_weekly_chests: float = 0.0
    guild_seasonal_store: float = 0.0
    offer_walls: float = 0.0
    purchased_with_money: float = 0.0


def _sum_sources(breakdown) -> float:
    return float(sum(getattr(breakdown, f.name) for f in fields(breakdown)))


def calculate_stone_income(breakdown: StoneIncomeBreakdown) -> float:
    return _sum_sources(breakdown)


def calculate_gem_income(breakdown: GemIncomeBreakdown) -> float:
    return _sum_sources(breakdown)


def apply_breakdown(
    incomes: Sequence[CurrencyIncome], currency_id: CurrencyId, weekly_income: float
) -> List[CurrencyIncome]:
    """Replace one currency's weekly_income with a breakdown total."""
    return [
        replace(i, weekly_income=weekly_income) if i.currency_id == currency_id else i
        for i in incomes
    ]


# =============================================================================
# Enabled currencies
# =============================================================================
def get_enabled_currencies_in_order(enabled: Iterable[CurrencyId]) -> List[CurrencyId]:
    enabled_set = set(enabled)
    return [c for c in CURRENCY_ORDER if c in enabled_set]


def is_currency_enabled(enabled: Iterable[CurrencyId], currency_id: CurrencyId) -> bool:
    return currency_id in set(enabled)


def toggle_currency_enabled(
    enabled: Sequence[CurrencyId], currency_id: CurrencyId
) -> List[CurrencyId]:
    """Keeps CURRENCY_ORDER; the last enabled currency cannot be disabled."""
    if currency_id in enabled:
        if len(enabled) <= 1:
            return list(enabled)
        return [c for c in enabled if c != currency_id]

    return get_enabled_currencies_in_order([*enabled, currency_id])
