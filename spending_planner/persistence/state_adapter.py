from __future__ import annotations

from dataclasses import dataclass, asdict, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from spending_planner.config.planner_config import ALLOWED_TIMELINE_WEEKS
from spending_planner.core.chains import validate_chain_links
from spending_planner.core.priority import sort_by_priority
from spending_planner.core.types import CurrencyId, CurrencyIncome, SpendingEvent
from spending_planner.currencies.currency_config import (
    CURRENCY_ORDER,
    GemIncomeBreakdown,
    StoneIncomeBreakdown,
    create_default_income,
    get_enabled_currencies_in_order,
)
from spending_planner.utils.errors import UserInputError
from spending_planner.utils.logger import logs

"""
{#!filepath: spending_planner/persistence/state_adapter.py}

Persisted-state adapter

Input : already-decoded JSON-like mapping (camelCase keys, possibly legacy)
Output: PlannerState made of the engine's value objects

Normalisation:
- missing lockedToEventId            -> None
- lockedToEventId to a missing event -> None (warning)
- missing income / breakdowns        -> defaults
- weeks outside {4, 8, 12, 26, 52}   -> 12
- priorities re-indexed densely after the chain check
"""

DEFAULT_WEEKS = 12


# =============================================================================
# Raw (wire) records
# =============================================================================
class _Raw(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawIncome(_Raw):
    currency_id: CurrencyId = Field(alias="currencyId")
    current_balance: float = Field(0.0, alias="currentBalance")
    weekly_income: float = Field(0.0, alias="weeklyIncome")
    growth_rate_percent: float = Field(0.0, alias="growthRatePercent")


class RawEvent(_Raw):
    id: str = Field(min_length=1)
    name: str
    currency_id: CurrencyId = Field(alias="currencyId")
    amount: float = Field(ge=0)
    priority: float
    duration_days: Optional[float] = Field(None, alias="durationDays")
    locked_to_event_id: Optional[str] = Field(None, alias="lockedToEventId")


class RawStoneBreakdown(_Raw):
    weekly_challenges: float = Field(0.0, alias="weeklyChallenges")
    event_store: float = Field(0.0, alias="eventStore")
    tournament_results: float = Field(0.0, alias="tournamentResults")
    purchased_with_money: float = Field(0.0, alias="purchasedWithMoney")


class RawGemBreakdown(_Raw):
    ad_gems: float = Field(0.0, alias="adGems")
    floating_gems: float = Field(0.0, alias="floatingGems")
    store_daily_gems: float = Field(0.0, alias="storeDailyGems")
    store_weekly_gems: float = Field(0.0, alias="storeWeeklyGems")
    missions_daily_completion: float = Field(0.0, alias="missionsDailyCompletion")
    missions_weekly_chests: float = Field(0.0, alias="missionsWeeklyChests")
    tournaments: float = Field(0.0, alias="tournaments")
    biweekly_event_shop: float = Field(0.0, alias="biweeklyEventShop")
    guild_weekly_chests: float = Field(0.0, alias="guildWeeklyChests")
    guild_seasonal_store: float = Field(0.0, alias="guildSeasonalStore")
    offer_walls: float = Field(0.0, alias="offerWalls")
    purchased_with_money: float = Field(0.0, alias="purchasedWithMoney")


class RawTimelineConfig(_Raw):
    weeks: Any = DEFAULT_WEEKS


class RawPlannerState(_Raw):
    incomes: List[RawIncome] = Field(default_factory=list)
    events: List[RawEvent] = Field(default_factory=list)
    stone_income_breakdown: Optional[RawStoneBreakdown] = Field(None, alias="stoneIncomeBreakdown")
    gem_income_breakdown: Optional[RawGemBreakdown] = Field(None, alias="gemIncomeBreakdown")
    timeline_config: Optional[RawTimelineConfig] = Field(None, alias="timelineConfig")
    enabled_currencies: Optional[List[CurrencyId]] = Field(None, alias="enabledCurrencies")


# =============================================================================
# Normalised state
# =============================================================================
@dataclass(frozen=True)
class PlannerState:
    incomes: List[CurrencyIncome]
    events: List[SpendingEvent]
    stone_breakdown: StoneIncomeBreakdown = field(default_factory=StoneIncomeBreakdown)
    gem_breakdown: GemIncomeBreakdown = field(default_factory=GemIncomeBreakdown)
    weeks: int = DEFAULT_WEEKS
    enabled_currencies: List[CurrencyId] = field(default_factory=lambda: list(CURRENCY_ORDER))


def default_state(growth_rates: Optional[Mapping[str, float]] = None) -> PlannerState:
    return PlannerState(
        incomes=[create_default_income(c, growth_rates) for c in CURRENCY_ORDER],
        events=[],
    )


def _normalize_incomes(
    raw: List[RawIncome], growth_rates: Optional[Mapping[str, float]]
) -> List[CurrencyIncome]:
    by_currency: Dict[CurrencyId, CurrencyIncome] = {}
    for r in raw:
        if r.currency_id in by_currency:
            logs.warning(f"[StateAdapter] duplicate income for {r.currency_id.value} -> keep first")
            continue
        by_currency[r.currency_id] = CurrencyIncome(
            currency_id=r.currency_id,
            current_balance=r.current_balance,
            weekly_income=r.weekly_income,
            growth_rate_percent=r.growth_rate_percent,
        )

    return [
        by_currency.get(c) or create_default_income(c, growth_rates)
        for c in CURRENCY_ORDER
    ]


def _normalize_events(raw: List[RawEvent]) -> List[SpendingEvent]:
    ids = set()
    for r in raw:
        if r.id in ids:
            raise UserInputError(f"duplicate event id in stored state: {r.id!r}")
        ids.add(r.id)

    events: List[SpendingEvent] = []
    for r in raw:
        lock = r.locked_to_event_id
        if lock is not None and lock not in ids:
            logs.warning(f"[StateAdapter] event {r.id} locked to missing {lock} -> unlocked")
            lock = None

        events.append(
            SpendingEvent(
                id=r.id,
                name=r.name,
                currency_id=r.currency_id,
                amount=r.amount,
                priority=r.priority,
                duration_days=r.duration_days if r.duration_days and r.duration_days > 0 else None,
                locked_to_event_id=lock,
            )
        )

    # 先用原始 priority 检查单调性，再重新编号
    validate_chain_links(events)

    return [replace(e, priority=i) for i, e in enumerate(sort_by_priority(events))]


def normalize_state(
    raw: Optional[Mapping[str, Any]],
    growth_rates: Optional[Mapping[str, float]] = None,
) -> PlannerState:
    """
    Raises
    ------
    UserInputError
        records with the wrong shape or duplicate event ids
    CorruptChainError
        chain links that do not point to a smaller priority
    """
    if not raw:
        return default_state(growth_rates)

    try:
        parsed = RawPlannerState.model_validate(raw)
    except ValidationError as e:
        raise UserInputError(f"invalid planner state: {e}") from e

    weeks = parsed.timeline_config.weeks if parsed.timeline_config else DEFAULT_WEEKS
    if weeks not in ALLOWED_TIMELINE_WEEKS:
        logs.warning(f"[StateAdapter] unsupported weeks={weeks!r} -> {DEFAULT_WEEKS}")
        weeks = DEFAULT_WEEKS

    enabled = (
        get_enabled_currencies_in_order(parsed.enabled_currencies)
        if parsed.enabled_currencies
        else list(CURRENCY_ORDER)
    )

    stone = parsed.stone_income_breakdown or RawStoneBreakdown()
    gem = parsed.gem_income_breakdown or RawGemBreakdown()

    return PlannerState(
        incomes=_normalize_incomes(parsed.incomes, growth_rates),
        events=_normalize_events(parsed.events),
        stone_breakdown=StoneIncomeBreakdown(**stone.model_dump()),
        gem_breakdown=GemIncomeBreakdown(**gem.model_dump()),
        weeks=int(weeks),
        enabled_currencies=enabled,
    )


# =============================================================================
# Dump (current camelCase shape)
# =============================================================================
def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


def _dump_dataclass(obj) -> Dict[str, Any]:
    out = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, CurrencyId):
            value = value.value
        out[_camel(f.name)] = value
    return out


def to_mapping(state: PlannerState) -> Dict[str, Any]:
    events = []
    for e in sort_by_priority(state.events):
        item = _dump_dataclass(e)
        if e.duration_days is None:
            item.pop("durationDays")
        events.append(item)

    return {
        "incomes": [_dump_dataclass(i) for i in state.incomes],
        "events": events,
        "stoneIncomeBreakdown": {_camel(k): v for k, v in asdict(state.stone_breakdown).items()},
        "gemIncomeBreakdown": {_camel(k): v for k, v in asdict(state.gem_breakdown).items()},
        "timelineConfig": {"weeks": state.weeks},
        "enabledCurrencies": [c.value for c in state.enabled_currencies],
    }
