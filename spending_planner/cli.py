#!filepath: spending_planner/cli.py
import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from spending_planner import __version__
from spending_planner.config import AppConfig
from spending_planner.core.chains import group_events_into_chains
from spending_planner.currencies.currency_config import get_currency_config
from spending_planner.income.scale import format_amount
from spending_planner.observability.instrumentation import Instrumentation
from spending_planner.persistence.state_adapter import PlannerState, normalize_state
from spending_planner.planner import TimelinePlanner
from spending_planner.report.timeline_frame import balance_pivot
from spending_planner.utils.datetime_utils import WeekUtils
from spending_planner.utils.errors import CorruptChainError, UserInputError
from spending_planner.utils.logger import logs

app = typer.Typer(help="Spending Planner CLI")


def _load_state(cfg: AppConfig, state_file: Path) -> PlannerState:
    if not state_file.exists():
        raise UserInputError(f"state file not found: {state_file}")

    try:
        raw = json.loads(state_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise UserInputError(f"state file is not valid JSON: {e}") from e

    return normalize_state(raw, cfg.planner.default_growth_rate_percent)


def _parse_start(start: Optional[str]) -> Optional[date]:
    if start is None:
        return None
    try:
        return datetime.strptime(start, "%Y-%m-%d").date()
    except ValueError as e:
        raise UserInputError(f"--start must be YYYY-MM-DD, got {start!r}") from e


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def plan(
    state_file: Path,
    weeks: Optional[int] = typer.Option(None, help="Timeline length in weeks"),
    start: Optional[str] = typer.Option(None, help="Reference day (YYYY-MM-DD), default today"),
    balances: bool = typer.Option(False, "--balances", help="Print week x currency balances"),
):
    """
    计算 spending timeline 并输出每个事件的触发周
    """
    cfg = AppConfig.load()
    logs.configure(cfg.log)

    try:
        state = _load_state(cfg, state_file)
        now = _parse_start(start) or datetime.now()

        inst = Instrumentation(enabled=True)
        planner = TimelinePlanner(cfg.planner, inst=inst)
        data = planner.plan_state(state, now=now, weeks=weeks)
    except (UserInputError, CorruptChainError) as e:
        logs.warning(f"[CLI] {type(e).__name__}: {e}")
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    print(f"[green]Timeline from {WeekUtils.get_week_start(now)}[/green]")

    for te in data.events:
        e = te.event
        currency = get_currency_config(e.currency_id)
        line = (
            f"  week {te.trigger_week:>2}  {te.trigger_date}  {escape(e.name)}  "
            f"{format_amount(e.amount)} {currency.abbreviation}  "
            f"(left {format_amount(te.balance_at_trigger)})"
        )
        if te.end_date is not None:
            line += f"  until {te.end_date}"
        print(line)

    if data.unaffordable_events:
        print("[yellow]Unaffordable within the timeline:[/yellow]")
        for e in data.unaffordable_events:
            currency = get_currency_config(e.currency_id)
            print(f"  {escape(e.name)}  {format_amount(e.amount)} {currency.abbreviation}")

    if balances:
        print(balance_pivot(data).to_string())

    inst.generate_timeline_report("plan")


@app.command()
def chains(state_file: Path):
    """
    输出事件队列的 chain 分组
    """
    cfg = AppConfig.load()

    try:
        state = _load_state(cfg, state_file)
    except (UserInputError, CorruptChainError) as e:
        logs.warning(f"[CLI] {type(e).__name__}: {e}")
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    for i, group in enumerate(group_events_into_chains(state.events)):
        names = " -> ".join(escape(e.name) for e in group.events)
        tag = "chain" if group.is_chain else "free"
        print(f"  {i:>2} ({tag}) {names}")


if __name__ == "__main__":
    app()

# python -m spending_planner.cli plan state.json --weeks 26
