"""Command line interface for tycoonsim."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tycoonsim.config import Config, load_config
from tycoonsim.engine.actions import parse_action
from tycoonsim.engine.queries import net_worth, percent_change, portfolio_value
from tycoonsim.engine.session import GameSession
from tycoonsim.engine.unlocks import item_status
from tycoonsim.reporting.summary import export_summary, summarize_timeseries
from tycoonsim.utils.io import load_action_script, save_table, timestamped_dir, write_config_snapshot
from tycoonsim.utils.logging import setup_logging
from tycoonsim.utils.validation import validate_config

app = typer.Typer(help="Stock tycoon economy engine CLI")
console = Console()


def _load(config: Optional[Path], seed: Optional[int] = None) -> Config:
    overrides = {"session": {"seed": seed}} if seed is not None else None
    cfg = load_config(config, overrides=overrides)
    validate_config(cfg)
    return cfg


@app.command()
def simulate(
    ticks: int = typer.Option(100, min=1, help="Number of price ticks to run"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
    seed: Optional[int] = typer.Option(None, min=0, help="Override the session seed"),
    out: Optional[Path] = typer.Option(None, help="Directory for timeseries and summary tables"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Run the price process for a number of ticks and summarise it."""

    setup_logging(log_level)
    cfg = _load(config, seed)
    session = GameSession(cfg)
    result = session.run_ticks(ticks)
    summary = summarize_timeseries(result.timeseries)

    table = Table(title=f"{ticks} ticks (seed {cfg.session.seed})")
    for column in ("symbol", "first_price", "final_price", "peak_price", "min_price", "return_pct"):
        table.add_column(column, justify="left" if column == "symbol" else "right")
    for row in summary.itertuples(index=False):
        table.add_row(
            row.symbol,
            f"{row.first_price:,.2f}",
            f"{row.final_price:,.2f}",
            f"{row.peak_price:,.2f}",
            f"{row.min_price:,.2f}",
            f"{row.return_pct:+.2f}%",
        )
    console.print(table)

    if out is not None:
        out_dir = timestamped_dir(out, cfg.meta.name)
        save_table(result.timeseries, out_dir, "timeseries")
        export_summary(result.timeseries, out_dir)
        write_config_snapshot(cfg, out_dir)
        console.print(f"Saved tables to {out_dir}")


@app.command()
def catalog(config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML")) -> None:
    """List instruments and luxury items with their unlock thresholds."""

    cfg = _load(config)
    state = GameSession(cfg).state
    fraction = cfg.economy.unlock_threshold_fraction

    instruments = Table(title="Instruments")
    for column in ("id", "symbol", "name", "price", "trend"):
        instruments.add_column(column)
    for instrument in state.instruments:
        instruments.add_row(instrument.id, instrument.symbol, instrument.name, f"{instrument.price:,.2f}", instrument.trend.value)
    console.print(instruments)

    items = Table(title=f"Luxury items (unlock at {fraction:.0%} of price)")
    for column in ("id", "name", "category", "price", "premium", "unlocks at", "status"):
        items.add_column(column)
    for item in state.items:
        status = item_status(state, item.id)
        items.add_row(
            item.id,
            item.name,
            item.category.value,
            f"{item.primary_price:,.0f}",
            f"{item.premium_price:,.0f}",
            f"{fraction * item.primary_price:,.0f}",
            status.value if status else "",
        )
    console.print(items)


@app.command()
def replay(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML/JSON list of actions"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
    seed: Optional[int] = typer.Option(None, min=0, help="Override the session seed"),
    log_level: str = typer.Option("WARNING", help="Logging level (DEBUG shows rejected actions)"),
) -> None:
    """Apply an action script to a fresh session and print the resulting balances."""

    setup_logging(log_level)
    cfg = _load(config, seed)
    try:
        actions = [parse_action(payload) for payload in load_action_script(script)]
    except (ValueError, ValidationError) as exc:
        console.print(f"[bold red]Invalid action script[/bold red]: {exc}")
        raise typer.Exit(code=1) from exc
    session = GameSession(cfg)
    for action in actions:
        session.dispatch(action)
    state = session.state

    console.print(f"Applied {len(actions)} actions")
    console.print(f"Primary balance: {state.wallet.primary:,.2f}")
    console.print(f"Premium balance: {state.wallet.premium:,.2f}")
    if state.portfolio:
        holdings = Table(title="Holdings")
        for column in ("symbol", "shares", "avg cost", "price", "change"):
            holdings.add_column(column)
        for instrument_id, holding in state.portfolio.items():
            instrument = state.instrument(instrument_id)
            holdings.add_row(
                instrument.symbol if instrument else instrument_id,
                str(holding.shares),
                f"{holding.average_cost:,.2f}",
                f"{instrument.price:,.2f}" if instrument else "-",
                f"{percent_change(state, instrument_id):+.2f}%",
            )
        console.print(holdings)
    console.print(f"Portfolio value: {portfolio_value(state):,.2f}")
    console.print(f"Net worth: {net_worth(state):,.2f}")
    console.print(f"Unlocked items: {len(state.unlocked_ids)}")


@app.command()
def validate(config: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Validate configuration without running a session."""

    try:
        _load(config)
    except (ValueError, ValidationError) as exc:
        console.print(f"[bold red]Invalid configuration[/bold red]: {exc}")
        raise typer.Exit(code=1) from exc
    console.print("Configuration validated successfully")


if __name__ == "__main__":
    app()
