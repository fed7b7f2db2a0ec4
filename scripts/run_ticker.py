"""Run a live session on the wall-clock tick scheduler and print final prices."""

from __future__ import annotations

import argparse
import time
from pathlib import Path

import pandas as pd

from tycoonsim.config import load_config
from tycoonsim.engine.queries import percent_change
from tycoonsim.engine.session import GameSession, TickScheduler
from tycoonsim.utils.logging import setup_logging


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drive a tycoonsim session with the tick scheduler.")
    parser.add_argument("--config", type=Path, default=None, help="Path to YAML config")
    parser.add_argument("--seconds", type=float, default=10.0, help="How long to keep the scheduler running")
    parser.add_argument("--interval", type=float, default=None, help="Override the tick interval in seconds")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser.parse_args()


def _print_prices(session: GameSession) -> None:
    state = session.state
    df = pd.DataFrame([
        {
            "Symbol": instrument.symbol,
            "Price": instrument.price,
            "Change": percent_change(state, instrument.id),
            "Trend": instrument.trend.value,
        }
        for instrument in state.instruments
    ])
    print(df.to_string(index=False, formatters={"Price": lambda v: f"${v:,.2f}", "Change": lambda v: f"{v:+.2f}%"}))


def main() -> None:
    args = _parse_args()
    setup_logging("INFO")
    overrides = {"session": {"seed": args.seed}} if args.seed is not None else None
    session = GameSession(load_config(args.config, overrides=overrides))
    with TickScheduler(session, interval=args.interval):
        time.sleep(args.seconds)
    print(f"Ticks fired: {session.ticks}")
    _print_prices(session)


if __name__ == "__main__":
    main()
