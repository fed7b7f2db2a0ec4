"""Static instrument and luxury item catalog loading."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from tycoonsim.config import Config
from tycoonsim.engine.state import (
    CatalogItem,
    GameState,
    Instrument,
    ItemCategory,
    SessionFlags,
    Trend,
    Wallet,
)

DATA_DIR = Path(__file__).resolve().parent / "data"
INSTRUMENTS_CSV = DATA_DIR / "instruments.csv"
ITEMS_CSV = DATA_DIR / "luxury_items.csv"

_TRUE_VALUES = {"true", "1", "yes", "y"}


def _flag(value: object) -> bool:
    return str(value).strip().lower() in _TRUE_VALUES


def _read(path: str | Path, required: set[str], label: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={"id": str}, keep_default_na=False)
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"{label} CSV missing columns: {sorted(missing)}")
    return df


def load_instruments(path: str | Path = INSTRUMENTS_CSV) -> List[Instrument]:
    df = _read(path, {"id", "name", "symbol", "price"}, "Instrument")
    instruments = []
    for _, row in df.iterrows():
        price = float(row["price"])
        if price <= 0:
            raise ValueError(f"Instrument {row['id']} must start with a positive price")
        trend = Trend(row["trend"]) if "trend" in df.columns and row["trend"] else Trend.NEUTRAL
        instruments.append(
            Instrument(
                id=str(row["id"]),
                name=row["name"],
                symbol=row["symbol"],
                price=price,
                history=(price,),
                trend=trend,
            )
        )
    ids = [instrument.id for instrument in instruments]
    if len(set(ids)) != len(ids):
        raise ValueError("Instrument ids must be unique")
    return instruments


def load_items(path: str | Path = ITEMS_CSV) -> List[CatalogItem]:
    df = _read(path, {"id", "name", "category", "primary_price", "premium_price"}, "Luxury item")
    items = [
        CatalogItem(
            id=str(row["id"]),
            name=row["name"],
            description=row["description"] if "description" in df.columns else "",
            category=ItemCategory(row["category"]),
            primary_price=float(row["primary_price"]),
            premium_price=float(row["premium_price"]),
            unlocked=_flag(row["unlocked"]) if "unlocked" in df.columns else False,
        )
        for _, row in df.iterrows()
    ]
    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise ValueError("Luxury item ids must be unique")
    return items


@lru_cache(maxsize=8)
def _cached_catalog(instruments_csv: str, items_csv: str) -> Tuple[Tuple[Instrument, ...], Tuple[CatalogItem, ...]]:
    return tuple(load_instruments(instruments_csv)), tuple(load_items(items_csv))


def build_initial_state(config: Config) -> GameState:
    """Return the canonical fresh-session state for ``config``."""

    instruments, items = _cached_catalog(
        config.catalog.instruments_csv or str(INSTRUMENTS_CSV),
        config.catalog.items_csv or str(ITEMS_CSV),
    )
    economy = config.economy
    return GameState(
        wallet=Wallet(primary=economy.starting_primary, premium=economy.starting_premium),
        instruments=instruments,
        items=items,
        portfolio={},
        unlocked_ids=frozenset(item.id for item in items if item.unlocked),
        flags=SessionFlags(login_streak=economy.starting_login_streak),
    )


__all__ = ["DATA_DIR", "load_instruments", "load_items", "build_initial_state"]
