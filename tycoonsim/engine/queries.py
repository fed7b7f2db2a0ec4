"""Read-only views derived from game state."""

from __future__ import annotations

import math
from typing import List

from tycoonsim.engine.state import CatalogItem, GameState


def portfolio_value(state: GameState) -> float:
    """Market value of all holdings at current instrument prices."""

    total = 0.0
    for instrument_id, holding in state.portfolio.items():
        instrument = state.instrument(instrument_id)
        if instrument is not None:
            total += holding.shares * instrument.price
    return total


def owned_items(state: GameState) -> List[CatalogItem]:
    return [item for item in state.items if item.owned]


def net_worth(state: GameState) -> float:
    """Primary balance plus portfolio value plus the primary price of owned items."""

    items_value = sum(item.primary_price for item in owned_items(state))
    return state.wallet.primary + portfolio_value(state) + items_value


def percent_change(state: GameState, instrument_id: str) -> float:
    """Last-step percentage move; 0 when fewer than two history points exist."""

    instrument = state.instrument(instrument_id)
    if instrument is None or len(instrument.history) < 2:
        return 0.0
    previous, latest = instrument.history[-2], instrument.history[-1]
    if previous == 0:
        return 0.0
    return (latest - previous) / previous * 100.0


def max_affordable_shares(state: GameState, instrument_id: str) -> int:
    instrument = state.instrument(instrument_id)
    if instrument is None or instrument.price <= 0:
        return 0
    return int(math.floor(state.wallet.primary / instrument.price))


def unrealized_pnl(state: GameState, instrument_id: str) -> float:
    holding = state.holding(instrument_id)
    instrument = state.instrument(instrument_id)
    if holding is None or instrument is None:
        return 0.0
    return (instrument.price - holding.average_cost) * holding.shares


def can_spin(state: GameState, today: str, premium: bool = False) -> bool:
    """Whether the free wheel may be spun on ``today`` (ISO date); the premium wheel is always open."""

    if premium:
        return True
    return not state.flags.daily_spin_used or state.flags.last_spin_date != today


__all__ = [
    "portfolio_value",
    "owned_items",
    "net_worth",
    "percent_change",
    "max_affordable_shares",
    "unrealized_pnl",
    "can_spin",
]
