"""Regime-switching price process for the instrument catalog.

Each tick draws a regime per instrument (mild up, mild down, or a rare wide
move), adds a small upward drift, applies the move with a hard price floor and
keeps a bounded history window. The random source only needs a ``random()``
method returning a float in ``[0, 1)``; production code passes a
:class:`numpy.random.Generator`.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Iterable, Tuple

from numpy.random import Generator

from tycoonsim.config import PriceParams
from tycoonsim.engine.state import Instrument, Trend


class Regime(str, Enum):
    MILD_UP = "mild_up"
    MILD_DOWN = "mild_down"
    WIDE = "wide"


def select_regime(r: float, params: PriceParams) -> Regime:
    """Map a uniform draw onto a regime using the cumulative cut points."""

    if r < params.mild_up_threshold:
        return Regime.MILD_UP
    if r < params.mild_down_threshold:
        return Regime.MILD_DOWN
    return Regime.WIDE


def draw_change(rng: Generator, params: PriceParams) -> Tuple[Regime, float]:
    """Return the regime and the drifted change fraction for one step."""

    regime = select_regime(float(rng.random()), params)
    u = float(rng.random())
    if regime is Regime.MILD_UP:
        change = u * params.mild_up_max
    elif regime is Regime.MILD_DOWN:
        change = -u * params.mild_down_max
    else:
        change = (u - params.wide_offset) * params.wide_scale
    return regime, change + params.drift


def classify_trend(change: float, band: float) -> Trend:
    if change > band:
        return Trend.UP
    if change < -band:
        return Trend.DOWN
    return Trend.NEUTRAL


def next_price(price: float, change: float, params: PriceParams) -> float:
    return round(max(params.price_floor, price * (1.0 + change)), params.price_decimals)


def step_instrument(instrument: Instrument, rng: Generator, params: PriceParams) -> Instrument:
    """Advance one instrument by a single stochastic step."""

    _, change = draw_change(rng, params)
    price = next_price(instrument.price, change, params)
    history = (instrument.history + (price,))[-params.history_window:]
    return replace(
        instrument,
        price=price,
        history=history,
        trend=classify_trend(change, params.trend_band),
    )


def step_all(instruments: Iterable[Instrument], rng: Generator, params: PriceParams) -> Tuple[Instrument, ...]:
    return tuple(step_instrument(instrument, rng, params) for instrument in instruments)


__all__ = [
    "Regime",
    "select_regime",
    "draw_change",
    "classify_trend",
    "next_price",
    "step_instrument",
    "step_all",
]
