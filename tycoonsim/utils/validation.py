"""Validation helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from tycoonsim.config import Config


def assert_fraction(value: float, name: str) -> None:
    """Ensure value lies within [0, 1]."""

    if not 0 <= value <= 1:
        raise ValueError(f"{name} must lie in [0, 1], received {value}")


def assert_non_negative(sequence: Sequence[float], name: str) -> None:
    """Ensure no element of a sequence is negative."""

    arr = np.asarray(sequence, dtype=float)
    if np.any(arr < 0):
        raise ValueError(f"{name} must not contain negative values")


def validate_config(config: Config) -> None:
    """Run cross-field checks on configuration (fractions, windows, price floor)."""

    prices = config.prices
    assert_fraction(config.economy.unlock_threshold_fraction, "economy.unlock_threshold_fraction")
    assert_fraction(prices.mild_down_threshold, "prices.mild_down_threshold")
    assert_non_negative(
        [config.economy.starting_primary, config.economy.starting_premium],
        "economy starting balances",
    )
    if prices.history_window < 2:
        raise ValueError("prices.history_window must keep at least two points for percent change")
    if prices.price_floor <= 0:
        raise ValueError("prices.price_floor must be positive")
    if prices.mild_down_max >= 1.0:
        raise ValueError("prices.mild_down_max must stay below 1")


__all__ = ["assert_fraction", "assert_non_negative", "validate_config"]
