"""Wheel-of-fortune prize tables.

The draw happens here, outside the transition function; the engine only
records the drawn prize through a ``ResolveDailySpin`` action.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from numpy.random import Generator

from tycoonsim.engine.actions import ResolveDailySpin
from tycoonsim.engine.state import Currency


@dataclass(frozen=True)
class Prize:
    currency: Currency
    amount: float


STANDARD_WHEEL: Tuple[Prize, ...] = (
    Prize(Currency.PRIMARY, 1_000),
    Prize(Currency.PREMIUM, 10),
    Prize(Currency.PRIMARY, 2_500),
    Prize(Currency.PREMIUM, 25),
    Prize(Currency.PRIMARY, 5_000),
    Prize(Currency.PREMIUM, 50),
    Prize(Currency.PRIMARY, 10_000),
    Prize(Currency.PREMIUM, 100),
)

PREMIUM_WHEEL: Tuple[Prize, ...] = (
    Prize(Currency.PRIMARY, 50_000),
    Prize(Currency.PREMIUM, 500),
    Prize(Currency.PRIMARY, 100_000),
    Prize(Currency.PREMIUM, 1_000),
    Prize(Currency.PRIMARY, 200_000),
    Prize(Currency.PREMIUM, 2_000),
    Prize(Currency.PRIMARY, 500_000),
    Prize(Currency.PREMIUM, 5_000),
)


def wheel(premium: bool = False) -> Tuple[Prize, ...]:
    return PREMIUM_WHEEL if premium else STANDARD_WHEEL


def draw_prize(rng: Generator, premium: bool = False) -> Prize:
    """Pick one prize uniformly from the selected wheel."""

    prizes = wheel(premium)
    index = min(int(float(rng.random()) * len(prizes)), len(prizes) - 1)
    return prizes[index]


def spin_action(prize: Prize, spin_date: Optional[str] = None) -> ResolveDailySpin:
    return ResolveDailySpin(
        currency=prize.currency,
        amount=prize.amount,
        spin_date=spin_date or date.today().isoformat(),
    )


__all__ = ["Prize", "STANDARD_WHEEL", "PREMIUM_WHEEL", "wheel", "draw_prize", "spin_action"]
