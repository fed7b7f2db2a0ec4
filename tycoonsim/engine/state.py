"""Game state definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class Currency(str, Enum):
    PRIMARY = "primary"
    PREMIUM = "premium"


class ItemCategory(str, Enum):
    CAR = "car"
    HOUSE = "house"
    YACHT = "yacht"
    JET = "jet"
    GADGET = "gadget"
    JEWELRY = "jewelry"
    ART = "art"
    ELECTRONICS = "electronics"
    FASHION = "fashion"
    ACCESSORIES = "accessories"
    COUNTRIES = "countries"


class ItemStatus(str, Enum):
    """Lifecycle of a catalog item: locked, then unlocked, then owned."""

    LOCKED = "locked"
    UNLOCKED = "unlocked"
    OWNED = "owned"


@dataclass(frozen=True)
class Instrument:
    """Tradable synthetic stock with its recent price window."""

    id: str
    name: str
    symbol: str
    price: float
    history: Tuple[float, ...]
    trend: Trend = Trend.NEUTRAL


@dataclass(frozen=True)
class Holding:
    """Share count and weighted-average cost basis for one instrument."""

    instrument_id: str
    shares: int
    average_cost: float


@dataclass(frozen=True)
class Wallet:
    primary: float
    premium: float

    def balance(self, currency: Currency) -> float:
        return self.premium if currency is Currency.PREMIUM else self.primary

    def credit(self, currency: Currency, amount: float) -> "Wallet":
        if currency is Currency.PREMIUM:
            return Wallet(primary=self.primary, premium=self.premium + amount)
        return Wallet(primary=self.primary + amount, premium=self.premium)


@dataclass(frozen=True)
class CatalogItem:
    """Luxury item purchasable with either currency once unlocked."""

    id: str
    name: str
    primary_price: float
    premium_price: float
    category: ItemCategory
    description: str = ""
    owned: bool = False
    unlocked: bool = False

    def price(self, currency: Currency) -> float:
        return self.premium_price if currency is Currency.PREMIUM else self.primary_price


@dataclass(frozen=True)
class SessionFlags:
    daily_reward_claimed: bool = False
    daily_spin_used: bool = False
    last_spin_date: str = ""
    login_streak: int = 1
    tutorial_completed: bool = False


@dataclass(frozen=True)
class GameState:
    """Complete engine state; every transition returns a new value."""

    wallet: Wallet
    instruments: Tuple[Instrument, ...]
    items: Tuple[CatalogItem, ...]
    portfolio: Mapping[str, Holding] = field(default_factory=dict)
    unlocked_ids: FrozenSet[str] = frozenset()
    flags: SessionFlags = field(default_factory=SessionFlags)

    def __post_init__(self) -> None:
        object.__setattr__(self, "portfolio", MappingProxyType(dict(self.portfolio)))
        object.__setattr__(self, "unlocked_ids", frozenset(self.unlocked_ids))

    def instrument(self, instrument_id: str) -> Optional[Instrument]:
        for instrument in self.instruments:
            if instrument.id == instrument_id:
                return instrument
        return None

    def item(self, item_id: str) -> Optional[CatalogItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def holding(self, instrument_id: str) -> Optional[Holding]:
        return self.portfolio.get(instrument_id)


__all__ = [
    "Trend",
    "Currency",
    "ItemCategory",
    "ItemStatus",
    "Instrument",
    "Holding",
    "Wallet",
    "CatalogItem",
    "SessionFlags",
    "GameState",
]
