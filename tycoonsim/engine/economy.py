"""Economy transition function.

``apply(state, action, rules, rng)`` is the single writer of game state. It
never raises: an action whose preconditions fail returns the input state
object unchanged. Two rejection policies coexist. Trades, item purchases and
the daily reward either succeed fully or not at all, while spending premium
currency always succeeds and clamps at a zero balance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

import numpy as np
from numpy.random import Generator

from tycoonsim.catalog import build_initial_state
from tycoonsim.config import Config, EconomyParams, PriceParams
from tycoonsim.engine.actions import (
    AddPremium,
    AddPrimary,
    Buy,
    ClaimDailyReward,
    CompleteTutorial,
    PurchaseItem,
    Reset,
    ResolveDailySpin,
    RestartTutorial,
    Sell,
    SpendPremium,
    Tick,
    Unlock,
)
from tycoonsim.engine.prices import step_all
from tycoonsim.engine.state import Currency, GameState, Holding, Wallet
from tycoonsim.engine.unlocks import evaluate_unlocks, unlock
from tycoonsim.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class EconomyRules:
    """Constants a transition needs besides the state itself."""

    economy: EconomyParams
    prices: PriceParams
    initial_state: GameState

    @classmethod
    def from_config(cls, config: Config) -> "EconomyRules":
        return cls(economy=config.economy, prices=config.prices, initial_state=build_initial_state(config))


def _positive(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def _currency(value: object) -> Optional[Currency]:
    try:
        return Currency(value)
    except ValueError:
        return None


def _reject(state: GameState, action: object, reason: str) -> GameState:
    logger.debug("%s rejected: %s", getattr(action, "kind", type(action).__name__), reason)
    return state


def _buy(state: GameState, action: Buy, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if not isinstance(action.shares, int) or action.shares <= 0:
        return _reject(state, action, "share count must be positive")
    if not _positive(action.unit_price):
        return _reject(state, action, "unit price must be positive")
    if state.instrument(action.instrument_id) is None:
        return _reject(state, action, f"unknown instrument {action.instrument_id!r}")
    cost = action.shares * action.unit_price
    if state.wallet.primary < cost:
        return _reject(state, action, f"insufficient funds ({state.wallet.primary:.2f} < {cost:.2f})")
    current = state.holding(action.instrument_id)
    old_shares = current.shares if current else 0
    old_basis = old_shares * current.average_cost if current else 0.0
    shares = old_shares + action.shares
    holding = Holding(action.instrument_id, shares, (old_basis + cost) / shares)
    portfolio = dict(state.portfolio)
    portfolio[action.instrument_id] = holding
    wallet = Wallet(primary=state.wallet.primary - cost, premium=state.wallet.premium)
    return replace(state, wallet=wallet, portfolio=portfolio)


def _sell(state: GameState, action: Sell, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if not isinstance(action.shares, int) or action.shares <= 0:
        return _reject(state, action, "share count must be positive")
    if not _positive(action.unit_price):
        return _reject(state, action, "unit price must be positive")
    holding = state.holding(action.instrument_id)
    if holding is None or holding.shares < action.shares:
        return _reject(state, action, f"not enough shares of {action.instrument_id!r}")
    portfolio = dict(state.portfolio)
    remaining = holding.shares - action.shares
    if remaining > 0:
        portfolio[action.instrument_id] = replace(holding, shares=remaining)
    else:
        del portfolio[action.instrument_id]
    wallet = state.wallet.credit(Currency.PRIMARY, action.shares * action.unit_price)
    return replace(state, wallet=wallet, portfolio=portfolio)


def _tick(state: GameState, action: Tick, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    source = rng if rng is not None else np.random.default_rng()
    return replace(state, instruments=step_all(state.instruments, source, rules.prices))


def _purchase_item(state: GameState, action: PurchaseItem, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    item = state.item(action.item_id)
    if item is None:
        return _reject(state, action, f"unknown item {action.item_id!r}")
    if item.owned:
        return _reject(state, action, f"item {item.id!r} already owned")
    if item.id not in state.unlocked_ids:
        return _reject(state, action, f"item {item.id!r} is locked")
    currency = _currency(action.currency)
    if currency is None:
        return _reject(state, action, f"unknown currency {action.currency!r}")
    cost = item.price(currency)
    if state.wallet.balance(currency) < cost:
        return _reject(state, action, f"insufficient {currency.value} balance")
    wallet = state.wallet.credit(currency, -cost)
    items = tuple(replace(entry, owned=True) if entry.id == item.id else entry for entry in state.items)
    return replace(state, wallet=wallet, items=items)


def _add_primary(state: GameState, action: AddPrimary, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if not _positive(action.amount):
        return _reject(state, action, "amount must be positive")
    return replace(state, wallet=state.wallet.credit(Currency.PRIMARY, action.amount))


def _add_premium(state: GameState, action: AddPremium, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if not _positive(action.amount):
        return _reject(state, action, "amount must be positive")
    return replace(state, wallet=state.wallet.credit(Currency.PREMIUM, action.amount))


def _spend_premium(state: GameState, action: SpendPremium, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if not _positive(action.amount):
        return _reject(state, action, "amount must be positive")
    debit = min(action.amount, state.wallet.premium)
    return replace(state, wallet=Wallet(primary=state.wallet.primary, premium=state.wallet.premium - debit))


def _claim_daily_reward(state: GameState, action: ClaimDailyReward, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if state.flags.daily_reward_claimed:
        return _reject(state, action, "daily reward already claimed")
    flags = replace(state.flags, daily_reward_claimed=True, login_streak=state.flags.login_streak + 1)
    wallet = state.wallet.credit(Currency.PRIMARY, rules.economy.daily_reward)
    return replace(state, wallet=wallet, flags=flags)


def _resolve_daily_spin(state: GameState, action: ResolveDailySpin, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    currency = _currency(action.currency)
    if currency is None:
        return _reject(state, action, f"unknown currency {action.currency!r}")
    if not isinstance(action.amount, (int, float)) or not math.isfinite(action.amount) or action.amount < 0:
        return _reject(state, action, "prize amount must be non-negative")
    flags = replace(state.flags, daily_spin_used=True, last_spin_date=action.spin_date)
    wallet = state.wallet.credit(currency, action.amount)
    return replace(state, wallet=wallet, flags=flags)


def _reset(state: GameState, action: Reset, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    return rules.initial_state


def _unlock(state: GameState, action: Unlock, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    return unlock(state, action.item_id)


def _complete_tutorial(state: GameState, action: CompleteTutorial, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if state.flags.tutorial_completed:
        return state
    return replace(state, flags=replace(state.flags, tutorial_completed=True))


def _restart_tutorial(state: GameState, action: RestartTutorial, rules: EconomyRules, rng: Optional[Generator]) -> GameState:
    if not state.flags.tutorial_completed:
        return state
    return replace(state, flags=replace(state.flags, tutorial_completed=False))


Handler = Callable[[GameState, object, EconomyRules, Optional[Generator]], GameState]

_HANDLERS: Dict[type, Handler] = {
    Buy: _buy,
    Sell: _sell,
    Tick: _tick,
    PurchaseItem: _purchase_item,
    AddPrimary: _add_primary,
    AddPremium: _add_premium,
    SpendPremium: _spend_premium,
    ClaimDailyReward: _claim_daily_reward,
    ResolveDailySpin: _resolve_daily_spin,
    Reset: _reset,
    Unlock: _unlock,
    CompleteTutorial: _complete_tutorial,
    RestartTutorial: _restart_tutorial,
}

# actions after which the primary balance may have moved
WEALTH_ACTIONS = (Buy, Sell, PurchaseItem, AddPrimary, SpendPremium, ClaimDailyReward, ResolveDailySpin)


def apply(state: GameState, action: object, rules: EconomyRules, rng: Optional[Generator] = None) -> GameState:
    """Return the state that results from applying ``action`` to ``state``.

    ``rng`` feeds the price step of a TICK; when omitted a fresh unseeded
    generator is used. Unknown action types are treated as rejected.
    """

    handler = _HANDLERS.get(type(action))
    if handler is None:
        return _reject(state, action, "unsupported action")
    next_state = handler(state, action, rules, rng)
    if next_state is not state and isinstance(action, WEALTH_ACTIONS):
        next_state = evaluate_unlocks(next_state, rules.economy.unlock_threshold_fraction)
    return next_state


__all__ = ["EconomyRules", "WEALTH_ACTIONS", "apply"]
