"""Wealth-gated unlocking of catalog items."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from tycoonsim.engine.state import GameState, ItemStatus


def qualifying_items(state: GameState, fraction: float) -> List[str]:
    """Return ids of locked items whose threshold the primary balance now meets."""

    balance = state.wallet.primary
    return [
        item.id
        for item in state.items
        if item.id not in state.unlocked_ids and balance >= fraction * item.primary_price
    ]


def with_unlocked(state: GameState, item_ids: Iterable[str]) -> GameState:
    """Insert catalog ids into the unlocked set and mirror the item flags."""

    known = {item.id for item in state.items}
    added = {item_id for item_id in item_ids if item_id in known and item_id not in state.unlocked_ids}
    if not added:
        return state
    items = tuple(replace(item, unlocked=True) if item.id in added else item for item in state.items)
    return replace(state, items=items, unlocked_ids=state.unlocked_ids | added)


def evaluate_unlocks(state: GameState, fraction: float) -> GameState:
    """Unlock every item that newly qualifies, in a single pass."""

    return with_unlocked(state, qualifying_items(state, fraction))


def unlock(state: GameState, item_id: str) -> GameState:
    return with_unlocked(state, [item_id])


def item_status(state: GameState, item_id: str) -> ItemStatus | None:
    item = state.item(item_id)
    if item is None:
        return None
    if item.owned:
        return ItemStatus.OWNED
    if item.id in state.unlocked_ids:
        return ItemStatus.UNLOCKED
    return ItemStatus.LOCKED


__all__ = ["qualifying_items", "with_unlocked", "evaluate_unlocks", "unlock", "item_status"]
