"""Action models accepted by the economy engine."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from tycoonsim.engine.state import Currency


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class Buy(_Action):
    kind: Literal["BUY"] = "BUY"
    instrument_id: str
    shares: int
    unit_price: float


class Sell(_Action):
    kind: Literal["SELL"] = "SELL"
    instrument_id: str
    shares: int
    unit_price: float


class Tick(_Action):
    kind: Literal["TICK"] = "TICK"


class PurchaseItem(_Action):
    kind: Literal["PURCHASE_ITEM"] = "PURCHASE_ITEM"
    item_id: str
    currency: Currency = Currency.PRIMARY


class AddPrimary(_Action):
    kind: Literal["ADD_PRIMARY"] = "ADD_PRIMARY"
    amount: float


class AddPremium(_Action):
    kind: Literal["ADD_PREMIUM"] = "ADD_PREMIUM"
    amount: float


class SpendPremium(_Action):
    kind: Literal["SPEND_PREMIUM"] = "SPEND_PREMIUM"
    amount: float


class ClaimDailyReward(_Action):
    kind: Literal["CLAIM_DAILY_REWARD"] = "CLAIM_DAILY_REWARD"


class ResolveDailySpin(_Action):
    """Record an already-drawn wheel prize."""

    kind: Literal["RESOLVE_DAILY_SPIN"] = "RESOLVE_DAILY_SPIN"
    currency: Currency
    amount: float
    spin_date: str = Field(default_factory=lambda: date.today().isoformat())


class Reset(_Action):
    kind: Literal["RESET"] = "RESET"


class Unlock(_Action):
    kind: Literal["UNLOCK"] = "UNLOCK"
    item_id: str


class CompleteTutorial(_Action):
    kind: Literal["COMPLETE_TUTORIAL"] = "COMPLETE_TUTORIAL"


class RestartTutorial(_Action):
    kind: Literal["RESTART_TUTORIAL"] = "RESTART_TUTORIAL"


Action = Annotated[
    Union[
        Buy,
        Sell,
        Tick,
        PurchaseItem,
        AddPrimary,
        AddPremium,
        SpendPremium,
        ClaimDailyReward,
        ResolveDailySpin,
        Reset,
        Unlock,
        CompleteTutorial,
        RestartTutorial,
    ],
    Field(discriminator="kind"),
]

_ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(payload: Dict[str, Any]) -> Action:
    """Validate a wire-shaped mapping (``{"kind": "BUY", ...}``) into an action."""

    return _ACTION_ADAPTER.validate_python(payload)


__all__ = [
    "Action",
    "Buy",
    "Sell",
    "Tick",
    "PurchaseItem",
    "AddPrimary",
    "AddPremium",
    "SpendPremium",
    "ClaimDailyReward",
    "ResolveDailySpin",
    "Reset",
    "Unlock",
    "CompleteTutorial",
    "RestartTutorial",
    "parse_action",
]
