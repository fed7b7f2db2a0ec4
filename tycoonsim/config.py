"""Configuration models and loaders for tycoonsim."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


class MetaParams(BaseModel):
    name: str = "base"
    description: str | None = None


class EconomyParams(BaseModel):
    """Wallet seeding, rewards and unlock gating."""

    starting_primary: float = Field(10_000.0, ge=0, description="Primary currency granted at session start")
    starting_premium: float = Field(100.0, ge=0, description="Premium currency granted at session start")
    starting_login_streak: int = Field(1, ge=1)
    daily_reward: float = Field(1_000.0, gt=0, description="Primary currency credited by the daily reward")
    unlock_threshold_fraction: float = Field(
        0.3,
        ge=0,
        le=1,
        description="Share of an item's primary price the primary balance must reach to unlock it",
    )


class PriceParams(BaseModel):
    """Regime-switching random walk parameters."""

    mild_up_threshold: float = Field(0.80, ge=0, le=1, description="Draws below this pick the mild-up regime")
    mild_down_threshold: float = Field(0.95, ge=0, le=1, description="Draws below this (and not mild-up) pick mild-down")
    mild_up_max: float = Field(0.025, ge=0, description="Upper bound of the mild-up draw")
    mild_down_max: float = Field(0.015, ge=0, description="Magnitude bound of the mild-down draw")
    wide_scale: float = Field(0.07, ge=0)
    wide_offset: float = Field(0.3, ge=0, le=1, description="Centre shift applied to the wide draw")
    drift: float = Field(0.001, description="Constant added to every regime draw")
    trend_band: float = Field(0.008, ge=0, description="Change fraction beyond which a trend is reported")
    price_floor: float = Field(1.0, gt=0)
    price_decimals: int = Field(2, ge=0, le=8)
    history_window: int = Field(30, ge=1)

    @model_validator(mode="after")
    def validate_regimes(self) -> "PriceParams":
        if self.mild_up_threshold > self.mild_down_threshold:
            raise ValueError("mild_up_threshold must not exceed mild_down_threshold")
        return self


class CatalogParams(BaseModel):
    """Optional overrides for the packaged catalog CSVs."""

    instruments_csv: Optional[str] = Field(None, description="CSV with instrument definitions")
    items_csv: Optional[str] = Field(None, description="CSV with luxury item definitions")


class SessionParams(BaseModel):
    seed: int = Field(42, ge=0)
    tick_interval_seconds: float = Field(2.0, gt=0)


class Config(BaseModel):
    """Top-level configuration model."""

    meta: MetaParams = Field(default_factory=MetaParams)
    economy: EconomyParams = Field(default_factory=EconomyParams)
    prices: PriceParams = Field(default_factory=PriceParams)
    catalog: CatalogParams = Field(default_factory=CatalogParams)
    session: SessionParams = Field(default_factory=SessionParams)


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_dict() -> Dict[str, Any]:
    """Return the default configuration as a dictionary."""

    return Config().model_dump()


def load_config(path: str | Path | None = None, overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Load configuration from YAML and merge with defaults."""

    base_dict = default_config_dict()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            user_data = yaml.safe_load(handle) or {}
        if not isinstance(user_data, dict):
            raise ValueError(f"Config YAML {path} must map to an object")
        base_dict = _deep_update(base_dict, user_data)
    if overrides:
        base_dict = _deep_update(base_dict, overrides)
    return Config.model_validate(base_dict)


__all__ = [
    "Config",
    "MetaParams",
    "EconomyParams",
    "PriceParams",
    "CatalogParams",
    "SessionParams",
    "load_config",
]
