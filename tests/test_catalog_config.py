from pathlib import Path

import pytest
from pydantic import ValidationError

from tycoonsim.catalog import build_initial_state, load_instruments, load_items
from tycoonsim.config import load_config
from tycoonsim.engine.state import ItemCategory, Trend
from tycoonsim.utils.validation import validate_config

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def test_defaults_match_base_yaml() -> None:
    defaults = load_config()
    base = load_config(CONFIG_DIR / "base.yaml")
    assert base.economy == defaults.economy
    assert base.prices == defaults.prices
    assert defaults.economy.starting_primary == 10_000
    assert defaults.economy.unlock_threshold_fraction == pytest.approx(0.3)
    assert defaults.prices.history_window == 30
    assert defaults.session.tick_interval_seconds == pytest.approx(2.0)


def test_partial_yaml_merges_over_defaults() -> None:
    cfg = load_config(CONFIG_DIR / "volatile.yaml")
    assert cfg.economy.unlock_threshold_fraction == pytest.approx(0.5)
    assert cfg.economy.daily_reward == pytest.approx(1_000.0)
    assert cfg.prices.wide_scale == pytest.approx(0.10)
    validate_config(cfg)


def test_overrides_and_invalid_regimes() -> None:
    cfg = load_config(overrides={"session": {"seed": 9}})
    assert cfg.session.seed == 9
    with pytest.raises(ValidationError):
        load_config(overrides={"prices": {"mild_up_threshold": 0.96, "mild_down_threshold": 0.95}})
    with pytest.raises(ValidationError):
        load_config(overrides={"economy": {"unlock_threshold_fraction": 1.5}})


def test_validate_config_rejects_short_history() -> None:
    cfg = load_config(overrides={"prices": {"history_window": 1}})
    with pytest.raises(ValueError):
        validate_config(cfg)


def test_non_mapping_yaml_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_packaged_catalog() -> None:
    instruments = load_instruments()
    assert [inst.symbol for inst in instruments] == ["AAPL", "TSLA", "MSFT", "AMZN", "GOOGL"]
    assert instruments[0].price == pytest.approx(150.0)
    assert instruments[0].history == (150.0,)
    assert instruments[2].trend is Trend.NEUTRAL
    items = load_items()
    assert len(items) == 40
    assert sum(item.category is ItemCategory.CAR for item in items) == 20
    assert sum(item.category is ItemCategory.HOUSE for item in items) == 20
    assert all(item.premium_price == pytest.approx(item.primary_price / 250) for item in items)
    assert len({item.id for item in items}) == 40


def test_catalog_missing_columns(tmp_path: Path) -> None:
    path = tmp_path / "instruments.csv"
    path.write_text("id,name\n1,Broken\n", encoding="utf-8")
    with pytest.raises(ValueError, match="missing columns"):
        load_instruments(path)


def test_custom_catalog_paths(tmp_path: Path) -> None:
    instruments = tmp_path / "instruments.csv"
    instruments.write_text("id,name,symbol,price,trend\nA,Alpha,ALP,10,up\n", encoding="utf-8")
    items = tmp_path / "items.csv"
    items.write_text(
        "id,name,description,category,primary_price,premium_price,unlocked\n"
        "p,Phone,Shiny,gadget,1000,4,true\n"
        "j,Jet,Fast,jet,5000000,20000,false\n",
        encoding="utf-8",
    )
    cfg = load_config(overrides={"catalog": {"instruments_csv": str(instruments), "items_csv": str(items)}})
    state = build_initial_state(cfg)
    assert [inst.id for inst in state.instruments] == ["A"]
    assert state.unlocked_ids == frozenset({"p"})
    assert state.item("p").unlocked
    assert not state.item("j").unlocked


def test_initial_state() -> None:
    state = build_initial_state(load_config())
    assert state.wallet.primary == pytest.approx(10_000.0)
    assert state.wallet.premium == pytest.approx(100.0)
    assert state.portfolio == {}
    assert state.flags.login_streak == 1
    assert not state.flags.daily_reward_claimed
    assert not state.flags.daily_spin_used
    assert state.flags.last_spin_date == ""
    assert not state.flags.tutorial_completed
    assert not any(item.owned for item in state.items)
