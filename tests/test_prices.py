import numpy as np
import pytest
from pydantic import ValidationError

from tycoonsim.config import PriceParams
from tycoonsim.engine.prices import (
    Regime,
    classify_trend,
    draw_change,
    next_price,
    select_regime,
    step_all,
    step_instrument,
)
from tycoonsim.engine.state import Instrument, Trend


def _instrument(price: float = 100.0) -> Instrument:
    return Instrument(id="X", name="Instrument X", symbol="XXX", price=price, history=(price,))


def test_regime_thresholds() -> None:
    params = PriceParams()
    assert select_regime(0.0, params) is Regime.MILD_UP
    assert select_regime(0.7999, params) is Regime.MILD_UP
    assert select_regime(0.80, params) is Regime.MILD_DOWN
    assert select_regime(0.9499, params) is Regime.MILD_DOWN
    assert select_regime(0.95, params) is Regime.WIDE
    assert select_regime(0.9999, params) is Regime.WIDE


def test_regime_cut_points_are_compared_directly() -> None:
    params = PriceParams(mild_up_threshold=0.70, mild_down_threshold=0.90)
    assert select_regime(0.6999, params) is Regime.MILD_UP
    assert select_regime(0.70, params) is Regime.MILD_DOWN
    assert select_regime(0.8999, params) is Regime.MILD_DOWN
    assert select_regime(0.90, params) is Regime.WIDE
    assert select_regime(0.5, PriceParams(mild_up_threshold=0.5, mild_down_threshold=0.5)) is Regime.WIDE


def test_regime_cut_points_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        PriceParams(mild_up_threshold=0.96, mild_down_threshold=0.95)


def test_draw_change_per_regime(scripted_rng) -> None:
    params = PriceParams()
    regime, change = draw_change(scripted_rng([0.1, 0.4]), params)
    assert regime is Regime.MILD_UP
    assert change == pytest.approx(0.011)
    regime, change = draw_change(scripted_rng([0.9, 0.5]), params)
    assert regime is Regime.MILD_DOWN
    assert change == pytest.approx(-0.0075 + 0.001)
    regime, change = draw_change(scripted_rng([0.97, 0.0]), params)
    assert regime is Regime.WIDE
    assert change == pytest.approx(-0.021 + 0.001)


def test_change_bounds_with_numpy_generator() -> None:
    params = PriceParams()
    rng = np.random.default_rng(7)
    changes = [draw_change(rng, params)[1] for _ in range(5_000)]
    assert min(changes) >= -0.021 + 0.001 - 1e-12
    assert max(changes) < 0.049 + 0.001
    assert np.mean(changes) > 0


def test_mild_up_step_matches_worked_example(scripted_rng) -> None:
    stepped = step_instrument(_instrument(100.0), scripted_rng([0.1, 0.4]), PriceParams())
    assert stepped.price == pytest.approx(101.10)
    assert stepped.history == pytest.approx((100.0, 101.10))
    assert stepped.trend is Trend.UP


def test_price_rounded_to_cents() -> None:
    assert next_price(123.456, 0.0, PriceParams()) == 123.46


def test_price_floor_holds() -> None:
    params = PriceParams()
    instrument = _instrument(1.0)
    rng = np.random.default_rng(3)
    for _ in range(500):
        instrument = step_instrument(instrument, rng, params)
        assert instrument.price >= 1.0
    assert next_price(1.0, -0.5, params) == 1.0


def test_history_window_keeps_latest_prices() -> None:
    params = PriceParams()
    instrument = _instrument()
    rng = np.random.default_rng(11)
    prices = [instrument.price]
    for _ in range(45):
        instrument = step_instrument(instrument, rng, params)
        prices.append(instrument.price)
    assert len(instrument.history) == 30
    assert list(instrument.history) == prices[-30:]
    assert instrument.history[-1] == instrument.price


def test_trend_band() -> None:
    assert classify_trend(0.0081, 0.008) is Trend.UP
    assert classify_trend(0.008, 0.008) is Trend.NEUTRAL
    assert classify_trend(-0.008, 0.008) is Trend.NEUTRAL
    assert classify_trend(-0.0081, 0.008) is Trend.DOWN


def test_step_all_advances_every_instrument_once(scripted_rng) -> None:
    instruments = (_instrument(100.0), Instrument("Y", "Instrument Y", "YYY", 50.0, (50.0,)))
    stepped = step_all(instruments, scripted_rng([0.1, 0.4, 0.1, 0.0]), PriceParams())
    assert [inst.id for inst in stepped] == ["X", "Y"]
    assert stepped[0].price == pytest.approx(101.10)
    assert stepped[1].price == pytest.approx(50.05)
    assert all(len(inst.history) == 2 for inst in stepped)
