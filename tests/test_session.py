import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pandas as pd
import pytest
from pydantic import ValidationError

from tycoonsim.config import load_config
from tycoonsim.engine.actions import Buy, ResolveDailySpin, Tick, parse_action
from tycoonsim.engine.session import GameSession, TickScheduler
from tycoonsim.engine.spin import PREMIUM_WHEEL, STANDARD_WHEEL, draw_prize, spin_action
from tycoonsim.engine.state import Currency


def test_seeded_sessions_are_deterministic() -> None:
    cfg = load_config(overrides={"session": {"seed": 123}})
    first = GameSession(cfg).run_ticks(40)
    second = GameSession(cfg).run_ticks(40)
    pd.testing.assert_frame_equal(first.timeseries, second.timeseries)


def test_run_ticks_records_every_instrument() -> None:
    session = GameSession(load_config())
    result = session.run_ticks(35)
    assert session.ticks == 35
    assert len(result.timeseries) == 36 * len(result.final_state.instruments)
    assert {"tick", "instrument_id", "symbol", "price", "trend"}.issubset(result.timeseries.columns)
    assert (result.timeseries["price"] >= 1.0).all()
    for instrument in result.final_state.instruments:
        assert len(instrument.history) == 30
        recorded = result.timeseries[result.timeseries["instrument_id"] == instrument.id]["price"].tolist()
        assert list(instrument.history) == recorded[-30:]


def test_dispatch_and_reset() -> None:
    session = GameSession(load_config())
    session.dispatch(Buy(instrument_id="1", shares=10, unit_price=150.0))
    session.tick()
    assert session.state.portfolio["1"].shares == 10
    assert session.state.wallet.primary == pytest.approx(8_500.0)
    state = session.reset()
    assert state is session.rules.initial_state
    assert session.ticks == 0


def test_free_spin_once_per_day() -> None:
    session = GameSession(load_config())
    prize = session.spin(today="2026-10-19")
    assert prize in STANDARD_WHEEL
    assert session.state.flags.daily_spin_used
    assert session.spin(today="2026-10-19") is None
    assert session.spin(today="2026-10-20") is not None
    assert session.spin(today="2026-10-20", premium=True) in PREMIUM_WHEEL


def test_concurrent_free_spins_award_one_prize() -> None:
    session = GameSession(load_config())
    barrier = threading.Barrier(8)

    def spin_once():
        barrier.wait()
        return session.spin(today="2026-10-19")

    with ThreadPoolExecutor(max_workers=8) as pool:
        prizes = list(pool.map(lambda _: spin_once(), range(8)))
    assert sum(prize is not None for prize in prizes) == 1


def test_reset_restarts_price_streams() -> None:
    cfg = load_config(overrides={"session": {"seed": 5}})
    expected = GameSession(cfg).run_ticks(5).timeseries
    session = GameSession(cfg)
    session.run_ticks(3)
    session.reset()
    pd.testing.assert_frame_equal(session.run_ticks(5).timeseries, expected)


def test_draw_prize_indexes_wheel(scripted_rng) -> None:
    assert draw_prize(scripted_rng([0.0])) == STANDARD_WHEEL[0]
    assert draw_prize(scripted_rng([0.999])) == STANDARD_WHEEL[-1]
    assert draw_prize(scripted_rng([0.3]), premium=True) == PREMIUM_WHEEL[2]
    action = spin_action(STANDARD_WHEEL[1], "2026-10-19")
    assert action == ResolveDailySpin(currency=Currency.PREMIUM, amount=10, spin_date="2026-10-19")


def test_parse_action_discriminates_kind() -> None:
    action = parse_action({"kind": "BUY", "instrument_id": "1", "shares": 3, "unit_price": 150})
    assert isinstance(action, Buy)
    assert action.unit_price == pytest.approx(150.0)
    assert isinstance(parse_action({"kind": "TICK"}), Tick)
    spin = parse_action({"kind": "RESOLVE_DAILY_SPIN", "currency": "premium", "amount": 25})
    assert spin.currency is Currency.PREMIUM
    assert spin.spin_date
    with pytest.raises(ValidationError):
        parse_action({"kind": "STEAL", "amount": 1})


def test_scheduler_ticks_until_stopped() -> None:
    session = GameSession(load_config())
    scheduler = TickScheduler(session, interval=0.01)
    scheduler.start()
    deadline = time.monotonic() + 5.0
    while session.ticks < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    scheduler.stop(timeout=1.0)
    assert not scheduler.running
    fired = session.ticks
    assert fired >= 3
    time.sleep(0.05)
    assert session.ticks == fired


def test_scheduler_context_manager_uses_config_interval() -> None:
    session = GameSession(load_config(overrides={"session": {"tick_interval_seconds": 0.01}}))
    with TickScheduler(session) as scheduler:
        assert scheduler.interval == pytest.approx(0.01)
        assert scheduler.running
    assert not scheduler.running
