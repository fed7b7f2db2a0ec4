"""Session host owning the single mutable state cell."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

import pandas as pd

from tycoonsim.config import Config
from tycoonsim.engine.actions import Action, Reset, Tick
from tycoonsim.engine.economy import EconomyRules, apply
from tycoonsim.engine.queries import can_spin
from tycoonsim.engine.spin import Prize, draw_prize, spin_action
from tycoonsim.engine.state import GameState, Instrument
from tycoonsim.utils.logging import get_logger
from tycoonsim.utils.rng import RNGManager

logger = get_logger(__name__)


@dataclass
class SessionResults:
    timeseries: pd.DataFrame
    final_state: GameState


class GameSession:
    """Serialise actions against one engine state.

    Every ``dispatch`` runs under a lock so that a timer thread issuing TICKs
    and a caller issuing trades never interleave.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.rules = EconomyRules.from_config(config)
        self.rng = RNGManager(config.session.seed)
        self._lock = threading.Lock()
        self._state = self.rules.initial_state
        self.ticks = 0

    @property
    def state(self) -> GameState:
        return self._state

    def dispatch(self, action: Action) -> GameState:
        with self._lock:
            return self._apply(action)

    def _apply(self, action: Action) -> GameState:
        # caller holds self._lock
        rng = self.rng.generator("prices") if isinstance(action, Tick) else None
        self._state = apply(self._state, action, self.rules, rng)
        if isinstance(action, Tick):
            self.ticks += 1
        return self._state

    def tick(self) -> GameState:
        return self.dispatch(Tick())

    def reset(self) -> GameState:
        logger.info("Resetting session to initial state")
        with self._lock:
            state = self._apply(Reset())
            self.rng.reset()
            self.ticks = 0
            return state

    def spin(self, today: Optional[str] = None, premium: bool = False) -> Optional[Prize]:
        """Draw and record a wheel prize; returns ``None`` if the free spin is used up."""

        today = today or date.today().isoformat()
        with self._lock:
            if not can_spin(self._state, today, premium=premium):
                return None
            prize = draw_prize(self.rng.generator("spin"), premium=premium)
            self._apply(spin_action(prize, today))
            return prize

    def run_ticks(self, count: int) -> SessionResults:
        """Advance ``count`` ticks and record every instrument price per tick."""

        records: List[Dict[str, object]] = []
        for instrument in self._state.instruments:
            records.append(self._record(self.ticks, instrument))
        for _ in range(count):
            state = self.tick()
            for instrument in state.instruments:
                records.append(self._record(self.ticks, instrument))
        return SessionResults(timeseries=pd.DataFrame.from_records(records), final_state=self._state)

    @staticmethod
    def _record(tick: int, instrument: Instrument) -> Dict[str, object]:
        return {
            "tick": tick,
            "instrument_id": instrument.id,
            "symbol": instrument.symbol,
            "price": instrument.price,
            "trend": instrument.trend.value,
        }


class TickScheduler:
    """Fire TICK actions on a fixed wall-clock interval until stopped."""

    def __init__(self, session: GameSession, interval: Optional[float] = None) -> None:
        self.session = session
        self.interval = interval if interval is not None else session.config.session.tick_interval_seconds
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="tycoonsim-ticker", daemon=True)
        self._thread.start()
        logger.info("Tick scheduler started (every %.2fs)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info("Tick scheduler stopped after %d ticks", self.session.ticks)

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            self.session.tick()

    def __enter__(self) -> "TickScheduler":
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()


__all__ = ["GameSession", "SessionResults", "TickScheduler"]
