"""SimulationEngine — fixed-rate tick loop driving one GameMode.

Architecture
------------
The engine is the single owner of the GameMode and everything it holds
(session, hero, villains).  It runs one daemon thread:

  sim-tick (default 60 Hz) — calls ``game_mode.tick(dt)`` and, whenever a
  playing tick ran, publishes the render snapshot as a ``game_frame`` event
  on the EventBus.

Every entry point (tick, start / restart / menu commands, hero input,
sound toggle, asset reports from probe threads) takes the same lock, so
ticks never overlap and input lands strictly between two ticks.  The next
tick's collision check reads whatever hero position was set last.

Tick rate / fixed step:
  One tick is one simulation step regardless of wall-clock jitter; villain
  speeds are expressed in units per tick.  The loop sleeps for the
  remainder of each period and does not try to catch up missed ticks.

Stopping the thread is the only way to cancel ticking; a tick that has
started always runs to completion.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import TYPE_CHECKING

from .game_mode import DEFAULT_HEIGHT, DEFAULT_WIDTH, GameMode

if TYPE_CHECKING:
    from alkapuri.comms.event_bus import EventBus

    from .step import StepResult

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 60.0  # Hz


class SimulationEngine:
    """Drives the game at a fixed tick rate and publishes frame events."""

    def __init__(
        self,
        event_bus: EventBus,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        tick_rate: float = DEFAULT_TICK_RATE,
        seed: int | None = None,
        required_assets: list[str] | None = None,
        loading_timeout: float = 4.0,
        sound_on: bool = True,
    ) -> None:
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self._event_bus = event_bus
        self._lock = threading.Lock()
        self._running = False
        self._thread: threading.Thread | None = None
        self._dt = 1.0 / tick_rate
        self.game_mode = GameMode(
            event_bus,
            width=width,
            height=height,
            rng=random.Random(seed),
            required_assets=required_assets,
            loading_timeout=loading_timeout,
            sound_on=sound_on,
        )

    @property
    def event_bus(self) -> EventBus:
        """Public read access to the engine's EventBus."""
        return self._event_bus

    @property
    def tick_interval(self) -> float:
        return self._dt

    @property
    def running(self) -> bool:
        return self._running

    # -- Commands -----------------------------------------------------------

    def start_game(self) -> bool:
        with self._lock:
            return self.game_mode.start()

    def restart_game(self) -> bool:
        with self._lock:
            return self.game_mode.restart()

    def go_to_menu(self) -> bool:
        with self._lock:
            return self.game_mode.go_to_menu()

    def set_hero_x(self, x: float) -> float:
        with self._lock:
            return self.game_mode.set_hero_x(x)

    def toggle_sound(self) -> bool:
        with self._lock:
            return self.game_mode.toggle_sound()

    def asset_reported(self, name: str, ok: bool) -> None:
        with self._lock:
            self.game_mode.asset_reported(name, ok)

    def get_game_state(self) -> dict:
        """Return current game state dict."""
        with self._lock:
            return self.game_mode.get_state()

    # -- Lifecycle ----------------------------------------------------------

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._tick_loop, name="sim-tick", daemon=True
        )
        self._thread.start()
        logger.info(f"Tick loop started ({1.0 / self._dt:.0f} Hz)")

    def stop(self) -> None:
        self._running = False
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None
        logger.info("Tick loop stopped")

    # -- Tick loop ----------------------------------------------------------

    def _tick_loop(self) -> None:
        next_at = time.monotonic()
        while self._running:
            self._do_tick(self._dt)
            next_at += self._dt
            delay = next_at - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            else:
                next_at = time.monotonic()

    def _do_tick(self, dt: float) -> StepResult | None:
        """Execute one tick.  Called from the tick loop thread, or directly
        in tests to exercise the engine without starting threads."""
        with self._lock:
            result = self.game_mode.tick(dt)
            if result is None:
                return None
            frame = self.game_mode.get_state()
        self._event_bus.publish("game_frame", frame)
        return result
