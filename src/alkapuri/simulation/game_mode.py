"""GameMode — state machine, session owner and tick dispatcher.

Architecture
------------
GameMode manages the flow of a play session through a small state machine:

  loading -> menu -> playing -> game_over -> playing (restart)
                 ^                   |
                 +------ menu -------+   (also playing -> menu)

loading ends when every required asset has reported (loaded or failed) or
after ``loading_timeout`` seconds of ticks, whichever comes first.

start (menu) and restart (game_over) both build a fresh SessionState,
center the hero and clear the villain set.  While playing, each ``tick()``
runs exactly one ``simulate_tick()``; when lives reach zero the game moves
to game_over within that same tick and stops simulating.

Commands issued in a state that does not accept them are ignored and
return False; nothing in here raises on bad input.

Events published on EventBus for the render sink and announcer:
  - ``game_state_change``: any state transition (full snapshot)
  - ``game_over``: final score / level when lives run out
  - ``audio_cue``: via AudioCues (music on transitions, eat sfx)
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from alkapuri.audio.cues import AudioCues

from .entities import Hero, SessionState, Villain
from .spawner import VillainSpawner
from .step import StepResult, simulate_tick

if TYPE_CHECKING:
    from alkapuri.comms.event_bus import EventBus

logger = logging.getLogger(__name__)

# Loading screen safety timeout
_LOADING_TIMEOUT = 4.0  # seconds

DEFAULT_WIDTH = 400.0
DEFAULT_HEIGHT = 800.0


class GameMode:
    """Game state machine + session state + simulation dispatch."""

    STATES = ("loading", "menu", "playing", "game_over")

    def __init__(
        self,
        event_bus: EventBus,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        rng: random.Random | None = None,
        required_assets: list[str] | None = None,
        loading_timeout: float = _LOADING_TIMEOUT,
        sound_on: bool = True,
    ) -> None:
        self._event_bus = event_bus
        self.width = float(width)
        self.height = float(height)
        self.spawner = VillainSpawner(rng)
        self.audio = AudioCues(event_bus, enabled=sound_on)

        self.state: str = "loading"
        self.session = SessionState()
        self.hero = Hero()
        self.villains: list[Villain] = []
        self.ticks: int = 0

        self._required_assets: set[str] = set(required_assets or [])
        self._asset_status: dict[str, bool] = {}
        self._loading_timeout = loading_timeout
        self._loading_elapsed: float = 0.0

    # -- Public interface -------------------------------------------------------

    @property
    def sound_on(self) -> bool:
        return self.audio.enabled

    def tick(self, dt: float) -> StepResult | None:
        """Called every engine tick. Returns the step result while playing."""
        if self.state == "loading":
            self._tick_loading(dt)
            return None
        if self.state == "playing":
            return self._tick_playing()
        return None

    def asset_reported(self, name: str, ok: bool) -> None:
        """Record one asset's load outcome (from AssetProbe callbacks)."""
        self._asset_status[name] = bool(ok)
        if not ok:
            logger.warning(f"Asset '{name}' failed to load, using fallback drawing")
        if self.state == "loading" and self._required_assets <= set(self._asset_status):
            logger.info(f"All {len(self._required_assets)} assets reported")
            self._enter_menu()

    def asset_available(self, name: str) -> bool:
        return self._asset_status.get(name, False)

    def start(self) -> bool:
        """menu -> playing with a fresh session."""
        if self.state != "menu":
            return False
        self._begin_session()
        return True

    def restart(self) -> bool:
        """game_over -> playing with a fresh session."""
        if self.state != "game_over":
            return False
        self._begin_session()
        return True

    def go_to_menu(self) -> bool:
        """playing / game_over -> menu. Stops the music, then plays the menu theme."""
        if self.state not in ("playing", "game_over"):
            return False
        self.audio.stop_music()
        self.villains.clear()
        self._enter_menu()
        return True

    def set_hero_x(self, x: float) -> float:
        """Move the hero; out-of-range input is clamped, never rejected."""
        return self.hero.set_x(x)

    def toggle_sound(self) -> bool:
        """Flip sound on/off. Returns the new setting."""
        if self.audio.enabled:
            self.audio.mute()
        else:
            self.audio.unmute()
            if self.state == "playing":
                self.audio.play_game_music()
            elif self.state == "menu":
                self.audio.play_menu_music()
        return self.audio.enabled

    def get_state(self) -> dict:
        """Return serializable game state for the render sink / API."""
        return {
            "state": self.state,
            **self.session.to_dict(),
            "sound_on": self.sound_on,
            "hero": self.hero.to_dict(self.width, self.height),
            "villains": [v.to_dict() for v in self.villains],
            "assets": {
                name: self.asset_available(name)
                for name in sorted(self._required_assets | set(self._asset_status))
            },
            "playfield": {"width": self.width, "height": self.height},
        }

    # -- State tick handlers ----------------------------------------------------

    def _tick_loading(self, dt: float) -> None:
        self._loading_elapsed += dt
        if self._loading_elapsed >= self._loading_timeout:
            logger.info(
                f"Loading timed out after {self._loading_timeout:.1f}s "
                f"({len(self._asset_status)}/{len(self._required_assets)} assets reported)"
            )
            self._enter_menu()

    def _tick_playing(self) -> StepResult:
        self.ticks += 1
        result = simulate_tick(
            self.session,
            self.villains,
            self.hero,
            self.width,
            self.height,
            self.spawner,
            on_eat=self._on_eat,
        )
        if result.level_ups:
            logger.info(f"Level up -> {self.session.level}")
        if result.game_over:
            self._on_game_over()
        return result

    # -- Transitions ------------------------------------------------------------

    def _begin_session(self) -> None:
        self.session = SessionState()
        self.hero = Hero()
        self.villains.clear()
        self.ticks = 0
        self.state = "playing"
        logger.info("Game started")
        self.audio.play_game_music()
        self._publish_state_change()

    def _enter_menu(self) -> None:
        self.state = "menu"
        self.audio.play_menu_music()
        self._publish_state_change()

    def _on_eat(self, villain: Villain) -> None:
        self.audio.play_eat()

    def _on_game_over(self) -> None:
        self.state = "game_over"
        self.audio.stop_music()
        logger.info(
            f"Game over: score={self.session.score} level={self.session.level} "
            f"ticks={self.ticks}"
        )
        self._event_bus.publish("game_over", {
            "final_score": self.session.score,
            "level": self.session.level,
            "ticks": self.ticks,
        })
        self._publish_state_change()

    # -- Event publishing -------------------------------------------------------

    def _publish_state_change(self) -> None:
        self._event_bus.publish("game_state_change", self.get_state())
