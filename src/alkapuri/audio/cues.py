"""AudioCues — fire-and-forget music and sound-effect triggers.

The game core never plays audio itself.  It publishes ``audio_cue`` events
on the EventBus and whatever consumes them (a browser client over the
WebSocket, a desktop mixer) does the playback:

  menu_music  — entering the menu (loops)
  game_music  — start / restart (loops)
  eat         — a villain was eaten
  stop_music  — game over, leaving a game for the menu, or sound muted

A muted game emits nothing except the ``stop_music`` that accompanies the
mute itself.  Emission failures are logged at debug and dropped; audio can
never interrupt a tick.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alkapuri.comms.event_bus import EventBus

logger = logging.getLogger(__name__)


class Cue(str, Enum):
    MENU_MUSIC = "menu_music"
    GAME_MUSIC = "game_music"
    EAT = "eat"
    STOP_MUSIC = "stop_music"


# Looping background tracks vs one-shot effects
_MUSIC_CUES = {Cue.MENU_MUSIC, Cue.GAME_MUSIC}


class AudioCues:
    """Publishes audio cues on the EventBus while sound is enabled."""

    def __init__(self, event_bus: EventBus, enabled: bool = True) -> None:
        self._event_bus = event_bus
        self.enabled = enabled
        self.emitted = 0

    def play_menu_music(self) -> None:
        self._emit(Cue.MENU_MUSIC)

    def play_game_music(self) -> None:
        self._emit(Cue.GAME_MUSIC)

    def play_eat(self) -> None:
        self._emit(Cue.EAT)

    def stop_music(self) -> None:
        self._emit(Cue.STOP_MUSIC)

    def mute(self) -> None:
        """Disable sound; the running track is stopped."""
        self._emit(Cue.STOP_MUSIC)
        self.enabled = False

    def unmute(self) -> None:
        self.enabled = True

    def _emit(self, cue: Cue) -> None:
        if not self.enabled:
            return
        try:
            self._event_bus.publish("audio_cue", {
                "cue": cue.value,
                "loop": cue in _MUSIC_CUES,
            })
            self.emitted += 1
        except Exception as e:
            logger.debug(f"Audio cue {cue.value} dropped: {e}")
