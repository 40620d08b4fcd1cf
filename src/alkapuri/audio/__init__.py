"""Audio triggers emitted by the game loop."""

from .cues import AudioCues, Cue

__all__ = ["AudioCues", "Cue"]
