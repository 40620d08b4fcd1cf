"""Internal messaging between the game loop and its consumers."""

from .event_bus import EventBus

__all__ = ["EventBus"]
