"""EventBus — thread-safe pub/sub between the game loop and its consumers.

The game loop is the only producer of interest: it publishes render frames
(``game_frame``), state transitions (``game_state_change``, ``game_over``)
and audio triggers (``audio_cue``).  Consumers (the WebSocket bridge, an
audio player, tests) subscribe and drain their own queue at their own pace.

Publishing never blocks the tick: each subscriber queue is bounded, and a
full queue drops its oldest message to make room for the new one.
"""

from __future__ import annotations

import queue
import threading
from typing import Iterable


class EventBus:
    """Simple thread-safe pub/sub for pushing events to subscribers."""

    def __init__(self, maxsize: int = 100) -> None:
        self._lock = threading.Lock()
        self._maxsize = maxsize
        self._subscribers: list[tuple[queue.Queue, frozenset[str] | None]] = []

    def subscribe(self, event_types: Iterable[str] | str | None = None) -> queue.Queue:
        """Subscribe to events. Returns a Queue of ``{"type", "data"}`` dicts.

        ``event_types`` restricts delivery to the named event types; ``None``
        receives everything.
        """
        if isinstance(event_types, str):
            event_types = [event_types]
        wanted = frozenset(event_types) if event_types is not None else None
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        with self._lock:
            self._subscribers.append((q, wanted))
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            self._subscribers = [(s, w) for s, w in self._subscribers if s is not q]

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event_type: str, data: dict | list | None = None) -> None:
        msg = {"type": event_type}
        if data is not None:
            msg["data"] = data
        with self._lock:
            for q, wanted in self._subscribers:
                if wanted is not None and event_type not in wanted:
                    continue
                try:
                    q.put_nowait(msg)
                except queue.Full:
                    # Drop oldest so state changes are never lost behind
                    # a backlog of frames.
                    try:
                        q.get_nowait()
                    except queue.Empty:
                        pass
                    try:
                        q.put_nowait(msg)
                    except queue.Full:
                        pass
