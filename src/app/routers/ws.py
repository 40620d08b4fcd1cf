"""WebSocket endpoint streaming game frames and audio cues to clients.

Clients receive every EventBus message (``game_frame``, ``game_state_change``,
``game_over``, ``audio_cue``) as JSON and may send commands back:

    {"type": "hero", "x": 0.42}
    {"type": "start"} / {"type": "restart"} / {"type": "menu"} / {"type": "sound"}
    {"type": "ping"}
"""

import asyncio
import json
import queue
import threading
from datetime import datetime, timezone
from typing import Set

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

router = APIRouter(prefix="/ws", tags=["websocket"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConnectionManager:
    """Manages WebSocket connections for real-time updates."""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket):
        """Accept and register a new WebSocket connection."""
        await websocket.accept()
        async with self._lock:
            self.active_connections.add(websocket)
        logger.info(f"WebSocket connected. Total connections: {len(self.active_connections)}")

    async def disconnect(self, websocket: WebSocket):
        """Remove a WebSocket connection."""
        async with self._lock:
            self.active_connections.discard(websocket)
        logger.info(f"WebSocket disconnected. Total connections: {len(self.active_connections)}")

    async def broadcast(self, message: dict):
        """Broadcast a message to all connected clients."""
        if not self.active_connections:
            return

        message_str = json.dumps(message)
        disconnected = set()

        async with self._lock:
            for connection in self.active_connections:
                try:
                    await connection.send_text(message_str)
                except Exception as e:
                    logger.warning(f"Failed to send to websocket: {e}")
                    disconnected.add(connection)

            self.active_connections -= disconnected

    async def send_to(self, websocket: WebSocket, message: dict):
        """Send a message to a specific client."""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.warning(f"Failed to send to websocket: {e}")


manager = ConnectionManager()


@router.websocket("/game")
async def websocket_game(websocket: WebSocket):
    """Live game stream: frames out, player commands in."""
    await manager.connect(websocket)

    engine = getattr(websocket.app.state, "simulation_engine", None)
    await manager.send_to(
        websocket,
        {
            "type": "connected",
            "timestamp": _now(),
            "state": engine.get_game_state() if engine is not None else None,
        },
    )

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await manager.send_to(
                    websocket, {"type": "error", "message": "Invalid JSON"}
                )
                continue
            await handle_client_message(websocket, engine, message)
    except WebSocketDisconnect:
        await manager.disconnect(websocket)


async def handle_client_message(websocket: WebSocket, engine, message: dict):
    """Apply a client command to the engine."""
    msg_type = message.get("type") if isinstance(message, dict) else None

    if msg_type == "ping":
        await manager.send_to(websocket, {"type": "pong", "timestamp": _now()})
        return
    if engine is None:
        await manager.send_to(
            websocket, {"type": "error", "message": "Simulation engine not available"}
        )
        return

    if msg_type == "hero":
        try:
            x = float(message.get("x"))
        except (TypeError, ValueError):
            await manager.send_to(
                websocket, {"type": "error", "message": "hero.x must be a number"}
            )
            return
        engine.set_hero_x(x)
    elif msg_type in ("start", "restart", "menu"):
        command = {
            "start": engine.start_game,
            "restart": engine.restart_game,
            "menu": engine.go_to_menu,
        }[msg_type]
        if not command():
            await manager.send_to(
                websocket,
                {
                    "type": "error",
                    "message": f"Cannot {msg_type} in state: {engine.get_game_state()['state']}",
                },
            )
    elif msg_type == "sound":
        await manager.send_to(
            websocket, {"type": "sound", "sound_on": engine.toggle_sound()}
        )
    else:
        await manager.send_to(
            websocket,
            {"type": "error", "message": f"Unknown message type: {msg_type}"},
        )


def start_game_event_bridge(event_bus, loop: asyncio.AbstractEventLoop) -> threading.Event:
    """Start a daemon thread that forwards EventBus events to WebSocket clients.

    Bridges the engine's threaded EventBus to FastAPI's async WebSocket side.
    Returns an Event; set it to stop the bridge.
    """
    sub = event_bus.subscribe()
    stop = threading.Event()

    def bridge_loop():
        while not stop.is_set():
            try:
                msg = sub.get(timeout=0.5)
            except queue.Empty:
                continue
            asyncio.run_coroutine_threadsafe(
                manager.broadcast({
                    "type": msg.get("type", "unknown"),
                    "data": msg.get("data", {}),
                    "timestamp": _now(),
                }),
                loop,
            )
        event_bus.unsubscribe(sub)

    thread = threading.Thread(target=bridge_loop, daemon=True, name="game-ws-bridge")
    thread.start()
    return stop
