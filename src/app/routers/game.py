"""Game control API — state, start, restart, menu, hero input, sound."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

router = APIRouter(prefix="/api/game", tags=["game"])


class HeroMove(BaseModel):
    x: float  # normalized 0..1, clamped by the engine


def _get_engine(request: Request):
    """Retrieve the SimulationEngine from app state."""
    sim = getattr(request.app.state, "simulation_engine", None)
    if sim is not None:
        return sim
    raise HTTPException(503, "Simulation engine not available")


def _reject(engine, command: str):
    state = engine.get_game_state()["state"]
    raise HTTPException(409, f"Cannot {command} in state: {state}")


@router.get("/state")
async def get_game_state(request: Request):
    """Get current game state (HUD, hero, villains, asset availability)."""
    engine = _get_engine(request)
    return engine.get_game_state()


@router.post("/start")
async def start_game(request: Request):
    """Start a game from the menu."""
    engine = _get_engine(request)
    if not engine.start_game():
        _reject(engine, "start")
    return {"status": "started", "state": "playing"}


@router.post("/restart")
async def restart_game(request: Request):
    """Play again after game over."""
    engine = _get_engine(request)
    if not engine.restart_game():
        _reject(engine, "restart")
    return {"status": "restarted", "state": "playing"}


@router.post("/menu")
async def go_to_menu(request: Request):
    """Leave the current game (or the game-over screen) for the menu."""
    engine = _get_engine(request)
    if not engine.go_to_menu():
        _reject(engine, "go to menu")
    return {"status": "menu", "state": "menu"}


@router.post("/hero")
async def move_hero(move: HeroMove, request: Request):
    """Set the hero's normalized horizontal position."""
    engine = _get_engine(request)
    x = engine.set_hero_x(move.x)
    return {"x": x}


@router.post("/sound")
async def toggle_sound(request: Request):
    """Toggle music and sound effects."""
    engine = _get_engine(request)
    return {"sound_on": engine.toggle_sound()}
