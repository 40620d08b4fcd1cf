"""ALKAPURI RUN - catch-the-villains arcade game.

Main FastAPI application.  Hosts the game engine and exposes it to a
browser client over HTTP (commands, state) and WebSocket (live frames,
audio cues).
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from alkapuri import __version__
from alkapuri.assets import REQUIRED_ASSETS, AssetProbe
from alkapuri.comms import EventBus
from alkapuri.simulation import SimulationEngine
from app.config import Settings, settings
from app.routers import game_router, ws_router
from app.routers.ws import start_game_event_bridge


# ---------------------------------------------------------------------------
# Subsystem startup helpers
# ---------------------------------------------------------------------------

def _create_simulation_engine(cfg: Settings) -> SimulationEngine:
    """Create the engine from settings. The engine starts in ``loading``."""
    engine = SimulationEngine(
        EventBus(),
        width=cfg.playfield_width,
        height=cfg.playfield_height,
        tick_rate=cfg.tick_rate,
        seed=cfg.rng_seed,
        required_assets=list(REQUIRED_ASSETS),
        loading_timeout=cfg.asset_load_timeout,
        sound_on=cfg.sound_enabled,
    )
    logger.info(
        f"Simulation engine created ({cfg.playfield_width:.0f}x{cfg.playfield_height:.0f}, "
        f"seed={cfg.rng_seed})"
    )
    return engine


def _start_asset_probe(engine: SimulationEngine, cfg: Settings) -> AssetProbe:
    """Probe image assets in the background; results feed the loading screen."""
    if not cfg.asset_dir.exists():
        logger.warning(f"Asset directory not found: {cfg.asset_dir} (fallback drawings)")
    probe = AssetProbe(cfg.asset_dir)
    probe.probe_all(engine.asset_reported)
    logger.info(f"Probing {len(probe.names)} assets in {cfg.asset_dir}")
    return probe


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info(f"  {settings.app_name} v{__version__} - INITIALIZING")
    logger.info("=" * 60)

    engine = _create_simulation_engine(settings)
    app.state.simulation_engine = engine

    bridge_stop = start_game_event_bridge(engine.event_bus, asyncio.get_running_loop())
    logger.info("Game event bridge started")

    engine.start()
    probe = _start_asset_probe(engine, settings)

    yield

    logger.info("Stopping asset probe...")
    probe.shutdown()
    logger.info("Stopping game event bridge...")
    bridge_stop.set()
    logger.info("Stopping simulation engine...")
    engine.stop()
    logger.info(f"{settings.app_name} shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)

app.include_router(game_router)
app.include_router(ws_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "operational",
        "version": __version__,
        "system": settings.app_name,
    }


def run() -> None:
    """Console entry point: serve the game with uvicorn."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port,
                log_level="debug" if settings.debug else "info")


if __name__ == "__main__":
    run()
