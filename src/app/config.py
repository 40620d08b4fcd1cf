"""Configuration management using Pydantic settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ALKAPURI RUN"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Playfield (game units; the client scales to its screen)
    playfield_width: float = Field(default=400.0, gt=0)
    playfield_height: float = Field(default=800.0, gt=0)

    # Game loop
    tick_rate: float = Field(default=60.0, gt=0)  # Hz, one simulation step per tick
    rng_seed: Optional[int] = None                # fixed seed replays the same villain stream

    # Assets (hero.png, villain1.png, villain2.png, bg.png)
    asset_dir: Path = Path("assets/images")
    asset_load_timeout: float = Field(default=4.0, ge=0)  # seconds before the menu opens anyway

    # Audio
    sound_enabled: bool = True


settings = Settings()
