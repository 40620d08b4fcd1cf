"""ALKAPURI RUN web front — FastAPI presentation adapter over the game core."""
