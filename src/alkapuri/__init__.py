"""ALKAPURI RUN — catch-the-falling-villains arcade game core.

Package layout:
  comms/       — EventBus (pub/sub for frames, audio cues, state changes)
  simulation/  — entities, spawner, tick step, GameMode, SimulationEngine
  audio/       — AudioCues (fire-and-forget music / sfx triggers)
  assets/      — AssetProbe (per-asset readiness futures)
"""

__version__ = "0.1.0"
