"""Asset readiness reporting for the loading screen."""

from .loader import REQUIRED_ASSETS, AssetProbe

__all__ = ["AssetProbe", "REQUIRED_ASSETS"]
