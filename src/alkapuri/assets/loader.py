"""AssetProbe — checks the game's image assets, one future per asset.

The core does not decode images.  It only needs to know, per asset, whether
the render sink can use the real image or must draw a fallback, and when
every asset has answered so the loading screen can end.  Each asset is
probed on a worker thread; the result is delivered through the future's
done-callback as ``callback(name, ok)``.

A probe never raises into the caller.  Missing, empty or unreadable files
report ``ok=False`` and the game carries on with fallback drawings.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

# Logical asset name -> file name inside the asset directory
REQUIRED_ASSETS: dict[str, str] = {
    "hero": "hero.png",
    "villain1": "villain1.png",
    "villain2": "villain2.png",
    "background": "bg.png",
}


class AssetProbe:
    """Resolves each required asset on a small thread pool."""

    def __init__(self, asset_dir: str | Path,
                 assets: dict[str, str] | None = None,
                 max_workers: int = 4) -> None:
        self._asset_dir = Path(asset_dir)
        self._assets = dict(assets if assets is not None else REQUIRED_ASSETS)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="asset-probe"
        )

    @property
    def names(self) -> list[str]:
        return list(self._assets)

    def probe_all(self, callback: Callable[[str, bool], None]) -> list[Future]:
        """Start probing every asset; ``callback`` fires once per asset."""
        futures: list[Future] = []
        for name, filename in self._assets.items():
            path = self._asset_dir / filename
            fut = self._executor.submit(_is_readable, path)
            fut.add_done_callback(_reporter(name, path, callback))
            futures.append(fut)
        return futures

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


def _is_readable(path: Path) -> bool:
    with open(path, "rb") as fh:
        return len(fh.read(8)) > 0


def _reporter(name: str, path: Path,
              callback: Callable[[str, bool], None]) -> Callable[[Future], None]:
    def _done(fut: Future) -> None:
        ok = False
        if not fut.cancelled():
            err = fut.exception()
            if err is None:
                ok = bool(fut.result())
            else:
                logger.warning(f"Asset {name} unavailable ({path}): {err}")
        callback(name, ok)
    return _done
