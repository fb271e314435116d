"""
Scene Store - the current scene list and its per-scene asset map.

Both live in memory only. Every successful analysis replaces the scene list
wholesale, bumps ``generation`` and clears the asset map; writes tagged with
an older generation are discarded so a superseded run cannot leak results
into the new scene list.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.config import ASSET_ERROR, DEFAULT_PRESET
from app.core import get_logger

logger = get_logger(__name__, component="scene_store")


@dataclass
class AssetResult:
    """Outcome of one scene: each slot is None, ASSET_ERROR or a data URI."""
    image: Optional[str] = None
    audio: Optional[str] = None

    @property
    def image_ok(self) -> bool:
        return self.image is not None and self.image != ASSET_ERROR

    @property
    def audio_ok(self) -> bool:
        return self.audio is not None and self.audio != ASSET_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"image": self.image, "audio": self.audio}


class SceneStore:
    """In-memory scene list, generation counter and asset map."""

    def __init__(self):
        self._scenes: List[str] = []
        self._generation = 0
        self._assets: Dict[int, AssetResult] = {}
        self._preset_key = DEFAULT_PRESET

    @property
    def scenes(self) -> List[str]:
        return list(self._scenes)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def preset_key(self) -> str:
        """Preset detected (or chosen) when the current scenes were produced."""
        return self._preset_key

    @property
    def assets(self) -> Dict[int, AssetResult]:
        return dict(self._assets)

    def is_empty(self) -> bool:
        return not self._scenes

    def replace(self, scenes: List[str], preset_key: Optional[str] = None) -> int:
        """Replace the scene list, clear the asset map and return the new generation."""
        self._scenes = list(scenes)
        self._assets = {}
        self._generation += 1
        if preset_key:
            self._preset_key = preset_key
        logger.info(
            "Scene list replaced",
            extra={"generation": self._generation, "scene_count": len(self._scenes)},
        )
        return self._generation

    def merge_asset(self, generation: int, index: int, result: AssetResult) -> bool:
        """Record the result for one scene index.

        Only the entry at ``index`` is touched. Returns False (and drops the
        write) when ``generation`` is no longer current.
        """
        if generation != self._generation:
            logger.warning(
                "Discarding asset write from superseded generation",
                extra={"generation": generation, "current_generation": self._generation, "scene_index": index},
            )
            return False
        self._assets[index] = result
        return True

    def asset_dict(self) -> Dict[int, Dict[str, Any]]:
        return {index: result.to_dict() for index, result in sorted(self._assets.items())}
