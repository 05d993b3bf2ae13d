"""Sprite and background loading.

Images are decoded with Pillow, scaled to their in-world size and kept as
RGBA numpy arrays for the scene renderer. Loading is one awaitable that
the host finishes before the first simulation tick.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np
from PIL import Image as PILImage
from numpy.typing import NDArray

from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import ObstacleType

logger = logging.getLogger(__name__)

Image = NDArray[np.uint8]

# File names under the assets directory
BACKGROUND_FAR = "bg_far.png"
BACKGROUND_MID = "bg_mid.png"
GROUND = "ground.png"

OBSTACLE_FILES: Dict[ObstacleType, str] = {
    ObstacleType.GROUND_SMALL: "obstacle_s.png",
    ObstacleType.GROUND_LARGE: "obstacle_l.png",
    ObstacleType.FLYING_SMALL: "obstacle_fly_s.png",
    ObstacleType.FLYING_LARGE: "obstacle_fly_l.png",
}

# Sprite key -> file; JUMP reuses the first run frame
PLAYER_FILES: Dict[str, str] = {
    "RUN_1": "chara_1.png",
    "RUN_2": "chara_2.png",
    "JUMP": "chara_1.png",
    "DIE": "chara_3.png",
}


@dataclass
class AssetBundle:
    """Decoded images, any of which may be missing."""

    bg_far: Optional[Image] = None
    bg_mid: Optional[Image] = None
    ground: Optional[Image] = None
    obstacles: Dict[ObstacleType, Optional[Image]] = field(default_factory=dict)
    player: Dict[str, Optional[Image]] = field(default_factory=dict)

    @property
    def missing(self) -> int:
        images = [self.bg_far, self.bg_mid, self.ground]
        images += list(self.obstacles.values()) + list(self.player.values())
        return sum(1 for image in images if image is None)


def load_image(path: Path, size: Tuple[float, float]) -> Optional[Image]:
    """Decode ``path`` and scale it to ``size`` (width, height).

    Returns an (h, w, 4) uint8 array, or None if the file is missing or
    cannot be decoded.
    """
    if not path.exists():
        logger.warning(f"Image not found: {path}")
        return None

    try:
        img = PILImage.open(path).convert('RGBA')
    except (OSError, PILImage.UnidentifiedImageError) as e:
        logger.warning(f"Could not decode image {path}: {e}")
        return None

    width, height = max(1, int(size[0])), max(1, int(size[1]))
    img = img.resize((width, height), PILImage.Resampling.LANCZOS)
    return np.array(img, dtype=np.uint8)


async def load_assets(assets_path: Path, settings: GameSettings) -> AssetBundle:
    """Load every image concurrently in worker threads."""
    s = settings
    world = (s.world_width, s.world_height)
    ground_strip = (s.ground_tile_width, max(1.0, s.world_height - s.ground_y))
    player_size = (s.player_width, s.player_height)
    obstacle_sizes = {
        ObstacleType.GROUND_SMALL: s.ground_small_size,
        ObstacleType.GROUND_LARGE: s.ground_large_size,
        ObstacleType.FLYING_SMALL: s.flying_small_size,
        ObstacleType.FLYING_LARGE: s.flying_large_size,
    }

    def task(name: str, size: Tuple[float, float]):
        return asyncio.to_thread(load_image, assets_path / name, size)

    backgrounds = await asyncio.gather(
        task(BACKGROUND_FAR, world),
        task(BACKGROUND_MID, world),
        task(GROUND, ground_strip),
    )
    obstacles = await asyncio.gather(
        *(task(OBSTACLE_FILES[t], obstacle_sizes[t]) for t in OBSTACLE_FILES)
    )
    sprites = await asyncio.gather(
        *(task(PLAYER_FILES[k], player_size) for k in PLAYER_FILES)
    )

    bundle = AssetBundle(
        bg_far=backgrounds[0],
        bg_mid=backgrounds[1],
        ground=backgrounds[2],
        obstacles=dict(zip(OBSTACLE_FILES, obstacles)),
        player=dict(zip(PLAYER_FILES, sprites)),
    )
    logger.info(f"Assets loaded from {assets_path} ({bundle.missing} missing)")
    return bundle
