from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from wedding_run.assets.loader import (
    GROUND,
    OBSTACLE_FILES,
    PLAYER_FILES,
    AssetBundle,
    load_assets,
    load_image,
)
from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import ObstacleType


def _write_png(path: Path, size: tuple[int, int], color: tuple[int, int, int, int]) -> None:
    Image.new("RGBA", size, color).save(path)


def test_missing_file_yields_none(tmp_path: Path) -> None:
    assert load_image(tmp_path / "nope.png", (10, 10)) is None


def test_garbage_file_yields_none(tmp_path: Path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"not a png")
    assert load_image(path, (10, 10)) is None


def test_image_is_scaled_to_world_size(tmp_path: Path) -> None:
    path = tmp_path / "sprite.png"
    _write_png(path, (8, 4), (10, 20, 30, 255))

    image = load_image(path, (40, 50))

    assert image is not None
    assert image.shape == (50, 40, 4)
    assert tuple(image[25, 20]) == (10, 20, 30, 255)


def test_empty_bundle_counts_everything_missing() -> None:
    bundle = AssetBundle(
        obstacles={t: None for t in OBSTACLE_FILES},
        player={k: None for k in PLAYER_FILES},
    )
    assert bundle.missing == 3 + len(OBSTACLE_FILES) + len(PLAYER_FILES)


@pytest.mark.asyncio
async def test_load_assets_tolerates_partial_sets(tmp_path: Path) -> None:
    settings = GameSettings()
    _write_png(tmp_path / OBSTACLE_FILES[ObstacleType.GROUND_LARGE], (9, 16), (0, 200, 0, 255))
    _write_png(tmp_path / GROUND, (10, 10), (100, 50, 0, 255))

    bundle = await load_assets(tmp_path, settings)

    large = bundle.obstacles[ObstacleType.GROUND_LARGE]
    assert large is not None
    assert large.shape[:2] == (80, 45)
    assert bundle.obstacles[ObstacleType.GROUND_SMALL] is None
    assert bundle.ground is not None
    assert bundle.ground.shape[1] == int(settings.ground_tile_width)
    assert bundle.bg_far is None
    assert bundle.player["RUN_1"] is None
