from __future__ import annotations

import numpy as np
import pytest

from wedding_run.assets.loader import AssetBundle
from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import MatchPhase, ObstacleType, PlayerAnimation
from wedding_run.game.snapshot import ObstacleView, PlayerView, RenderSnapshot, ScrollView
from wedding_run.graphics.primitives import (
    DEFAULT_FONT,
    draw_image,
    draw_rect,
    draw_text,
    draw_tiled,
    measure_text,
    new_buffer,
)
from wedding_run.graphics.scene import (
    DEAD_COLOR,
    OBSTACLE_COLORS,
    PLAYER_COLOR,
    SceneRenderer,
    sprite_key,
)


def _player(animation=PlayerAnimation.RUN, run_frame=0) -> PlayerView:
    return PlayerView(x=50, y=320, width=60, height=60, animation=animation, run_frame=run_frame)


def _snapshot(**overrides) -> RenderSnapshot:
    values = dict(
        player=_player(),
        obstacles=(),
        scroll=ScrollView(0.0, 0.0, 0.0),
        score=0,
        speed=6.0,
        is_playing=True,
        phase=MatchPhase.RUNNING,
    )
    values.update(overrides)
    return RenderSnapshot(**values)


def test_new_buffer_shape() -> None:
    buffer = new_buffer(20, 10)
    assert buffer.shape == (10, 20, 3)
    assert buffer.dtype == np.uint8


def test_draw_rect_clips_to_buffer() -> None:
    buffer = new_buffer(10, 10)
    draw_rect(buffer, -5, -5, 8, 8, (255, 0, 0))
    assert tuple(buffer[0, 0]) == (255, 0, 0)
    assert tuple(buffer[2, 2]) == (255, 0, 0)
    assert tuple(buffer[3, 3]) == (0, 0, 0)


def test_draw_rect_outline_leaves_inside_empty() -> None:
    buffer = new_buffer(10, 10)
    draw_rect(buffer, 0, 0, 10, 10, (0, 255, 0), filled=False)
    assert tuple(buffer[0, 5]) == (0, 255, 0)
    assert tuple(buffer[9, 5]) == (0, 255, 0)
    assert tuple(buffer[5, 5]) == (0, 0, 0)


def test_draw_image_blends_alpha() -> None:
    buffer = new_buffer(4, 4)
    image = np.zeros((2, 2, 4), dtype=np.uint8)
    image[0, 0] = (200, 100, 0, 255)
    image[0, 1] = (200, 100, 0, 0)
    draw_image(buffer, image, 1, 1)
    assert tuple(buffer[1, 1]) == (200, 100, 0)
    assert tuple(buffer[1, 2]) == (0, 0, 0)


def test_draw_image_fully_offscreen_is_ignored() -> None:
    buffer = new_buffer(4, 4)
    draw_image(buffer, np.full((2, 2, 3), 255, dtype=np.uint8), 10, 10)
    assert not buffer.any()


def test_draw_tiled_covers_full_width() -> None:
    buffer = new_buffer(25, 2)
    strip = np.full((2, 10, 3), 77, dtype=np.uint8)
    draw_tiled(buffer, strip, 3.5, 0)
    assert (buffer == 77).all()


def test_text_measurement_matches_drawing() -> None:
    buffer = new_buffer(100, 20)
    width, height = measure_text("AB", scale=2)
    assert height == 10
    draw_text(buffer, "AB", 0, 0, (255, 255, 255), scale=2)
    lit_columns = np.where(buffer.any(axis=(0, 2)))[0]
    assert lit_columns.max() + 1 == width


@pytest.mark.parametrize("text", ["ERROR: NETWORK_ERROR", "ERROR: HTTP 500", "* DELETE  # CLEAR"])
def test_screen_messages_have_glyphs(text: str) -> None:
    assert all(c == " " or c in DEFAULT_FONT for c in text.upper())


def test_underscore_sits_on_the_baseline() -> None:
    buffer = new_buffer(10, 10)
    draw_text(buffer, "_", 0, 0, (255, 255, 255))
    lit_rows = np.where(buffer.any(axis=(1, 2)))[0]
    assert lit_rows.tolist() == [4]


def test_sprite_key_follows_animation() -> None:
    assert sprite_key(_player(PlayerAnimation.RUN, 0)) == "RUN_1"
    assert sprite_key(_player(PlayerAnimation.RUN, 1)) == "RUN_2"
    assert sprite_key(_player(PlayerAnimation.JUMP)) == "JUMP"
    assert sprite_key(_player(PlayerAnimation.DIE)) == "DIE"


def test_scene_falls_back_to_flat_shapes() -> None:
    settings = GameSettings()
    renderer = SceneRenderer(settings, AssetBundle())
    buffer = new_buffer(settings.world_width, settings.world_height)
    obstacle = ObstacleView(ObstacleType.GROUND_LARGE, x=400, y=300, width=45, height=80)

    renderer.render(buffer, _snapshot(obstacles=(obstacle,)))

    assert tuple(buffer[340, 420]) == OBSTACLE_COLORS[ObstacleType.GROUND_LARGE]
    assert tuple(buffer[340, 80]) == PLAYER_COLOR


def test_dead_player_is_drawn_grey() -> None:
    settings = GameSettings()
    renderer = SceneRenderer(settings)
    buffer = new_buffer(settings.world_width, settings.world_height)
    renderer.render(buffer, _snapshot(player=_player(PlayerAnimation.DIE), is_playing=False))
    assert tuple(buffer[340, 80]) == DEAD_COLOR


def test_scene_uses_sprites_when_loaded() -> None:
    settings = GameSettings()
    sprite = np.zeros((60, 60, 4), dtype=np.uint8)
    sprite[:, :] = (1, 2, 3, 255)
    renderer = SceneRenderer(settings, AssetBundle(player={"RUN_1": sprite}))
    buffer = new_buffer(settings.world_width, settings.world_height)
    renderer.render(buffer, _snapshot())
    assert tuple(buffer[340, 80]) == (1, 2, 3)


def test_render_is_a_pure_function_of_the_snapshot() -> None:
    settings = GameSettings()
    renderer = SceneRenderer(settings)
    snapshot = _snapshot(score=1234)
    a = new_buffer(settings.world_width, settings.world_height)
    b = new_buffer(settings.world_width, settings.world_height)
    b[:] = 99
    renderer.render(a, snapshot)
    renderer.render(b, snapshot)
    assert np.array_equal(a, b)
