"""Draws runner snapshots into a frame buffer."""

from typing import Optional

from wedding_run.assets.loader import AssetBundle
from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import ObstacleType, PlayerAnimation
from wedding_run.game.snapshot import ObstacleView, PlayerView, RenderSnapshot
from wedding_run.graphics.primitives import (
    Buffer,
    draw_image,
    draw_rect,
    draw_text,
    draw_tiled,
    fill,
    measure_text,
)

SKY_COLOR = (250, 236, 220)
GROUND_COLOR = (150, 110, 80)
PLAYER_COLOR = (240, 120, 40)
DEAD_COLOR = (120, 120, 120)
SCORE_COLOR = (234, 88, 12)

OBSTACLE_COLORS = {
    ObstacleType.GROUND_SMALL: (90, 160, 90),
    ObstacleType.GROUND_LARGE: (60, 120, 60),
    ObstacleType.FLYING_SMALL: (220, 120, 160),
    ObstacleType.FLYING_LARGE: (180, 80, 130),
}


def sprite_key(player: PlayerView) -> str:
    """Sprite name for the player's animation tag."""
    match player.animation:
        case PlayerAnimation.RUN:
            return "RUN_2" if player.run_frame else "RUN_1"
        case PlayerAnimation.JUMP:
            return "JUMP"
        case PlayerAnimation.DIE:
            return "DIE"


class SceneRenderer:
    """Renders a snapshot; falls back to flat boxes for missing images."""

    def __init__(self, settings: GameSettings, assets: Optional[AssetBundle] = None):
        self.settings = settings
        self.assets = assets or AssetBundle()

    def render(self, buffer: Buffer, snapshot: RenderSnapshot) -> None:
        self._draw_background(buffer, snapshot)
        for obstacle in snapshot.obstacles:
            self._draw_obstacle(buffer, obstacle)
        self._draw_player(buffer, snapshot.player)
        self._draw_score(buffer, snapshot.score)

    def _draw_background(self, buffer: Buffer, snapshot: RenderSnapshot) -> None:
        fill(buffer, SKY_COLOR)
        ground_y = int(self.settings.ground_y)

        if self.assets.bg_far is not None:
            draw_tiled(buffer, self.assets.bg_far, snapshot.scroll.far, 0)
        if self.assets.bg_mid is not None:
            draw_tiled(buffer, self.assets.bg_mid, snapshot.scroll.mid, 0)

        if self.assets.ground is not None:
            draw_tiled(buffer, self.assets.ground, snapshot.scroll.ground, ground_y)
        else:
            draw_rect(buffer, 0, ground_y, buffer.shape[1], buffer.shape[0] - ground_y, GROUND_COLOR)

    def _draw_obstacle(self, buffer: Buffer, obstacle: ObstacleView) -> None:
        image = self.assets.obstacles.get(obstacle.type)
        x, y = int(obstacle.x), int(obstacle.y)
        if image is not None:
            draw_image(buffer, image, x, y)
        else:
            draw_rect(
                buffer, x, y, int(obstacle.width), int(obstacle.height),
                OBSTACLE_COLORS[obstacle.type],
            )

    def _draw_player(self, buffer: Buffer, player: PlayerView) -> None:
        image = self.assets.player.get(sprite_key(player))
        x, y = int(player.x), int(player.y)
        if image is not None:
            draw_image(buffer, image, x, y)
            return

        color = DEAD_COLOR if player.animation is PlayerAnimation.DIE else PLAYER_COLOR
        draw_rect(buffer, x, y, int(player.width), int(player.height), color)
        # Legs alternate with the run frame
        leg_x = x + (8 if player.run_frame == 0 else int(player.width) - 16)
        draw_rect(buffer, leg_x, y + int(player.height) - 6, 8, 6, GROUND_COLOR)

    def _draw_score(self, buffer: Buffer, score: int) -> None:
        text = f"SCORE: {score:05d}"
        width, _ = measure_text(text, scale=3)
        draw_text(buffer, text, buffer.shape[1] - width - 16, 16, SCORE_COLOR, scale=3)
