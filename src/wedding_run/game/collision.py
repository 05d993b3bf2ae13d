"""Player versus obstacle collision."""

import logging
from typing import Iterable, Optional

from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import Box, Obstacle, PlayerState

logger = logging.getLogger(__name__)


class CollisionResolver:
    """AABB test between inset hitboxes.

    Both hitboxes are shrunk by ``hitbox_padding`` on every side, so
    grazing the edge of a sprite does not count as a hit.
    """

    def __init__(self, settings: GameSettings):
        self.padding = settings.hitbox_padding

    def player_hitbox(self, player: PlayerState) -> Box:
        return player.box.inset(self.padding)

    def obstacle_hitbox(self, obstacle: Obstacle) -> Box:
        return obstacle.box.inset(self.padding)

    def first_hit(self, player: PlayerState, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
        """Return the first obstacle overlapping the player, if any."""
        hitbox = self.player_hitbox(player)
        for obstacle in obstacles:
            if obstacle.marked_for_deletion:
                continue
            if hitbox.overlaps(self.obstacle_hitbox(obstacle)):
                return obstacle
        return None
