from __future__ import annotations

import random
from collections import Counter

import pytest

from wedding_run.config.settings import GameSettings
from wedding_run.game.collision import CollisionResolver
from wedding_run.game.entities import ObstacleType, SimulationState
from wedding_run.game.physics import PlayerPhysics
from wedding_run.game.spawner import OBSTACLE_ORDER, ObstacleSpawner, jump_arc_frames


def _state(settings: GameSettings, cooldown: int = 1) -> SimulationState:
    return SimulationState(
        player=PlayerPhysics(settings).create_player(),
        speed=settings.initial_speed,
        spawn_cooldown=cooldown,
    )


@pytest.mark.parametrize(
    "gravity, jump, expected",
    [(0.5, -10.0, 41), (0.8, -15.0, 39), (1.0, -3.0, 7)],
)
def test_jump_arc_frames(gravity: float, jump: float, expected: int) -> None:
    assert jump_arc_frames(gravity, jump) == expected


def test_safety_floor_adds_margin() -> None:
    settings = GameSettings(gravity=0.5, jump_strength=-10, spawn_safety_margin=5)
    assert ObstacleSpawner(settings).safety_floor == 46


@pytest.mark.parametrize("seed", range(20))
def test_gaps_never_go_below_safety_floor(seed: int) -> None:
    settings = GameSettings()
    spawner = ObstacleSpawner(settings, random.Random(seed))
    for speed in (settings.initial_speed, 9.0, settings.max_speed):
        for _ in range(200):
            assert spawner.next_gap(speed) >= spawner.safety_floor


def test_floor_wins_over_short_configured_rates() -> None:
    settings = GameSettings(spawn_rate_min=5, spawn_rate_max=10, cluster_probability=0.0)
    spawner = ObstacleSpawner(settings, random.Random(1))
    assert all(spawner.next_gap(settings.max_speed) == spawner.safety_floor for _ in range(50))


def test_cluster_gaps_sit_just_above_floor() -> None:
    settings = GameSettings(cluster_probability=1.0, cluster_span=12)
    spawner = ObstacleSpawner(settings, random.Random(3))
    gaps = {spawner.next_gap(settings.initial_speed) for _ in range(300)}
    assert min(gaps) >= spawner.safety_floor
    assert max(gaps) <= spawner.safety_floor + 12


def test_relaxed_gaps_shrink_as_speed_rises() -> None:
    settings = GameSettings(cluster_probability=0.0, spawn_rate_min=100, spawn_rate_max=200)
    slow = ObstacleSpawner(settings, random.Random(5))
    fast = ObstacleSpawner(settings, random.Random(5))

    slow_gaps = [slow.next_gap(settings.initial_speed) for _ in range(200)]
    fast_gaps = [fast.next_gap(settings.max_speed) for _ in range(200)]

    assert all(100 <= g <= 200 for g in slow_gaps)
    assert sum(fast_gaps) < sum(slow_gaps)


def test_update_counts_down_then_spawns_and_resamples() -> None:
    settings = GameSettings()
    spawner = ObstacleSpawner(settings, random.Random(11))
    state = _state(settings, cooldown=3)

    assert spawner.update(state) is None
    assert spawner.update(state) is None
    obstacle = spawner.update(state)

    assert obstacle is not None
    assert state.obstacles == [obstacle]
    assert state.spawn_cooldown == spawner.last_gap
    assert spawner.last_gap >= spawner.safety_floor


def test_at_most_one_obstacle_per_update() -> None:
    settings = GameSettings()
    spawner = ObstacleSpawner(settings, random.Random(2))
    state = _state(settings, cooldown=-50)
    spawner.update(state)
    assert len(state.obstacles) == 1


def test_type_weights_are_respected() -> None:
    settings = GameSettings(obstacle_weights=(0.0, 0.0, 0.0, 1.0))
    spawner = ObstacleSpawner(settings, random.Random(0))
    assert {spawner.pick_type() for _ in range(100)} == {ObstacleType.FLYING_LARGE}


def test_type_distribution_follows_default_weights() -> None:
    spawner = ObstacleSpawner(GameSettings(), random.Random(42))
    counts = Counter(spawner.pick_type() for _ in range(10_000))
    assert set(counts) == set(OBSTACLE_ORDER)
    assert counts[ObstacleType.GROUND_SMALL] > counts[ObstacleType.GROUND_LARGE]
    assert counts[ObstacleType.GROUND_LARGE] > counts[ObstacleType.FLYING_SMALL]
    assert counts[ObstacleType.FLYING_SMALL] > counts[ObstacleType.FLYING_LARGE]


@pytest.mark.parametrize("obstacle_type", [ObstacleType.GROUND_SMALL, ObstacleType.GROUND_LARGE])
def test_ground_obstacles_stand_on_the_ground(obstacle_type: ObstacleType) -> None:
    settings = GameSettings()
    obstacle = ObstacleSpawner(settings).build(obstacle_type)
    assert obstacle.y + obstacle.height == pytest.approx(settings.ground_y)
    assert obstacle.x == settings.world_width + settings.spawn_margin
    assert obstacle.marked_for_deletion is False


@pytest.mark.parametrize("obstacle_type", [ObstacleType.FLYING_SMALL, ObstacleType.FLYING_LARGE])
def test_flying_obstacles_clear_a_standing_player(obstacle_type: ObstacleType) -> None:
    settings = GameSettings()
    spawner = ObstacleSpawner(settings, random.Random(9))
    resolver = CollisionResolver(settings)
    player = PlayerPhysics(settings).create_player()

    for _ in range(100):
        obstacle = spawner.build(obstacle_type)
        bottom = obstacle.y + obstacle.height
        assert settings.ground_y - settings.flying_clearance - settings.flying_band <= bottom
        assert bottom <= settings.ground_y - settings.flying_clearance

        # Slide it straight over the player: no hit while standing
        obstacle.x = player.x
        assert resolver.first_hit(player, [obstacle]) is None


@pytest.mark.parametrize("obstacle_type", [ObstacleType.FLYING_SMALL, ObstacleType.FLYING_LARGE])
def test_jumping_into_a_flying_obstacle_hits_it(obstacle_type: ObstacleType) -> None:
    settings = GameSettings()
    spawner = ObstacleSpawner(settings, random.Random(9))
    resolver = CollisionResolver(settings)
    physics = PlayerPhysics(settings)

    for _ in range(50):
        obstacle = spawner.build(obstacle_type)
        obstacle.x = settings.player_x
        state = _state(settings)
        assert physics.start_jump(state)

        hit = False
        for _ in range(jump_arc_frames(settings.gravity, settings.jump_strength)):
            physics.step(state, settings.reference_frame_ms)
            if resolver.first_hit(state.player, [obstacle]) is obstacle:
                hit = True
                break
        assert hit, f"full jump passed through {obstacle_type.name} at y={obstacle.y:.1f}"


def test_obstacle_sizes_match_settings() -> None:
    settings = GameSettings()
    spawner = ObstacleSpawner(settings)
    large = spawner.build(ObstacleType.GROUND_LARGE)
    assert (large.width, large.height) == settings.ground_large_size
