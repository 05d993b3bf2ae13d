from __future__ import annotations

import os
import random
from collections.abc import Callable

import pytest

# pygame must never open a real window or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from wedding_run.config.settings import GameSettings
from wedding_run.game.simulation import RunnerSimulation

FRAME_MS = 1000.0 / 60.0


@pytest.fixture()
def game_settings() -> GameSettings:
    return GameSettings()


@pytest.fixture()
def make_sim() -> Callable[..., RunnerSimulation]:
    """Build a seeded simulation with optional setting overrides."""

    def _make(on_game_over=None, seed: int = 7, **overrides) -> RunnerSimulation:
        return RunnerSimulation(
            settings=GameSettings(**overrides),
            on_game_over=on_game_over,
            rng=random.Random(seed),
        )

    return _make


@pytest.fixture()
def run_frames() -> Callable[..., float]:
    """Tick a simulation at a steady 60 fps; returns the next timestamp."""

    def _run(sim: RunnerSimulation, frames: int, start_ms: float = 0.0) -> float:
        ts = start_ms
        for _ in range(frames):
            sim.tick(ts)
            ts += FRAME_MS
        return ts

    return _run
