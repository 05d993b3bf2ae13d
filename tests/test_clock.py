from __future__ import annotations

import pytest

from wedding_run.game.clock import FrameClock


def test_first_frame_uses_default_delta() -> None:
    clock = FrameClock(default_ms=16.0, max_ms=100.0)
    assert clock.advance(5000.0) == 16.0


def test_regular_delta_is_passed_through() -> None:
    clock = FrameClock(default_ms=16.0, max_ms=100.0)
    clock.advance(0.0)
    assert clock.advance(20.0) == pytest.approx(20.0)
    assert clock.last_delta == pytest.approx(20.0)


def test_backgrounded_tab_delta_is_replaced_by_last_good_delta() -> None:
    clock = FrameClock(default_ms=16.0, max_ms=100.0)
    clock.advance(0.0)
    clock.advance(18.0)
    assert clock.advance(10_018.0) == pytest.approx(18.0)
    # The next regular frame measures from the stalled timestamp
    assert clock.advance(10_034.0) == pytest.approx(16.0)


@pytest.mark.parametrize("next_ts", [17.0, 5.0])
def test_duplicate_or_backwards_timestamp_is_replaced(next_ts: float) -> None:
    clock = FrameClock(default_ms=16.0, max_ms=100.0)
    clock.advance(0.0)
    clock.advance(17.0)
    assert clock.advance(next_ts) == pytest.approx(17.0)


def test_reset_forgets_history() -> None:
    clock = FrameClock(default_ms=16.0, max_ms=100.0)
    clock.advance(0.0)
    clock.advance(30.0)
    clock.reset()
    assert clock.last_delta == 16.0
    assert clock.advance(1_000_000.0) == 16.0
