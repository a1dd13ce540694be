"""Tests for the reveal/time-mapping engine."""

import random

import pytest

from replaytap.reveal import RevealEngine, compute_reveal

TIMES = [0, 500, 2000, 2000, 7000, 15000]


@pytest.mark.parametrize("clock", [-1, 0, 1, 499, 500, 1999, 2000, 6999, 7000, 20000])
def test_visible_set_is_exactly_entries_at_or_before_clock(clock) -> None:
    result = compute_reveal(TIMES, clock)
    assert result.visible_indices() == [i for i, t in enumerate(TIMES) if t <= clock]


def test_visible_set_is_path_independent() -> None:
    rng = random.Random(7)
    stepped = RevealEngine(TIMES)
    for clock in sorted(rng.uniform(0, 16000) for _ in range(40)):
        stepped.advance(clock)
    final = stepped.advance(9000)

    jumped = RevealEngine(TIMES).advance(9000)
    assert final.visible == jumped.visible
    assert final.active_index == jumped.active_index


def test_active_entry_is_nearest_within_threshold() -> None:
    result = compute_reveal(TIMES, 2400)
    assert result.active_index == 2  # first of the tied 2000 entries


def test_no_active_entry_after_long_gap() -> None:
    result = compute_reveal(TIMES, 5000)
    assert result.visible_count == 4
    assert result.active_index is None


def test_threshold_is_strict() -> None:
    assert compute_reveal([0], 1500).active_index is None
    assert compute_reveal([0], 1499).active_index == 0


def test_future_entries_never_active() -> None:
    result = compute_reveal([1000], 900)
    assert result.visible_count == 0
    assert result.active_index is None


def test_initial_state_has_no_clock() -> None:
    engine = RevealEngine(TIMES)
    assert not engine.state.has_clock
    assert engine.state.visible_up_to == -1
    engine.advance(100)
    assert engine.state.has_clock


def test_backward_seek_shrinks_and_forward_grows() -> None:
    engine = RevealEngine(TIMES)
    forward = engine.advance(8000).visible_count
    back = engine.advance(1000).visible_count
    again = engine.advance(16000).visible_count
    assert back < forward < again


def test_scroll_target_once_per_change() -> None:
    engine = RevealEngine(TIMES)
    assert engine.advance(100).scroll_to == 0
    assert engine.advance(200).scroll_to is None
    # Seek revealing several entries scrolls to the last one only
    assert engine.advance(7500).scroll_to == 4
    assert engine.advance(600).scroll_to == 1
    assert engine.advance(-10).scroll_to is None
    assert engine.advance(600).scroll_to == 1


def test_state_tracks_last_visible_and_active() -> None:
    engine = RevealEngine(TIMES)
    engine.advance(600)
    assert engine.state.visible_up_to == 1
    assert engine.state.active_index == 1
    engine.reset()
    assert not engine.state.has_clock


def test_custom_proximity() -> None:
    engine = RevealEngine([0], proximity_ms=100)
    assert engine.advance(150).active_index is None
