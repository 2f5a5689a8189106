"""Tests for the frame clock."""

import pytest

from avatar_physics.simulation.time_controller import TimeController


class TestFrameDelta:
    def test_first_frame_yields_zero(self):
        clock = TimeController()
        assert clock.frame_delta(12.5) == 0.0

    def test_delta_since_previous_frame(self):
        clock = TimeController()
        clock.frame_delta(1.0)
        assert clock.frame_delta(1.025) == pytest.approx(0.025)

    def test_large_gaps_are_clamped(self):
        clock = TimeController(max_delta=0.1)
        clock.frame_delta(1.0)
        assert clock.frame_delta(5.0) == 0.1

    def test_backwards_timestamps_yield_zero(self):
        clock = TimeController()
        clock.frame_delta(2.0)
        assert clock.frame_delta(1.0) == 0.0

    def test_paused_clock_yields_zero(self):
        clock = TimeController()
        clock.frame_delta(1.0)
        clock.pause()
        assert clock.frame_delta(1.05) == 0.0
        clock.resume()
        assert clock.frame_delta(1.06) == pytest.approx(0.01)

    def test_reset_forgets_last_frame(self):
        clock = TimeController()
        clock.frame_delta(1.0)
        clock.reset()
        assert clock.frame_delta(1.05) == 0.0


class TestTick:
    def test_tick_advances_time(self):
        clock = TimeController(time_step=0.25)
        clock.tick()
        assert clock.tick(0.5) == 0.75

    def test_paused_tick_does_not_advance(self):
        clock = TimeController(time_step=0.25)
        assert clock.toggle_pause() is True
        assert clock.tick() == 0.0

    def test_tick_callback(self):
        ticks = []
        clock = TimeController(time_step=0.5)
        clock.set_time_tick_callback(ticks.append)
        clock.tick()
        clock.tick()
        assert ticks == [0.5, 1.0]

    def test_set_time_is_non_negative(self):
        clock = TimeController()
        clock.set_time(-3.0)
        assert clock.current_time == 0.0
