"""
Tests for brush rasterisation and brush state.

Tests:
- Disc and capsule coverage
- Idempotence and monotonic erosion
- Gap-free segments under fast motion
- Off-canvas coordinates and radius clamping
"""

import logging

import numpy as np
import pytest

from scratchr.core.brush import BrushEngine, BrushState
from scratchr.core.clearance import ClearanceEvaluator


@pytest.fixture
def engine():
    return BrushEngine()


class TestErasePoint:
    """Tests for disc erasure."""

    def test_disc_boundary(self, make_layer, engine):
        layer = make_layer(100, 100)
        engine.erase_point(layer, 50, 50, 10)

        a = layer.alpha  # indexed [row, col]
        assert a[50, 50] == 0
        assert a[60, 50] == 0      # distance 10: on the rim
        assert a[61, 50] != 0
        assert a[57, 57] == 0      # distance ~9.9
        assert a[58, 58] != 0      # distance ~11.3

    def test_only_alpha_changes(self, make_layer, engine):
        layer = make_layer(40, 40)
        rgb_before = layer.buffer[:, :, :3].copy()
        engine.erase_point(layer, 20, 20, 8)
        assert np.array_equal(layer.buffer[:, :, :3], rgb_before)

    def test_returns_newly_transparent_count(self, make_layer, engine):
        layer = make_layer(100, 100)
        n = engine.erase_point(layer, 50, 50, 10)

        assert n > 0
        assert n == ClearanceEvaluator.rescan(layer)
        assert layer.transparent_count == n

    def test_idempotent(self, make_layer, engine):
        layer = make_layer(60, 60)
        engine.erase_point(layer, 30, 30, 12)
        snapshot = layer.buffer.copy()

        assert engine.erase_point(layer, 30, 30, 12) == 0
        assert np.array_equal(layer.buffer, snapshot)

    def test_disc_off_canvas_erases_nothing(self, make_layer, engine):
        layer = make_layer(100, 100)
        assert engine.erase_point(layer, -40, 50, 5) == 0
        assert np.all(layer.alpha == 255)

    def test_disc_straddling_edge_is_clipped(self, make_layer, engine):
        layer = make_layer(50, 50)
        engine.erase_point(layer, -2, 10, 5)

        assert layer.alpha[10, 0] == 0
        assert layer.alpha[10, 3] == 0      # distance 5 from (-2, 10)
        assert layer.alpha[10, 4] != 0
        assert layer.alpha[14, 0] == 0      # distance ~4.5
        assert layer.alpha[15, 0] != 0      # distance ~5.4

    def test_huge_coordinates_are_harmless(self, make_layer, engine):
        layer = make_layer(20, 20)
        assert engine.erase_point(layer, float("inf"), 1e300, 5) == 0

    def test_inactive_layer_is_rejected(self, make_layer, engine):
        layer = make_layer(20, 20, active=False)
        with pytest.raises(AssertionError):
            engine.erase_point(layer, 5, 5, 3)


class TestEraseSegment:
    """Tests for capsule erasure."""

    def test_no_gap_under_fast_motion(self, make_layer, engine):
        """Every point of the segment lands on an erased pixel, even with radius 1."""
        layer = make_layer(100, 100)
        a, b = (5.0, 5.0), (95.0, 80.0)
        engine.erase_segment(layer, a, b, 1)

        for t in np.linspace(0.0, 1.0, 500):
            x = a[0] + t * (b[0] - a[0])
            y = a[1] + t * (b[1] - a[1])
            assert layer.alpha[int(round(y)), int(round(x))] == 0

    def test_segment_fills_what_isolated_dots_miss(self, make_layer, engine):
        dots = make_layer(100, 100)
        engine.erase_point(dots, 10, 50, 4)
        engine.erase_point(dots, 90, 50, 4)
        assert dots.alpha[50, 50] != 0

        line = make_layer(100, 100)
        engine.erase_segment(line, (10, 50), (90, 50), 4)
        assert np.all(line.alpha[50, 10:91] == 0)

    def test_round_caps(self, make_layer, engine):
        layer = make_layer(100, 100)
        engine.erase_segment(layer, (30, 50), (70, 50), 5)

        assert layer.alpha[50, 25] == 0     # cap reaches radius past the start
        assert layer.alpha[50, 24] != 0
        assert layer.alpha[45, 50] == 0
        assert layer.alpha[44, 50] != 0
        assert layer.alpha[54, 26] != 0     # corner outside the rounded cap

    def test_zero_length_segment_is_a_disc(self, make_layer, engine):
        seg = make_layer(40, 40)
        dot = make_layer(40, 40)
        engine.erase_segment(seg, (20, 20), (20, 20), 6)
        engine.erase_point(dot, 20, 20, 6)
        assert np.array_equal(seg.alpha, dot.alpha)

    def test_segment_through_buffer_erases_in_bounds_part(self, make_layer, engine):
        layer = make_layer(80, 60)
        engine.erase_segment(layer, (-100, 30), (500, 30), 2)
        assert np.all(layer.alpha[30, :] == 0)

    def test_oblique_segment_from_off_canvas_keeps_its_line(self, make_layer, engine):
        """Only the in-bounds part is erased, and it lies on the true line."""
        layer = make_layer(200, 200)
        a, b = (-100.0, 0.0), (50.0, 150.0)
        engine.erase_segment(layer, a, b, 5)

        # y = x + 100 on the buffer: (0, 100) .. (50, 150)
        for x in range(0, 51):
            assert layer.alpha[x + 100, x] == 0
        assert layer.alpha[110, 10] == 0
        # off the line
        assert layer.alpha[0, 0] == 255
        assert layer.alpha[50, 20] == 255

    def test_segment_fully_off_canvas_erases_nothing(self, make_layer, engine):
        layer = make_layer(50, 50)
        assert engine.erase_segment(layer, (-80, -10), (-20, 90), 4) == 0
        assert engine.erase_segment(layer, (-1e12, 25), (-1e9, 25), 4) == 0
        assert np.all(layer.alpha == 255)

    def test_segment_with_far_endpoint(self, make_layer, engine):
        layer = make_layer(50, 50)
        engine.erase_segment(layer, (25, 25), (1e12, 25), 2)
        assert np.all(layer.alpha[25, 25:] == 0)
        assert layer.alpha[25, 20] != 0

    def test_erasing_is_not_logged(self, make_layer, engine, caplog):
        layer = make_layer(50, 50)
        with caplog.at_level(logging.DEBUG):
            engine.erase_point(layer, 10, 10, 3)
            for x in range(10, 40):
                engine.erase_segment(layer, (x, 10), (x + 1, 12), 3)
        assert caplog.records == []

    def test_idempotent(self, make_layer, engine):
        layer = make_layer(60, 60)
        engine.erase_segment(layer, (0, 0), (59, 40), 5)
        snapshot = layer.buffer.copy()
        count = layer.transparent_count

        assert engine.erase_segment(layer, (0, 0), (59, 40), 5) == 0
        assert np.array_equal(layer.buffer, snapshot)
        assert layer.transparent_count == count


class TestMonotonicErosion:

    def test_ratio_never_decreases(self, make_layer, engine):
        layer = make_layer(120, 90)
        evaluator = ClearanceEvaluator("scan")
        rng = np.random.default_rng(1234)
        prev = evaluator.evaluate(layer)
        last = (60.0, 45.0)
        for _ in range(60):
            nxt = (float(rng.uniform(-20, 140)), float(rng.uniform(-20, 110)))
            r = int(rng.integers(1, 12))
            if rng.random() < 0.3:
                engine.erase_point(layer, nxt[0], nxt[1], r)
            else:
                engine.erase_segment(layer, last, nxt, r)
            last = nxt
            ratio = evaluator.evaluate(layer)
            assert ratio >= prev
            assert layer.transparent_count == ClearanceEvaluator.rescan(layer)
            prev = ratio


class TestBrushState:

    def test_radius_is_clamped_to_bounds(self):
        b = BrushState(radius=20, min_radius=2, max_radius=50)
        assert b.set_radius(0) == 2
        assert b.set_radius(-7) == 2
        assert b.set_radius(500) == 50
        assert b.set_radius(33) == 33

    def test_unparseable_radius_keeps_current(self):
        b = BrushState(radius=12)
        assert b.set_radius("wide") == 12
        assert b.set_radius(None) == 12

    def test_initial_radius_is_clamped(self):
        assert BrushState(radius=0).radius == 1
        assert BrushState(radius=1000, max_radius=100).radius == 100

    def test_stroke_state_invariant(self):
        b = BrushState()
        assert not b.stroke_active and b.last_position is None

        b.begin((3.0, 4.0))
        assert b.stroke_active and b.last_position == (3.0, 4.0)

        b.advance((5.0, 6.0))
        assert b.last_position == (5.0, 6.0)

        b.end()
        assert not b.stroke_active and b.last_position is None
