"""
Tests for clearance evaluation.
"""

import numpy as np
import pytest

from scratchr.core.brush import BrushEngine
from scratchr.core.clearance import (
    CLEAR_THRESHOLD, ClearanceEvaluator, MODE_INCREMENTAL, MODE_SCAN,
    is_cleared_ratio, transparent_ratio,
)


class TestThreshold:

    def test_contract_value(self):
        assert CLEAR_THRESHOLD == 0.99

    def test_boundary_is_strict(self):
        assert not is_cleared_ratio(0.99)
        assert is_cleared_ratio(0.990001)
        assert not is_cleared_ratio(0.5)
        assert is_cleared_ratio(1.0)

    def test_ratio_of_empty_buffer(self):
        assert transparent_ratio(0, 0) == 0.0


@pytest.mark.parametrize("mode", [MODE_INCREMENTAL, MODE_SCAN])
class TestEvaluator:

    def test_fresh_layer_is_opaque(self, make_layer, mode):
        layer = make_layer(50, 50)
        assert ClearanceEvaluator(mode).evaluate(layer) == 0.0

    def test_exactly_99_percent_is_not_cleared(self, make_layer, mode):
        layer = make_layer(100, 100)
        layer.buffer[:99, :, 3] = 0
        layer.transparent_count = 9900
        ev = ClearanceEvaluator(mode)

        assert ev.evaluate(layer) == 0.99
        assert not ev.is_cleared(layer)

        layer.buffer[99, 0, 3] = 0
        layer.transparent_count += 1
        assert ev.is_cleared(layer)

    def test_full_erasure_clears(self, make_layer, mode):
        layer = make_layer(100, 100)
        BrushEngine().erase_point(layer, 50, 50, 75)
        ev = ClearanceEvaluator(mode)

        assert ev.evaluate(layer) == 1.0
        assert ev.is_cleared(layer)


class TestModesAgree:

    def test_incremental_matches_rescan_after_strokes(self, make_layer):
        layer = make_layer(160, 120)
        engine = BrushEngine()
        inc, scan = ClearanceEvaluator(MODE_INCREMENTAL), ClearanceEvaluator(MODE_SCAN)
        rng = np.random.default_rng(7)
        pos = (80.0, 60.0)
        for _ in range(40):
            nxt = (float(rng.uniform(0, 160)), float(rng.uniform(0, 120)))
            engine.erase_segment(layer, pos, nxt, int(rng.integers(1, 15)))
            pos = nxt
            assert inc.evaluate(layer) == scan.evaluate(layer)
            assert inc.is_cleared(layer) == scan.is_cleared(layer)

    def test_unknown_mode_falls_back(self):
        assert ClearanceEvaluator("sometimes").mode == MODE_INCREMENTAL
