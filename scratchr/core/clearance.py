from __future__ import annotations
import numpy as np

from scratchr.core.layer import Layer
from scratchr.core.logging import get_logger

# Fixed contract values: strictly more than 99% transparent counts as cleared.
CLEAR_THRESHOLD = 0.99

MODE_INCREMENTAL = "incremental"
MODE_SCAN = "scan"
MODES = (MODE_INCREMENTAL, MODE_SCAN)


def transparent_ratio(transparent: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return transparent / total


def is_cleared_ratio(ratio: float) -> bool:
    return ratio > CLEAR_THRESHOLD


class ClearanceEvaluator:
    """
    Fraction of fully transparent pixels in a layer.

    "scan" walks the whole alpha plane every call. "incremental" trusts the
    counter BrushEngine maintains on the layer, which makes evaluation O(1)
    per pointer move. The two agree exactly as long as only BrushEngine and
    Layer.reset write to the alpha plane.
    """

    def __init__(self, mode: str = MODE_INCREMENTAL) -> None:
        self._log = get_logger(__name__)
        if mode not in MODES:
            self._log.warning("Unknown clearance mode %r; falling back to %s", mode, MODE_INCREMENTAL)
            mode = MODE_INCREMENTAL
        self.mode = mode

    @staticmethod
    def rescan(layer: Layer) -> int:
        """Full-buffer count of pixels with alpha exactly zero."""
        return int(np.count_nonzero(layer.alpha == 0))

    def transparent_pixels(self, layer: Layer) -> int:
        if self.mode == MODE_SCAN:
            return self.rescan(layer)
        return layer.transparent_count

    def evaluate(self, layer: Layer) -> float:
        return transparent_ratio(self.transparent_pixels(layer), layer.pixel_count)

    def is_cleared(self, layer: Layer) -> bool:
        return is_cleared_ratio(self.evaluate(layer))
