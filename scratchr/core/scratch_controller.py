from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import math
import numpy as np

from scratchr.qt import QtCore
from scratchr.core.brush import BrushEngine, BrushState
from scratchr.core.clearance import ClearanceEvaluator, MODE_INCREMENTAL
from scratchr.core.events import (
    BrushSizeChanged, PointerDown, PointerMove, PointerUp, Reset, Resize, ScratchEvent,
)
from scratchr.core.layer import Layer
from scratchr.core.sequencer import LayerSequencer, SequencerEvent
from scratchr.core.logging import get_logger


def map_to_buffer(x: float, y: float, display_w: float, display_h: float,
                  buffer_w: int, buffer_h: int) -> Tuple[int, int]:
    """Display coordinates → buffer pixels (linear scale, floored)."""
    sx = buffer_w / display_w if display_w > 0 else 1.0
    sy = buffer_h / display_h if display_h > 0 else 1.0
    return int(math.floor(x * sx)), int(math.floor(y * sy))


class ScratchController(QtCore.QObject):
    """
    Owns every piece of scratch state: brush, stroke, layer stack and sequencer.
    Consumes the input event stream synchronously via handle(); after every
    erasure (pointer-down dot included) the active layer is re-evaluated.
    """
    layerChanged = QtCore.Signal(int)          # new active index
    allCleared = QtCore.Signal()
    layersReset = QtCore.Signal()
    brushRadiusChanged = QtCore.Signal(int)
    bufferChanged = QtCore.Signal(int)         # layer index that was erased

    def __init__(self, images: Sequence[np.ndarray], width: int, height: int,
                 radius: int = 20, min_radius: int = 1, max_radius: int = 100,
                 clearance_mode: str = MODE_INCREMENTAL,
                 parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._log = get_logger(__name__)
        self.brush = BrushState(radius=radius, min_radius=min_radius, max_radius=max_radius)
        self.engine = BrushEngine()
        self.evaluator = ClearanceEvaluator(clearance_mode)
        self.sequencer = LayerSequencer(images, width, height, self.evaluator)

    # ──────────────────────────────────────────────────────────────────────────
    # Exposed state
    # ──────────────────────────────────────────────────────────────────────────
    @property
    def layers(self) -> List[Layer]:
        return self.sequencer.layers

    @property
    def current_layer_index(self) -> Optional[int]:
        return self.sequencer.active_index

    @property
    def all_cleared(self) -> bool:
        return self.sequencer.all_cleared

    @property
    def brush_radius(self) -> int:
        return self.brush.radius

    @property
    def buffer_size(self) -> Tuple[int, int]:
        return self.sequencer.width, self.sequencer.height

    def is_cleared(self, index: int) -> bool:
        return self.sequencer.is_cleared(index)

    # ──────────────────────────────────────────────────────────────────────────
    # Event stream
    # ──────────────────────────────────────────────────────────────────────────
    def handle(self, event: ScratchEvent) -> None:
        if isinstance(event, PointerDown):
            self._on_pointer_down(event.x, event.y)
        elif isinstance(event, PointerMove):
            self._on_pointer_move(event.x, event.y)
        elif isinstance(event, PointerUp):
            self._end_stroke()
        elif isinstance(event, Resize):
            self._on_resize(event.width, event.height)
        elif isinstance(event, Reset):
            self.reset()
        elif isinstance(event, BrushSizeChanged):
            self.set_brush_radius(event.radius)
        else:
            raise TypeError(f"unknown scratch event: {event!r}")

    def reset(self) -> None:
        self._end_stroke()
        self.sequencer.reset()
        self._announce_reset()

    def set_brush_radius(self, radius) -> int:
        before = self.brush.radius
        r = self.brush.set_radius(radius)
        if r != radius:
            self._log.debug("Brush radius %r clamped to %d", radius, r)
        if r != before:
            self.brushRadiusChanged.emit(r)
        return r

    def set_images(self, images: Sequence[np.ndarray]) -> None:
        """Swap in a new layer stack at the current size (asset loader completion)."""
        self._end_stroke()
        w, h = self.buffer_size
        self.sequencer = LayerSequencer(images, w, h, self.evaluator)
        self._log.info("Loaded %d layer images", len(images))
        self._announce_reset()

    # Internals
    def _on_pointer_down(self, x: float, y: float) -> None:
        layer = self.sequencer.active_layer
        if layer is None:
            return
        pos = (float(x), float(y))
        self.brush.begin(pos)
        self.engine.erase_point(layer, pos[0], pos[1], self.brush.radius)
        self._after_erase(layer)

    def _on_pointer_move(self, x: float, y: float) -> None:
        if not self.brush.stroke_active:
            return
        layer = self.sequencer.active_layer
        if layer is None:
            return
        pos = (float(x), float(y))
        # The stroke carries on into the next layer once the previous one is cleared
        self.engine.erase_segment(layer, self.brush.last_position, pos, self.brush.radius)
        self.brush.advance(pos)
        self._after_erase(layer)

    def _after_erase(self, layer: Layer) -> None:
        self.bufferChanged.emit(layer.index)
        outcome = self.sequencer.evaluate_active()
        if outcome is SequencerEvent.ADVANCED:
            self.layerChanged.emit(self.sequencer.active_index)
        elif outcome is SequencerEvent.ALL_CLEARED:
            self._end_stroke()
            self.allCleared.emit()

    def _on_resize(self, width: int, height: int) -> None:
        w, h = max(1, int(width)), max(1, int(height))
        if (w, h) == self.buffer_size:
            return
        self._log.info("Viewport resized to %dx%d; reloading layers", w, h)
        self._end_stroke()
        self.sequencer.reset(w, h)
        self._announce_reset()

    def _end_stroke(self) -> None:
        self.brush.end()

    def _announce_reset(self) -> None:
        if self.sequencer.active_index is None:
            self.allCleared.emit()
        else:
            self.layerChanged.emit(self.sequencer.active_index)
        self.layersReset.emit()
