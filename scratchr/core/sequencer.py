from __future__ import annotations
from enum import Enum
from typing import List, Optional, Sequence
import numpy as np

from scratchr.core.layer import Layer
from scratchr.core.clearance import ClearanceEvaluator, is_cleared_ratio
from scratchr.core.logging import get_logger


class SequencerEvent(str, Enum):
    ADVANCED = "advanced"
    ALL_CLEARED = "all_cleared"


class LayerSequencer:
    """
    Which layer is scratchable.

    States are Active(i) for 0 <= i < layer_count and the terminal AllCleared
    (active_index is None). Every layer above the active one is cleared and
    inactive; exactly one layer is active until AllCleared, after which none is.
    Only the active layer is ever evaluated, so one call advances at most once.
    """

    def __init__(self, images: Sequence[np.ndarray], width: int, height: int,
                 evaluator: Optional[ClearanceEvaluator] = None) -> None:
        self._log = get_logger(__name__)
        self.evaluator = evaluator or ClearanceEvaluator()
        self.layers: List[Layer] = [Layer(index=i, source_image=img) for i, img in enumerate(images)]
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.active_index: Optional[int] = None
        self.reset()

    # ──────────────────────────────────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────────────────────────────────
    @property
    def layer_count(self) -> int:
        return len(self.layers)

    @property
    def all_cleared(self) -> bool:
        return self.active_index is None

    @property
    def active_layer(self) -> Optional[Layer]:
        if self.active_index is None:
            return None
        return self.layers[self.active_index]

    def is_cleared(self, index: int) -> bool:
        return self.layers[index].cleared

    # ──────────────────────────────────────────────────────────────────────────
    # Transitions
    # ──────────────────────────────────────────────────────────────────────────
    def reset(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        """Back to Active(0) with every layer recomposited; progress is discarded."""
        if width is not None:
            self.width = max(1, int(width))
        if height is not None:
            self.height = max(1, int(height))
        for layer in self.layers:
            layer.reset(None, self.width, self.height)
            layer.active = layer.index == 0
        self.active_index = 0 if self.layers else None
        self._log.info("Sequencer reset: %d layers at %dx%d", self.layer_count, self.width, self.height)

    def evaluate_active(self) -> Optional[SequencerEvent]:
        """Re-check the active layer and advance one step if it is cleared."""
        layer = self.active_layer
        if layer is None:
            return None
        ratio = self.evaluator.evaluate(layer)
        if not is_cleared_ratio(ratio):
            return None

        layer.cleared = True
        layer.active = False
        nxt = layer.index + 1
        if nxt < self.layer_count:
            self.active_index = nxt
            self.layers[nxt].active = True
            self._log.info("Layer %d cleared (%.4f); layer %d active", layer.index, ratio, nxt)
            return SequencerEvent.ADVANCED

        self.active_index = None
        self._log.info("Layer %d cleared (%.4f); all layers cleared", layer.index, ratio)
        return SequencerEvent.ALL_CLEARED
