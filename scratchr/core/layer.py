from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import numpy as np
import cv2

from scratchr.core.logging import get_logger

ALPHA = 3
OPAQUE = 255

_log = get_logger(__name__)


def to_rgb(image: np.ndarray) -> np.ndarray:
    """Normalise a decoded image (gray, RGB or RGBA; uint8) to 3-channel RGB."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    ch = image.shape[2]
    if ch == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGB)
    if ch == 4:
        return np.ascontiguousarray(image[:, :, :3])
    assert ch == 3, f"unsupported channel count {ch}"
    return image


@dataclass(eq=False)
class Layer:
    """
    One erasable raster surface. The buffer is (h, w, 4) uint8 RGBA; only the
    alpha plane is ever touched by the brush.
    index 0 is the topmost layer (first to be scratched).
    """
    index: int
    source_image: np.ndarray
    buffer: np.ndarray = field(default_factory=lambda: np.zeros((1, 1, 4), dtype=np.uint8))
    active: bool = False
    cleared: bool = False
    # pixels with alpha == 0, kept in step by BrushEngine
    transparent_count: int = 0

    @property
    def width(self) -> int:
        return int(self.buffer.shape[1])

    @property
    def height(self) -> int:
        return int(self.buffer.shape[0])

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def alpha(self) -> np.ndarray:
        return self.buffer[:, :, ALPHA]

    def reset(self, image: Optional[np.ndarray], width: int, height: int) -> None:
        """
        Composite `image` scaled to fill a fresh width × height buffer at full opacity.
        Always allocates; nothing from the previous buffer survives. `active` is left
        for the sequencer to decide.
        """
        if image is not None:
            self.source_image = image
        w, h = max(1, int(width)), max(1, int(height))
        rgb = to_rgb(self.source_image)
        src_h, src_w = rgb.shape[:2]
        # INTER_AREA is the better filter when shrinking, linear when growing
        interp = cv2.INTER_AREA if (w < src_w or h < src_h) else cv2.INTER_LINEAR
        scaled = cv2.resize(rgb, (w, h), interpolation=interp)

        buf = np.empty((h, w, 4), dtype=np.uint8)
        buf[:, :, :3] = scaled
        buf[:, :, ALPHA] = OPAQUE
        self.buffer = buf
        self.transparent_count = 0
        self.cleared = False
        _log.debug("Layer %d reset to %dx%d", self.index, w, h)
