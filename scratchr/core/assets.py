from __future__ import annotations
from pathlib import Path
from typing import List, Sequence
import numpy as np
import cv2

from scratchr.core.logging import get_logger

_log = get_logger(__name__)


class AssetLoadError(RuntimeError):
    """An image could not be read or decoded."""


def load_image(path: str | Path) -> np.ndarray:
    """
    Decode an image file to RGB (or RGBA when it carries alpha), uint8.
    Raises AssetLoadError instead of returning None like cv2.imread does.
    """
    p = Path(path)
    # imdecode on the raw bytes copes with non-ASCII paths on Windows where imread does not
    try:
        raw = np.fromfile(str(p), dtype=np.uint8)
    except OSError as ex:
        raise AssetLoadError(f"cannot read {p}: {ex}") from ex
    img = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise AssetLoadError(f"cannot decode {p}")

    if img.dtype == np.uint16:
        # 16-bit PNG/TIFF → 8-bit
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise AssetLoadError(f"unsupported pixel type {img.dtype} in {p}")

    if img.ndim == 2:
        rgb = img
    elif img.shape[2] == 4:
        rgb = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    else:
        rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    _log.info("Loaded %s (%dx%d)", p.name, rgb.shape[1], rgb.shape[0])
    return rgb


def load_layer_images(paths: Sequence[str | Path]) -> List[np.ndarray]:
    """Load a whole stack, top layer first. Any failure aborts the batch."""
    return [load_image(p) for p in paths]


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    c = color.strip().lstrip("#")
    if len(c) != 6:
        raise ValueError(f"expected #rrggbb, got {color!r}")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def placeholder_image(color: str, width: int = 640, height: int = 360, label: str = "") -> np.ndarray:
    """Solid RGB layer with a centred caption, used when no layer images are configured."""
    img = np.empty((max(1, height), max(1, width), 3), dtype=np.uint8)
    img[:, :] = hex_to_rgb(color)
    if label:
        font = cv2.FONT_HERSHEY_SIMPLEX
        scale = max(0.5, min(width, height) / 180.0)
        thickness = max(1, int(scale * 2))
        (tw, th), _ = cv2.getTextSize(label, font, scale, thickness)
        org = ((width - tw) // 2, (height + th) // 2)
        cv2.putText(img, label, org, font, scale, (32, 33, 36), thickness, cv2.LINE_AA)
    return img


def placeholder_stack(colors: Sequence[str], width: int = 640, height: int = 360) -> List[np.ndarray]:
    return [placeholder_image(c, width, height, f"Layer {i + 1}") for i, c in enumerate(colors)]
