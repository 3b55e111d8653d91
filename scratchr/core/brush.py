from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from scratchr.core.layer import Layer, ALPHA

Point = Tuple[float, float]


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


# Coordinates past this are treated as this far out; keeps the float math finite
FAR = 1e6


def clip_segment(a: Point, b: Point, lo: Point, hi: Point) -> Optional[Tuple[Point, Point]]:
    """
    Liang-Barsky: the part of a→b inside the box lo..hi, or None when it misses.
    The clipped segment lies on the original line.
    """
    ax, ay = clamp(a[0], -FAR, FAR), clamp(a[1], -FAR, FAR)
    bx, by = clamp(b[0], -FAR, FAR), clamp(b[1], -FAR, FAR)
    dx, dy = bx - ax, by - ay
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, ax - lo[0]), (dx, hi[0] - ax), (-dy, ay - lo[1]), (dy, hi[1] - ay)):
        if p == 0.0:
            if q < 0.0:
                return None
            continue
        t = q / p
        if p < 0.0:
            t0 = max(t0, t)
        else:
            t1 = min(t1, t)
        if t0 > t1:
            return None
    return (ax + t0 * dx, ay + t0 * dy), (ax + t1 * dx, ay + t1 * dy)


@dataclass
class BrushState:
    """
    Radius plus the in-progress stroke.
    last_position is set exactly while stroke_active is True.
    """
    radius: int = 20
    min_radius: int = 1
    max_radius: int = 100
    last_position: Optional[Point] = None
    stroke_active: bool = False

    def __post_init__(self) -> None:
        self.min_radius = max(1, int(self.min_radius))
        self.max_radius = max(self.min_radius, int(self.max_radius))
        self.radius = self.clamp_radius(self.radius)

    def clamp_radius(self, value) -> int:
        """Out-of-range or non-positive sizes snap to the nearest bound."""
        try:
            r = int(round(float(value)))
        except (TypeError, ValueError, OverflowError):
            # Unparseable input keeps the current size
            cur = self.radius
            if isinstance(cur, int) and self.min_radius <= cur <= self.max_radius:
                return cur
            return self.min_radius
        return int(clamp(r, self.min_radius, self.max_radius))

    def set_radius(self, value) -> int:
        self.radius = self.clamp_radius(value)
        return self.radius

    def begin(self, pos: Point) -> None:
        self.stroke_active = True
        self.last_position = pos

    def advance(self, pos: Point) -> None:
        assert self.stroke_active, "advance() outside a stroke"
        self.last_position = pos

    def end(self) -> None:
        self.stroke_active = False
        self.last_position = None


class BrushEngine:
    """
    Alpha-only erasure onto a layer's buffer.

    A pixel (col, row) is erased when its centre lies within `radius` of the
    shape: a point for discs, the segment start→end for capsules. Only the
    bounding box of the shape is rasterised. Both primitives return how many
    pixels went from non-zero to zero alpha and fold that into
    layer.transparent_count, so a running count always equals a rescan.
    """

    @staticmethod
    def band(layer: Layer, radius: int) -> Tuple[Point, Point]:
        """
        Box reaching one buffer plus one radius past every edge. Anything outside it
        is too far away to touch the buffer, so coordinates can be bounded to it
        without changing which pixels get erased.
        """
        r = max(1, int(radius))
        w, h = layer.width, layer.height
        return (-float(r + w), -float(r + h)), (2.0 * w + r, 2.0 * h + r)

    def erase_point(self, layer: Layer, x: float, y: float, radius: int) -> int:
        lo, hi = self.band(layer, radius)
        p = (clamp(float(x), lo[0], hi[0]), clamp(float(y), lo[1], hi[1]))
        return self._erase_capsule(layer, p, p, radius)

    def erase_segment(self, layer: Layer, start: Point, end: Point, radius: int) -> int:
        lo, hi = self.band(layer, radius)
        clipped = clip_segment((float(start[0]), float(start[1])), (float(end[0]), float(end[1])), lo, hi)
        if clipped is None:
            return 0
        return self._erase_capsule(layer, clipped[0], clipped[1], radius)

    def _erase_capsule(self, layer: Layer, a: Point, b: Point, radius: int) -> int:
        assert layer.active, f"erasure routed to inactive layer {layer.index}"
        r = max(1, int(radius))
        (ax, ay), (bx, by) = a, b

        # Bounding box of the capsule, intersected with the buffer
        x0 = max(0, int(np.floor(min(ax, bx) - r)))
        x1 = min(layer.width - 1, int(np.ceil(max(ax, bx) + r)))
        y0 = max(0, int(np.floor(min(ay, by) - r)))
        y1 = min(layer.height - 1, int(np.ceil(max(ay, by) + r)))
        if x1 < x0 or y1 < y0:
            return 0

        xs = np.arange(x0, x1 + 1, dtype=np.float64)[np.newaxis, :]
        ys = np.arange(y0, y1 + 1, dtype=np.float64)[:, np.newaxis]

        # Distance² from each pixel centre to the nearest point on a→b
        dx, dy = bx - ax, by - ay
        seg_len2 = dx * dx + dy * dy
        if seg_len2 > 0.0:
            t = ((xs - ax) * dx + (ys - ay) * dy) / seg_len2
            t = np.clip(t, 0.0, 1.0)
            px = xs - (ax + t * dx)
            py = ys - (ay + t * dy)
        else:
            px = xs - ax
            py = ys - ay
        covered = (px * px + py * py) <= float(r * r)

        alpha = layer.buffer[y0:y1 + 1, x0:x1 + 1, ALPHA]
        fresh = covered & (alpha != 0)
        n = int(np.count_nonzero(fresh))
        if n:
            alpha[fresh] = 0
            layer.transparent_count += n
        return n
