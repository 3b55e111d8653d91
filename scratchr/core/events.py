from __future__ import annotations
from dataclasses import dataclass
from typing import Union

# Input events consumed by ScratchController.handle(). Coordinates are
# already in layer-local buffer pixels (see map_to_buffer).


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class BrushSizeChanged:
    radius: int


ScratchEvent = Union[PointerDown, PointerMove, PointerUp, Resize, Reset, BrushSizeChanged]
