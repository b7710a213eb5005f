from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List

from dryfire.api.frame_data import LaserColor


@dataclass(frozen=True)
class DebugPixel:
    x: int
    y: int
    r: int
    g: int
    b: int
    color: LaserColor
    matched: bool   # strict threshold rule fired
    dominant: bool  # dominance rule fired


DebugSink = Callable[[DebugPixel], None]


class DebugPixelCollector:
    """
    Debug sink that keeps every qualifying pixel the scanner reports.
    Pass an instance as `debug_sink`; call clear() between frames
    if one collector is reused.
    """

    def __init__(self):
        self.pixels: List[DebugPixel] = []

    def __call__(self, pixel: DebugPixel) -> None:
        self.pixels.append(pixel)

    def __len__(self) -> int:
        return len(self.pixels)

    def clear(self) -> None:
        self.pixels.clear()

    def by_color(self) -> Dict[LaserColor, List[DebugPixel]]:
        out: Dict[LaserColor, List[DebugPixel]] = {}
        for p in self.pixels:
            out.setdefault(p.color, []).append(p)
        return out
