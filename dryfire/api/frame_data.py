from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .errors import InvalidInput


class LaserColor(str, Enum):
    RED = "red"
    GREEN = "green"


@dataclass(frozen=True)
class Hit:
    x: int
    y: int
    color: LaserColor


@dataclass(frozen=True)
class Roi:
    """
    Axis-aligned scan window in camera pixels.
    min_* are inclusive, max_* exclusive, so Roi(0, w, 0, h) is the full frame.
    """
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def full(cls, width: int, height: int) -> "Roi":
        return cls(0, width, 0, height)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Roi":
        # accept both the camelCase keys region trackers hand us and snake_case
        def pick(snake: str, camel: str) -> int:
            if snake in data:
                return int(data[snake])
            if camel in data:
                return int(data[camel])
            raise InvalidInput(f"ROI is missing {snake!r}")

        return cls(
            min_x=pick("min_x", "minX"),
            max_x=pick("max_x", "maxX"),
            min_y=pick("min_y", "minY"),
            max_y=pick("max_y", "maxY"),
        )

    def validate(self, width: int, height: int) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise InvalidInput(f"ROI is inverted: {self}")
        if self.min_x < 0 or self.min_y < 0 or self.max_x > width or self.max_y > height:
            raise InvalidInput(f"ROI {self} lies outside a {width}x{height} frame")

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y
