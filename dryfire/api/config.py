from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Sequence

from dryfire import const

from .errors import InvalidInput
from .frame_data import LaserColor


def _as_int(name: str, value: Any) -> int:
    # bools and nulls are rejected, floats only when integral
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be an integer, got {value!r}") from None
    if isinstance(value, float) and value != out:
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    return out


@dataclass(frozen=True)
class ChannelThreshold:
    """
    Per-color channel limits.
    For red, `r` is the minimum red and `g`/`b` are maxima.
    For green, `g` is the minimum green and `r`/`b` are maxima.
    """
    r: int
    g: int
    b: int

    @classmethod
    def from_value(cls, value: Any) -> "ChannelThreshold":
        if isinstance(value, ChannelThreshold):
            return value
        if isinstance(value, Mapping):
            try:
                r, g, b = value["r"], value["g"], value["b"]
            except KeyError as e:
                raise InvalidInput(f"threshold is missing channel {e}") from None
        elif isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 3:
            r, g, b = value
        else:
            raise InvalidInput(f"threshold must be an r/g/b mapping or triple, got {value!r}")

        return cls(_as_int("r", r), _as_int("g", g), _as_int("b", b))

    def __post_init__(self):
        for ch in (self.r, self.g, self.b):
            if not 0 <= ch <= 255:
                raise InvalidInput(f"threshold channel {ch} outside 0..255")


@dataclass(frozen=True)
class DetectionConfig:
    red: ChannelThreshold = field(
        default_factory=lambda: ChannelThreshold(*const.RED_THRESHOLD))
    green: ChannelThreshold = field(
        default_factory=lambda: ChannelThreshold(*const.GREEN_THRESHOLD))
    min_brightness: int = const.MIN_BRIGHTNESS
    min_color_dominance: int = const.MIN_COLOR_DOMINANCE
    cluster_radius: int = const.CLUSTER_RADIUS
    min_laser_size: int = const.MIN_LASER_SIZE
    background_threshold: int = const.BACKGROUND_THRESHOLD

    def __post_init__(self):
        if self.cluster_radius <= 0:
            raise InvalidInput("cluster_radius must be positive")
        if self.min_laser_size <= 0:
            raise InvalidInput("min_laser_size must be positive")

    def threshold_for(self, color: LaserColor) -> ChannelThreshold:
        return self.red if color is LaserColor.RED else self.green

    def replace(self, **changes: Any) -> "DetectionConfig":
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "DetectionConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInput(f"unknown detection settings: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for name, value in data.items():
            if name in ("red", "green"):
                kwargs[name] = ChannelThreshold.from_value(value)
            else:
                kwargs[name] = _as_int(name, value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, ChannelThreshold):
                value = {"r": value.r, "g": value.g, "b": value.b}
            out[f.name] = value
        return out
