from __future__ import annotations
from typing import Tuple

import numpy as np

from dryfire.api.config import DetectionConfig
from dryfire.api.frame_data import LaserColor

# label codes used by classify_array()
NONE, RED, GREEN = 0, 1, 2
LABEL_COLORS = {RED: LaserColor.RED, GREEN: LaserColor.GREEN}


def match_color(r: int, g: int, b: int, color: LaserColor,
                config: DetectionConfig) -> Tuple[bool, bool]:
    """
    Test one pixel against one color's rule.
    Returns (strict, dominant): which of the two independent rules fired.
    Both are False for pixels under the brightness floor.
    """
    r, g, b = int(r), int(g), int(b)
    if r + g + b < config.min_brightness:
        return False, False

    t = config.threshold_for(color)
    if color is LaserColor.RED:
        main, a, c = r, g, b
        main_min, a_max, c_max = t.r, t.g, t.b
    else:
        main, a, c = g, r, b
        main_min, a_max, c_max = t.g, t.r, t.b

    strict = main > main_min and a < a_max and c < c_max
    dominant = (main > a and main > c and main > main_min
                and min(main - a, main - c) >= config.min_color_dominance)
    return strict, dominant


def classify(r: int, g: int, b: int, config: DetectionConfig | None = None) -> LaserColor | None:
    """Red wins ties; a pixel is never both colors."""
    config = config or DetectionConfig()
    for color in (LaserColor.RED, LaserColor.GREEN):
        strict, dominant = match_color(r, g, b, color, config)
        if strict or dominant:
            return color
    return None


def match_array(rgb: np.ndarray, color: LaserColor, config: DetectionConfig):
    """Vectorised match_color(): (strict, dominant) bool arrays for one color."""
    # widen before any subtraction so uint8 never wraps
    px = np.asarray(rgb)[..., :3].astype(np.int16)
    r, g, b = px[..., 0], px[..., 1], px[..., 2]
    bright = (r + g + b) >= config.min_brightness

    t = config.threshold_for(color)
    if color is LaserColor.RED:
        main, a, c = r, g, b
        main_min, a_max, c_max = t.r, t.g, t.b
    else:
        main, a, c = g, r, b
        main_min, a_max, c_max = t.g, t.r, t.b

    strict = bright & (main > main_min) & (a < a_max) & (c < c_max)
    dominant = (bright & (main > a) & (main > c) & (main > main_min)
                & (np.minimum(main - a, main - c) >= config.min_color_dominance))
    return strict, dominant


def classify_masks(rgb: np.ndarray, config: DetectionConfig):
    """
    classify_array() plus each color's own match mask, {color: strict | dominant},
    computed without red taking precedence. The flood fill grows over those.
    """
    red_strict, red_dom = match_array(rgb, LaserColor.RED, config)
    green_strict, green_dom = match_array(rgb, LaserColor.GREEN, config)

    is_red = red_strict | red_dom
    is_green = ~is_red & (green_strict | green_dom)

    labels = np.zeros(is_red.shape, dtype=np.uint8)
    labels[is_red] = RED
    labels[is_green] = GREEN

    strict = np.where(is_red, red_strict, is_green & green_strict)
    dominant = np.where(is_red, red_dom, is_green & green_dom)
    matches = {LaserColor.RED: is_red, LaserColor.GREEN: green_strict | green_dom}
    return labels, strict, dominant, matches


def classify_array(rgb: np.ndarray, config: DetectionConfig | None = None):
    """
    Vectorised classify() over an (..., 3+) array of channel values.
    Returns (labels, strict, dominant):
      labels   uint8, NONE / RED / GREEN per pixel
      strict   bool, the strict threshold rule fired for the labelled color
      dominant bool, the dominance rule fired for the labelled color
    """
    labels, strict, dominant, _ = classify_masks(rgb, config or DetectionConfig())
    return labels, strict, dominant


def background_changed(rgb: np.ndarray, background_rgb: np.ndarray, threshold: int) -> np.ndarray:
    """True where |dr|+|dg|+|db| against the background reaches `threshold`."""
    cur = np.asarray(rgb)[..., :3].astype(np.int16)
    bg = np.asarray(background_rgb)[..., :3].astype(np.int16)
    return np.abs(cur - bg).sum(axis=-1) >= threshold
