from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import List

import numpy as np

from dryfire.api.config import DetectionConfig
from dryfire.api.errors import InvalidInput
from dryfire.api.frame_data import Hit, Roi

from .classifier import LABEL_COLORS, background_changed, classify_masks
from .debug_pixels import DebugPixel, DebugSink

log = logging.getLogger(__name__)

CHANNELS = 4  # R, G, B, A
NEIGHBORS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))


@dataclass
class _Cluster:
    min_x: int
    max_x: int
    min_y: int
    max_y: int
    size: int = 0

    def add(self, x: int, y: int) -> None:
        self.size += 1
        self.min_x = min(self.min_x, x)
        self.max_x = max(self.max_x, x)
        self.min_y = min(self.min_y, y)
        self.max_y = max(self.max_y, y)

    def center(self):
        # round half up on (min + max) / 2; coordinates are never negative
        return (self.min_x + self.max_x + 1) // 2, (self.min_y + self.max_y + 1) // 2


def as_pixels(buffer, width: int, height: int, what: str = "buffer") -> np.ndarray:
    """
    View a flat RGBA buffer as a (height, width, 4) uint8 array.
    Raises InvalidInput when the sample count does not match the dimensions
    or a sample is not an integer in 0..255.
    """
    if width < 0 or height < 0:
        raise InvalidInput(f"frame size {width}x{height} is negative")

    if isinstance(buffer, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(buffer, dtype=np.uint8)
    else:
        arr = np.asarray(buffer)
        if arr.dtype != np.uint8 and arr.size:
            if not np.issubdtype(arr.dtype, np.integer):
                raise InvalidInput(f"{what} samples must be 8-bit integers, got {arr.dtype}")
            if arr.min() < 0 or arr.max() > 255:
                raise InvalidInput(f"{what} samples must lie in 0..255")
        arr = arr.astype(np.uint8, copy=False)

    expected = width * height * CHANNELS
    if arr.size != expected:
        raise InvalidInput(
            f"{what} holds {arr.size} samples, expected {expected} for {width}x{height} RGBA")
    return arr.reshape(height, width, CHANNELS)


def _flood_fill(seed_x: int, seed_y: int, match: np.ndarray, visited: bytearray,
                w: int, h: int, radius: int) -> _Cluster:
    """
    Breadth-first fill over 8-connected pixels of one color, in window coords.
    Neighbors are enqueued (and marked visited) only inside the window and within
    `radius` of the seed; pixels that fail the color rule stay visited but do not
    expand.
    """
    cluster = _Cluster(seed_x, seed_x, seed_y, seed_y)
    visited[seed_y * w + seed_x] = 1
    queue = deque([(seed_x, seed_y)])

    while queue:
        x, y = queue.popleft()
        if not match[y * w + x]:
            continue
        cluster.add(x, y)

        for dx, dy in NEIGHBORS:
            nx, ny = x + dx, y + dy
            if nx < 0 or nx >= w or ny < 0 or ny >= h:
                continue
            if abs(nx - seed_x) >= radius or abs(ny - seed_y) >= radius:
                continue
            n = ny * w + nx
            if visited[n]:
                continue
            visited[n] = 1
            queue.append((nx, ny))

    return cluster


def scan(
    buffer,
    width: int,
    height: int,
    roi: Roi | None = None,
    background=None,
    background_threshold: int | None = None,
    config: DetectionConfig | None = None,
    debug_sink: DebugSink | None = None,
) -> List[Hit]:
    """
    Find red/green laser spots in one RGBA frame.

    Pixels are visited in raster order inside `roi` (whole frame if None).
    A pixel seeds a cluster when it differs enough from `background` (if given)
    and classifies as red or green; the cluster grows over matching neighbors of
    the same color and becomes a Hit at its bounding-box center when it has at
    least `config.min_laser_size` pixels.

    `debug_sink` is called with a DebugPixel for every qualifying pixel the scan
    examines, seeds or not.
    """
    config = config or DetectionConfig()
    if background_threshold is None:
        background_threshold = config.background_threshold

    pixels = as_pixels(buffer, width, height)
    bg_pixels = None
    if background is not None:
        bg_pixels = as_pixels(background, width, height, what="background")

    bounds = roi or Roi.full(width, height)
    bounds.validate(width, height)

    hits: List[Hit] = []
    w, h = bounds.width, bounds.height
    if w == 0 or h == 0:
        return hits

    ox, oy = bounds.min_x, bounds.min_y
    window = pixels[oy:bounds.max_y, ox:bounds.max_x]

    labels, strict, dominant, matches = classify_masks(window, config)
    seeds = labels != 0
    if bg_pixels is not None:
        bg_window = bg_pixels[oy:bounds.max_y, ox:bounds.max_x]
        seeds &= background_changed(window, bg_window, background_threshold)

    fill_masks = {color: mask.ravel() for color, mask in matches.items()}

    flat_labels = labels.ravel()
    visited = bytearray(w * h)

    for idx in np.flatnonzero(seeds).tolist():
        if visited[idx] and debug_sink is None:
            continue

        y, x = divmod(idx, w)
        color = LABEL_COLORS[int(flat_labels[idx])]

        if debug_sink is not None:
            r, g, b = (int(v) for v in window[y, x, :3])
            debug_sink(DebugPixel(
                x=x + ox, y=y + oy, r=r, g=g, b=b, color=color,
                matched=bool(strict[y, x]), dominant=bool(dominant[y, x]),
            ))
            if visited[idx]:
                continue

        cluster = _flood_fill(x, y, fill_masks[color], visited, w, h, config.cluster_radius)
        cx, cy = cluster.center()
        cx, cy = cx + ox, cy + oy

        if cluster.size < config.min_laser_size:
            log.debug("dropped %s cluster at (%d, %d): %d px", color.value, cx, cy, cluster.size)
            continue

        log.debug("%s laser at (%d, %d), size %d, seed RGB %s",
                  color.value, cx, cy, cluster.size, tuple(int(v) for v in window[y, x, :3]))
        hits.append(Hit(cx, cy, color))

    return hits
