from __future__ import annotations
from typing import Iterable, Sequence

import cv2
import numpy as np

from dryfire.api.frame_data import Hit, LaserColor, Roi
from dryfire.detect.debug_pixels import DebugPixel

# BGR
PAINT = {LaserColor.RED: (0, 0, 255), LaserColor.GREEN: (0, 255, 0)}
HIT_RING = (255, 255, 0)
ROI_OUTLINE = (0, 200, 200)


def draw_debug_overlay(
    frame_bgr: np.ndarray,
    debug_pixels: Iterable[DebugPixel] = (),
    hits: Sequence[Hit] = (),
    roi: Roi | None = None,
) -> np.ndarray:
    """
    Return an annotated copy of `frame_bgr`:
    qualifying pixels painted pure red/green, hits ringed and labelled, ROI outlined.
    """
    overlay = frame_bgr.copy()

    for p in debug_pixels:
        overlay[p.y, p.x] = PAINT[p.color]

    if roi is not None:
        cv2.rectangle(overlay, (roi.min_x, roi.min_y),
                      (max(roi.min_x, roi.max_x - 1), max(roi.min_y, roi.max_y - 1)),
                      ROI_OUTLINE, 1, cv2.LINE_AA)

    for i, hit in enumerate(hits):
        cv2.circle(overlay, (hit.x, hit.y), 8, HIT_RING, 1, cv2.LINE_AA)
        cv2.putText(
            overlay, f"{i + 1}:{hit.color.value}", (hit.x + 10, hit.y - 10),
            cv2.FONT_HERSHEY_SIMPLEX, 0.4, PAINT[hit.color], 1, cv2.LINE_AA
        )

    return overlay
