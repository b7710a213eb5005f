from __future__ import annotations
import logging
from typing import List

import numpy as np

from dryfire.api.config import DetectionConfig
from dryfire.api.frame_data import Hit, Roi
from dryfire.video.convert import to_rgba_buffer

from .debug_pixels import DebugSink
from .scanner import as_pixels, scan

log = logging.getLogger(__name__)


class LaserDetector:
    """
    Per-camera detection settings plus the caller's background snapshot.
    Each detect() call is an independent scan; nothing carries over between frames
    except the background reference handed in via set_background().
    """

    def __init__(self, config: DetectionConfig | None = None, debug_sink: DebugSink | None = None):
        self.config = config or DetectionConfig()
        self.debug_sink = debug_sink
        self._background = None

    @property
    def has_background(self) -> bool:
        return self._background is not None

    def set_background(self, buffer, width: int, height: int) -> None:
        # raises InvalidInput on a size mismatch
        as_pixels(buffer, width, height, what="background")
        self._background = buffer
        log.debug("background snapshot set (%dx%d)", width, height)

    def set_background_bgr(self, frame_bgr: np.ndarray) -> None:
        buf, w, h = to_rgba_buffer(frame_bgr)
        self.set_background(buf, w, h)

    def clear_background(self) -> None:
        self._background = None

    def detect(self, buffer, width: int, height: int, roi: Roi | None = None) -> List[Hit]:
        return scan(
            buffer, width, height,
            roi=roi,
            background=self._background,
            background_threshold=self.config.background_threshold,
            config=self.config,
            debug_sink=self.debug_sink,
        )

    def detect_bgr(self, frame_bgr: np.ndarray, roi: Roi | None = None) -> List[Hit]:
        """Convenience for OpenCV frames straight from a capture or imread()."""
        buf, w, h = to_rgba_buffer(frame_bgr)
        return self.detect(buf, w, h, roi=roi)
