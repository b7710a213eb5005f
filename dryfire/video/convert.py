from __future__ import annotations
from typing import Tuple

import cv2
import numpy as np

from dryfire.api.errors import InvalidInput


def to_rgba_buffer(frame: np.ndarray) -> Tuple[np.ndarray, int, int]:
    """
    Convert an OpenCV frame (BGR, BGRA or single-channel) into the flat RGBA
    uint8 buffer the scanner reads. Returns (buffer, width, height).
    """
    if frame is None:
        raise InvalidInput("no frame")
    frame = np.asarray(frame)
    if frame.dtype != np.uint8:
        raise InvalidInput(f"expected an 8-bit frame, got {frame.dtype}")

    if frame.ndim == 2:
        code = cv2.COLOR_GRAY2RGBA
    elif frame.ndim == 3 and frame.shape[2] == 3:
        code = cv2.COLOR_BGR2RGBA
    elif frame.ndim == 3 and frame.shape[2] == 4:
        code = cv2.COLOR_BGRA2RGBA
    else:
        raise InvalidInput(f"unsupported frame shape {frame.shape}")

    h, w = frame.shape[:2]
    rgba = cv2.cvtColor(frame, code)
    return rgba.reshape(-1), w, h
