import numpy as np
import pytest

from dryfire import LaserDetector
from dryfire.api import DetectionConfig, Hit, InvalidInput, LaserColor, Roi
from dryfire.detect.debug_pixels import DebugPixelCollector
from dryfire.video.convert import to_rgba_buffer

from conftest import RED, block


def bgr_frame(w, h):
    return np.zeros((h, w, 3), dtype=np.uint8)


def test_to_rgba_buffer_swaps_channels():
    frame = bgr_frame(4, 3)
    frame[1, 2] = (10, 20, 30)  # B, G, R
    buf, w, h = to_rgba_buffer(frame)
    assert (w, h) == (4, 3)
    assert buf.shape == (4 * 3 * 4,)
    px = buf.reshape(3, 4, 4)[1, 2]
    assert px.tolist() == [30, 20, 10, 255]


def test_to_rgba_buffer_gray_and_bgra():
    gray = np.full((2, 2), 77, dtype=np.uint8)
    buf, _, _ = to_rgba_buffer(gray)
    assert buf.reshape(2, 2, 4)[0, 0].tolist() == [77, 77, 77, 255]

    bgra = np.zeros((2, 2, 4), dtype=np.uint8)
    bgra[0, 0] = (1, 2, 3, 4)
    buf, _, _ = to_rgba_buffer(bgra)
    assert buf.reshape(2, 2, 4)[0, 0].tolist() == [3, 2, 1, 4]


@pytest.mark.parametrize("frame", [
    None,
    np.zeros((2, 2, 2), dtype=np.uint8),
    np.zeros((2, 2, 3), dtype=np.float32),
])
def test_to_rgba_buffer_rejects(frame):
    with pytest.raises(InvalidInput):
        to_rgba_buffer(frame)


def test_detect_bgr():
    frame = bgr_frame(10, 10)
    for x, y in block(4, 4, 2, 2):
        frame[y, x] = RED[::-1]
    det = LaserDetector()
    assert det.detect_bgr(frame) == [Hit(5, 5, LaserColor.RED)]
    assert det.detect_bgr(frame, roi=Roi(0, 4, 0, 10)) == []


def test_background_snapshot_suppresses_static_spot():
    static = bgr_frame(20, 20)
    for x, y in block(2, 2, 2, 2):
        static[y, x] = RED[::-1]

    det = LaserDetector()
    det.set_background_bgr(static)
    assert det.has_background

    shot = static.copy()
    for x, y in block(12, 12, 2, 2):
        shot[y, x] = RED[::-1]
    assert det.detect_bgr(shot) == [Hit(13, 13, LaserColor.RED)]

    det.clear_background()
    assert not det.has_background
    assert det.detect_bgr(shot) == [Hit(3, 3, LaserColor.RED), Hit(13, 13, LaserColor.RED)]


def test_background_validated_on_set():
    det = LaserDetector()
    with pytest.raises(InvalidInput):
        det.set_background(np.zeros(10, dtype=np.uint8), 2, 2)
    assert not det.has_background


def test_frame_background_size_mismatch():
    det = LaserDetector()
    det.set_background_bgr(bgr_frame(8, 8))
    with pytest.raises(InvalidInput):
        det.detect_bgr(bgr_frame(10, 10))


def test_config_and_debug_sink_are_used():
    frame = bgr_frame(10, 10)
    for x, y in block(4, 4, 2, 2):
        frame[y, x] = RED[::-1]
    sink = DebugPixelCollector()
    det = LaserDetector(DetectionConfig(min_laser_size=5), debug_sink=sink)
    assert det.detect_bgr(frame) == []
    assert len(sink) == 4
    assert list(sink.by_color()) == [LaserColor.RED]
