import numpy as np
import pytest

RED = (200, 0, 0)
GREEN = (0, 200, 0)


def blank(width, height, rgb=(0, 0, 0)):
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[..., :3] = rgb
    frame[..., 3] = 255
    return frame


def paint(frame, points, rgb):
    for x, y in points:
        frame[y, x, :3] = rgb
    return frame


def block(x0, y0, w, h):
    return [(x, y) for y in range(y0, y0 + h) for x in range(x0, x0 + w)]


@pytest.fixture
def frame10():
    return blank(10, 10)
