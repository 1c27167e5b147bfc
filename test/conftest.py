from datetime import datetime, timedelta, timezone

import cv2
import numpy as np
import pytest

KST = timezone(timedelta(hours=9))


def uniform_rgba(r, g, b, size=(40, 40)):
    image = np.zeros(size + (4,), dtype=np.uint8)
    image[..., 0] = r
    image[..., 1] = g
    image[..., 2] = b
    image[..., 3] = 255
    return image


def png_bytes(r, g, b, size=(60, 60)):
    # cv2 는 BGR 순서로 저장
    bgr = np.zeros(size + (3,), dtype=np.uint8)
    bgr[:] = (b, g, r)
    ok, buf = cv2.imencode('.png', bgr)
    assert ok
    return buf.tobytes()


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock(datetime(2025, 1, 10, 14, 30, tzinfo=KST))
