import numpy as np
import pytest

import pet_pad as pp
from conftest import uniform_rgba


def test_uniform_color():
    result = pp.RegionSampler()(uniform_rgba(50, 200, 50))

    assert result['color'] == {'R': 50, 'G': 200, 'B': 50}
    assert result['n'] == 20 * 20
    assert not result['fallback']


def test_roi_ignores_border():
    image = uniform_rgba(200, 30, 30, size=(100, 100))
    # 중앙 50 x 50 만 다른 색
    image[25:75, 25:75, :3] = (40, 160, 90)

    result = pp.RegionSampler(roi_ratio=0.5)(image)

    assert result['color'] == {'R': 40, 'G': 160, 'B': 90}
    assert result['n'] == 2500


def test_odd_roi_offset():
    # W*r 는 버림, offset 은 (W - roiW) // 2
    sampler = pp.RegionSampler(roi_ratio=0.5)
    roi = sampler.crop(np.zeros((11, 7, 4), dtype=np.uint8), 0.5)
    assert roi.shape[:2] == (5, 3)


def test_luma_filter_excludes_glare():
    image = uniform_rgba(100, 100, 100, size=(100, 100))
    # 빛 반사 (luma 255) 픽셀은 제외
    image[25:50, 25:75, :3] = 255

    result = pp.RegionSampler()(image)

    assert result['color'] == {'R': 100, 'G': 100, 'B': 100}
    assert result['n'] == 1250


def test_rounding_half_up():
    image = uniform_rgba(100, 100, 100, size=(20, 20))
    # ROI 10 x 10 중 절반은 101 -> 평균 100.5 -> 101
    image[5:10, 5:15, :3] = 101

    result = pp.RegionSampler(min_pixels=1)(image)

    assert result['color'] == {'R': 101, 'G': 101, 'B': 101}


def test_fallback_to_full_frame():
    image = uniform_rgba(128, 128, 128, size=(100, 100))
    # 중앙 ROI 는 전부 luma 범위 밖
    image[25:75, 25:75, :3] = 0

    result = pp.RegionSampler()(image)

    assert result['fallback']
    assert result['n'] == 100 * 100 - 50 * 50
    assert result['color'] == {'R': 128, 'G': 128, 'B': 128}


def test_fallback_uses_fixed_bounds():
    # 12 은 ROI 범위(15~245) 밖이지만 fallback 범위(10~245) 안
    image = uniform_rgba(12, 12, 12, size=(40, 40))

    result = pp.RegionSampler()(image)

    assert result['fallback']
    assert result['n'] == 1600
    assert result['color'] == {'R': 12, 'G': 12, 'B': 12}


def test_too_few_pixels_in_roi():
    image = uniform_rgba(0, 0, 0, size=(100, 100))
    image[40:45, 40:45, :3] = 120  # ROI 안 유효 픽셀 25개 < 50

    result = pp.RegionSampler()(image)

    assert result['fallback']
    assert result['n'] == 25


def test_degenerate_black_image():
    result = pp.RegionSampler()(uniform_rgba(0, 0, 0))

    assert result['color'] == {'R': 0, 'G': 0, 'B': 0}
    assert result['n'] == 0
    assert pp.rgb_to_hsv(0, 0, 0) == (0, 0, 0)


@pytest.mark.parametrize("ratio", [0, -0.1, 1.5])
def test_invalid_ratio(ratio):
    with pytest.raises(ValueError):
        pp.RegionSampler(roi_ratio=ratio)
