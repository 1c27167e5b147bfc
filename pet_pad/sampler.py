import time
import numpy as np

from .utils import round_half_up

# BT.709 luma 가중치
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


class RegionSampler:
    def __init__(self, roi_ratio=0.5, min_luma=15, max_luma=245,
                 fallback_luma=(10, 245), min_pixels=50):
        if not 0 < roi_ratio <= 1:
            raise ValueError(f'roi_ratio must be in (0, 1], got {roi_ratio}')
        self.roi_ratio = roi_ratio
        self.min_luma = min_luma
        self.max_luma = max_luma
        self.fallback_luma = fallback_luma
        self.min_pixels = min_pixels

    def __call__(self, image):
        start_time = time.time()

        # RGBA (H x W x 4) 이미지에서 중앙 ROI를 잘라냄
        roi = self.crop(image, self.roi_ratio)

        sums, n = self._accumulate(roi, self.min_luma, self.max_luma)
        fallback = False

        # 유효 픽셀이 너무 적으면 ROI 결과는 버리고 전체 이미지로 다시 계산
        if n < self.min_pixels:
            fallback = True
            lo, hi = self.fallback_luma
            sums, n = self._accumulate(image, lo, hi)

        if n:
            color = {
                'R': round_half_up(sums[0] / n),
                'G': round_half_up(sums[1] / n),
                'B': round_half_up(sums[2] / n),
            }
        else:
            # 유효 픽셀이 하나도 없으면 (0,0,0). 오류가 아님
            color = {'R': 0, 'G': 0, 'B': 0}

        return {
            'color': color,
            'n': n,
            'fallback': fallback,
            'elapsed': time.time() - start_time,
        }

    def crop(self, image, ratio):
        h, w = image.shape[:2]
        roi_w = int(w * ratio)
        roi_h = int(h * ratio)
        off_x = (w - roi_w) // 2
        off_y = (h - roi_h) // 2
        return image[off_y:off_y + roi_h, off_x:off_x + roi_w]

    def _accumulate(self, image, lo, hi):
        rgb = image[..., :3].reshape(-1, 3).astype(np.float64)
        if rgb.size == 0:
            return np.zeros(3), 0

        luma = rgb @ LUMA_WEIGHTS
        valid = (luma >= lo) & (luma <= hi)

        # 노출이 과하거나 부족한 픽셀은 제외하고 R, G, B 합계
        sums = rgb[valid].sum(axis=0)
        return sums, int(valid.sum())
