import cv2
import numpy as np

from .errors import InputError, ReadError, DecodeError

# 분석 전에 거르는 컨테이너 형식 (변환하지 않음)
UNSUPPORTED_EXTENSIONS = ('.heic', '.heif')


def rgba(image):
    # OpenCV 는 BGR 순서이므로 RGBA 로 변환
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)


class ImageDecoder:
    def __init__(self, canvas_size=(300, 300)):
        self.canvas_size = canvas_size

    def __call__(self, filename, data=None):
        self.check(filename)
        if data is None:
            data = self.read(filename)
        return self.decode(data)

    def check(self, filename):
        if not filename:
            raise InputError('파일을 선택해 주세요.')
        if filename.lower().endswith(UNSUPPORTED_EXTENSIONS):
            raise InputError('⚠️ HEIC/HEIF 형식은 분석이 어려워요. JPG/PNG로 변환해주세요.')

    def read(self, filename):
        try:
            with open(filename, 'rb') as fp:
                return fp.read()
        except OSError as exc:
            raise ReadError('❌ 파일을 읽지 못했어요. 다른 이미지로 시도해 주세요.') from exc

    def decode(self, data):
        buf = np.frombuffer(bytes(data), dtype=np.uint8)
        try:
            image = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED) if buf.size else None
        except cv2.error:
            image = None
        if image is None:
            raise DecodeError('이미지 로드 실패')

        # 16bit 이미지는 8bit 로
        if image.dtype != np.uint8:
            top = np.iinfo(image.dtype).max if np.issubdtype(image.dtype, np.integer) else 1.0
            image = cv2.convertScaleAbs(image, alpha=255.0 / top)

        image = rgba(image)

        # 분석은 고정 크기 캔버스에서 진행
        return cv2.resize(image, self.canvas_size, interpolation=cv2.INTER_AREA)
