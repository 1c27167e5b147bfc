import numpy as np

from .utils import round_half_up

LEVEL_LABELS = ['정상', '주의', '의심', '위험']

# 포도당 규칙: (h 하한, h 상한, v 하한, level). 위에서부터 처음 맞는 규칙 적용
# 양 끝 포함. h=60 은 두번째 규칙에서 먼저 잡히므로 마지막 규칙은 사실상 h < 60
GLUCOSE_RULES = [
    (160, np.inf, -np.inf, 0),
    (60, 140, 75, 1),
    (60, 140, -np.inf, 2),
    (-np.inf, 60, -np.inf, 3),
]
GLUCOSE_DEFAULT_LEVEL = 2  # 140 < h < 160

DIAGNOSIS = [
    '🟦 깨끗해요!',
    '🟩 포도당이 평소보다 조금 더 검출 되었어요',
    '🟨 주기적인 검진이 필요해요!',
    '🟥 포도당이 너무 많아요, 위험해요!',
]

TREATMENT_GUIDE = [
    '🟦 1. 깨끗해요! (정상 범위): 기존 사료 유지, 고탄수화물 간식은 주 1회 이하로 제한.\n'
    '하루 20~30분 산책 권장.\n'
    '체중 1kg당 50~70ml 수분 섭취.',
    '🟩 2. 포도당이 조금 검출되었어요 (주의): 저탄수화물 사료로 변경, 단백질 중심 간식 제공.\n'
    '하루 30분 이상 활동.\n'
    '체중 1kg당 70~90ml 수분 섭취.',
    '🟨 3. 주기적인 검진이 필요해요! (의심 단계): 수의사 상담 권장. 저탄고단 사료 제공.\n'
    '체중 1kg당 80~100ml 물 섭취.\n'
    '실내 장난감 놀이 강화.',
    '🟥 4. 포도당이 너무 많아요. 위험해요! (심각): 즉시 수의사 진료. 전용 당뇨식 사료로 교체.\n'
    '체중 1kg당 100ml 이상 물 공급.\n'
    '활동량 조절.',
]

# pH 측정 불가 조건: (채널, 최소값, 사유)
PH_GUARDS = [
    ('v', 25, '조도가 너무 낮아 측정 불가'),
    ('s', 8, '채도가 너무 낮아 측정 불가'),
]

# pH 색상 구간: (h 하한 포함, h 상한 미포함, ph, label)
# pH 9 구간은 190 까지 포함
PH_BANDS = [
    (20, 45, 5, 'pH 5 (오렌지)'),
    (45, 58, 6, 'pH 6 (노랑)'),
    (58, 80, 7, 'pH 7 (황록)'),
    (80, 150, 8, 'pH 8 (녹색)'),
    (150, np.nextafter(190, np.inf), 9, 'pH 9 (청록)'),
    (-np.inf, 20, 5, 'pH 5 (추정)'),
    (-np.inf, np.inf, 9, 'pH 9 (추정)'),
]


def classify_by_hsv(h, v):
    for h_lo, h_hi, v_lo, level in GLUCOSE_RULES:
        if h_lo <= h <= h_hi and v >= v_lo:
            return level
    return GLUCOSE_DEFAULT_LEVEL


def diagnosis_text(level):
    return DIAGNOSIS[level]


def treatment_guide(level):
    return TREATMENT_GUIDE[level]


def classify_ph_by_hsv(h, s, v):
    hsv = {'h': h, 's': s, 'v': v}

    # 너무 어둡거나 채도가 낮으면 ph=None (오류가 아님)
    for channel, minimum, reason in PH_GUARDS:
        if hsv[channel] < minimum:
            return {'ph': None, 'label': reason}

    for lo, hi, ph, label in PH_BANDS:
        if lo <= h < hi:
            return {'ph': ph, 'label': label}

    # h가 NaN인 경우에만 도달
    raise ValueError(f'hue out of range: {h}')


def glucose_metrics(h, s, v, b, adjusted_b):
    return (f'(참고: H {round_half_up(h)}°, S {round_half_up(s)}%, V {round_half_up(v)}%, '
            f'Blue(채널) 보정전 {round_half_up(b)}, 보정후 {adjusted_b})')


def ph_metrics(h, s, v):
    return f'(pH 추정용: H {round_half_up(h)}°, S {round_half_up(s)}%, V {round_half_up(v)}%)'
