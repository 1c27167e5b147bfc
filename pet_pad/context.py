from .utils import clamp, round_half_up

WEIGHTS = {
    'night_time': 1.2,      # 0 ~ 6시
    'late_night': 1.1,      # 22시 이후
    'after_meal': 1.2,      # 식후 60분 이내
    'water_per_ml': 1 / 500,
    'elapsed_per_min': 1 / 60,
}

DEFAULT_INPUTS = {
    'water_intake': 0,
    'elapsed_time': 0,
    'after_meal_time': 0,
    'input_time': '',
}


def _number(value):
    # 숫자가 아니거나 음수면 0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0
    if value != value or value < 0:
        return 0
    return value


def normalize_inputs(inputs):
    # 저장된 사용자 입력을 기본값 위에 덮어씀 (타입이 맞는 값만)
    out = dict(DEFAULT_INPUTS)
    if not isinstance(inputs, dict):
        return out
    for key in ('water_intake', 'elapsed_time', 'after_meal_time'):
        if key in inputs:
            out[key] = _number(inputs[key])
    if isinstance(inputs.get('input_time'), str):
        out['input_time'] = inputs['input_time']
    return out


def measurement_hour(input_time, now):
    # 'HH:MM' 측정 시각이 있으면 그 시간을, 없으면 현재 시간을 사용
    if input_time:
        try:
            hour = int(input_time.split(':')[0])
        except ValueError:
            return now.hour
        return clamp(hour, 0, 23)
    return now.hour


def context_from_inputs(inputs, now):
    inputs = normalize_inputs(inputs)
    return {
        'hour': measurement_hour(inputs['input_time'], now),
        'after_meal_min': inputs['after_meal_time'],
        'water_ml': inputs['water_intake'],
        'elapsed_min': inputs['elapsed_time'],
    }


def time_factor(hour):
    # 야간 판정이 우선
    if 0 <= hour <= 6:
        return WEIGHTS['night_time']
    if hour >= 22:
        return WEIGHTS['late_night']
    return 1.0


def apply_context_factors(b, context):
    # blue 채널 보정값. 진단 문구에만 표시되고 분류에는 쓰지 않음
    meal_factor = WEIGHTS['after_meal'] if _number(context.get('after_meal_min')) < 60 else 1.0
    dilution_factor = (1
                       + _number(context.get('water_ml')) * WEIGHTS['water_per_ml']
                       + _number(context.get('elapsed_min')) * WEIGHTS['elapsed_per_min'])

    adjusted = b * time_factor(context.get('hour', 0)) * meal_factor * dilution_factor
    return round_half_up(clamp(adjusted, 0, 255))
