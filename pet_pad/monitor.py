import logging

from . import aggregate
from .classify import (classify_by_hsv, classify_ph_by_hsv, diagnosis_text,
                       treatment_guide, glucose_metrics, ph_metrics)
from .color import rgb_to_hsv
from .context import apply_context_factors, context_from_inputs
from .decoder import ImageDecoder
from .errors import PetPadError, InputError
from .history import glucose_update, ph_update
from .repository import Repository
from .sampler import RegionSampler
from .utils import local_now, date_key, iso_timestamp

logger = logging.getLogger(__name__)


def analyze_image(image, sampler, context, now):
    # 분석 시각(now)의 날짜/timestamp 로 확인 대기 결과를 만듦
    sample = sampler(image)
    color = sample['color']
    h, s, v = rgb_to_hsv(color['R'], color['G'], color['B'])

    # 보정된 blue 값은 참고용 문구에만 사용
    b = color['B']
    adjusted_b = apply_context_factors(b, context)

    level = classify_by_hsv(h, v)
    date = date_key(now)
    timestamp = iso_timestamp(now)

    glucose = {
        'date': date,
        'timestamp': timestamp,
        'level': level,
        'diagnosis': diagnosis_text(level),
        'hsv': (h, s, v),
        'color': color,
        'adjusted_b': adjusted_b,
        'metrics': glucose_metrics(h, s, v, b, adjusted_b),
    }

    ph = classify_ph_by_hsv(h, s, v)
    ph.update({
        'date': date,
        'timestamp': timestamp,
        'metrics': ph_metrics(h, s, v),
    })
    return glucose, ph


class PetPadMonitor:
    def __init__(self, repository=None, sampler=None, decoder=None, clock=local_now):
        self.repository = repository or Repository()
        self.sampler = sampler or RegionSampler()
        self.decoder = decoder or ImageDecoder()
        self.clock = clock

        self.generation = 0
        self.is_analyzing = False
        self.pending = None
        self.pending_ph = None

    @property
    def history(self):
        return self.repository.history

    @property
    def inputs(self):
        return self.repository.inputs

    def begin(self, filename):
        # 입력 오류는 상태를 바꾸지 않음
        self.decoder.check(filename)

        # 새 분석이 시작되면 확인 대기중인 결과는 버림
        self.generation += 1
        self.is_analyzing = True
        self.pending = None
        self.pending_ph = None
        return self.generation

    def _is_current(self, generation):
        if generation != self.generation:
            logger.info('dropping stale analysis %d (current %d)', generation, self.generation)
            return False
        return True

    def complete(self, generation, image):
        if not self._is_current(generation):
            return {'success': False, 'error': 'STALE', 'message': ''}

        try:
            now = self.clock()
            context = context_from_inputs(self.inputs, now)
            glucose, ph = analyze_image(image, self.sampler, context, now)
        finally:
            self.is_analyzing = False

        self.pending = glucose
        self.pending_ph = ph
        return {
            'success': True,
            'generation': generation,
            'level': glucose['level'],
            'diagnosis': glucose['diagnosis'],
            'ph': ph['ph'],
            'ph_label': ph['label'],
            'hsv': glucose['hsv'],
            'color': glucose['color'],
            'adjusted_b': glucose['adjusted_b'],
        }

    def fail(self, generation, error):
        if not self._is_current(generation):
            return {'success': False, 'error': 'STALE', 'message': ''}

        self.is_analyzing = False
        self.pending = None
        self.pending_ph = None
        if isinstance(error, PetPadError):
            return {'success': False, 'error': error.code, 'message': error.message}
        return {'success': False, 'error': 'UNKNOWN', 'message': f'❌ 분석 중 오류: {error}'}

    def analyze(self, filename, data=None):
        # 이미지 처리 경계: 여기서 발생한 오류는 모두 결과 dict 로 변환
        try:
            generation = self.begin(filename)
        except InputError as exc:
            return {'success': False, 'error': exc.code, 'message': exc.message}

        try:
            if data is None:
                data = self.decoder.read(filename)
            image = self.decoder.decode(data)
        except Exception as exc:
            if not isinstance(exc, PetPadError):
                logger.error('analysis of %s failed', filename, exc_info=True)
            return self.fail(generation, exc)

        try:
            return self.complete(generation, image)
        except Exception as exc:
            logger.error('analysis of %s failed', filename, exc_info=True)
            return self.fail(generation, exc)

    def confirm_glucose(self):
        if self.pending is None:
            return None

        pending = self.pending
        self.repository.upsert(glucose_update(pending))
        self.pending = None

        return {
            'level': pending['level'],
            'text': f"{pending['diagnosis']}\n{pending['metrics']}",
            'treatment': treatment_guide(pending['level']),
        }

    def confirm_ph(self):
        if self.pending_ph is None:
            return None

        pending = self.pending_ph
        self.repository.upsert(ph_update(pending))
        self.pending_ph = None

        if pending['ph'] is None:
            text = f"📏 pH 측정 불가 — {pending['label']}"
        else:
            text = f"📏 추정 pH: {pending['ph']}\n{pending['label']}\n{pending['metrics']}"
        return {'ph': pending['ph'], 'text': text}

    def update_inputs(self, **values):
        return self.repository.update_inputs(**values)

    def clear_history(self, confirmed=False):
        return self.repository.clear_history(confirmed)

    def export_history(self):
        return self.history.export_json()

    def export_filename(self):
        return f'petpad-history-{date_key(self.clock())}.json'

    def calendar(self, days=30):
        return aggregate.calendar(self.history.entries, self.clock().date(), days)

    def stats(self):
        return aggregate.stats(self.history.entries)
