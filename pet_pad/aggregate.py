import math
import numpy as np
import pandas as pd

from .classify import LEVEL_LABELS
from .history import ENTRY_KEYS
from .utils import past_n_dates


def _frame(entries):
    df = pd.DataFrame(list(entries), columns=list(ENTRY_KEYS))
    return df.astype(object).where(df.notna(), None)


def _value(value):
    # numpy 타입을 python int 로
    if value is None:
        return None
    return int(value)


def merged_by_date(entries):
    # timestamp 순으로 같은 날짜 record를 합침 (나중 값이 우선, 없는 값은 유지)
    merged = {}
    for entry in sorted(entries, key=lambda e: e['timestamp']):
        merged.setdefault(entry['date'], {}).update(entry)
    return merged


def calendar(entries, today, days=30):
    by_date = merged_by_date(entries)

    cells = []
    for d in past_n_dates(today, days):
        entry = by_date.get(d)
        level = _value(entry.get('level')) if entry else None
        ph = _value(entry.get('ph')) if entry else None

        # 타일 설명: 날짜 — 단계 / pH
        title = d + (f' — {LEVEL_LABELS[level]}' if level is not None else ' — 기록 없음')
        if ph is not None:
            title += f' / pH {ph}'

        cells.append({
            'date': d,
            'day': int(d[-2:]),
            'has_record': entry is not None,
            'level': level,
            'ph': ph,
            'title': title,
        })
    return cells


def level_counts(entries):
    df = _frame(entries)
    levels = pd.to_numeric(df['level'], errors='coerce').dropna().astype(int)
    counts = levels.value_counts().reindex(range(len(LEVEL_LABELS)), fill_value=0)
    return {int(level): int(count) for level, count in counts.items()}


def display_date(date):
    # 'YYYY-MM-DD' -> 'M. D.'
    _, m, d = date.split('-')
    return f'{int(m)}. {int(d)}.'


def stats(entries):
    merged = list(merged_by_date(entries).values())
    df = _frame(merged).sort_values('date', kind='stable')

    series = []
    for row in df.itertuples(index=False):
        level = _value(row.level)
        series.append({
            'date': row.date,
            'display_date': display_date(row.date),
            'level': level + 1 if level is not None else None,
            'ph': _value(row.ph),
        })

    n = len(series)
    return {
        'counts': level_counts(entries),
        'series': series,
        # pH 값이 하나라도 있어야 오른쪽 pH 축을 그림
        'has_ph': any(point['ph'] is not None for point in series),
        'tick_interval': 0 if n <= 10 else math.ceil(n / 8),
    }


def series_frame(stats_view):
    # 차트용 DataFrame (level 1~4, ph 5~9, 결측은 NaN)
    df = pd.DataFrame(stats_view['series'], columns=['date', 'display_date', 'level', 'ph'])
    for col in ('level', 'ph'):
        df[col] = pd.to_numeric(df[col], errors='coerce').astype(np.float64)
    return df
