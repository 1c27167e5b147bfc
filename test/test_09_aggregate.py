from datetime import date

import pet_pad as pp

TODAY = date(2025, 3, 10)


def entry(d, **kw):
    out = {'date': d, 'timestamp': f'{d}T03:00:00.000Z'}
    out.update(kw)
    return out


def test_calendar_30_days():
    cells = pp.calendar([], TODAY)

    assert len(cells) == 30
    assert cells[0]['date'] == '2025-02-09'
    assert cells[-1]['date'] == '2025-03-10'
    assert cells[-1]['day'] == 10
    assert all(not c['has_record'] and c['level'] is None and c['ph'] is None for c in cells)
    assert cells[0]['title'] == '2025-02-09 — 기록 없음'


def test_calendar_level_and_ph_independent():
    history = [
        entry('2025-03-08', level=2, diagnosis='x'),
        entry('2025-03-09', ph=7),
        entry('2025-03-10', level=0, ph=None),
        entry('2025-01-01', level=3),  # 30일 밖
    ]
    cells = {c['date']: c for c in pp.calendar(history, TODAY)}

    assert cells['2025-03-08']['level'] == 2 and cells['2025-03-08']['ph'] is None
    assert cells['2025-03-09']['level'] is None and cells['2025-03-09']['ph'] == 7
    assert cells['2025-03-09']['has_record']
    assert cells['2025-03-09']['title'] == '2025-03-09 — 기록 없음 / pH 7'
    assert cells['2025-03-10']['title'] == '2025-03-10 — 정상'
    assert '2025-01-01' not in cells


def test_calendar_custom_days():
    assert [c['date'] for c in pp.calendar([], TODAY, days=3)] == ['2025-03-08', '2025-03-09', '2025-03-10']


def test_stats_counts_whole_history():
    history = [
        entry('2024-01-01', level=3),
        entry('2024-06-01', level=3),
        entry('2025-03-01', level=0),
        entry('2025-03-02', ph=8),
    ]
    view = pp.stats(history)

    assert view['counts'] == {0: 1, 1: 0, 2: 0, 3: 2}


def test_stats_series():
    history = [
        entry('2025-03-02', ph=8),
        entry('2025-03-01', level=0),
        entry('2025-03-03', level=3, ph=5),
    ]
    view = pp.stats(history)

    assert view['series'] == [
        {'date': '2025-03-01', 'display_date': '3. 1.', 'level': 1, 'ph': None},
        {'date': '2025-03-02', 'display_date': '3. 2.', 'level': None, 'ph': 8},
        {'date': '2025-03-03', 'display_date': '3. 3.', 'level': 4, 'ph': 5},
    ]
    assert view['has_ph']
    assert view['tick_interval'] == 0


def test_stats_without_ph():
    view = pp.stats([entry('2025-03-01', level=1), entry('2025-03-02', level=2, ph=None)])
    assert not view['has_ph']


def test_stats_empty():
    view = pp.stats([])
    assert view['counts'] == {0: 0, 1: 0, 2: 0, 3: 0}
    assert view['series'] == []
    assert not view['has_ph']


def test_tick_interval():
    history = [entry(f'2025-01-{d:02d}', level=0) for d in range(1, 18)]
    assert pp.stats(history)['tick_interval'] == 3


def test_series_frame():
    view = pp.stats([entry('2025-03-01', level=0), entry('2025-03-02', ph=8)])
    frame = pp.series_frame(view)

    assert list(frame.columns) == ['date', 'display_date', 'level', 'ph']
    assert frame['level'].isna().tolist() == [False, True]
    assert frame['ph'].iloc[1] == 8
