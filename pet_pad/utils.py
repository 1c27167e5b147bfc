import os
import glob as _glob
import math
from datetime import datetime, timedelta, timezone


def mkdir_p(path):
    # 디렉토리가 없는 경우 새로 만듬
    os.makedirs(path, exist_ok=True)


def glob(filename):
    files = _glob.glob(filename)
    return [fn.replace('\\', '/') for fn in sorted(files)]


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def round_half_up(x):
    # python round()는 banker's rounding 이므로 .5는 항상 올림
    return int(math.floor(x + 0.5))


def local_now():
    return datetime.now().astimezone()


def date_key(now):
    # 캘린더 키는 로컬 날짜 (YYYY-MM-DD)
    return now.strftime('%Y-%m-%d')


def iso_timestamp(now):
    # 정렬용 timestamp는 UTC ISO-8601 (밀리초, 'Z')
    utc = now.astimezone(timezone.utc)
    return utc.strftime('%Y-%m-%dT%H:%M:%S.') + f'{utc.microsecond // 1000:03d}Z'


def past_n_dates(today, n=30):
    # today 포함 최근 n일을 오래된 순으로
    start = today - timedelta(days=n - 1)
    return [date_key(start + timedelta(days=i)) for i in range(n)]
