import json

# 저장되는 record의 key 순서
ENTRY_KEYS = ('date', 'timestamp', 'diagnosis', 'level', 'ph')
IDENTITY_KEYS = ('date', 'timestamp')
LEVELS = (0, 1, 2, 3)
PH_VALUES = (5, 6, 7, 8, 9)


def _valid(value, allowed):
    # bool 은 int 의 하위 타입이므로 제외
    return isinstance(value, int) and not isinstance(value, bool) and value in allowed


def _check_payload(payload):
    unknown = set(payload) - set(ENTRY_KEYS)
    if unknown:
        raise ValueError(f'unknown history fields: {sorted(unknown)}')
    for key in IDENTITY_KEYS:
        if not isinstance(payload.get(key), str) or not payload[key]:
            raise ValueError(f'history entry needs a {key!r} string')


def glucose_update(pending):
    # 포도당 결과는 diagnosis, level 만 갱신
    return {
        'date': pending['date'],
        'timestamp': pending['timestamp'],
        'diagnosis': pending['diagnosis'],
        'level': pending['level'],
    }


def ph_update(pending):
    # pH 결과는 ph 만 갱신. 측정 불가(None)도 그대로 덮어씀
    return {
        'date': pending['date'],
        'timestamp': pending['timestamp'],
        'ph': pending['ph'],
    }


def canonical(entry):
    return {key: entry[key] for key in ENTRY_KEYS if key in entry}


class HistoryStore:
    def __init__(self, entries=None):
        self.entries = []
        for entry in entries or []:
            self.upsert(entry)

    @classmethod
    def from_entries(cls, entries):
        # 저장된 snapshot이 정렬되지 않았거나 날짜가 중복되어도 upsert로 다시 정리
        store = cls()
        if not isinstance(entries, list):
            return store
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            row = {k: v for k, v in entry.items() if k in ENTRY_KEYS}
            # 범위를 벗어난 level, ph 는 None 으로
            if 'level' in row and not _valid(row['level'], LEVELS):
                row['level'] = None
            if 'ph' in row and not _valid(row['ph'], PH_VALUES):
                row['ph'] = None
            try:
                store.upsert(row)
            except ValueError:
                continue
        return store

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def get(self, date):
        for entry in self.entries:
            if entry['date'] == date:
                return entry
        return None

    def upsert(self, payload):
        _check_payload(payload)

        for idx, entry in enumerate(self.entries):
            if entry['date'] == payload['date']:
                # payload에 있는 key만 덮어씀 (None 포함), 없는 key는 유지
                merged = dict(entry)
                merged.update(payload)
                self.entries[idx] = merged
                break
        else:
            self.entries.append(dict(payload))

        # ISO-8601 UTC 문자열은 사전순 정렬 = 시간순 정렬
        self.entries.sort(key=lambda e: e['timestamp'])
        return self.entries

    def clear(self, confirmed=False):
        # 사용자가 확인한 경우에만 삭제
        if not confirmed:
            return False
        self.entries = []
        return True

    def to_list(self):
        return [canonical(entry) for entry in self.entries]

    def export_json(self):
        return json.dumps(self.to_list(), indent=2, ensure_ascii=False)
