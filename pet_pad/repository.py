import os
import json
import logging

from .errors import PersistenceError
from .history import HistoryStore
from .context import normalize_inputs
from .utils import mkdir_p

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    'history': 'petpad-history',
    'inputs': 'petpad-inputs',
}


class MemoryStore:
    # 문서 단위 snapshot 저장 (직렬화해서 보관)
    def __init__(self):
        self.docs = {}

    def get(self, key):
        doc = self.docs.get(key)
        return None if doc is None else json.loads(doc)

    def set(self, key, value):
        self.docs[key] = json.dumps(value, ensure_ascii=False)


class JsonFileStore:
    # key 하나당 JSON 파일 하나
    def __init__(self, directory):
        self.directory = directory

    def path(self, key):
        return os.path.join(self.directory, key + '.json')

    def get(self, key):
        path = self.path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as fp:
                return json.load(fp)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f'cannot read {path}: {exc}') from exc

    def set(self, key, value):
        path = self.path(key)
        tmp = path + '.tmp'
        try:
            mkdir_p(self.directory)
            # 임시 파일에 다 쓴 뒤 교체 (중간에 죽어도 기존 문서는 그대로)
            with open(tmp, 'w', encoding='utf-8') as fp:
                json.dump(value, fp, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except (OSError, TypeError) as exc:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise PersistenceError(f'cannot write {path}: {exc}') from exc

    def backup(self, key):
        # 읽을 수 없는 문서는 덮어쓰기 전에 .bak 으로 옮겨둠
        path = self.path(key)
        if not os.path.exists(path):
            return None
        try:
            os.replace(path, path + '.bak')
        except OSError as exc:
            raise PersistenceError(f'cannot back up {path}: {exc}') from exc
        return path + '.bak'


class Repository:
    def __init__(self, store=None):
        self.store = store
        # 읽기에 실패한 문서 key. 백업 전에는 덮어쓰지 않음
        self.unreadable = set()
        # 메모리 상태가 기준. 저장소는 매 변경마다 전체 문서를 덮어씀
        self.history = HistoryStore.from_entries(self._load(STORAGE_KEYS['history']))
        self.inputs = normalize_inputs(self._load(STORAGE_KEYS['inputs']))

    def _load(self, key):
        if self.store is None:
            return None
        try:
            return self.store.get(key)
        except PersistenceError as exc:
            logger.warning('failed to load %s, starting empty: %s', key, exc)
            self.unreadable.add(key)
            return None

    def _save(self, key, value):
        if self.store is None:
            return False
        if key in self.unreadable and not self._backup(key):
            return False
        try:
            self.store.set(key, value)
        except PersistenceError as exc:
            logger.warning('failed to save %s: %s', key, exc)
            return False
        return True

    def upsert(self, payload):
        self.history.upsert(payload)
        self.save_history()
        return self.history.entries

    def clear_history(self, confirmed=False):
        cleared = self.history.clear(confirmed)
        if cleared:
            self.save_history()
        return cleared

    def save_history(self):
        return self._save(STORAGE_KEYS['history'], self.history.to_list())

    def update_inputs(self, **values):
        unknown = set(values) - set(self.inputs)
        if unknown:
            raise ValueError(f'unknown input fields: {sorted(unknown)}')
        merged = dict(self.inputs)
        merged.update(values)
        self.inputs = normalize_inputs(merged)
        self._save(STORAGE_KEYS['inputs'], self.inputs)
        return self.inputs

    def _backup(self, key):
        backup = getattr(self.store, 'backup', None)
        if backup is None:
            logger.warning('not saving %s: stored document is unreadable', key)
            return False
        try:
            path = backup(key)
        except PersistenceError as exc:
            logger.warning('not saving %s: %s', key, exc)
            return False
        logger.warning('moved unreadable %s to %s', key, path)
        self.unreadable.discard(key)
        return True
