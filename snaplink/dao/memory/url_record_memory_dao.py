"""In-process Data Access Object (DAO) for URL records

Thread-safe dictionary-backed implementation of UrlRecordBaseDAO, used for
local runs and tests. Every operation runs under a single lock, which makes
`insert_if_absent` and `increment_click` atomic the same way the Lua scripts
do for UrlRecordRedisDAO. Nothing is persisted across process restarts.

Example:
    >>> dao = UrlRecordMemoryDAO()
    >>> dao.insert_if_absent(record)
    True
    >>> dao.exists(record.code)
    True
"""

import threading
import dataclasses
from datetime import datetime

from beartype import beartype

from snaplink.models import UrlRecordModel
from snaplink.dao.base import UrlRecordBaseDAO


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    def __init__(self, records: list[UrlRecordModel] | None = None):
        self._lock = threading.Lock()
        self._records: dict[str, UrlRecordModel] = {}
        self._codes_by_url: dict[str, set[str]] = {}

        for record in records or []:
            self.insert_if_absent(record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        with self._lock:
            return code in self._records

    @beartype
    def insert_if_absent(self, record: UrlRecordModel, **kwargs) -> bool:
        with self._lock:
            if record.code in self._records:
                return False
            self._records[record.code] = record
            self._codes_by_url.setdefault(record.original_url, set()).add(record.code)
            return True

    @beartype
    def find_by_code(self, code: str, **kwargs) -> UrlRecordModel | None:
        with self._lock:
            return self._records.get(code)

    @beartype
    def increment_click(self, code: str, **kwargs) -> bool:
        with self._lock:
            record = self._records.get(code)
            if record is None:
                return False
            self._records[code] = dataclasses.replace(record, click_count=record.click_count + 1)
            return True

    @beartype
    def find_by_url(self, url: str, **kwargs) -> list[UrlRecordModel]:
        with self._lock:
            records = [self._records[code] for code in self._codes_by_url.get(url, ())]
        return sorted(records, key=lambda record: record.created_at)

    @beartype
    def delete_where_expired_before(self, now: datetime, **kwargs) -> int:
        with self._lock:
            expired = [code for code, record in self._records.items() if record.is_expired(now)]
            for code in expired:
                record = self._records.pop(code)
                codes = self._codes_by_url[record.original_url]
                codes.discard(code)
                if not codes:
                    del self._codes_by_url[record.original_url]
            return len(expired)

    @beartype
    def recent(self, limit: int, **kwargs) -> list[UrlRecordModel]:
        with self._lock:
            records = sorted(self._records.values(), key=lambda record: record.created_at, reverse=True)
        return records[: max(limit, 0)]
