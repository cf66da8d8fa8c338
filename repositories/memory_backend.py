"""
In-memory backend - dict of records, for tests and embedding.
"""

import threading
from typing import Iterable, Optional

from models import AnalysisRecord
from .base import RecordRepository


class MemoryRecordRepository(RecordRepository):
    """Dict-backed record repository. Stores copies so callers can't mutate state."""

    def __init__(self, records: Iterable[AnalysisRecord] = ()):
        self._lock = threading.Lock()
        self._records: dict[str, AnalysisRecord] = {}
        for record in records:
            self.save(record)

    def get(self, id: str) -> Optional[AnalysisRecord]:
        with self._lock:
            record = self._records.get(id)
        return record.model_copy(deep=True) if record else None

    def save(self, entity: AnalysisRecord) -> None:
        with self._lock:
            self._records[entity.id] = entity.model_copy(deep=True)

    def delete(self, id: str) -> bool:
        with self._lock:
            return self._records.pop(id, None) is not None

    def list(self) -> list[AnalysisRecord]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records.values()]

    def exists(self, id: str) -> bool:
        return id in self._records

    def clear(self) -> int:
        with self._lock:
            removed = len(self._records)
            self._records.clear()
        return removed
