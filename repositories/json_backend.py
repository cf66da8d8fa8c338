"""
JSON file backend - one file per analysis record.

Directory structure:
    records/
        {quoted id}.json     - AnalysisRecord (id percent-encoded)
"""

import json
import threading
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from pydantic import ValidationError

from config import RECORDS_DIR
from models import AnalysisRecord
from .base import RecordRepository


class WriteQueue:
    """Thread-safe write serialization."""

    def __init__(self):
        self._lock = threading.Lock()

    def write_json(self, path: Path, data: dict) -> None:
        """Atomic JSON write."""
        with self._lock:
            temp = path.with_suffix(".json.tmp")
            with open(temp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            temp.replace(path)

    def remove(self, path: Path) -> bool:
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
            return True


_write_queue = WriteQueue()


class JsonRecordRepository(RecordRepository):
    """JSON file implementation of the record repository."""

    def __init__(self, base_path: Path = None):
        self._base_path = Path(base_path) if base_path else RECORDS_DIR

    def _record_file(self, id: str) -> Path:
        # One-to-one: distinct ids map to distinct files
        return self._base_path / f"{quote(id, safe='')}.json"

    def _load(self, path: Path) -> Optional[AnalysisRecord]:
        try:
            with open(path, encoding="utf-8") as f:
                return AnalysisRecord.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            print(f"[WARN] Corrupt record file {path.name}: {e}")
            return None

    def get(self, id: str) -> Optional[AnalysisRecord]:
        path = self._record_file(id)
        if not path.exists():
            return None
        record = self._load(path)
        if record is None or record.id != id:
            return None
        return record

    def save(self, entity: AnalysisRecord) -> None:
        self._base_path.mkdir(parents=True, exist_ok=True)
        _write_queue.write_json(self._record_file(entity.id), entity.model_dump(mode="json"))

    def delete(self, id: str) -> bool:
        return _write_queue.remove(self._record_file(id))

    def list(self) -> list[AnalysisRecord]:
        if not self._base_path.exists():
            return []

        records = []
        for path in sorted(self._base_path.glob("*.json")):
            record = self._load(path)
            if record:
                records.append(record)
        return records

    def exists(self, id: str) -> bool:
        return self._record_file(id).exists()

    def clear(self) -> int:
        removed = 0
        for record in self.list():
            if self.delete(record.id):
                removed += 1
        return removed
