"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no external dependencies)
- Deterministic (same result every time)
"""

import pytest

from repositories import MemoryRecordRepository, RecordStore


@pytest.fixture
def memory_store():
    """Async store over an empty in-memory repository."""
    return RecordStore(MemoryRecordRepository())


@pytest.fixture
def store_with(memory_store):
    """Fill the memory store with records: store_with(a, b, c)."""
    def fill(*records):
        for record in records:
            memory_store.repository.save(record)
        return memory_store
    return fill
