"""
Repository base classes - define the interface.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional

from models import AnalysisRecord

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base for entity repositories."""

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def save(self, entity: T) -> None:
        """Save entity."""
        pass

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Delete entity by ID. Returns True if deleted."""
        pass

    @abstractmethod
    def list(self) -> list[T]:
        """List all entities."""
        pass

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Check if entity exists."""
        pass


class RecordRepository(BaseRepository[AnalysisRecord]):
    """Repository for analysis records."""

    @abstractmethod
    def clear(self) -> int:
        """Delete every record. Returns how many were removed."""
        pass


class RecordStore:
    """
    Async facade over a record repository.

    This is what the correlation core reads from. Repository calls run in a
    worker thread.
    """

    def __init__(self, repository: RecordRepository):
        self.repository = repository

    async def get_all_results(self) -> list[AnalysisRecord]:
        """Every record, oldest input first. Empty store -> []."""
        records = await asyncio.to_thread(self.repository.list)
        return sorted(records, key=lambda r: r.input.timestamp)

    async def get_result(self, id: str) -> Optional[AnalysisRecord]:
        return await asyncio.to_thread(self.repository.get, id)

    async def save_result(self, record: AnalysisRecord) -> None:
        await asyncio.to_thread(self.repository.save, record)
        print(f"[Storage] Saved analysis {record.id}")

    async def delete_result(self, id: str) -> bool:
        return await asyncio.to_thread(self.repository.delete, id)

    async def clear_all(self) -> int:
        return await asyncio.to_thread(self.repository.clear)
