"""
Repository layer - abstracts persistence.

Usage:
    from repositories import get_store

    store = get_store()  # Async facade over the configured backend
    records = await store.get_all_results()

Backends are swappable via config (FORENSIC_STORE_BACKEND) or
configure_backend().
"""

from config import STORE_BACKEND
from .base import RecordRepository, RecordStore
from .json_backend import JsonRecordRepository
from .memory_backend import MemoryRecordRepository

_backend: str = STORE_BACKEND
_backend_kwargs: dict = {}
_instance: RecordRepository = None


def get_repository() -> RecordRepository:
    """Get the configured repository instance."""
    global _instance

    if _instance is None:
        if _backend == "json":
            _instance = JsonRecordRepository(**_backend_kwargs)
        elif _backend == "memory":
            _instance = MemoryRecordRepository(**_backend_kwargs)
        else:
            raise ValueError(f"Unknown backend: {_backend}")

    return _instance


def get_store() -> RecordStore:
    """Async store over the configured repository."""
    return RecordStore(get_repository())


def configure_backend(backend: str, **kwargs) -> None:
    """Configure the repository backend."""
    global _backend, _backend_kwargs, _instance
    _backend = backend
    _backend_kwargs = kwargs
    _instance = None  # Force re-initialization


__all__ = [
    "get_repository",
    "get_store",
    "configure_backend",
    "RecordRepository",
    "RecordStore",
    "JsonRecordRepository",
    "MemoryRecordRepository",
]
