"""
Repository Contract Tests.

Any record repository implementation MUST pass these tests.
This ensures backends are interchangeable.

To add a new backend:
1. Implement the RecordRepository interface
2. Add a test class that inherits RepositoryContractTests
3. Provide a `repo` fixture that returns your implementation
"""

import asyncio
from abc import ABC

import pytest

from repositories import RecordStore


class RepositoryContractTests(ABC):
    """
    Contract tests that any repository must pass.

    Subclass this and provide a `repo` fixture.
    """

    def test_save_and_load_record(self, repo, make_record, french_output):
        record = make_record("ANALYSE-1", output=french_output)
        repo.save(record)

        loaded = repo.get("ANALYSE-1")

        assert loaded is not None
        assert loaded == record

    def test_load_nonexistent_returns_none(self, repo):
        assert repo.get("does-not-exist") is None

    def test_record_exists(self, repo, make_record):
        assert not repo.exists("A")
        repo.save(make_record("A"))
        assert repo.exists("A")

    def test_list_empty(self, repo):
        assert repo.list() == []

    def test_list_records(self, repo, make_record):
        repo.save(make_record("A"))
        repo.save(make_record("B"))

        ids = {r.id for r in repo.list()}

        assert ids == {"A", "B"}

    def test_save_overwrites(self, repo, make_record):
        repo.save(make_record("A", status="processing", output=None))
        repo.save(make_record("A", keyEntities=["John Doe"]))

        loaded = repo.get("A")

        assert loaded.status.value == "completed"
        assert loaded.output.key_entities == ["John Doe"]
        assert len(repo.list()) == 1

    def test_similar_ids_stay_distinct(self, repo, make_record):
        repo.save(make_record("a/b", keyEntities=["Slash Person"]))
        repo.save(make_record("a_b", keyEntities=["Underscore Person"]))

        assert repo.get("a/b").output.key_entities == ["Slash Person"]
        assert repo.get("a_b").output.key_entities == ["Underscore Person"]
        assert {r.id for r in repo.list()} == {"a/b", "a_b"}

        assert repo.delete("a_b") is True
        assert repo.exists("a/b")
        assert not repo.exists("a_b")

    def test_delete_record(self, repo, make_record):
        repo.save(make_record("to-delete"))

        assert repo.delete("to-delete") is True
        assert not repo.exists("to-delete")

    def test_delete_nonexistent_returns_false(self, repo):
        assert repo.delete("does-not-exist") is False

    def test_clear(self, repo, make_record):
        repo.save(make_record("A"))
        repo.save(make_record("B"))

        assert repo.clear() == 2
        assert repo.list() == []

    def test_mutating_loaded_record_does_not_change_store(self, repo, make_record):
        repo.save(make_record("A", keyEntities=["John Doe"]))

        loaded = repo.get("A")
        loaded.output.key_entities.append("Intruder")

        assert repo.get("A").output.key_entities == ["John Doe"]

    # === Async store facade ===

    def test_store_sorted_by_timestamp(self, repo, make_record):
        first = make_record("Z-first")
        second = make_record("A-second")
        repo.save(second)
        repo.save(first)

        records = asyncio.run(RecordStore(repo).get_all_results())

        assert [r.id for r in records] == ["Z-first", "A-second"]

    def test_store_roundtrip(self, repo, make_record):
        store = RecordStore(repo)
        record = make_record("A", keyEntities=["John Doe"])

        async def scenario():
            await store.save_result(record)
            loaded = await store.get_result("A")
            deleted = await store.delete_result("A")
            missing = await store.get_result("A")
            return loaded, deleted, missing

        loaded, deleted, missing = asyncio.run(scenario())

        assert loaded == record
        assert deleted is True
        assert missing is None

    def test_store_empty(self, repo):
        assert asyncio.run(RecordStore(repo).get_all_results()) == []


class TestJsonBackendContract(RepositoryContractTests):
    """Test JSON backend passes contract."""

    @pytest.fixture
    def repo(self, records_dir):
        """Provide JSON repository with temp directory."""
        from repositories.json_backend import JsonRecordRepository
        return JsonRecordRepository(base_path=records_dir)

    def test_corrupt_file_skipped(self, repo, records_dir, make_record, capsys):
        repo.save(make_record("A"))
        (records_dir / "broken.json").write_text("{not json")

        assert [r.id for r in repo.list()] == ["A"]
        assert "[WARN]" in capsys.readouterr().out

    def test_unsafe_id_stays_inside_directory(self, repo, records_dir, make_record):
        repo.save(make_record("../escape/attempt"))

        assert repo.get("../escape/attempt") is not None
        assert list(records_dir.parent.glob("*.json")) == []

    def test_missing_directory_lists_empty(self, temp_dir):
        from repositories.json_backend import JsonRecordRepository
        assert JsonRecordRepository(base_path=temp_dir / "nope").list() == []


class TestMemoryBackendContract(RepositoryContractTests):
    """Test in-memory backend passes contract."""

    @pytest.fixture
    def repo(self):
        from repositories.memory_backend import MemoryRecordRepository
        return MemoryRecordRepository()
