from __future__ import annotations

import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from contribgrid.config import CacheConfig
from contribgrid.errors import CacheReadError, CacheWriteError
from contribgrid.io.cache import TTL_MS, ContributionCache, cache_key
from contribgrid.io.store import FileStore, KeyValueStore, MemoryStore, build_store
from tests.helpers import ENTITY, HOUR_MS, NOW_MS, YEAR, FakeClock, make_response


class BrokenStore:
    """Store whose every operation fails like an exhausted browser quota."""

    def get(self, key: str) -> bytes | None:
        raise OSError("storage unavailable")

    def set(self, key: str, value: bytes) -> None:
        raise OSError("quota exceeded")

    def delete(self, key: str) -> None:
        raise OSError("storage unavailable")


class CacheKeyTests(unittest.TestCase):
    def test_key_layout(self) -> None:
        self.assertEqual(cache_key("alice", 2024), "contributions_alice_2024")

    def test_ttl_is_one_day(self) -> None:
        self.assertEqual(TTL_MS, 86_400_000)


class ContributionCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.clock = FakeClock()
        self.cache = ContributionCache(self.store, clock=self.clock)
        self.response = make_response()

    def test_round_trip_within_ttl(self) -> None:
        self.cache.set(ENTITY, YEAR, self.response)
        self.clock.advance(TTL_MS - 1)

        self.assertEqual(self.cache.get(ENTITY, YEAR), self.response)

    def test_miss_when_absent(self) -> None:
        outcome = self.cache.read(ENTITY, YEAR)

        self.assertTrue(outcome.ok)
        self.assertIsNone(outcome.value)
        self.assertIsNone(self.cache.get(ENTITY, YEAR))

    def test_entries_are_per_entity_and_year(self) -> None:
        self.cache.set(ENTITY, YEAR, self.response)

        self.assertIsNone(self.cache.get(ENTITY, YEAR - 1))
        self.assertIsNone(self.cache.get("bob", YEAR))

    def test_set_overwrites_existing_entry(self) -> None:
        self.cache.set(ENTITY, YEAR, self.response)
        replacement = make_response(total=1)
        self.clock.advance(HOUR_MS)
        self.cache.set(ENTITY, YEAR, replacement)

        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.cache.get(ENTITY, YEAR), replacement)
        stored = json.loads(self.store.get(cache_key(ENTITY, YEAR)))
        self.assertEqual(stored["timestamp"], NOW_MS + HOUR_MS)

    def test_persisted_schema(self) -> None:
        self.cache.set(ENTITY, YEAR, self.response)

        stored = json.loads(self.store.get(cache_key(ENTITY, YEAR)))
        self.assertEqual(set(stored), {"data", "timestamp"})
        self.assertEqual(stored["timestamp"], NOW_MS)
        self.assertEqual(stored["data"]["total"], {str(YEAR): self.response.total_for(YEAR)})
        self.assertEqual(len(stored["data"]["contributions"]), 366)

    def test_expired_entry_is_absent_and_removed(self) -> None:
        self.cache.set(ENTITY, YEAR, self.response)
        self.clock.advance(TTL_MS)

        self.assertIsNone(self.cache.get(ENTITY, YEAR))
        self.assertNotIn(cache_key(ENTITY, YEAR), self.store)

    def test_entry_written_by_previous_process_is_readable(self) -> None:
        payload = {"data": json.loads(self.response.model_dump_json()), "timestamp": NOW_MS - HOUR_MS}
        self.store.set(cache_key(ENTITY, YEAR), json.dumps(payload).encode("utf-8"))

        self.assertEqual(self.cache.get(ENTITY, YEAR), self.response)

    def test_corrupt_entry_is_a_miss(self) -> None:
        self.store.set(cache_key(ENTITY, YEAR), b"{not json")

        outcome = self.cache.read(ENTITY, YEAR)
        self.assertIsInstance(outcome.error, CacheReadError)
        self.assertIsNone(self.cache.get(ENTITY, YEAR))

    def test_unknown_schema_is_a_miss(self) -> None:
        self.store.set(cache_key(ENTITY, YEAR), json.dumps({"contributions": []}).encode("utf-8"))

        self.assertIsNone(self.cache.get(ENTITY, YEAR))

    def test_storage_faults_never_escape(self) -> None:
        cache = ContributionCache(BrokenStore(), clock=self.clock)

        self.assertIsInstance(cache.read(ENTITY, YEAR).error, CacheReadError)
        self.assertIsInstance(cache.write(ENTITY, YEAR, self.response).error, CacheWriteError)
        self.assertIsNone(cache.get(ENTITY, YEAR))
        cache.set(ENTITY, YEAR, self.response)


class FileStoreTests(unittest.TestCase):
    def test_entries_survive_new_store_instance(self) -> None:
        with TemporaryDirectory() as tmpdir:
            clock = FakeClock()
            response = make_response()
            ContributionCache(FileStore(Path(tmpdir)), clock=clock).set(ENTITY, YEAR, response)

            reopened = ContributionCache(FileStore(Path(tmpdir)), clock=clock)
            self.assertEqual(reopened.get(ENTITY, YEAR), response)

    def test_delete_removes_file(self) -> None:
        with TemporaryDirectory() as tmpdir:
            store = FileStore(Path(tmpdir))
            store.set("contributions_a/b_2024", b"x")
            path = store.path_for("contributions_a/b_2024")

            self.assertEqual(path.parent, Path(tmpdir))
            self.assertTrue(path.exists())
            store.delete("contributions_a/b_2024")
            self.assertFalse(path.exists())
            store.delete("contributions_a/b_2024")
            self.assertIsNone(store.get("contributions_a/b_2024"))

    def test_build_store_backends(self) -> None:
        with TemporaryDirectory() as tmpdir:
            file_store = build_store(CacheConfig(backend="file", directory=Path(tmpdir)))
            memory_store = build_store(CacheConfig(backend="memory"))

        self.assertIsInstance(file_store, FileStore)
        self.assertEqual(file_store.root, Path(tmpdir).resolve())
        self.assertIsInstance(memory_store, MemoryStore)
        self.assertIsInstance(memory_store, KeyValueStore)


if __name__ == "__main__":
    unittest.main()
