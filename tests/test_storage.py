"""Tests for metadata session storage."""

from unittest.mock import patch

import pytest

from seo_metadata_analyzer.models import PageMetadata
from seo_metadata_analyzer.storage import (
    METADATA_SESSION_PREFIX,
    STORE_DIR_ENV,
    InMemoryStore,
    JSONFileStore,
    StorageError,
    delete_metadata_session,
    list_metadata_sessions,
    load_metadata_session,
    save_metadata_session,
)


@pytest.fixture(params=["memory", "files"])
def store(request, tmp_path):
    """Each store adapter in turn."""
    if request.param == "memory":
        return InMemoryStore()
    return JSONFileStore(tmp_path / "store")


class TestStores:
    """Tests shared by both adapters."""

    def test_get_set_delete(self, store):
        """Test values round-trip and deletes are idempotent."""
        store.set("k", {"a": [1, 2]})
        assert store.get("k") == {"a": [1, 2]}
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None

    def test_list_by_prefix(self, store):
        """Test listing keys filtered by prefix."""
        store.set("seo-metadata-a", 1)
        store.set("other", 2)
        assert store.list("seo-metadata-") == ["seo-metadata-a"]

    def test_values_are_copies(self, store):
        """Test mutating a stored value after set does not change the store."""
        value = {"items": [1]}
        store.set("k", value)
        value["items"].append(2)
        assert store.get("k") == {"items": [1]}


class TestSessions:
    """Tests for session helpers."""

    def test_save_and_load(self, store, ideal_page, empty_page):
        """Test a saved session loads back as equal pages."""
        save_metadata_session(store, "site", [ideal_page, empty_page])
        assert load_metadata_session(store, "site") == [ideal_page, empty_page]
        assert store.list(METADATA_SESSION_PREFIX) == [f"{METADATA_SESSION_PREFIX}site"]

    def test_load_missing(self, store):
        """Test an unknown session loads as None."""
        assert load_metadata_session(store, "nope") is None

    def test_list_newest_first(self, store):
        """Test sessions are listed by save time, newest first."""
        with patch("seo_metadata_analyzer.storage.time") as mock_time:
            mock_time.time.side_effect = [100.0, 200.0]
            save_metadata_session(store, "old", [PageMetadata(url="https://a.example")])
            save_metadata_session(store, "new", [])
        sessions = list_metadata_sessions(store)
        assert [(s.id, s.timestamp, s.count) for s in sessions] == [
            ("new", 200.0, 0),
            ("old", 100.0, 1),
        ]

    def test_delete(self, store):
        """Test deleting a session."""
        save_metadata_session(store, "site", [])
        delete_metadata_session(store, "site")
        assert load_metadata_session(store, "site") is None
        assert list_metadata_sessions(store) == []


class TestJSONFileStore:
    """Tests specific to the file adapter."""

    def test_default_directory_from_env(self, tmp_path, monkeypatch):
        """Test the directory defaults to the environment variable."""
        monkeypatch.setenv(STORE_DIR_ENV, str(tmp_path / "env-store"))
        store = JSONFileStore()
        assert store.directory == tmp_path / "env-store"
        assert store.directory.is_dir()

    def test_unsafe_key_characters(self, tmp_path):
        """Test keys with path characters stay inside the directory."""
        store = JSONFileStore(tmp_path)
        store.set("a/../b", "v")
        assert store.get("a/../b") == "v"
        assert store.list() == ["a/../b"]
        assert all(path.parent == tmp_path for path in tmp_path.iterdir())

    def test_corrupt_file(self, tmp_path):
        """Test a corrupt entry raises on get and is skipped by list."""
        store = JSONFileStore(tmp_path)
        store.set("good", 1)
        store.set("bad", 2)
        store._path("bad").write_text("{not json")
        with pytest.raises(StorageError):
            store.get("bad")
        assert store.list() == ["good"]

    def test_similar_keys_use_separate_files(self, tmp_path):
        """Test keys that differ only in punctuation never share a file."""
        store = JSONFileStore(tmp_path)
        save_metadata_session(store, "client:a", [PageMetadata(url="https://a.example/")])
        save_metadata_session(store, "client_a", [PageMetadata(url="https://b.example/")])

        assert [p.url for p in load_metadata_session(store, "client:a")] == ["https://a.example/"]
        assert [p.url for p in load_metadata_session(store, "client_a")] == ["https://b.example/"]
        assert sorted(s.id for s in list_metadata_sessions(store)) == ["client:a", "client_a"]
        assert len(list(tmp_path.glob("*.json"))) == 2

    def test_entry_for_another_key(self, tmp_path):
        """Test get refuses a file whose stored key does not match."""
        store = JSONFileStore(tmp_path)
        store.set("other", "v")
        store._path("other").rename(store._path("mine"))
        with pytest.raises(StorageError):
            store.get("mine")
