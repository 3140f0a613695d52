"""
Session persistence for page metadata.

Storage is an injected port: callers pass a ``MetadataStore`` explicitly.
Two adapters are provided, an in-memory store and a directory of JSON
files. Session helpers keep a list of pages plus a save timestamp under
a prefixed key.
"""

import hashlib
import json
import logging
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from .models import PageMetadata, SessionInfo

logger = logging.getLogger(__name__)

METADATA_SESSION_PREFIX = "seo-metadata-"

# Environment variable naming the default JSON store directory
STORE_DIR_ENV = "SEO_METADATA_STORE_DIR"


class StorageError(Exception):
    """Raised when stored data cannot be read or written."""
    pass


class MetadataStore(ABC):
    """Key-value persistence port."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under key, or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""

    @abstractmethod
    def list(self, prefix: str = "") -> list[str]:
        """Return stored keys starting with prefix."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key; missing keys are ignored."""


class InMemoryStore(MetadataStore):
    """Store backed by a dict. Values are copied through JSON."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def list(self, prefix: str = "") -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStore(MetadataStore):
    """
    Store writing one JSON file per key into a directory.

    File names are the SHA-256 hex digest of the key, so any key maps to
    its own file inside the directory. The original key is kept inside the
    file and checked on read.
    """

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        directory = directory or os.environ.get(STORE_DIR_ENV) or Path.home() / ".seo-metadata"
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    def _read(self, path: Path) -> dict:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}")
        if not isinstance(data, dict):
            raise StorageError(f"Malformed store entry: {path}")
        return data

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        data = self._read(path)
        if data.get("key") != key:
            raise StorageError(f"{path} holds key {data.get('key')!r}, not {key!r}")
        return data.get("value")

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            path.write_text(json.dumps({"key": key, "value": value}), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}")

    def list(self, prefix: str = "") -> list[str]:
        keys = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                key = self._read(path).get("key", "")
            except StorageError as e:
                logger.warning(f"Skipping unreadable store entry: {e}")
                continue
            if key.startswith(prefix):
                keys.append(key)
        return keys

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


def save_metadata_session(
    store: MetadataStore,
    session_id: str,
    pages: list[PageMetadata],
) -> None:
    """Save pages under a session id with the current timestamp."""
    store.set(f"{METADATA_SESSION_PREFIX}{session_id}", {
        "metadata": [page.to_dict() for page in pages],
        "timestamp": time.time(),
    })
    logger.debug(f"Saved session {session_id} ({len(pages)} pages)")


def load_metadata_session(store: MetadataStore, session_id: str) -> Optional[list[PageMetadata]]:
    """Load a session's pages, or None if the session does not exist."""
    data = store.get(f"{METADATA_SESSION_PREFIX}{session_id}")
    if not data or "metadata" not in data:
        return None
    return [PageMetadata.from_dict(item) for item in data["metadata"]]


def list_metadata_sessions(store: MetadataStore) -> list[SessionInfo]:
    """List stored sessions, most recently saved first."""
    sessions: list[SessionInfo] = []
    for key in store.list(METADATA_SESSION_PREFIX):
        data = store.get(key)
        if not isinstance(data, dict):
            logger.warning(f"Skipping malformed session entry: {key}")
            continue
        sessions.append(SessionInfo(
            id=key[len(METADATA_SESSION_PREFIX):],
            timestamp=data.get("timestamp", 0),
            count=len(data.get("metadata") or []),
        ))
    return sorted(sessions, key=lambda s: s.timestamp, reverse=True)


def delete_metadata_session(store: MetadataStore, session_id: str) -> None:
    """Delete a session; unknown ids are ignored."""
    store.delete(f"{METADATA_SESSION_PREFIX}{session_id}")
