"""
Session Store

Key-value persistence for serialized game sessions. The game service only
depends on the SessionStore interface; concrete stores keep records in
memory, in a JSON file, or in a MongoDB collection.
"""

import copy
import datetime
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi


class SessionStoreError(Exception):
    """A session record could not be read or written."""


class SessionStore(ABC):
    """Interface for session persistence."""

    @abstractmethod
    def load(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the record stored under ``key``, or None."""

    @abstractmethod
    def save(self, key: str, record: Dict[str, Any]) -> None:
        """Store ``record`` under ``key``, replacing any previous record."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove the record under ``key``. Returns True if one existed."""


class InMemorySessionStore(SessionStore):
    """Process-local store, used in tests and with SESSION_STORE=memory."""

    def __init__(self):
        self.records: Dict[str, Dict[str, Any]] = {}

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        record = self.records.get(key)
        return copy.deepcopy(record) if record is not None else None

    def save(self, key: str, record: Dict[str, Any]) -> None:
        self.records[key] = copy.deepcopy(record)

    def delete(self, key: str) -> bool:
        return self.records.pop(key, None) is not None


class JsonFileSessionStore(SessionStore):
    """
    Stores all records in a single JSON document mapping keys to records.

    Writes go to a temporary file that replaces the original, so a failed
    write leaves the previous document intact. Read-modify-write cycles are
    serialized per store instance.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SessionStoreError(f"Failed to read {self.path}: {e}")
        if not isinstance(data, dict):
            raise SessionStoreError(f"{self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            raise SessionStoreError(f"Failed to write {self.path}: {e}")

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        return self._read_all().get(key)

    def save(self, key: str, record: Dict[str, Any]) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = record
            self._write_all(data)

    def delete(self, key: str) -> bool:
        with self._lock:
            data = self._read_all()
            if key not in data:
                return False
            del data[key]
            self._write_all(data)
            return True


class MongoSessionStore(SessionStore):
    """Stores one document per key in a MongoDB collection."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str = 'ppt_game') -> "MongoSessionStore":
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        return cls(client[db_name].game_sessions)

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            document = self.collection.find_one({"_id": key})
        except PyMongoError as e:
            raise SessionStoreError(f"Failed to load session {key}: {e}")
        return document.get("record") if document else None

    def save(self, key: str, record: Dict[str, Any]) -> None:
        try:
            self.collection.update_one(
                {"_id": key},
                {"$set": {"record": record, "updated_at": datetime.datetime.now(datetime.timezone.utc)}},
                upsert=True,
            )
        except PyMongoError as e:
            raise SessionStoreError(f"Failed to save session {key}: {e}")

    def delete(self, key: str) -> bool:
        try:
            result = self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            raise SessionStoreError(f"Failed to delete session {key}: {e}")
        return result.deleted_count > 0


def build_session_store(config) -> SessionStore:
    """
    Create the store selected by ``config.SESSION_STORE``.

    Raises:
        ValueError: For an unknown store name, or "mongo" without MONGO_URI
    """
    kind = (getattr(config, 'SESSION_STORE', 'memory') or 'memory').lower()

    if kind == 'memory':
        return InMemorySessionStore()
    if kind == 'file':
        return JsonFileSessionStore(config.SESSION_FILE)
    if kind == 'mongo':
        if not config.MONGO_URI:
            raise ValueError("SESSION_STORE=mongo requires MONGO_URI")
        return MongoSessionStore.from_uri(config.MONGO_URI, config.MONGO_DB)

    raise ValueError(f"Unknown session store: {kind!r}")
