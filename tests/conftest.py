"""Shared fixtures and in-memory engine doubles."""

import fnmatch
import itertools
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId

from db_console.core.models import Connection, DatabaseType


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def make_connection(db_type: DatabaseType, **overrides: Any) -> Connection:
    fields: Dict[str, Any] = {
        "id": "1",
        "name": "Local",
        "type": db_type,
        "host": "localhost",
        "port": db_type.default_port,
        "database": "app",
        "username": "admin",
        "password": "secret",
    }
    fields.update(overrides)
    return Connection(**fields)


@pytest.fixture
def connection_for():
    return make_connection


# --- MongoDB ---------------------------------------------------------------


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(document.get(k) == v for k, v in query.items())


class FakeCursor:
    def __init__(self, items: List[Dict[str, Any]]):
        self.items = items
        self.limit_value: Optional[int] = None

    def limit(self, value: int) -> "FakeCursor":
        self.limit_value = value
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        items = self.items
        if self.limit_value:
            items = items[: self.limit_value]
        return [dict(item) for item in items]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.calls: List[str] = []

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.calls.append("find")
        return FakeCursor([d for d in self.documents if _matches(d, query)])

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        self.calls.append("insert_one")
        document = dict(document)
        document.setdefault("_id", ObjectId())
        self.documents.append(document)
        return SimpleNamespace(inserted_id=document["_id"])

    async def delete_many(self, query: Dict[str, Any]) -> SimpleNamespace:
        self.calls.append("delete_many")
        kept = [d for d in self.documents if not _matches(d, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)

    async def update_many(self, query: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        self.calls.append("update_many")
        matched = modified = 0
        for document in self.documents:
            if not _matches(document, query):
                continue
            matched += 1
            changes = update.get("$set", {})
            if any(document.get(k) != v for k, v in changes.items()):
                document.update(changes)
                modified += 1
        return SimpleNamespace(matched_count=matched, modified_count=modified)


class FakeDatabase:
    def __init__(self, name: str):
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(name))

    async def create_collection(self, name: str) -> FakeCollection:
        if name in self.collections:
            raise RuntimeError(f"collection {name} already exists")
        return self[name]

    async def list_collections(self) -> FakeCursor:
        return FakeCursor([{"name": n, "type": "collection"} for n in self.collections])


class FakeMongoClient:
    """Stands in for AsyncMongoClient; one instance serves every connect."""

    def __init__(self):
        self.databases: Dict[str, FakeDatabase] = {}
        self.uris: List[str] = []
        self.options: Dict[str, Any] = {}
        self.opened = 0
        self.closed = 0
        self.ping_error: Optional[Exception] = None

    def connect(self, uri: str, **options: Any) -> "FakeMongoClient":
        self.uris.append(uri)
        self.options = options
        self.opened += 1
        return self

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    @property
    def admin(self) -> SimpleNamespace:
        async def command(name: str) -> Dict[str, Any]:
            if self.ping_error:
                raise self.ping_error
            return {"ok": 1}

        return SimpleNamespace(command=command)

    async def close(self) -> None:
        self.closed += 1


@pytest.fixture
def mongo(monkeypatch: pytest.MonkeyPatch) -> FakeMongoClient:
    client = FakeMongoClient()
    monkeypatch.setattr("db_console.adapters.mongodb.executor.AsyncMongoClient", client.connect)
    return client


# --- Redis -----------------------------------------------------------------


class FakeRedisServer:
    def __init__(self):
        self.strings: Dict[str, str] = {}
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.clients: List["FakeRedis"] = []

    def client(self, **options: Any) -> "FakeRedis":
        client = FakeRedis(self, options)
        self.clients.append(client)
        return client


class FakeRedis:
    def __init__(self, server: FakeRedisServer, options: Dict[str, Any]):
        self.server = server
        self.options = options
        self.closed = 0

    async def ping(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[str]:
        return self.server.strings.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.server.strings[key] = value
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            removed += int(self.server.strings.pop(key, None) is not None)
            removed += int(self.server.hashes.pop(key, None) is not None)
        return removed

    async def keys(self, pattern: str) -> List[str]:
        names = itertools.chain(self.server.strings, self.server.hashes)
        return sorted(n for n in names if fnmatch.fnmatchcase(n, pattern))

    async def hgetall(self, key: str) -> Dict[str, str]:
        return dict(self.server.hashes.get(key, {}))

    async def hget(self, key: str, field: str) -> Optional[str]:
        return self.server.hashes.get(key, {}).get(field)

    async def hset(self, key: str, field: str, value: str) -> int:
        bucket = self.server.hashes.setdefault(key, {})
        added = int(field not in bucket)
        bucket[field] = value
        return added

    async def aclose(self) -> None:
        self.closed += 1


@pytest.fixture
def redis_server(monkeypatch: pytest.MonkeyPatch) -> FakeRedisServer:
    server = FakeRedisServer()
    monkeypatch.setattr("db_console.adapters.redis.executor.Redis", server.client)
    return server
