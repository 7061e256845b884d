"""
Document Store Gateway — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The store is replaced by an in-memory fake that implements the part
       of the async pymongo collection API the gateway calls. It returns
       real `pymongo.results` objects and real ObjectIds, so the service and
       routes run unmodified.

Fixtures:
    ├── fake_store:        In-memory StoreHandle stand-in
    ├── static_dir:        Temporary directory served under /Images
    ├── gateway_settings:  Settings pointing at the temporary directories
    └── test_client:       HTTPX AsyncClient bound to a fresh app
"""

import os
from copy import deepcopy
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any gateway import so the module-level settings ignore any
# real db.properties in the working directory.
os.environ["DB_PROPERTIES_FILE"] = os.path.join(os.path.dirname(__file__), "missing.properties")
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# In-memory store
# ══════════════════════════════════════════════════════════════════════════

class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return self._documents[:length]


class FakeCollection:
    """Dict-backed collection keyed by `_id`."""

    def __init__(self, name: str, data: Dict[Any, Dict[str, Any]]):
        self.name = name
        self._data = data

    def find(self, filter: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([deepcopy(doc) for doc in self._data.values()])

    async def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._data.get(filter["_id"])
        return deepcopy(doc) if doc is not None else None

    async def insert_one(self, document: Any) -> InsertOneResult:
        if not isinstance(document, dict):
            raise TypeError("document must be an instance of dict")
        # pymongo adds the generated id to the caller's dict as well
        document.setdefault("_id", ObjectId())
        self._data[document["_id"]] = deepcopy(document)
        return InsertOneResult(document["_id"], True)

    async def update_one(self, filter: Dict[str, Any], update: Dict[str, Any]) -> UpdateResult:
        doc = self._data.get(filter["_id"])
        if doc is None:
            return UpdateResult({"n": 0, "nModified": 0, "ok": 1.0}, True)
        doc.update(deepcopy(update["$set"]))
        return UpdateResult({"n": 1, "nModified": 1, "ok": 1.0}, True)

    async def delete_one(self, filter: Dict[str, Any]) -> DeleteResult:
        removed = self._data.pop(filter["_id"], None)
        return DeleteResult({"n": 0 if removed is None else 1, "ok": 1.0}, True)


class FakeStore:
    """Stand-in for StoreHandle holding every collection in memory."""

    def __init__(self, name: str = "test"):
        self.name = name
        self.collections: Dict[str, Dict[Any, Dict[str, Any]]] = {}
        self.closed = False

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(name, self.collections.setdefault(name, {}))

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def static_dir(tmp_path):
    """Directory served under /Images, with one file in it."""
    images = tmp_path / "images"
    images.mkdir()
    (images / "logo.txt").write_bytes(b"not really a logo")
    return images


@pytest.fixture
def gateway_settings(static_dir):
    from gateway.config import Settings

    return Settings(_env_file=None, static_dir=str(static_dir), log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(fake_store, gateway_settings):
    """
    HTTPX AsyncClient talking to an app built around the fake store.

    ASGITransport does not run the lifespan, so the store is injected
    through create_app().
    """
    from gateway.main import create_app

    app = create_app(app_settings=gateway_settings, store=fake_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
