"""
Shared fixtures for amplify tests.

Store-backed tests run against a temporary SQLite file; orchestration tests
use the in-memory fakes below in place of the store and the email provider.
"""

import copy
import uuid
from typing import Any, Dict, List, Mapping, Optional

import pytest

from amplify.config import Settings
from amplify.core.errors import DeliveryError, NotFound, StoreError
from amplify.database import build_engine, init_db
from amplify.store.gateway import RecordStore


# ====================
# Settings
# ====================


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'amplify.db'}",
        store_api_key="service-key",
        resend_api_key="re_test",
        email_from="news@example.com",
        send_concurrency=4,
    )


# ====================
# Record Store
# ====================


@pytest.fixture
async def store(settings):
    """RecordStore over a freshly created schema"""
    engine = build_engine(settings)
    await init_db(engine)
    yield RecordStore(engine)
    await engine.dispose()


class InMemoryStore:
    """Dict-backed stand-in for RecordStore (no aggregate support)."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.inserts: List[tuple] = []
        self.updates: List[tuple] = []
        self.fail_updates = False
        self.fail_inserts_for: set = set()

    def seed(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        self.collections.setdefault(collection, {})[row["id"]] = row
        return row

    async def insert_one(self, collection: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        if collection in self.fail_inserts_for:
            raise StoreError(f"insert on {collection} failed", payload="boom")
        self.inserts.append((collection, dict(record)))
        return self.seed(collection, dict(record))

    async def get_one(self, collection: str, key: str) -> Dict[str, Any]:
        try:
            return copy.deepcopy(self.collections[collection][key])
        except KeyError:
            raise NotFound(collection, key)

    async def update_one(self, collection: str, key: str, patch: Mapping[str, Any]) -> None:
        if self.fail_updates:
            raise StoreError(f"update on {collection} failed", payload="timeout")
        if key not in self.collections.get(collection, {}):
            raise NotFound(collection, key)
        self.updates.append((collection, key, dict(patch)))
        self.collections[collection][key].update(patch)

    async def select(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        **_: Any,
    ) -> List[Dict[str, Any]]:
        rows = self.collections.get(collection, {}).values()
        filters = filters or {}
        return [
            dict(r) for r in rows if all(r.get(k) == v for k, v in filters.items())
        ]


@pytest.fixture
def memory_store():
    return InMemoryStore()


# ====================
# Email Provider
# ====================


class FakeMailer:
    """Records every send; raises DeliveryError for addresses in ``failing``."""

    def __init__(self, failing: Optional[set] = None):
        self.failing = failing or set()
        self.sent: List[Dict[str, str]] = []

    async def send(self, sender: str, to: str, subject: str, html: str) -> Dict[str, Any]:
        if to in self.failing:
            raise DeliveryError(f"Invalid recipient {to}", status_code=422)
        message = {"from": sender, "to": to, "subject": subject, "html": html}
        self.sent.append(message)
        return {"id": f"msg_{len(self.sent)}"}


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def make_mailer():
    """Build a FakeMailer that rejects the given addresses"""
    return lambda *failing: FakeMailer(failing=set(failing))
