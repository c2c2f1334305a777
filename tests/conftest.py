"""Shared fixtures: an in-memory Firestore and fake sign-in so tests run without credentials."""
from __future__ import annotations

import copy
import uuid
from typing import Any, Dict, List, Optional

import pytest
from google.api_core import exceptions as google_exceptions


# ---------- Fake Firestore ----------

class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = copy.deepcopy(data)

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data)


class FakeDocRef:
    def __init__(self, db: "FakeFirestore", collection: str, doc_id: str):
        self._db = db
        self._collection = collection
        self.id = doc_id

    @property
    def _rows(self) -> Dict[str, Dict[str, Any]]:
        return self._db.data.setdefault(self._collection, {})

    def get(self):
        self._db._maybe_fail("get")
        return FakeSnapshot(self.id, self._rows.get(self.id))

    def set(self, data, merge=False):
        self._db._maybe_fail("set")
        self._apply_set(data, merge)

    def _apply_set(self, data, merge=False):
        if merge and self.id in self._rows:
            self._rows[self.id].update(copy.deepcopy(data))
        else:
            self._rows[self.id] = copy.deepcopy(data)

    def update(self, data):
        self._db._maybe_fail("update")
        if self.id not in self._rows:
            raise google_exceptions.NotFound(f"{self._collection}/{self.id}")
        self._rows[self.id].update(copy.deepcopy(data))

    def delete(self):
        self._db._maybe_fail("delete")
        self._apply_delete()

    def _apply_delete(self):
        self._rows.pop(self.id, None)


class FakeQuery:
    def __init__(self, db: "FakeFirestore", collection: str):
        self._db = db
        self._collection = collection
        self._filters: List[tuple] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    def _copy(self) -> "FakeQuery":
        q = FakeQuery(self._db, self._collection)
        q._filters = list(self._filters)
        q._order = self._order
        q._limit = self._limit
        return q

    def where(self, field, op, value):
        assert op == "==", f"fake only supports ==, got {op}"
        q = self._copy()
        q._filters.append((field, value))
        return q

    def order_by(self, field, direction="ASCENDING"):
        q = self._copy()
        q._order = (field, direction)
        return q

    def limit(self, n):
        q = self._copy()
        q._limit = n
        return q

    def stream(self):
        self._db._maybe_fail("stream")
        rows = self._db.data.get(self._collection, {})
        out = [
            (doc_id, row) for doc_id, row in rows.items()
            if all(row.get(f) == v for f, v in self._filters)
        ]
        if self._order:
            field, direction = self._order
            out.sort(key=lambda r: r[1].get(field) or "", reverse=(direction == "DESCENDING"))
        if self._limit is not None:
            out = out[: self._limit]
        return iter([FakeSnapshot(doc_id, row) for doc_id, row in out])


class FakeCollection(FakeQuery):
    def document(self, doc_id: Optional[str] = None):
        return FakeDocRef(self._db, self._collection, doc_id or uuid.uuid4().hex[:20])


class FakeBatch:
    def __init__(self, db: "FakeFirestore"):
        self._db = db
        self._ops: List[tuple] = []

    def set(self, ref, data, merge=False):
        self._ops.append(("set", ref, data, merge))

    def delete(self, ref):
        self._ops.append(("delete", ref, None, False))

    def commit(self):
        # nothing is applied unless the whole batch goes through
        self._db._maybe_fail("commit")
        for op, ref, data, merge in self._ops:
            if op == "set":
                ref._apply_set(data, merge)
            else:
                ref._apply_delete()


class FakeFirestore:
    def __init__(self):
        self.data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.fail_on: set = set()

    def _maybe_fail(self, op: str):
        if op in self.fail_on:
            raise google_exceptions.ServiceUnavailable(f"firestore unavailable during {op}")

    def collection(self, name: str):
        return FakeCollection(self, name)

    def batch(self):
        return FakeBatch(self)

    # test helpers
    def seed(self, collection: str, doc_id: str, data: Dict[str, Any]):
        self.data.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    def rows(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self.data.get(collection, {})


SERVICE_MODULES = [
    "storefront.services.products",
    "storefront.services.cart",
    "storefront.services.orders",
    "storefront.services.profiles",
    "storefront.services.roles",
    "storefront.services.bookings",
    "storefront.services.reviews",
    "storefront.services.wishlist",
]


def product(name="Air Max 90", price=1000.0, stock=10, **extra):
    data = {
        "name": name,
        "description": f"{name} sneakers",
        "price": price,
        "stockQuantity": stock,
        "size": "9",
        "brand": "Nike",
        "color": "white",
        "imageUrl": None,
        "isActive": True,
        "createdAt": "2026-01-01T00:00:00+00:00",
    }
    data.update(extra)
    return data


# ---------- Fixtures ----------

@pytest.fixture()
def db(monkeypatch):
    """Every service sees the same in-memory Firestore."""
    fake = FakeFirestore()
    for mod in SERVICE_MODULES:
        monkeypatch.setattr(f"{mod}.ensure_firestore", lambda: fake)
    return fake


@pytest.fixture()
def client(db):
    """FastAPI TestClient (sync) with the fake store wired in."""
    from fastapi.testclient import TestClient
    from storefront.main import app
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def login(client):
    """Call login(uid, role) to act as that user for the rest of the test."""
    from storefront.main import app
    from storefront.routes.auth import CurrentUser, current_user

    def _login(uid="cust-1", role="customer", email=None):
        app.dependency_overrides[current_user] = lambda: CurrentUser(uid=uid, role=role, email=email)
        return uid

    return _login
