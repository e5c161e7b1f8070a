"""
In-memory stand-ins for the async pymongo objects the catalog touches.

The filter evaluator covers only the operators ProductQuery and the id lookup
emit: $and, $or, $nor, $in, $regex/$options, null equality and plain equality.
"""
import asyncio
import re
from typing import Any

from pymongo.errors import ExecutionTimeout, ServerSelectionTimeoutError

_MISSING = object()


def _field_matches(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        if "$in" in condition:
            return any(_equals(value, candidate) for candidate in condition["$in"])
        if "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            pattern = re.compile(condition["$regex"], flags)
            values = value if isinstance(value, list) else [value]
            return any(isinstance(v, str) and pattern.search(v) for v in values)
        raise NotImplementedError(condition)
    if condition is None:
        return value is _MISSING or value is None
    return _equals(value, condition)


def _equals(value: Any, expected: Any) -> bool:
    if value is _MISSING:
        return False
    if isinstance(value, list) and not isinstance(expected, list):
        return any(_equals(v, expected) for v in value)
    # BSON keeps booleans and numbers apart
    if isinstance(value, bool) != isinstance(expected, bool):
        return False
    return value == expected


def matches_filter(doc: dict, query: dict) -> bool:
    for key, condition in query.items():
        if key == "$and":
            if not all(matches_filter(doc, sub) for sub in condition):
                return False
        elif key == "$or":
            if not any(matches_filter(doc, sub) for sub in condition):
                return False
        elif key == "$nor":
            if any(matches_filter(doc, sub) for sub in condition):
                return False
        elif not _field_matches(doc.get(key, _MISSING), condition):
            return False
    return True


def _project(doc: dict, projection: dict | None) -> dict:
    if not projection:
        return dict(doc)
    keep = {k for k, v in projection.items() if v}
    keep.add("_id")
    return {k: v for k, v in doc.items() if k in keep}


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self.docs = docs

    async def to_list(self, length=None):
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    def __init__(self, docs: list[dict], fail: bool = False):
        self.docs = docs
        self.fail = fail
        self.queries: list[dict] = []

    def find(self, query=None, projection=None, max_time_ms=None):
        self.queries.append(query or {})
        if self.fail:
            raise ExecutionTimeout("operation exceeded time limit")
        return FakeCursor([_project(d, projection) for d in self.docs if matches_filter(d, query or {})])

    async def find_one(self, query=None, max_time_ms=None):
        self.queries.append(query or {})
        if self.fail:
            raise ExecutionTimeout("operation exceeded time limit")
        for doc in self.docs:
            if matches_filter(doc, query or {}):
                return dict(doc)
        return None


class FakeAdmin:
    def __init__(self, client):
        self.client = client

    async def command(self, name):
        self.client.pings += 1
        await asyncio.sleep(0)
        if self.client.unreachable:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1}


class FakeDatabase:
    def __init__(self, collections):
        self.collections = collections

    def __getitem__(self, name):
        return self.collections[name]


class FakeMongoClient:
    def __init__(self, collections: dict[str, FakeCollection] | None = None, unreachable: bool = False):
        self.collections = collections or {}
        self.unreachable = unreachable
        self.pings = 0
        self.closed = False
        self.admin = FakeAdmin(self)

    def __call__(self, uri, **kwargs):
        # used as the connection's client_factory
        self.uri = uri
        self.options = kwargs
        return self

    def __getitem__(self, name):
        return FakeDatabase(self.collections)

    async def close(self):
        self.closed = True
