"""In-memory stand-ins for the subset of the pymongo async API the services use."""

import copy
from typing import Any, Self

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, expected in query.items():
        actual = doc.get(key)
        if isinstance(actual, list) and not isinstance(expected, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


def _apply(doc: dict[str, Any], update: dict[str, Any]) -> bool:
    before = copy.deepcopy(doc)
    for op, fields in update.items():
        for key, value in fields.items():
            if op == "$set":
                doc[key] = value
            elif op == "$addToSet":
                items = doc.setdefault(key, [])
                if value not in items:
                    items.append(value)
            elif op == "$pull":
                doc[key] = [item for item in doc.get(key, []) if item != value]
            else:
                raise NotImplementedError(op)
    return doc != before


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> Self:
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def __aiter__(self) -> Self:
        self._iter = iter(self._docs)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_keys: dict[str, bool] = {}  # field -> case-insensitive

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, collation: Any = None, **_: Any) -> str:
        if unique:
            self.unique_keys[keys[0][0]] = collation is not None
        return "_".join(f"{k}_{d}" for k, d in keys)

    def _norm(self, key: str, value: Any) -> Any:
        if self.unique_keys.get(key) and isinstance(value, str):
            return value.casefold()
        return value

    def _check_unique(self, doc: dict[str, Any]) -> None:
        for key in ("_id", *self.unique_keys):
            value = self._norm(key, doc.get(key))
            if any(self._norm(key, other.get(key)) == value for other in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {key}")

    async def insert_one(self, doc: dict[str, Any]) -> InsertOneResult:
        self._check_unique(doc)
        self.docs.append(copy.deepcopy(doc))
        return InsertOneResult(doc["_id"], acknowledged=True)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        doc = next((d for d in self.docs if _matches(d, query)), None)
        return copy.deepcopy(doc) if doc is not None else None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def find_one_and_update(
        self, query: dict[str, Any], update: dict[str, Any], return_document: bool = ReturnDocument.BEFORE
    ) -> dict[str, Any] | None:
        doc = next((d for d in self.docs if _matches(d, query)), None)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        _apply(doc, update)
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> UpdateResult:
        doc = next((d for d in self.docs if _matches(d, query)), None)
        modified = doc is not None and _apply(doc, update)
        return UpdateResult({"n": int(doc is not None), "nModified": int(modified)}, acknowledged=True)

    async def update_many(self, query: dict[str, Any], update: dict[str, Any]) -> UpdateResult:
        matched = [d for d in self.docs if _matches(d, query)]
        modified = sum(_apply(d, update) for d in matched)
        return UpdateResult({"n": len(matched), "nModified": modified}, acknowledged=True)

    async def delete_one(self, query: dict[str, Any]) -> DeleteResult:
        doc = next((d for d in self.docs if _matches(d, query)), None)
        if doc is not None:
            self.docs.remove(doc)
        return DeleteResult({"n": int(doc is not None)}, acknowledged=True)


class FakeDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection(name))


class FakeMongoClient:
    def __init__(self) -> None:
        self._databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        return self._databases.setdefault(name, FakeDatabase(name))

    async def aclose(self) -> None:
        self.closed = True
