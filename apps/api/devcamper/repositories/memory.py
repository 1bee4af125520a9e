"""In-memory document store used for local runs and tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from copy import deepcopy
from typing import Any
from uuid import uuid4

from devcamper.domain.geo import point_within_sphere
from devcamper.repositories.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    DuplicateKeyError,
    Filter,
    SortSpec,
)

_MISSING = object()


def _resolve(document: Mapping[str, Any], path: str) -> Any:
    current: Any = document
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _equals(value: Any, expected: Any) -> bool:
    if value is _MISSING:
        return expected is None
    if isinstance(value, list) and not isinstance(expected, list):
        return any(item == expected for item in value)
    return value == expected


def _compare(value: Any, operand: Any, op: str) -> bool:
    if value is _MISSING or value is None:
        return False
    candidates = value if isinstance(value, list) else [value]
    for candidate in candidates:
        try:
            if op == "$gt" and candidate > operand:
                return True
            if op == "$gte" and candidate >= operand:
                return True
            if op == "$lt" and candidate < operand:
                return True
            if op == "$lte" and candidate <= operand:
                return True
        except TypeError:
            continue
    return False


def _apply_operator(value: Any, op: str, operand: Any) -> bool:
    if op == "$ne":
        return not _equals(value, operand)
    if op == "$in":
        return any(_equals(value, item) for item in operand)
    if op == "$nin":
        return not any(_equals(value, item) for item in operand)
    if op in ("$gt", "$gte", "$lt", "$lte"):
        return _compare(value, operand, op)
    if op == "$geoWithin":
        center, radius = operand["$centerSphere"]
        return value is not _MISSING and point_within_sphere(value, center, float(radius))
    raise ValueError(f"Unsupported filter operator: {op}")


def _is_operator_clause(condition: Any) -> bool:
    return isinstance(condition, Mapping) and bool(condition) and all(str(key).startswith("$") for key in condition)


def match_document(document: Mapping[str, Any], filter: Filter | None) -> bool:
    """Evaluate a MongoDB-style filter against a single document."""
    for key, condition in (filter or {}).items():
        value = _resolve(document, key)
        if _is_operator_clause(condition):
            if not all(_apply_operator(value, op, operand) for op, operand in condition.items()):
                return False
        elif not _equals(value, condition):
            return False
    return True


def _sort_documents(documents: list[Document], sort: SortSpec) -> None:
    # Stable multi-key sort: apply the least significant key first.
    for field, direction in reversed(list(sort)):
        def key(document: Document, field: str = field) -> tuple[bool, Any]:
            value = _resolve(document, field)
            present = value is not _MISSING and value is not None
            return (present, value if present else None)

        try:
            documents.sort(key=key, reverse=direction < 0)
        except TypeError:
            documents.sort(key=lambda document, field=field: str(_resolve(document, field)), reverse=direction < 0)


class InMemoryCollection(DocumentCollection):
    """Dict-backed collection returning detached copies of stored documents."""

    def __init__(self, name: str, *, unique: Sequence[tuple[str, ...]] = ()) -> None:
        self.name = name
        self._unique = tuple(unique)
        self._documents: dict[str, Document] = {}
        self.write_count = 0

    def _check_unique(self, candidate: Mapping[str, Any], *, exclude_id: str | None = None) -> None:
        for fields in self._unique:
            values = [_resolve(candidate, field) for field in fields]
            if any(value is _MISSING or value is None for value in values):
                continue
            for document_id, existing in self._documents.items():
                if document_id == exclude_id:
                    continue
                if all(_resolve(existing, field) == value for field, value in zip(fields, values)):
                    raise DuplicateKeyError(self.name, fields)

    def find_by_id(self, document_id: str) -> Document | None:
        document = self._documents.get(str(document_id))
        return deepcopy(document) if document is not None else None

    def find_one(self, filter: Filter) -> Document | None:
        for document in self._documents.values():
            if match_document(document, filter):
                return deepcopy(document)
        return None

    def find(
        self,
        filter: Filter | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        matched = [document for document in self._documents.values() if match_document(document, filter)]
        if sort:
            _sort_documents(matched, sort)
        end = None if limit is None else skip + limit
        return [deepcopy(document) for document in matched[skip:end]]

    def count(self, filter: Filter | None = None) -> int:
        return sum(1 for document in self._documents.values() if match_document(document, filter))

    def create(self, document: Mapping[str, Any]) -> Document:
        record = deepcopy(dict(document))
        record["id"] = str(record.get("id") or uuid4())
        if record["id"] in self._documents:
            raise DuplicateKeyError(self.name, ("id",))
        self._check_unique(record)
        self._documents[record["id"]] = record
        self.write_count += 1
        return deepcopy(record)

    def update_by_id(self, document_id: str, changes: Mapping[str, Any]) -> Document | None:
        current = self._documents.get(str(document_id))
        if current is None:
            return None
        updated = {**current, **deepcopy(dict(changes)), "id": current["id"]}
        self._check_unique(updated, exclude_id=current["id"])
        self._documents[current["id"]] = updated
        self.write_count += 1
        return deepcopy(updated)

    def delete_by_id(self, document_id: str) -> Document | None:
        removed = self._documents.pop(str(document_id), None)
        if removed is not None:
            self.write_count += 1
        return removed

    def delete_many(self, filter: Filter) -> int:
        doomed = [document_id for document_id, document in self._documents.items() if match_document(document, filter)]
        for document_id in doomed:
            del self._documents[document_id]
        self.write_count += len(doomed)
        return len(doomed)


class InMemoryStore(DocumentStore):
    """Simple, deterministic persistence layer for local runs and tests."""

    def __init__(self) -> None:
        self._bootcamps = InMemoryCollection("bootcamps", unique=(("name",),))
        self._courses = InMemoryCollection("courses")
        self._reviews = InMemoryCollection("reviews", unique=(("bootcamp", "user"),))
        self._users = InMemoryCollection("users", unique=(("email",),))

    @property
    def bootcamps(self) -> InMemoryCollection:
        return self._bootcamps

    @property
    def courses(self) -> InMemoryCollection:
        return self._courses

    @property
    def reviews(self) -> InMemoryCollection:
        return self._reviews

    @property
    def users(self) -> InMemoryCollection:
        return self._users


__all__ = ["InMemoryCollection", "InMemoryStore", "match_document"]
