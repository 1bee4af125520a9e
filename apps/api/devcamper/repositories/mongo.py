"""MongoDB document store backed by pymongo."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, GEOSPHERE, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from devcamper.repositories.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    DuplicateKeyError,
    Filter,
    SortSpec,
)

logger = logging.getLogger(__name__)


def to_object_id(value: Any) -> ObjectId | None:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def _id_condition(condition: Any) -> Any:
    if isinstance(condition, Mapping):
        translated: dict[str, Any] = {}
        for op, operand in condition.items():
            if op in ("$in", "$nin"):
                translated[op] = [oid for oid in (to_object_id(item) for item in operand) if oid is not None]
            else:
                translated[op] = to_object_id(operand)
        return translated
    return to_object_id(condition)


def to_mongo_filter(filter: Filter | None) -> dict[str, Any]:
    """Rename ``id`` to ``_id`` and convert identifier values to ObjectIds."""
    translated: dict[str, Any] = {}
    for key, condition in (filter or {}).items():
        if key == "id":
            translated["_id"] = _id_condition(condition)
        else:
            translated[key] = condition
    return translated


def from_mongo(raw: Mapping[str, Any]) -> Document:
    document = dict(raw)
    document["id"] = str(document.pop("_id"))
    return document


class MongoCollection(DocumentCollection):
    def __init__(self, collection: Collection) -> None:
        self._collection = collection
        self.name = collection.name

    def _duplicate(self, exc: MongoDuplicateKeyError) -> DuplicateKeyError:
        key_pattern = (exc.details or {}).get("keyPattern") or {}
        return DuplicateKeyError(self.name, tuple(key_pattern) or ("unknown",))

    def find_by_id(self, document_id: str) -> Document | None:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        raw = self._collection.find_one({"_id": object_id})
        return from_mongo(raw) if raw is not None else None

    def find_one(self, filter: Filter) -> Document | None:
        raw = self._collection.find_one(to_mongo_filter(filter))
        return from_mongo(raw) if raw is not None else None

    def find(
        self,
        filter: Filter | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        cursor = self._collection.find(to_mongo_filter(filter))
        if sort:
            cursor = cursor.sort([("_id" if field == "id" else field, direction) for field, direction in sort])
        if skip:
            cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [from_mongo(raw) for raw in cursor]

    def count(self, filter: Filter | None = None) -> int:
        return self._collection.count_documents(to_mongo_filter(filter))

    def create(self, document: Mapping[str, Any]) -> Document:
        record = {key: value for key, value in document.items() if key != "id"}
        try:
            result = self._collection.insert_one(record)
        except MongoDuplicateKeyError as exc:
            raise self._duplicate(exc) from exc
        record.pop("_id", None)
        return {**record, "id": str(result.inserted_id)}

    def update_by_id(self, document_id: str, changes: Mapping[str, Any]) -> Document | None:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        assignments = {key: value for key, value in changes.items() if key != "id"}
        if not assignments:
            return self.find_by_id(document_id)
        try:
            raw = self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": assignments},
                return_document=ReturnDocument.AFTER,
            )
        except MongoDuplicateKeyError as exc:
            raise self._duplicate(exc) from exc
        return from_mongo(raw) if raw is not None else None

    def delete_by_id(self, document_id: str) -> Document | None:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        raw = self._collection.find_one_and_delete({"_id": object_id})
        return from_mongo(raw) if raw is not None else None

    def delete_many(self, filter: Filter) -> int:
        return self._collection.delete_many(to_mongo_filter(filter)).deleted_count


class MongoStore(DocumentStore):
    """Store handle over a MongoDB database; call ``open()`` before use."""

    def __init__(
        self,
        uri: str,
        database: str,
        *,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ) -> None:
        self._uri = uri
        self._database_name = database
        self._client_factory = client_factory
        self._client: MongoClient | None = None
        self._collections: dict[str, MongoCollection] = {}

    def open(self) -> None:
        if self._client is not None:
            return
        client = self._client_factory(self._uri, tz_aware=True)
        database = client[self._database_name]

        database["bootcamps"].create_index([("location", GEOSPHERE)])
        database["bootcamps"].create_index([("name", ASCENDING)], unique=True)
        database["bootcamps"].create_index([("user", ASCENDING)])
        database["courses"].create_index([("bootcamp", ASCENDING)])
        database["reviews"].create_index([("bootcamp", ASCENDING), ("user", ASCENDING)], unique=True)
        database["users"].create_index([("email", ASCENDING)], unique=True)

        self._collections = {
            name: MongoCollection(database[name]) for name in ("bootcamps", "courses", "reviews", "users")
        }
        self._client = client
        logger.info("store.opened backend=mongo database=%s", self._database_name)

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._collections = {}
        logger.info("store.closed backend=mongo")

    def ping(self) -> bool:
        if self._client is None:
            return False
        self._client.admin.command("ping")
        return True

    def _collection(self, name: str) -> MongoCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise RuntimeError("MongoStore is not open") from None

    @property
    def bootcamps(self) -> MongoCollection:
        return self._collection("bootcamps")

    @property
    def courses(self) -> MongoCollection:
        return self._collection("courses")

    @property
    def reviews(self) -> MongoCollection:
        return self._collection("reviews")

    @property
    def users(self) -> MongoCollection:
        return self._collection("users")


__all__ = ["MongoCollection", "MongoStore", "from_mongo", "to_mongo_filter", "to_object_id"]
