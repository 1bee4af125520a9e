"""Document store interfaces shared by the memory and MongoDB backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

Document = dict[str, Any]
Filter = Mapping[str, Any]
SortSpec = Sequence[tuple[str, int]]


class DuplicateKeyError(Exception):
    """Raised when a write would break a unique field constraint."""

    def __init__(self, collection: str, fields: Sequence[str]) -> None:
        self.collection = collection
        self.fields = tuple(fields)
        super().__init__(f"Duplicate value for {collection}.{'/'.join(self.fields)}")


class DocumentCollection(ABC):
    """CRUD-by-identifier and filtered find over one collection.

    Documents are plain dicts carrying their identifier under ``id`` as a string.
    """

    name: str

    @abstractmethod
    def find_by_id(self, document_id: str) -> Document | None: ...

    @abstractmethod
    def find_one(self, filter: Filter) -> Document | None: ...

    @abstractmethod
    def find(
        self,
        filter: Filter | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]: ...

    @abstractmethod
    def count(self, filter: Filter | None = None) -> int: ...

    @abstractmethod
    def create(self, document: Mapping[str, Any]) -> Document: ...

    @abstractmethod
    def update_by_id(self, document_id: str, changes: Mapping[str, Any]) -> Document | None:
        """Apply ``changes`` as field assignments and return the updated document."""

    @abstractmethod
    def delete_by_id(self, document_id: str) -> Document | None:
        """Remove a document and return it, or ``None`` when it did not exist."""

    @abstractmethod
    def delete_many(self, filter: Filter) -> int: ...


class DocumentStore(ABC):
    """Explicitly opened handle over the four resource collections."""

    @property
    @abstractmethod
    def bootcamps(self) -> DocumentCollection: ...

    @property
    @abstractmethod
    def courses(self) -> DocumentCollection: ...

    @property
    @abstractmethod
    def reviews(self) -> DocumentCollection: ...

    @property
    @abstractmethod
    def users(self) -> DocumentCollection: ...

    def open(self) -> None:
        """Acquire connections and prepare indexes."""

    def close(self) -> None:
        """Release connections."""

    def ping(self) -> bool:
        return True


__all__ = [
    "Document",
    "DocumentCollection",
    "DocumentStore",
    "DuplicateKeyError",
    "Filter",
    "SortSpec",
]
