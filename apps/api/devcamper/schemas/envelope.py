"""Uniform response envelopes."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    error: str
    code: str
    details: dict[str, Any] | None = None


class DataEnvelope(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


class ListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[dict[str, Any]]


class PageRef(BaseModel):
    page: int
    limit: int


class PagedEnvelope(ListEnvelope):
    pagination: dict[Literal["next", "prev"], PageRef]
