"""Paged listing shared by every collection endpoint."""

from collections.abc import Callable
from typing import Any

from devcamper.domain.query import ListQuery, build_pagination, project
from devcamper.repositories.base import Document, DocumentCollection
from devcamper.schemas.envelope import PagedEnvelope


def paged_list(
    collection: DocumentCollection,
    query: ListQuery,
    *,
    transform: Callable[[Document], Document] | None = None,
) -> PagedEnvelope:
    filter = query.filter
    total = collection.count(filter)
    documents = collection.find(filter, sort=query.sort, skip=query.skip, limit=query.limit)
    if transform is not None:
        documents = [transform(document) for document in documents]
    data = [project(document, query.select) for document in documents]
    return PagedEnvelope(
        count=len(data),
        pagination=build_pagination(page=query.page, limit=query.limit, total=total),
        data=data,
    )


def bootcamp_summary(collection: DocumentCollection, bootcamp_id: str) -> dict[str, Any] | str:
    """Embed the parent bootcamp's name and description, or keep the raw id if it is gone."""
    bootcamp = collection.find_by_id(bootcamp_id)
    if bootcamp is None:
        return bootcamp_id
    return {"id": bootcamp["id"], "name": bootcamp["name"], "description": bootcamp["description"]}
