"""Review service layer."""

from __future__ import annotations

from datetime import UTC, datetime
import logging

from devcamper.core.logging_config import safe_log_identifier
from devcamper.domain.policy import ensure_can_mutate
from devcamper.domain.query import ListQuery
from devcamper.errors import ApiError, NotFoundError
from devcamper.repositories.base import Document, DocumentStore
from devcamper.schemas.auth import AuthPrincipal
from devcamper.schemas.envelope import ListEnvelope, PagedEnvelope
from devcamper.schemas.review import CreateReviewRequest, Review, UpdateReviewRequest
from devcamper.services.listing import bootcamp_summary, paged_list

logger = logging.getLogger(__name__)


def average_rating(ratings: list[int]) -> float | None:
    if not ratings:
        return None
    return round(sum(ratings) / len(ratings), 1)


class ReviewService:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def list_reviews(self, *, query: ListQuery) -> PagedEnvelope:
        return paged_list(self._store.reviews, query, transform=self._populate)

    def list_bootcamp_reviews(self, *, bootcamp_id: str) -> ListEnvelope:
        bootcamp = self._load_bootcamp(bootcamp_id)
        documents = self._store.reviews.find({"bootcamp": bootcamp["id"]}, sort=[("created_at", 1)])
        return ListEnvelope(count=len(documents), data=documents)

    def get_review(self, *, review_id: str) -> Review:
        return Review.model_validate(self._populate(self._load(review_id)))

    def add_review(self, *, principal: AuthPrincipal, bootcamp_id: str, payload: CreateReviewRequest) -> Review:
        bootcamp = self._load_bootcamp(bootcamp_id)
        existing = self._store.reviews.find_one({"bootcamp": bootcamp["id"], "user": principal.user_id})
        if existing is not None:
            raise ApiError(
                status_code=400,
                code="REVIEW_ALREADY_SUBMITTED",
                message=f"User {principal.user_id} has already reviewed this bootcamp",
            )

        document = payload.model_dump(mode="json")
        document.update(bootcamp=bootcamp["id"], user=principal.user_id, created_at=datetime.now(UTC))
        record = self._store.reviews.create(document)
        self._refresh_average_rating(bootcamp["id"])
        logger.info(
            "review.created review_id=%s bootcamp_id=%s principal_id=%s",
            record["id"],
            bootcamp["id"],
            safe_log_identifier(principal.user_id, prefix="pid"),
        )
        return Review.model_validate(record)

    def update_review(self, *, principal: AuthPrincipal, review_id: str, payload: UpdateReviewRequest) -> Review:
        current = self._load(review_id)
        ensure_can_mutate(current["user"], principal, action="update", resource="review")

        changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not changes:
            return Review.model_validate(current)

        updated = self._store.reviews.update_by_id(current["id"], changes)
        if updated is None:
            raise self._not_found(review_id)
        if "rating" in changes:
            self._refresh_average_rating(updated["bootcamp"])
        return Review.model_validate(updated)

    def delete_review(self, *, principal: AuthPrincipal, review_id: str) -> None:
        current = self._load(review_id)
        ensure_can_mutate(current["user"], principal, action="delete", resource="review")

        self._store.reviews.delete_by_id(current["id"])
        self._refresh_average_rating(current["bootcamp"])

    def _refresh_average_rating(self, bootcamp_id: str) -> None:
        ratings = [int(review["rating"]) for review in self._store.reviews.find({"bootcamp": bootcamp_id})]
        self._store.bootcamps.update_by_id(bootcamp_id, {"average_rating": average_rating(ratings)})

    def _populate(self, record: Document) -> Document:
        return {**record, "bootcamp": bootcamp_summary(self._store.bootcamps, record["bootcamp"])}

    def _load(self, review_id: str) -> Document:
        record = self._store.reviews.find_by_id(review_id)
        if record is None:
            raise self._not_found(review_id)
        return record

    def _load_bootcamp(self, bootcamp_id: str) -> Document:
        bootcamp = self._store.bootcamps.find_by_id(bootcamp_id)
        if bootcamp is None:
            raise NotFoundError(f"No bootcamp with the id of {bootcamp_id}")
        return bootcamp

    @staticmethod
    def _not_found(review_id: str) -> NotFoundError:
        return NotFoundError(f"No review found with the id of {review_id}")
