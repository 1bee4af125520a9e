"""Course service layer."""

from __future__ import annotations

from datetime import UTC, datetime
import logging
import math

from devcamper.core.logging_config import safe_log_identifier
from devcamper.domain.policy import ensure_can_mutate
from devcamper.domain.query import ListQuery
from devcamper.errors import NotFoundError
from devcamper.repositories.base import Document, DocumentStore
from devcamper.schemas.auth import AuthPrincipal
from devcamper.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from devcamper.schemas.envelope import ListEnvelope, PagedEnvelope
from devcamper.services.listing import bootcamp_summary, paged_list

logger = logging.getLogger(__name__)


def average_cost(tuitions: list[float]) -> float | None:
    """Mean tuition rounded up to the next multiple of ten."""
    if not tuitions:
        return None
    return float(math.ceil(sum(tuitions) / len(tuitions) / 10) * 10)


class CourseService:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def list_courses(self, *, query: ListQuery) -> PagedEnvelope:
        return paged_list(self._store.courses, query, transform=self._populate)

    def list_bootcamp_courses(self, *, bootcamp_id: str) -> ListEnvelope:
        bootcamp = self._load_bootcamp(bootcamp_id)
        documents = self._store.courses.find({"bootcamp": bootcamp["id"]}, sort=[("created_at", 1)])
        return ListEnvelope(count=len(documents), data=documents)

    def get_course(self, *, course_id: str) -> Course:
        return Course.model_validate(self._populate(self._load(course_id)))

    def add_course(self, *, principal: AuthPrincipal, bootcamp_id: str, payload: CreateCourseRequest) -> Course:
        bootcamp = self._load_bootcamp(bootcamp_id)
        ensure_can_mutate(bootcamp["user"], principal, action="add a course to", resource="bootcamp")

        document = payload.model_dump(mode="json")
        document.update(bootcamp=bootcamp["id"], user=principal.user_id, created_at=datetime.now(UTC))
        record = self._store.courses.create(document)
        self._refresh_average_cost(bootcamp["id"])
        logger.info(
            "course.created course_id=%s bootcamp_id=%s principal_id=%s",
            record["id"],
            bootcamp["id"],
            safe_log_identifier(principal.user_id, prefix="pid"),
        )
        return Course.model_validate(record)

    def update_course(self, *, principal: AuthPrincipal, course_id: str, payload: UpdateCourseRequest) -> Course:
        current = self._load(course_id)
        ensure_can_mutate(current["user"], principal, action="update", resource="course")

        changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not changes:
            return Course.model_validate(current)

        updated = self._store.courses.update_by_id(current["id"], changes)
        if updated is None:
            raise self._not_found(course_id)
        if "tuition" in changes:
            self._refresh_average_cost(updated["bootcamp"])
        return Course.model_validate(updated)

    def delete_course(self, *, principal: AuthPrincipal, course_id: str) -> None:
        current = self._load(course_id)
        ensure_can_mutate(current["user"], principal, action="delete", resource="course")

        self._store.courses.delete_by_id(current["id"])
        self._refresh_average_cost(current["bootcamp"])
        logger.info(
            "course.deleted course_id=%s principal_id=%s",
            current["id"],
            safe_log_identifier(principal.user_id, prefix="pid"),
        )

    def _refresh_average_cost(self, bootcamp_id: str) -> None:
        tuitions = [float(course["tuition"]) for course in self._store.courses.find({"bootcamp": bootcamp_id})]
        self._store.bootcamps.update_by_id(bootcamp_id, {"average_cost": average_cost(tuitions)})

    def _populate(self, record: Document) -> Document:
        return {**record, "bootcamp": bootcamp_summary(self._store.bootcamps, record["bootcamp"])}

    def _load(self, course_id: str) -> Document:
        record = self._store.courses.find_by_id(course_id)
        if record is None:
            raise self._not_found(course_id)
        return record

    def _load_bootcamp(self, bootcamp_id: str) -> Document:
        bootcamp = self._store.bootcamps.find_by_id(bootcamp_id)
        if bootcamp is None:
            raise NotFoundError(f"No bootcamp with the id of {bootcamp_id}")
        return bootcamp

    @staticmethod
    def _not_found(course_id: str) -> NotFoundError:
        return NotFoundError(f"No course with the id of {course_id}")
