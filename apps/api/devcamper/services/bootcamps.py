"""Bootcamp service layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
import logging
from pathlib import PurePath
import re

from devcamper.adapters.geocoding import Geocoder
from devcamper.adapters.storage import FileStore, FileStoreError
from devcamper.core.logging_config import safe_log_identifier
from devcamper.domain.geo import translate_radius
from devcamper.domain.policy import ensure_can_create_bootcamp, ensure_can_mutate
from devcamper.domain.query import ListQuery
from devcamper.errors import InternalError, NotFoundError, UploadRejectedError, ValidationFailedError
from devcamper.repositories.base import Document, DocumentStore
from devcamper.schemas.auth import AuthPrincipal
from devcamper.schemas.bootcamp import Bootcamp, CreateBootcampRequest, GeoLocation, UpdateBootcampRequest
from devcamper.schemas.envelope import ListEnvelope, PagedEnvelope
from devcamper.services.listing import paged_list

logger = logging.getLogger(__name__)

DEFAULT_PHOTO = "no-photo.jpg"
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True, slots=True)
class UploadedFile:
    filename: str | None
    content_type: str | None
    content: bytes


def slugify(name: str) -> str:
    return _SLUG_SEPARATORS.sub("-", name.lower()).strip("-")


def photo_filename(bootcamp_id: str, original_filename: str | None) -> str:
    """Deterministic stored name: ``photo_<id><original extension>``."""
    extension = PurePath(original_filename or "").suffix
    return f"photo_{bootcamp_id}{extension}"


class BootcampService:
    def __init__(self, store: DocumentStore, geocoder: Geocoder) -> None:
        self._store = store
        self._geocoder = geocoder

    def list_bootcamps(self, *, query: ListQuery) -> PagedEnvelope:
        return paged_list(self._store.bootcamps, query)

    def get_bootcamp(self, *, bootcamp_id: str) -> Bootcamp:
        return self._to_bootcamp(self._load(bootcamp_id))

    def create_bootcamp(self, *, principal: AuthPrincipal, payload: CreateBootcampRequest) -> Bootcamp:
        published = self._store.bootcamps.find_one({"user": principal.user_id})
        ensure_can_create_bootcamp(principal, published)

        document = payload.model_dump(mode="json", exclude={"address"})
        document.update(
            slug=slugify(payload.name),
            location=self._locate(payload.address),
            average_rating=None,
            average_cost=None,
            photo=DEFAULT_PHOTO,
            user=principal.user_id,
            created_at=datetime.now(UTC),
        )
        record = self._store.bootcamps.create(document)
        logger.info(
            "bootcamp.created bootcamp_id=%s principal_id=%s",
            record["id"],
            safe_log_identifier(principal.user_id, prefix="pid"),
        )
        return self._to_bootcamp(record)

    def update_bootcamp(
        self,
        *,
        principal: AuthPrincipal,
        bootcamp_id: str,
        payload: UpdateBootcampRequest,
    ) -> Bootcamp:
        current = self._load(bootcamp_id)
        ensure_can_mutate(current["user"], principal, action="update", resource="bootcamp")

        changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["slug"] = slugify(changes["name"])
        if not changes:
            return self._to_bootcamp(current)

        updated = self._store.bootcamps.update_by_id(current["id"], changes)
        if updated is None:
            raise self._not_found(bootcamp_id)
        return self._to_bootcamp(updated)

    def delete_bootcamp(self, *, principal: AuthPrincipal, bootcamp_id: str) -> None:
        current = self._load(bootcamp_id)
        ensure_can_mutate(current["user"], principal, action="delete", resource="bootcamp")

        removed_courses = self._store.courses.delete_many({"bootcamp": current["id"]})
        removed_reviews = self._store.reviews.delete_many({"bootcamp": current["id"]})
        self._store.bootcamps.delete_by_id(current["id"])
        logger.info(
            "bootcamp.deleted bootcamp_id=%s principal_id=%s courses=%d reviews=%d",
            current["id"],
            safe_log_identifier(principal.user_id, prefix="pid"),
            removed_courses,
            removed_reviews,
        )

    def bootcamps_in_radius(self, *, zipcode: str, distance_miles: float) -> ListEnvelope:
        geo_query = translate_radius(zipcode, distance_miles, self._geocoder)
        documents = self._store.bootcamps.find(geo_query.as_filter())
        return ListEnvelope(count=len(documents), data=documents)

    def upload_photo(
        self,
        *,
        principal: AuthPrincipal,
        bootcamp_id: str,
        upload: UploadedFile | None,
        file_store: FileStore,
        max_size: int,
    ) -> str:
        current = self._load(bootcamp_id)
        ensure_can_mutate(current["user"], principal, action="update", resource="bootcamp")

        if upload is None or (not upload.filename and not upload.content):
            raise UploadRejectedError("FILE_MISSING", "Please upload a file")
        if not (upload.content_type or "").startswith("image"):
            raise UploadRejectedError(
                "FILE_NOT_IMAGE",
                "Please upload an image file",
                details={"content_type": upload.content_type},
            )
        if len(upload.content) > max_size:
            raise UploadRejectedError(
                "FILE_TOO_LARGE",
                f"Please upload an image less than {max_size} bytes",
                details={"max_size": max_size, "size": len(upload.content)},
            )

        filename = photo_filename(current["id"], upload.filename)
        try:
            file_store.save(filename, upload.content)
        except FileStoreError as exc:
            raise InternalError("Problem with file upload") from exc

        self._store.bootcamps.update_by_id(current["id"], {"photo": filename})
        return filename

    def _locate(self, address: str) -> dict:
        results = self._geocoder.geocode(address)
        if not results:
            raise ValidationFailedError("Could not geocode the bootcamp address", details={"address": address})
        first = results[0]
        return GeoLocation(
            coordinates=[first.longitude, first.latitude],
            formatted_address=first.formatted_address,
            street=first.street,
            city=first.city,
            state=first.state,
            zipcode=first.zipcode,
            country=first.country_code,
        ).model_dump()

    def _load(self, bootcamp_id: str) -> Document:
        record = self._store.bootcamps.find_by_id(bootcamp_id)
        if record is None:
            raise self._not_found(bootcamp_id)
        return record

    @staticmethod
    def _not_found(bootcamp_id: str) -> NotFoundError:
        return NotFoundError(f"Bootcamp not found with id of {bootcamp_id}")

    @staticmethod
    def _to_bootcamp(record: Document) -> Bootcamp:
        return Bootcamp.model_validate(record)
