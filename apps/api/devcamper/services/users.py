"""User administration service layer.

Access is gated to admins at the router; this layer performs no ownership checks.
"""

from datetime import UTC, datetime
import logging

from devcamper.adapters.auth import PasswordHasher
from devcamper.domain.query import ListQuery
from devcamper.errors import NotFoundError
from devcamper.repositories.base import Document, DocumentStore
from devcamper.schemas.envelope import PagedEnvelope
from devcamper.schemas.user import CreateUserRequest, UpdateUserRequest, User
from devcamper.services.listing import paged_list

logger = logging.getLogger(__name__)

_PRIVATE_FIELDS = frozenset({"password_hash"})


def _public(record: Document) -> Document:
    return {key: value for key, value in record.items() if key not in _PRIVATE_FIELDS}


class UserService:
    def __init__(self, store: DocumentStore, hasher: PasswordHasher) -> None:
        self._store = store
        self._hasher = hasher

    def list_users(self, *, query: ListQuery) -> PagedEnvelope:
        return paged_list(self._store.users, query, transform=_public)

    def get_user(self, *, user_id: str) -> User:
        return User.model_validate(self._load(user_id))

    def create_user(self, *, payload: CreateUserRequest) -> User:
        document = payload.model_dump(mode="json", exclude={"password"})
        document.update(password_hash=self._hasher.hash(payload.password), created_at=datetime.now(UTC))
        record = self._store.users.create(document)
        logger.info("user.created user_id=%s role=%s", record["id"], record["role"])
        return User.model_validate(record)

    def update_user(self, *, user_id: str, payload: UpdateUserRequest) -> User:
        current = self._load(user_id)
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not changes:
            return User.model_validate(current)

        updated = self._store.users.update_by_id(current["id"], changes)
        if updated is None:
            raise self._not_found(user_id)
        return User.model_validate(updated)

    def delete_user(self, *, user_id: str) -> None:
        removed = self._store.users.delete_by_id(user_id)
        if removed is None:
            raise self._not_found(user_id)
        logger.info("user.deleted user_id=%s", removed["id"])

    def _load(self, user_id: str) -> Document:
        record = self._store.users.find_by_id(user_id)
        if record is None:
            raise self._not_found(user_id)
        return record

    @staticmethod
    def _not_found(user_id: str) -> NotFoundError:
        return NotFoundError(f"No user with the id of {user_id}")
