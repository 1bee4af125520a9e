"""Ownership and publishing rules shared by every mutating resource."""

from collections.abc import Mapping
from typing import Any

from devcamper.errors import ForbiddenError, PublishLimitError
from devcamper.schemas.auth import AuthPrincipal, Role


def same_identity(left: Any, right: Any) -> bool:
    """Compare identities by value; an ObjectId equals its hex string."""
    if left is None or right is None:
        return False
    return str(left).strip() == str(right).strip()


def can_mutate(owner_id: Any, principal: AuthPrincipal) -> bool:
    """Owner or admin may update or delete a resource; nobody else."""
    return principal.role is Role.ADMIN or same_identity(owner_id, principal.user_id)


def ensure_can_mutate(owner_id: Any, principal: AuthPrincipal, *, action: str, resource: str) -> None:
    if not can_mutate(owner_id, principal):
        raise ForbiddenError(f"User {principal.user_id} is not authorized to {action} this {resource}")


def can_create_bootcamp(principal: AuthPrincipal, existing_bootcamp: Mapping[str, Any] | None) -> bool:
    """Non-admin principals may publish a single bootcamp."""
    return principal.role is Role.ADMIN or existing_bootcamp is None


def ensure_can_create_bootcamp(principal: AuthPrincipal, existing_bootcamp: Mapping[str, Any] | None) -> None:
    if not can_create_bootcamp(principal, existing_bootcamp):
        raise PublishLimitError(principal.user_id)


def ensure_role(principal: AuthPrincipal, allowed: frozenset[Role]) -> None:
    if principal.role not in allowed:
        raise ForbiddenError(f"User role {principal.role.value} is not authorized to access this route")
