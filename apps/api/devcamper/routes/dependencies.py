"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from devcamper.adapters.auth import (
    AuthVerificationError,
    JwtTokenVerifier,
    MockTokenVerifier,
    PasswordHasher,
    TokenVerifier,
)
from devcamper.adapters.geocoding import Geocoder, MapQuestGeocoder, StaticGeocoder
from devcamper.adapters.storage import FileStore, LocalFileStore
from devcamper.core.config import Settings
from devcamper.core.logging_config import safe_log_identifier
from devcamper.domain.policy import ensure_role
from devcamper.domain.query import (
    BOOTCAMP_TEXT_FIELDS,
    COURSE_TEXT_FIELDS,
    REVIEW_TEXT_FIELDS,
    USER_HIDDEN_FIELDS,
    USER_TEXT_FIELDS,
    ListQuery,
    parse_list_query,
)
from devcamper.errors import UnauthenticatedError
from devcamper.repositories.base import DocumentStore
from devcamper.schemas.auth import AuthPrincipal, Role
from devcamper.services.bootcamps import BootcampService
from devcamper.services.courses import CourseService
from devcamper.services.reviews import ReviewService
from devcamper.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
_TOKEN_COOKIE = "token"
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_token_verifier(settings: Annotated[Settings, Depends(get_app_settings)]) -> TokenVerifier:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "jwt":
        return JwtTokenVerifier(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return MockTokenVerifier()


def _bearer_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is not None:
        if credentials.scheme.lower() == "bearer" and credentials.credentials:
            return credentials.credentials
        return None
    return request.cookies.get(_TOKEN_COOKIE) or None


async def get_authenticated_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> AuthPrincipal:
    """Validate the bearer token (or token cookie) and attach the principal to the request."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
    token = _bearer_token(request, credentials)
    if token is None:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise UnauthenticatedError("Not authorized to access this route")

    try:
        principal = verifier.verify_token(token)
    except AuthVerificationError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=token_verification_failed",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise UnauthenticatedError(str(exc) or "Invalid bearer token") from exc

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.user_id, prefix="pid"),
        principal.role.value,
    )
    request.state.auth_principal = principal
    return principal


def require_roles(*roles: Role):
    allowed = frozenset(roles)

    async def dependency(
        principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    ) -> AuthPrincipal:
        ensure_role(principal, allowed)
        return principal

    return dependency


require_admin = require_roles(Role.ADMIN)


def list_query_for(*, text_fields: frozenset[str], hidden_fields: frozenset[str] = frozenset()):
    def dependency(request: Request) -> ListQuery:
        return parse_list_query(
            request.query_params.multi_items(),
            text_fields=text_fields,
            hidden_fields=hidden_fields,
        )

    return dependency


get_bootcamp_list_query = list_query_for(text_fields=BOOTCAMP_TEXT_FIELDS)
get_course_list_query = list_query_for(text_fields=COURSE_TEXT_FIELDS)
get_review_list_query = list_query_for(text_fields=REVIEW_TEXT_FIELDS)
get_user_list_query = list_query_for(text_fields=USER_TEXT_FIELDS, hidden_fields=USER_HIDDEN_FIELDS)


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_geocoder(settings: Annotated[Settings, Depends(get_app_settings)]) -> Geocoder:
    if settings.geocoder_provider == "static":
        return StaticGeocoder()
    return MapQuestGeocoder(
        api_key=settings.geocoder_api_key,
        base_url=settings.geocoder_base_url,
        timeout=settings.geocoder_timeout_seconds,
    )


def get_file_store(settings: Annotated[Settings, Depends(get_app_settings)]) -> FileStore:
    return LocalFileStore(settings.file_upload_path)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def get_bootcamp_service(
    store: Annotated[DocumentStore, Depends(get_store)],
    geocoder: Annotated[Geocoder, Depends(get_geocoder)],
) -> BootcampService:
    return BootcampService(store, geocoder)


def get_course_service(store: Annotated[DocumentStore, Depends(get_store)]) -> CourseService:
    return CourseService(store)


def get_review_service(store: Annotated[DocumentStore, Depends(get_store)]) -> ReviewService:
    return ReviewService(store)


def get_user_service(
    store: Annotated[DocumentStore, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(store, hasher)
