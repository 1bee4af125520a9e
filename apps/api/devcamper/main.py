"""FastAPI application entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devcamper import __version__
from devcamper.core.config import Settings, get_settings
from devcamper.core.logging_config import configure_logging, safe_log_identifier
from devcamper.errors import ApiError
from devcamper.repositories.base import DocumentStore, DuplicateKeyError
from devcamper.repositories.memory import InMemoryStore
from devcamper.routes import bootcamps_router, courses_router, health_router, reviews_router, users_router
from devcamper.schemas.envelope import ErrorEnvelope

logger = logging.getLogger(__name__)

_CORRELATION_HEADER = "X-Correlation-Id"


def build_store(settings: Settings) -> DocumentStore:
    if settings.store_backend == "mongo":
        from devcamper.repositories.mongo import MongoStore

        return MongoStore(settings.mongo_uri, settings.mongo_database)
    return InMemoryStore()


def _error_response(status_code: int, payload: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json", exclude_none=True))


def _validation_details(exc: RequestValidationError) -> dict:
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append({"field": ".".join(location) or "body", "message": error.get("msg", "Invalid value")})
    return {"fields": fields}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return _error_response(exc.status_code, exc.payload)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        details = _validation_details(exc)
        message = ", ".join(f"{item['field']}: {item['message']}" for item in details["fields"])
        payload = ErrorEnvelope(error=message or "Invalid request", code="VALIDATION_FAILED", details=details)
        return _error_response(400, payload)

    @app.exception_handler(DuplicateKeyError)
    async def handle_duplicate_key(_, exc: DuplicateKeyError) -> JSONResponse:
        logger.info("store.duplicate_key collection=%s fields=%s", exc.collection, ",".join(exc.fields))
        payload = ErrorEnvelope(
            error="Duplicate field value entered",
            code="DUPLICATE_VALUE",
            details={"fields": list(exc.fields)},
        )
        return _error_response(400, payload)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        correlation_id = getattr(request.state, "correlation_id", "")
        logger.error(
            "request.failed correlation_id=%s method=%s path=%s error=%s",
            safe_log_identifier(correlation_id, prefix="cid"),
            request.method,
            request.url.path,
            type(exc).__name__,
            exc_info=exc,
        )
        return _error_response(500, ErrorEnvelope(error="Server Error", code="INTERNAL_ERROR"))


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    store = build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        uploads = Path(settings.file_upload_path)
        uploads.mkdir(parents=True, exist_ok=True)
        store.open()
        logger.info(
            "app.started store=%s auth=%s uploads=%s",
            settings.store_backend,
            settings.auth_provider,
            uploads.resolve(),
        )
        try:
            yield
        finally:
            store.close()
            logger.info("app.stopped")

    app = FastAPI(title="DevCamper API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    @app.middleware("http")
    async def assign_correlation_id(request: Request, call_next):
        correlation_id = request.headers.get(_CORRELATION_HEADER) or f"req-{uuid4()}"
        request.state.correlation_id = correlation_id
        response = await call_next(request)
        response.headers[_CORRELATION_HEADER] = correlation_id
        return response

    register_exception_handlers(app)

    api_prefix = "/api/v1"
    app.include_router(bootcamps_router, prefix=api_prefix)
    app.include_router(courses_router, prefix=api_prefix)
    app.include_router(reviews_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(health_router, prefix=api_prefix)

    return app


app = create_app()
