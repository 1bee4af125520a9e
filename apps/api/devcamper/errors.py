"""Application exception types."""

from typing import Any

from devcamper.schemas.envelope import ErrorEnvelope


class ApiError(Exception):
    """Structured API error rendered as a failure envelope."""

    def __init__(self, status_code: int, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorEnvelope(error=message, code=code, details=details)
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.payload.code


class NotFoundError(ApiError):
    def __init__(self, message: str = "Resource not found", details: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=404, code="RESOURCE_NOT_FOUND", message=message, details=details)


class UnauthenticatedError(ApiError):
    def __init__(self, message: str = "Not authorized to access this route") -> None:
        super().__init__(status_code=401, code="UNAUTHORIZED", message=message)


class ForbiddenError(ApiError):
    """The resource exists but the principal may not act on it."""

    def __init__(self, message: str) -> None:
        super().__init__(status_code=403, code="FORBIDDEN", message=message)


class ValidationFailedError(ApiError):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=400, code="VALIDATION_FAILED", message=message, details=details)


class PublishLimitError(ApiError):
    def __init__(self, user_id: str) -> None:
        super().__init__(
            status_code=400,
            code="BOOTCAMP_ALREADY_PUBLISHED",
            message=f"The user with ID {user_id} has already published a bootcamp",
        )


class UploadRejectedError(ApiError):
    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=400, code=code, message=message, details=details)


class InternalError(ApiError):
    def __init__(self, message: str = "Server Error") -> None:
        super().__init__(status_code=500, code="INTERNAL_ERROR", message=message)


__all__ = [
    "ApiError",
    "ForbiddenError",
    "InternalError",
    "NotFoundError",
    "PublishLimitError",
    "UnauthenticatedError",
    "UploadRejectedError",
    "ValidationFailedError",
]
