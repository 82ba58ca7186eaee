"""Domain error taxonomy and its mapping onto HTTP responses."""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
import structlog

logger = structlog.get_logger(__name__)

# SQLSTATE codes reported by PostgreSQL drivers
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


class ErrorCategory(Enum):
    """Error categories for classification and routing."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class FieldError:
    """A single field-level validation failure."""
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class RecruitmentError(Exception):
    """Base exception class for recruitment workflow errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    # Expected errors are normal control flow and never logged as errors
    expected: bool = True

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "category": self.category.value,
            "status_code": self.status_code,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_error) if self.original_error else None,
            "original_error_type": type(self.original_error).__name__ if self.original_error else None,
        }

    def to_response_body(self) -> Dict[str, Any]:
        """Body returned to API callers. Never includes the original error."""
        return {"detail": self.message}


class ValidationError(RecruitmentError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[List[FieldError]] = None, **kwargs):
        super().__init__(message, ErrorCategory.VALIDATION, **kwargs)
        self.errors = errors or []

    def to_response_body(self) -> Dict[str, Any]:
        body = super().to_response_body()
        if self.errors:
            body["errors"] = [error.to_dict() for error in self.errors]
        return body


class NotFoundError(RecruitmentError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.NOT_FOUND, **kwargs)


class ConflictError(RecruitmentError):
    """Uniqueness violation."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.CONFLICT, **kwargs)


class InternalError(RecruitmentError):
    """Unexpected persistence or infrastructure failure.

    The message is fixed per operation; the cause stays in ``original_error``
    for server-side logging only.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    expected = False

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.INTERNAL, **kwargs)


def _sqlstate(error: IntegrityError) -> Optional[str]:
    orig = getattr(error, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error was raised by a foreign key constraint."""
    code = _sqlstate(error)
    if code:
        return code == FOREIGN_KEY_VIOLATION
    return "foreign key" in str(getattr(error, "orig", error)).lower()


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error was raised by a unique constraint."""
    code = _sqlstate(error)
    if code:
        return code == UNIQUE_VIOLATION
    text = str(getattr(error, "orig", error)).lower()
    return "unique" in text or "duplicate key" in text


def _format_location(loc) -> str:
    # Drop the request section prefix ("body", "query", "path")
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts) or "request"


def field_errors_from_pydantic(errors) -> List[FieldError]:
    """Convert pydantic/FastAPI error dicts into field errors."""
    return [
        FieldError(field=_format_location(error.get("loc", ())), message=error.get("msg", "Invalid value"))
        for error in errors
    ]


async def recruitment_error_handler(request: Request, exc: RecruitmentError) -> JSONResponse:
    """Render a domain error as JSON."""
    if not exc.expected:
        logger.error(
            "Request failed with internal error",
            path=request.url.path,
            method=request.method,
            **exc.to_dict()
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed path, query or body parameters are a Bad Request."""
    error = ValidationError("Validation failed", errors=field_errors_from_pydantic(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_response_body())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on an application."""
    app.add_exception_handler(RecruitmentError, recruitment_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
