"""
Error Handler Middleware - Global exception handling for the API.

Catches exceptions and returns consistent error responses of the form
``{"message": ..., "error": ...}``. Outside production, server-side
failures also carry the stack trace and the inbound request metadata.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback
from typing import Optional

from makerbench.core.config import get_settings


logger = logging.getLogger(__name__)

# Inbound headers never echoed back, even in debug responses
_REDACTED_HEADERS = {"authorization", "cookie", "proxy-authorization"}


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class MalformedRequestError(AppException):
    """Raised when a multipart body cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="MALFORMED_REQUEST",
            status_code=400
        )


class SubmissionValidationError(AppException):
    """Raised when required submission fields are missing or empty."""

    def __init__(self, missing: list):
        super().__init__(
            message="Missing required fields",
            error_code="VALIDATION_ERROR",
            status_code=400,
            details={"missing": missing}
        )


class UpstreamError(AppException):
    """Raised when the GitHub API cannot be reached or misbehaves."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message,
            error_code="UPSTREAM_ERROR",
            status_code=500,
            details=details
        )


class GitHubAPIError(UpstreamError):
    """Raised for a non-success GitHub API response."""

    def __init__(self, operation: str, status_code: int, message: str):
        self.upstream_status = status_code
        super().__init__(
            message=f"GitHub {operation} failed ({status_code}): {message}",
            details={"operation": operation, "upstream_status": status_code}
        )


class RefAlreadyExistsError(GitHubAPIError):
    """Raised when a branch ref being created already exists."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__("create ref", 422, f"Reference already exists: {branch}")


class VersionConflictError(AppException):
    """
    Raised when a file write is rejected because its sha is stale.

    Another submission changed the file since it was read. The caller
    may retry the whole submission.
    """

    def __init__(self, path: str):
        super().__init__(
            message="The tool directory changed while processing the suggestion. Please try again.",
            error_code="VERSION_CONFLICT",
            status_code=409,
            details={"path": path, "retryable": True}
        )


class LocalIOError(AppException):
    """Raised when a staged file cannot be read."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="LOCAL_IO_ERROR",
            status_code=500
        )


class DirectoryDocumentError(AppException):
    """Raised when the tool directory document is not in the expected shape."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="DIRECTORY_DOCUMENT_ERROR",
            status_code=500
        )


def _debug_fields(request: Optional[Request], traceback_str: Optional[str]) -> dict:
    fields = {}
    if traceback_str:
        fields["stack"] = traceback_str
    if request is not None:
        fields["headers"] = {
            key: value
            for key, value in request.headers.items()
            if key.lower() not in _REDACTED_HEADERS
        }
        fields["method"] = request.method
    return fields


def create_error_response(
    message: str,
    status_code: int = 500,
    error: Optional[str] = None,
    error_code: Optional[str] = None,
    debug: Optional[dict] = None
) -> JSONResponse:
    """Create a standardized error response."""
    settings = get_settings()

    content = {"message": message}
    if error:
        content["error"] = error
    if error_code:
        content["error_code"] = error_code

    # Diagnostics never leave the server in production
    if debug and not settings.is_production:
        content.update(debug)

    return JSONResponse(
        status_code=status_code,
        content=content
    )


async def app_exception_handler(
    request: Request,
    exc: AppException
) -> JSONResponse:
    """Handle application-specific exceptions."""
    if exc.status_code < 500:
        if exc.error_code == "VERSION_CONFLICT":
            logger.warning(f"Version conflict: {exc.details}")
            return create_error_response(
                message=exc.message,
                status_code=exc.status_code,
                error=exc.message,
                error_code=exc.error_code
            )
        return create_error_response(
            message=exc.message,
            status_code=exc.status_code,
            error_code=exc.error_code
        )

    traceback_str = "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    )
    logger.error(f"Error processing tool suggestion: {traceback_str}")

    return create_error_response(
        message="Error processing tool suggestion",
        status_code=exc.status_code,
        error=exc.message,
        error_code=exc.error_code,
        debug=_debug_fields(request, traceback_str)
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP exceptions (404, 405 and friends)."""
    response = create_error_response(
        message=str(exc.detail),
        status_code=exc.status_code
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        loc = " -> ".join(str(l) for l in error["loc"])
        errors.append(f"{loc}: {error['msg']}")

    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error="; ".join(errors),
        error_code="VALIDATION_ERROR"
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    traceback_str = "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    )
    logger.error(f"Unexpected error: {traceback_str}")

    return create_error_response(
        message="Error processing tool suggestion",
        status_code=500,
        error=str(exc),
        error_code="INTERNAL_ERROR",
        debug=_debug_fields(request, traceback_str)
    )
