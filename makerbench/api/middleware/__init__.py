"""
API Middleware - Exception types and handlers.
"""

from makerbench.api.middleware.error_handler import (
    AppException,
    MalformedRequestError,
    SubmissionValidationError,
    UpstreamError,
    GitHubAPIError,
    RefAlreadyExistsError,
    VersionConflictError,
    LocalIOError,
    DirectoryDocumentError,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler,
)

__all__ = [
    "AppException",
    "MalformedRequestError",
    "SubmissionValidationError",
    "UpstreamError",
    "GitHubAPIError",
    "RefAlreadyExistsError",
    "VersionConflictError",
    "LocalIOError",
    "DirectoryDocumentError",
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "generic_exception_handler",
]
