"""
Data Models for MakerBench Tool Suggestions
===========================================

- schemas: Core domain models (tool records, pull request intent)
- responses: API response models
"""

from makerbench.models.schemas import (
    ToolRecord,
    ChangeRequestIntent,
    SubmissionResult,
)

from makerbench.models.responses import (
    HealthResponse,
    SubmissionResponse,
    ErrorResponse,
)

__all__ = [
    # Schemas
    "ToolRecord",
    "ChangeRequestIntent",
    "SubmissionResult",
    # Responses
    "HealthResponse",
    "SubmissionResponse",
    "ErrorResponse",
]
