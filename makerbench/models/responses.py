"""
API Response Models - Pydantic models for API responses.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    environment: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class SubmissionResponse(BaseModel):
    """
    Response from a successful tool suggestion.

    Example:
        {
            "message": "Tool suggestion submitted successfully",
            "pullRequestUrl": "https://github.com/owner/repo/pull/42"
        }
    """
    model_config = ConfigDict(populate_by_name=True)

    message: str
    pull_request_url: str = Field(..., alias="pullRequestUrl")


class ErrorResponse(BaseModel):
    """
    Standard error response.

    Debug fields (stack, headers, method) only appear outside production.
    """
    message: str
    error: Optional[str] = None
    error_code: Optional[str] = None
    stack: Optional[str] = None
    headers: Optional[Dict[str, Any]] = None
    method: Optional[str] = None
