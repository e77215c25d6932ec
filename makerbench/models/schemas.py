"""
Core Domain Schemas - Shared data models used across the application.
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class ToolRecord(BaseModel):
    """A single entry of the tool directory (public/tools.json)."""
    id: int = Field(..., ge=1)
    title: str
    url: str
    description: str
    tag: List[str] = Field(default_factory=list)
    logo: Optional[str] = None
    repo: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        """Serialize in directory key order, omitting absent optional fields."""
        return self.model_dump(exclude_none=True)


class ChangeRequestIntent(BaseModel):
    """Everything needed to open the pull request for one submission."""
    branch: str
    base: str
    title: str
    body: str
    commit_message: str
    logo_commit_message: Optional[str] = None


class SubmissionResult(BaseModel):
    """Outcome of a successful submission."""
    tool: ToolRecord
    branch: str
    pull_request_url: str
