"""
Services Layer for MakerBench Tool Suggestions
==============================================

- multipart: Decodes the form body and stages the logo
- directory: Reads and writes public/tools.json
- GitHubClient: Talks to the GitHub REST API
- SubmissionService: Orchestrates a suggestion into a pull request

DEPENDENCY FLOW:
----------------
    decode_multipart ──► SubmissionFields ──┐
                                            ├──► SubmissionService
    GitHubClient ───────────────────────────┘
"""

from makerbench.services.multipart import decode_multipart, SubmissionFields, StagedFile
from makerbench.services.directory import ToolDirectory, parse_tags
from makerbench.services.github_client import GitHubClient
from makerbench.services.submission_service import SubmissionService

__all__ = [
    "decode_multipart",
    "SubmissionFields",
    "StagedFile",
    "ToolDirectory",
    "parse_tags",
    "GitHubClient",
    "SubmissionService",
]
