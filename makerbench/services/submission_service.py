"""
Submission Service - Turns a tool suggestion into a pull request.

COMPLETE FLOW:
==============
1. Validate the decoded form fields (no GitHub calls on failure)
        │
        ▼
2. Read public/tools.json from the base branch (content + sha)
        │
        ▼
3. Allocate the next tool id
        │
        ▼
4. Logo (optional): create branch tool-suggestion-<id>,
   upload public/logos/tool-<id><ext>
        │
        ▼
5. Append the new tool, make sure the branch exists,
   write tools.json with the sha from step 2
        │
        ▼
6. Open the pull request and return its URL

Steps are not transactional. Branches and files written before a failure
stay on GitHub; a stale sha in step 5 surfaces as VersionConflictError.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from makerbench.api.middleware.error_handler import (
    LocalIOError,
    RefAlreadyExistsError,
    SubmissionValidationError,
)
from makerbench.models.schemas import ChangeRequestIntent, SubmissionResult, ToolRecord
from makerbench.services.directory import ToolDirectory, parse_tags
from makerbench.services.github_client import GitHubClient
from makerbench.services.multipart import StagedFile, SubmissionFields


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "url", "description", "tag")


@dataclass
class SubmissionConfig:
    """Configuration for the submission service."""
    base_branch: str = "main"
    tools_path: str = "public/tools.json"
    logos_path: str = "public/logos"
    branch_prefix: str = "tool-suggestion-"


@dataclass
class ToolSubmission:
    """Validated form input."""
    title: str
    url: str
    description: str
    tags: List[str]
    repo: Optional[str] = None
    logo: Optional[StagedFile] = None


def validate_submission(fields: SubmissionFields) -> ToolSubmission:
    """
    Check required fields and parse tags.

    Raises:
        SubmissionValidationError: If a required field is absent or blank.
    """
    missing = [name for name in REQUIRED_FIELDS if not (fields.get(name) or "").strip()]
    if missing:
        raise SubmissionValidationError(missing)

    repo = (fields.get("repo") or "").strip() or None
    return ToolSubmission(
        title=fields.get("title").strip(),
        url=fields.get("url").strip(),
        description=fields.get("description").strip(),
        tags=parse_tags(fields.get("tag")),
        repo=repo,
        logo=fields.logo,
    )


def build_pull_request_body(tool: ToolRecord) -> str:
    body = (
        "## New Tool Suggestion\n\n"
        f"### Title\n{tool.title}\n\n"
        f"### Description\n{tool.description}\n\n"
        f"### URL\n{tool.url}\n\n"
        f"### Tags\n{', '.join(tool.tag)}\n\n"
    )
    if tool.repo:
        body += f"### Repository\n{tool.repo}\n\n"
    return body + "Added via the Suggest a Tool form on MakerBench."


class SubmissionService:
    """
    Opens a pull request adding a suggested tool to the directory.

    The GitHub client is injected so tests can substitute a fake.
    """

    def __init__(self, client: GitHubClient, config: Optional[SubmissionConfig] = None):
        self.client = client
        self.config = config or SubmissionConfig()

    def branch_name(self, tool_id: int) -> str:
        return f"{self.config.branch_prefix}{tool_id}"

    def build_intent(self, tool: ToolRecord) -> ChangeRequestIntent:
        return ChangeRequestIntent(
            branch=self.branch_name(tool.id),
            base=self.config.base_branch,
            title=f"Add {tool.title} to tools collection",
            body=build_pull_request_body(tool),
            commit_message=f"Add {tool.title} to tools.json",
            logo_commit_message=f"Add logo for tool #{tool.id}" if tool.logo else None,
        )

    async def ensure_branch(self, branch: str) -> None:
        """Create ``branch`` from the base tip. An existing branch is fine."""
        base_sha = await self.client.get_ref(self.config.base_branch)
        try:
            await self.client.create_ref(branch, base_sha)
            logger.info(f"Created branch {branch} at {base_sha[:7]}")
        except RefAlreadyExistsError:
            logger.info(f"Branch {branch} already exists, reusing it")

    async def _upload_logo(self, logo: StagedFile, filename: str, branch: str, message: str) -> None:
        try:
            content = logo.read_bytes()
        except OSError as e:
            raise LocalIOError(f"Could not read staged logo: {e.strerror or e}")

        path = f"{self.config.logos_path.rstrip('/')}/{filename}"
        await self.client.put_file(path, message, content, branch)
        logger.info(f"Uploaded logo {path} to {branch}")

    async def submit(self, fields: SubmissionFields) -> SubmissionResult:
        """
        Validate a submission and open a pull request for it.

        Args:
            fields: Decoded multipart form fields.

        Returns:
            SubmissionResult with the new tool and pull request URL.

        Raises:
            SubmissionValidationError: Missing required fields.
            VersionConflictError: tools.json changed after it was read.
            UpstreamError: Any other GitHub failure.
            LocalIOError: The staged logo could not be read.
        """
        submission = validate_submission(fields)

        # Steps 1-3: read the directory and allocate an id
        tools_file = await self.client.get_content(
            self.config.tools_path, ref=self.config.base_branch
        )
        directory = ToolDirectory.from_json(tools_file.decoded().decode("utf-8"))
        tool_id = directory.next_id()
        branch = self.branch_name(tool_id)
        logger.info(f"Processing suggestion '{submission.title}' as tool #{tool_id}")

        logo_filename = None
        if submission.logo is not None:
            logo_filename = f"tool-{tool_id}{submission.logo.extension}"

        tool = ToolRecord(
            id=tool_id,
            title=submission.title,
            url=submission.url,
            description=submission.description,
            tag=submission.tags,
            logo=logo_filename,
            repo=submission.repo,
        )
        intent = self.build_intent(tool)

        # Step 4: logo
        if submission.logo is not None:
            await self.ensure_branch(branch)
            await self._upload_logo(
                submission.logo, logo_filename, branch, intent.logo_commit_message
            )

        # Steps 5-8: directory document
        directory.append(tool)
        await self.ensure_branch(branch)
        await self.client.put_file(
            self.config.tools_path,
            intent.commit_message,
            directory.to_json().encode("utf-8"),
            branch,
            sha=tools_file.sha,
        )
        logger.info(f"Wrote {self.config.tools_path} to {branch}")

        # Step 9: pull request
        pull_request_url = await self.client.create_pull_request(
            title=intent.title,
            body=intent.body,
            head=intent.branch,
            base=intent.base,
        )
        logger.info(f"Opened pull request {pull_request_url}")

        return SubmissionResult(tool=tool, branch=branch, pull_request_url=pull_request_url)
