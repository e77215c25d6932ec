"""
GitHub Client - Minimal async wrapper around the GitHub REST API.

Covers the calls needed to propose a change to the content repository:
- Read a file (content + blob sha)
- Resolve and create branch refs
- Create or update a file on a branch
- Open a pull request

Non-success responses are classified into the application's exception
types. Only the specific conflict classes get their own exceptions;
everything else is a GitHubAPIError.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from makerbench.api.middleware.error_handler import (
    GitHubAPIError,
    RefAlreadyExistsError,
    UpstreamError,
    VersionConflictError,
)


logger = logging.getLogger(__name__)


@dataclass
class GitHubClientConfig:
    """Configuration for the GitHub client."""
    owner: str
    repo: str
    token: str = ""
    api_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"
    timeout_seconds: float = 10.0

    def __repr__(self) -> str:
        return (
            f"GitHubClientConfig(owner={self.owner!r}, repo={self.repo!r}, "
            f"api_url={self.api_url!r}, token=***)"
        )


@dataclass
class RepoFile:
    """A file read from the repository. ``content`` is base64 as GitHub returns it."""
    path: str
    sha: str
    content: str

    def decoded(self) -> bytes:
        return base64.b64decode(self.content)


class GitHubClient:
    """
    Async GitHub REST client bound to one repository.

    Usage:
        client = GitHubClient(GitHubClientConfig(owner="o", repo="r", token="..."))
        tools = await client.get_content("public/tools.json", ref="main")
        await client.aclose()
    """

    def __init__(
        self,
        config: GitHubClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": config.api_version,
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"

        self._client = httpx.AsyncClient(
            base_url=config.api_url,
            headers=headers,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.config.owner}/{self.config.repo}"

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            raise UpstreamError(
                f"GitHub {operation} timed out after {self.config.timeout_seconds}s",
                details={"operation": operation},
            )
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"GitHub {operation} failed: {type(e).__name__}",
                details={"operation": operation},
            )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(data, dict):
            return str(data.get("message", ""))
        return ""

    def _raise_for_status(self, operation: str, response: httpx.Response) -> None:
        if response.is_success:
            return
        raise GitHubAPIError(operation, response.status_code, self._error_message(response))

    async def get_content(self, path: str, ref: str) -> RepoFile:
        """Read a file from the repository at the given ref."""
        response = await self._request(
            "get content",
            "GET",
            f"{self._repo_path}/contents/{quote(path)}",
            params={"ref": ref},
        )
        self._raise_for_status("get content", response)
        data = response.json()
        if not isinstance(data, dict) or "content" not in data:
            raise GitHubAPIError("get content", response.status_code, f"{path} is not a file")
        return RepoFile(path=data.get("path", path), sha=data["sha"], content=data["content"])

    async def get_ref(self, branch: str) -> str:
        """Return the commit sha at the tip of a branch."""
        response = await self._request(
            "get ref", "GET", f"{self._repo_path}/git/ref/heads/{quote(branch)}"
        )
        self._raise_for_status("get ref", response)
        return response.json()["object"]["sha"]

    async def create_ref(self, branch: str, sha: str) -> None:
        """
        Create a branch pointing at ``sha``.

        Raises:
            RefAlreadyExistsError: If the branch already exists.
            GitHubAPIError: For any other failure.
        """
        response = await self._request(
            "create ref",
            "POST",
            f"{self._repo_path}/git/refs",
            json={"ref": f"refs/heads/{branch}", "sha": sha},
        )
        if response.status_code == 422 and "already exists" in self._error_message(response).lower():
            raise RefAlreadyExistsError(branch)
        self._raise_for_status("create ref", response)

    async def put_file(
        self,
        path: str,
        message: str,
        content: bytes,
        branch: str,
        sha: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create or update a file on a branch.

        ``sha`` is the blob sha the caller last read. GitHub rejects the
        write with 409 if the file has changed since.

        Raises:
            VersionConflictError: If ``sha`` is stale.
            GitHubAPIError: For any other failure.
        """
        payload = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha

        response = await self._request(
            "put file", "PUT", f"{self._repo_path}/contents/{quote(path)}", json=payload
        )
        if response.status_code == 409:
            raise VersionConflictError(path)
        self._raise_for_status("put file", response)
        return response.json()

    async def create_pull_request(self, title: str, body: str, head: str, base: str) -> str:
        """Open a pull request and return its web URL."""
        response = await self._request(
            "create pull request",
            "POST",
            f"{self._repo_path}/pulls",
            json={"title": title, "body": body, "head": head, "base": base},
        )
        self._raise_for_status("create pull request", response)
        return response.json()["html_url"]

    async def aclose(self) -> None:
        await self._client.aclose()
