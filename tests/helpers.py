"""Helpers shared by unit and integration tests."""

import base64
import json
from typing import Dict, List, Optional, Tuple


from makerbench.api.middleware.error_handler import RefAlreadyExistsError
from makerbench.services.github_client import RepoFile


BOUNDARY = "----MakerBenchFormBoundary7MA4YWxkTrZu0gW"

# PNG signature followed by bytes that are not valid UTF-8
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe\x00\x01"


def build_multipart(
    fields: Dict[str, str],
    files: Optional[List[Tuple[str, str, str, bytes]]] = None,
    boundary: str = BOUNDARY,
) -> bytes:
    """Build a multipart/form-data body the way a browser would."""
    parts = []
    for name, value in fields.items():
        parts.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{name}"\r\n'
            "\r\n".encode("utf-8")
            + value.encode("utf-8")
            + b"\r\n"
        )
    for name, filename, media_type, content in files or []:
        parts.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
            f"Content-Type: {media_type}\r\n"
            "\r\n".encode("utf-8")
            + content
            + b"\r\n"
        )
    parts.append(f"--{boundary}--\r\n".encode("utf-8"))
    return b"".join(parts)


def content_type(boundary: str = BOUNDARY) -> str:
    return f"multipart/form-data; boundary={boundary}"


class FakeGitHubClient:
    """
    In-memory stand-in for GitHubClient.

    Records every call in ``calls`` as (method name, kwargs).
    """

    def __init__(self, tools: list, sha: str = "blob-sha-1"):
        self.tools_document = json.dumps(tools, indent=2)
        self.sha = sha
        self.branches = {"main": "commit-sha-main"}
        self.files: Dict[Tuple[str, str], bytes] = {}
        self.calls: List[Tuple[str, dict]] = []
        self.put_file_error: Optional[Exception] = None
        self.pull_request_url = "https://github.com/schalkneethling/makerbench/pull/42"

    async def get_content(self, path, ref):
        self.calls.append(("get_content", {"path": path, "ref": ref}))
        encoded = base64.b64encode(self.tools_document.encode("utf-8")).decode("ascii")
        return RepoFile(path=path, sha=self.sha, content=encoded)

    async def get_ref(self, branch):
        self.calls.append(("get_ref", {"branch": branch}))
        return self.branches[branch]

    async def create_ref(self, branch, sha):
        self.calls.append(("create_ref", {"branch": branch, "sha": sha}))
        if branch in self.branches:
            raise RefAlreadyExistsError(branch)
        self.branches[branch] = sha

    async def put_file(self, path, message, content, branch, sha=None):
        self.calls.append(
            ("put_file", {"path": path, "message": message, "branch": branch, "sha": sha})
        )
        if self.put_file_error is not None and path.endswith(".json"):
            raise self.put_file_error
        self.files[(branch, path)] = content
        return {"content": {"path": path}}

    async def create_pull_request(self, title, body, head, base):
        self.calls.append(
            ("create_pull_request", {"title": title, "body": body, "head": head, "base": base})
        )
        return self.pull_request_url

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


