"""
Dependencies - Dependency injection for services and components.

Provides singleton instances built from settings. Tests override these
through ``app.dependency_overrides``.
"""

from typing import Optional

from makerbench.core.config import get_settings
from makerbench.services.github_client import GitHubClient, GitHubClientConfig
from makerbench.services.multipart import MultipartConfig
from makerbench.services.submission_service import SubmissionService, SubmissionConfig


# Singleton instances
_github_client: Optional[GitHubClient] = None
_submission_service: Optional[SubmissionService] = None


def get_github_client() -> GitHubClient:
    """Get the shared GitHub client (one connection pool per process)."""
    global _github_client
    if _github_client is None:
        settings = get_settings()
        config = GitHubClientConfig(
            owner=settings.repo_owner,
            repo=settings.repo_name,
            token=settings.github_token.get_secret_value(),
            api_url=settings.github_api_url,
            api_version=settings.github_api_version,
            timeout_seconds=settings.github_timeout_seconds
        )
        _github_client = GitHubClient(config=config)
    return _github_client


def get_submission_service() -> SubmissionService:
    """Get submission service instance."""
    global _submission_service
    if _submission_service is None:
        settings = get_settings()
        config = SubmissionConfig(
            base_branch=settings.base_branch,
            tools_path=settings.tools_path,
            logos_path=settings.logos_path,
            branch_prefix=settings.branch_prefix
        )
        _submission_service = SubmissionService(client=get_github_client(), config=config)
    return _submission_service


def get_multipart_config() -> MultipartConfig:
    """Get multipart decoding limits from settings."""
    settings = get_settings()
    return MultipartConfig(
        max_file_size_bytes=settings.max_logo_size_bytes,
        scratch_dir=settings.scratch_dir
    )


async def close_github_client() -> None:
    """Release the GitHub connection pool on shutdown."""
    global _github_client, _submission_service
    if _github_client is not None:
        await _github_client.aclose()
    _github_client = None
    _submission_service = None
