"""
Application Configuration - Environment settings and constants.

Loads configuration from environment variables with sensible defaults.
Uses Pydantic Settings for validation and type safety.

The GitHub token is the only secret. It is kept as a SecretStr so it
never shows up in reprs, logs or error responses.
"""

from typing import List, Optional
from pydantic import SecretStr
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Usage:
        from makerbench.core.config import get_settings
        settings = get_settings()
    """

    # Application
    app_name: str = "MakerBench Tool Suggestions"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    api_prefix: str = "/api"
    allowed_origins: List[str] = ["*"]

    # HTTP Server Configuration
    server_host: str = "0.0.0.0"
    server_port: int = 8000

    # GitHub API
    github_token: SecretStr = SecretStr("")
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    github_timeout_seconds: float = 10.0

    # Content repository holding the tool directory
    repo_owner: str = "schalkneethling"
    repo_name: str = "makerbench"
    base_branch: str = "main"
    tools_path: str = "public/tools.json"
    logos_path: str = "public/logos"
    branch_prefix: str = "tool-suggestion-"

    # Logo uploads
    max_logo_size_bytes: int = 1024 * 1024  # 1 MiB
    scratch_dir: Optional[str] = None  # None means the system temp dir

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
