"""API service configuration.

Requires: DATABASE_URL
Optional: GITHUB_HOST, GITHUB_API_URL, GITHUB_APP_ID, GITHUB_APP_PRIVATE_KEY_PATH,
GITLAB_HOST, GITLAB_API_URL, DEFAULT_BRANCH
"""

from functools import lru_cache

from pydantic import Field

from shared.clients.github import GITHUB_API_URL
from shared.clients.gitlab import GITLAB_API_URL
from shared.config import BaseSettings, database_url_field, host_field


class Settings(BaseSettings):
    """API service settings."""

    # Required
    database_url: str = database_url_field(required=True)

    # Repository providers
    github_host: str = host_field("github.com", "GitHub")
    github_api_url: str = Field(default=GITHUB_API_URL, description="GitHub REST API base URL")
    github_app_id: str | None = Field(default=None, description="GitHub App ID")
    github_app_private_key_path: str | None = Field(
        default=None, description="Path to the GitHub App private key (PEM)"
    )
    gitlab_host: str = host_field("gitlab.com", "GitLab")
    gitlab_api_url: str = Field(default=GITLAB_API_URL, description="GitLab REST API base URL")

    # Used when a project's default branch is not known
    default_branch: str = Field(
        default="master",
        description="Branch whose last prebuild is shown in project listings",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Validates required env vars on first call.
    Raises ValidationError if DATABASE_URL is missing.
    """
    return Settings()
