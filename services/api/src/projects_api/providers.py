"""Repository hosting providers, looked up by host."""

from typing import Protocol

from shared.clients import GitHubRepositoryProvider, GitLabRepositoryProvider
from shared.contracts.dto.project import RepositoryBranch
from shared.models import User

from .config import Settings


class RepositoryProvider(Protocol):
    """Source-hosting API used to list a repository's branches."""

    async def get_branches(self, user: User | None, owner: str, repo: str) -> list[RepositoryBranch]:
        """Return the repository's branches with their head commit."""
        ...


class RepositoryProviderRegistry:
    """Maps a host name (e.g. "github.com") to its provider."""

    def __init__(self, providers: dict[str, RepositoryProvider] | None = None):
        self._providers = {host.lower(): p for host, p in (providers or {}).items()}

    def register(self, host: str, provider: RepositoryProvider) -> None:
        self._providers[host.lower()] = provider

    def get(self, host: str) -> RepositoryProvider | None:
        return self._providers.get(host.lower())

    @property
    def hosts(self) -> list[str]:
        return sorted(self._providers)


def build_provider_registry(settings: Settings) -> RepositoryProviderRegistry:
    """Create the GitHub and GitLab providers configured in settings."""
    return RepositoryProviderRegistry(
        {
            settings.github_host: GitHubRepositoryProvider(
                host=settings.github_host,
                api_url=settings.github_api_url,
                app_id=settings.github_app_id,
                private_key_path=settings.github_app_private_key_path,
            ),
            settings.gitlab_host: GitLabRepositoryProvider(
                host=settings.gitlab_host,
                api_url=settings.gitlab_api_url,
            ),
        }
    )
