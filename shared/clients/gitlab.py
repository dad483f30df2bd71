from urllib.parse import quote

import httpx

from shared.contracts.dto.project import RepositoryBranch
from shared.logging_config import get_logger
from shared.models.user import User
from shared.schemas.gitlab import GitLabBranch

logger = get_logger(__name__)

GITLAB_API_URL = "https://gitlab.com/api/v4"
BRANCHES_PER_PAGE = 100


class GitLabRepositoryProvider:
    """Repository provider backed by the GitLab REST API (v4).

    GitLab embeds the head commit in branch listings, so one paginated call
    per repository is enough. Authenticates with the user's token for the host.
    """

    def __init__(self, host: str = "gitlab.com", api_url: str = GITLAB_API_URL):
        self.host = host
        self.api_url = api_url.rstrip("/")

    def _headers(self, user: User | None) -> dict[str, str]:
        token = user.token_for_host(self.host) if user else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _project_path(owner: str, repo: str) -> str:
        return quote(f"{owner}/{repo}", safe="")

    async def get_branches(self, user: User | None, owner: str, repo: str) -> list[RepositoryBranch]:
        """List branches with their head commit details."""
        branches: list[GitLabBranch] = []
        page = 1

        async with httpx.AsyncClient(base_url=self.api_url) as client:
            while True:
                resp = await client.get(
                    f"/projects/{self._project_path(owner, repo)}/repository/branches",
                    params={"per_page": BRANCHES_PER_PAGE, "page": page},
                    headers=self._headers(user),
                )
                resp.raise_for_status()
                batch = resp.json()
                if not batch:
                    break
                branches.extend(GitLabBranch.model_validate(b) for b in batch)
                if len(batch) < BRANCHES_PER_PAGE:
                    break
                page += 1

        logger.info("gitlab_branches_fetched", owner=owner, repo=repo, branch_count=len(branches))

        return [
            RepositoryBranch(
                name=b.name,
                author=b.commit.author_name,
                author_date=b.commit.authored_date,
                sha=b.commit.id,
                commit_message=b.commit.message or b.commit.title,
                # Branch listings carry no avatar
                author_avatar_url=None,
                html_url=b.web_url,
                commit_url=b.commit.web_url,
                is_default=b.default,
            )
            for b in branches
        ]
