from datetime import UTC, datetime

import httpx

from shared.contracts.dto.project import RepositoryBranch
from shared.logging_config import get_logger
from shared.models.user import User

logger = get_logger(__name__)


class MockRepositoryProvider:
    """In-memory repository provider for unit/integration tests."""

    def __init__(self, host: str = "github.com"):
        self.host = host
        # State: "owner/repo" -> branches in provider order
        self.branches: dict[str, list[RepositoryBranch]] = {}
        self.calls: list[tuple[str, str, str]] = []

        # Behavior Configuration
        self.should_fail: bool = False
        self.fail_exception: Exception | None = None

    def _check_failure(self):
        if self.should_fail:
            raise self.fail_exception or RuntimeError("Simulated Failure")

    def add_branch(
        self,
        owner: str,
        repo: str,
        name: str,
        sha: str | None = None,
        commit_message: str = "initial commit",
        author: str = "octocat",
        default: bool = False,
    ) -> RepositoryBranch:
        full_name = f"{owner}/{repo}"
        sha = sha or f"{len(self.branches.get(full_name, [])) + 1:040x}"
        branch = RepositoryBranch(
            name=name,
            author=author,
            author_date=datetime(2021, 6, 1, 12, 0, tzinfo=UTC),
            sha=sha,
            commit_message=commit_message,
            author_avatar_url=f"https://avatars.example.com/{author}",
            html_url=f"https://{self.host}/{full_name}/tree/{name}",
            commit_url=f"https://{self.host}/{full_name}/commit/{sha}",
            is_default=default,
        )
        self.branches.setdefault(full_name, []).append(branch)
        return branch

    async def get_branches(self, user: User | None, owner: str, repo: str) -> list[RepositoryBranch]:
        self._check_failure()
        self.calls.append(("get_branches", owner, repo))
        full_name = f"{owner}/{repo}"
        if full_name not in self.branches:
            request = httpx.Request("GET", f"https://api.github.com/repos/{full_name}/branches")
            response = httpx.Response(404, request=request)
            raise httpx.HTTPStatusError("Not Found", request=request, response=response)
        logger.info("mock_branches_listed", repo=full_name)
        return list(self.branches[full_name])
