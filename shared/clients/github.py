import os
import time

import httpx
import jwt

from shared.contracts.dto.project import RepositoryBranch
from shared.logging_config import get_logger
from shared.models.user import User
from shared.schemas.github import GitHubBranch, GitHubCommit, GitHubRepository

logger = get_logger(__name__)

GITHUB_API_URL = "https://api.github.com"
BRANCHES_PER_PAGE = 100


class GitHubRepositoryProvider:
    """Repository provider backed by the GitHub REST API.

    Requests are authenticated with the acting user's token for the host when
    one is stored, otherwise with a GitHub App installation token. Without
    either, requests go out anonymously (public repositories only).
    """

    def __init__(
        self,
        host: str = "github.com",
        api_url: str = GITHUB_API_URL,
        app_id: str | None = None,
        private_key_path: str | None = None,
    ):
        self.host = host
        self.api_url = api_url.rstrip("/")
        self.app_id = app_id or os.getenv("GITHUB_APP_ID")
        self.private_key_path = private_key_path or os.getenv(
            "GITHUB_APP_PRIVATE_KEY_PATH", "/app/keys/github_app.pem"
        )
        self._private_key = None

        if not self.app_id:
            logger.warning("github_app_id_missing", env_var="GITHUB_APP_ID", host=host)

    def _load_private_key(self) -> str:
        if self._private_key:
            return self._private_key

        if not os.path.exists(self.private_key_path):
            if os.getenv("GITHUB_PRIVATE_KEY_CONTENT"):
                self._private_key = os.getenv("GITHUB_PRIVATE_KEY_CONTENT")
                return self._private_key

            raise FileNotFoundError(f"GitHub App private key not found at {self.private_key_path}")

        with open(self.private_key_path) as f:
            self._private_key = f.read()
        return self._private_key

    def _generate_jwt(self) -> str:
        """Generate JWT for GitHub App authentication."""
        pem = self._load_private_key()
        now = int(time.time())
        payload = {"iat": now - 60, "exp": now + (10 * 60), "iss": self.app_id}
        return jwt.encode(payload, pem, algorithm="RS256")

    async def get_installation_token(self, owner: str, repo: str) -> str:
        """Get an installation access token for a specific repo."""
        jwt_headers = {
            "Authorization": f"Bearer {self._generate_jwt()}",
            "Accept": "application/vnd.github+json",
        }
        async with httpx.AsyncClient(base_url=self.api_url) as client:
            resp = await client.get(f"/repos/{owner}/{repo}/installation", headers=jwt_headers)
            resp.raise_for_status()
            installation_id = resp.json()["id"]

            resp = await client.post(
                f"/app/installations/{installation_id}/access_tokens", headers=jwt_headers
            )
            resp.raise_for_status()
            return resp.json()["token"]

    async def _headers(self, user: User | None, owner: str, repo: str) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        token = user.token_for_host(self.host) if user else None
        if not token and self.app_id:
            try:
                token = await self.get_installation_token(owner, repo)
            except (OSError, httpx.HTTPStatusError) as e:
                # Missing key or app not installed on the repo: continue anonymously
                logger.warning(
                    "github_app_token_failed",
                    owner=owner,
                    repo=repo,
                    error=str(e),
                    error_type=type(e).__name__,
                )
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    async def get_branches(self, user: User | None, owner: str, repo: str) -> list[RepositoryBranch]:
        """List branches with their head commit details."""
        headers = await self._headers(user, owner, repo)

        async with httpx.AsyncClient(base_url=self.api_url) as client:
            resp = await client.get(f"/repos/{owner}/{repo}", headers=headers)
            resp.raise_for_status()
            default_branch = GitHubRepository.model_validate(resp.json()).default_branch

            branches: list[GitHubBranch] = []
            page = 1
            while True:
                resp = await client.get(
                    f"/repos/{owner}/{repo}/branches",
                    params={"per_page": BRANCHES_PER_PAGE, "page": page},
                    headers=headers,
                )
                resp.raise_for_status()
                batch = resp.json()
                if not batch:
                    break
                branches.extend(GitHubBranch.model_validate(b) for b in batch)
                if len(batch) < BRANCHES_PER_PAGE:
                    break
                page += 1

            result = []
            for branch in branches:
                resp = await client.get(
                    f"/repos/{owner}/{repo}/commits/{branch.commit.sha}", headers=headers
                )
                resp.raise_for_status()
                commit = GitHubCommit.model_validate(resp.json())
                git_author = commit.commit.author
                result.append(
                    RepositoryBranch(
                        name=branch.name,
                        author=git_author.name if git_author else None,
                        author_date=git_author.date if git_author else None,
                        sha=commit.sha,
                        commit_message=commit.commit.message,
                        author_avatar_url=commit.author.avatar_url if commit.author else None,
                        html_url=f"https://{self.host}/{owner}/{repo}/tree/{branch.name}",
                        commit_url=commit.html_url,
                        is_default=branch.name == default_branch,
                    )
                )

        logger.info(
            "github_branches_fetched",
            owner=owner,
            repo=repo,
            branch_count=len(result),
        )
        return result
