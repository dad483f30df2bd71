"""Projects service - per-branch overview of a team's projects.

Combines the project row, the branch list of the source-hosting provider and
the latest prebuild per branch. Store and provider failures are not caught
here; they propagate to the HTTP layer.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal
import uuid

import structlog

from shared.contracts.dto.project import (
    BranchDetails,
    CreateProjectParams,
    PrebuildInfo,
    ProjectDTO,
    ProjectInfo,
    ProjectOverview,
    RepositoryBranch,
)
from shared.models import PrebuildState, PrebuiltWorkspace, Project, User
from shared.repohost import RepoUrl, parse_repo_url

from ..providers import RepositoryProvider, RepositoryProviderRegistry
from ..stores import PrebuildStore, ProjectStore

logger = structlog.get_logger()

UNKNOWN_BRANCH = "unknown"


@dataclass(frozen=True)
class OverviewFound:
    overview: ProjectOverview


@dataclass(frozen=True)
class OverviewNotFound:
    team_id: str
    project_name: str


@dataclass(frozen=True)
class OverviewProviderUnavailable:
    reason: Literal["unparseable_clone_url", "no_provider_for_host"]
    clone_url: str
    host: str | None = None


OverviewResult = OverviewFound | OverviewNotFound | OverviewProviderUnavailable


def _title(commit_message: str | None) -> str | None:
    if not commit_message:
        return commit_message
    return commit_message.splitlines()[0]


class ProjectsService:
    """Aggregates project, branch and prebuild data."""

    def __init__(
        self,
        project_store: ProjectStore,
        prebuild_store: PrebuildStore,
        providers: RepositoryProviderRegistry,
        default_branch: str = "master",
    ):
        self.project_store = project_store
        self.prebuild_store = prebuild_store
        self.providers = providers
        self.default_branch = default_branch

    async def get_projects(self, team_id: str) -> list[ProjectInfo]:
        """List the team's projects, each with its last prebuild."""

        async def to_project_info(project: Project) -> ProjectInfo:
            last_prebuild = await self.get_last_prebuild(project)
            return ProjectInfo.model_validate(project).model_copy(
                update={"last_prebuild": last_prebuild}
            )

        projects = await self.project_store.find_projects_by_team(team_id)
        return list(await asyncio.gather(*(to_project_info(p) for p in projects)))

    async def get_project_overview(
        self, user: User | None, team_id: str, project_name: str
    ) -> ProjectOverview | None:
        """Branch name -> details, or None when the project does not exist.

        An unparseable clone URL or a host without provider yields an empty
        overview; use resolve_project_overview to tell these cases apart.
        """
        result = await self.resolve_project_overview(user, team_id, project_name)
        if isinstance(result, OverviewFound):
            return result.overview
        if isinstance(result, OverviewNotFound):
            return None
        return {}

    async def resolve_project_overview(
        self, user: User | None, team_id: str, project_name: str
    ) -> OverviewResult:
        """Build the overview, reporting why it could not be built."""
        project = await self.project_store.find_project(team_id, project_name)
        if project is None:
            logger.info("project_not_found", team_id=team_id, project_name=project_name)
            return OverviewNotFound(team_id=team_id, project_name=project_name)

        resolved = self._resolve_provider(project)
        if isinstance(resolved, OverviewProviderUnavailable):
            return resolved

        provider, repo_url = resolved
        overview: ProjectOverview = {}
        # Duplicate branch names: last one wins
        for branch in await self._collect_branch_details(user, project, provider, repo_url):
            overview[branch.name] = branch

        logger.info(
            "project_overview_built",
            project_id=project.id,
            team_id=team_id,
            branch_count=len(overview),
        )
        return OverviewFound(overview=overview)

    async def get_branch_details(self, user: User | None, project: Project) -> list[BranchDetails]:
        """Branch rows for a project; empty when no provider can serve it."""
        resolved = self._resolve_provider(project)
        if isinstance(resolved, OverviewProviderUnavailable):
            return []
        provider, repo_url = resolved
        return await self._collect_branch_details(user, project, provider, repo_url)

    def _resolve_provider(
        self, project: Project
    ) -> tuple[RepositoryProvider, RepoUrl] | OverviewProviderUnavailable:
        repo_url = parse_repo_url(project.clone_url)
        if repo_url is None:
            logger.warning(
                "branch_details_unavailable",
                reason="unparseable_clone_url",
                project_id=project.id,
                clone_url=project.clone_url,
            )
            return OverviewProviderUnavailable(
                reason="unparseable_clone_url", clone_url=project.clone_url
            )

        provider = self.providers.get(repo_url.host)
        if provider is None:
            logger.warning(
                "branch_details_unavailable",
                reason="no_provider_for_host",
                project_id=project.id,
                host=repo_url.host,
                known_hosts=self.providers.hosts,
            )
            return OverviewProviderUnavailable(
                reason="no_provider_for_host",
                clone_url=project.clone_url,
                host=repo_url.host,
            )
        return provider, repo_url

    async def _collect_branch_details(
        self,
        user: User | None,
        project: Project,
        provider: RepositoryProvider,
        repo_url: RepoUrl,
    ) -> list[BranchDetails]:
        branches = await provider.get_branches(user, repo_url.owner, repo_url.repo)

        result = []
        for branch in branches:
            last_prebuild = await self.get_last_prebuild(project, branch.name)
            result.append(self._to_branch_details(branch, last_prebuild))
        return result

    @staticmethod
    def _to_branch_details(
        branch: RepositoryBranch, last_prebuild: PrebuildInfo | None
    ) -> BranchDetails:
        return BranchDetails(
            name=branch.name,
            branch_url=branch.html_url,
            change_author=branch.author,
            change_author_avatar=branch.author_avatar_url,
            change_date=branch.author_date,
            change_hash=branch.sha,
            change_title=_title(branch.commit_message),
            is_default=branch.is_default,
            change_pr=None,
            change_url=branch.commit_url,
            last_prebuild=last_prebuild,
        )

    async def create_project(self, params: CreateProjectParams) -> ProjectDTO:
        """Persist a new project. No duplicate or URL validation happens here."""
        project = Project(
            id=str(uuid.uuid4()),
            name=params.name,
            clone_url=params.clone_url,
            team_id=params.team_id,
            app_installation_id=params.app_installation_id,
            creation_time=datetime.now(UTC),
        )
        stored = await self.project_store.store_project(project)
        logger.info(
            "project_created",
            project_id=stored.id,
            team_id=stored.team_id,
            name=stored.name,
        )
        return ProjectDTO.model_validate(stored)

    async def get_default_branch(self, project: Project) -> str:
        # Configured fallback; the repository default needs a user-authorized provider call
        return self.default_branch

    async def get_last_prebuild(
        self, project: Project, branch: str | None = None
    ) -> PrebuildInfo | None:
        """Latest prebuild of a branch (default branch when omitted)."""
        branch = branch or await self.get_default_branch(project)
        prebuilds = await self.prebuild_store.find_prebuilt_workspaces_by_project(project.id, branch)
        if not prebuilds:
            return None
        return self.to_prebuild_info(project, prebuilds[-1], branch_prebuild_number=len(prebuilds))

    async def get_prebuilds(self, team_id: str, project_name: str) -> list[PrebuildInfo]:
        """All prebuilds of a project, oldest first; [] for an unknown project."""
        project = await self.project_store.find_project(team_id, project_name)
        if project is None:
            return []

        prebuilds = await self.prebuild_store.find_prebuilt_workspaces_by_project(project.id)

        per_branch: Counter[str | None] = Counter()
        result = []
        for prebuild in prebuilds:
            per_branch[prebuild.branch] += 1
            result.append(self.to_prebuild_info(project, prebuild, per_branch[prebuild.branch]))
        return result

    @staticmethod
    def to_prebuild_info(
        project: Project, prebuild: PrebuiltWorkspace, branch_prebuild_number: int
    ) -> PrebuildInfo:
        return PrebuildInfo(
            id=prebuild.id,
            started_at=prebuild.creation_time,
            team_id=project.team_id,
            project=project.name,
            branch=prebuild.branch or UNKNOWN_BRANCH,
            clone_url=prebuild.clone_url,
            status=PrebuildState(prebuild.state),
            change_hash=prebuild.commit,
            branch_prebuild_number=branch_prebuild_number,
        )
