from typing import Protocol

from shared.models import PrebuiltWorkspace, Project, Team, User


class ProjectStore(Protocol):
    """Project persistence."""

    async def find_project(self, team_id: str, name: str) -> Project | None:
        """Return the team's project with this name, if any."""
        ...

    async def find_projects_by_team(self, team_id: str) -> list[Project]:
        """Return all projects of a team (empty list for an empty team)."""
        ...

    async def store_project(self, project: Project) -> Project:
        """Persist a project and return the stored row."""
        ...


class TeamStore(Protocol):
    """Team lookup."""

    async def find_team_by_id(self, team_id: str) -> Team | None: ...

    async def find_team_by_slug(self, slug: str) -> Team | None: ...

    async def find_teams(self) -> list[Team]: ...


class PrebuildStore(Protocol):
    """Prebuilt workspace lookup."""

    async def find_prebuilt_workspaces_by_project(
        self, project_id: str, branch: str | None = None
    ) -> list[PrebuiltWorkspace]:
        """Return the project's prebuilds, oldest first.

        Results are ordered by ascending creation_time (ties by id), so the
        last element is the most recent prebuild. With branch=None prebuilds
        of every branch are returned.
        """
        ...


class UserStore(Protocol):
    """User lookup."""

    async def find_user_by_id(self, user_id: str) -> User | None: ...
