"""FastAPI dependencies: stores, service wiring and the acting user."""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status

from shared.models import Team, User

from .config import Settings, get_settings
from .database import get_session_maker
from .providers import RepositoryProviderRegistry, build_provider_registry
from .services import ProjectsService
from .stores import (
    ProjectStore,
    SqlPrebuildStore,
    SqlProjectStore,
    SqlTeamStore,
    SqlUserStore,
    TeamStore,
    UserStore,
)


@lru_cache
def get_provider_registry() -> RepositoryProviderRegistry:
    """Providers are stateless apart from cached keys; build them once."""
    return build_provider_registry(get_settings())


def get_project_store() -> ProjectStore:
    return SqlProjectStore(get_session_maker())


def get_team_store() -> TeamStore:
    return SqlTeamStore(get_session_maker())


def get_user_store() -> UserStore:
    return SqlUserStore(get_session_maker())


def get_projects_service(
    project_store: ProjectStore = Depends(get_project_store),
    settings: Settings = Depends(get_settings),
) -> ProjectsService:
    """Wire the projects service with SQL stores and the provider registry."""
    return ProjectsService(
        project_store=project_store,
        prebuild_store=SqlPrebuildStore(get_session_maker()),
        providers=get_provider_registry(),
        default_branch=settings.default_branch,
    )


async def get_current_user(
    x_user_id: str = Header(..., alias="X-User-ID"),
    users: UserStore = Depends(get_user_store),
) -> User:
    """Get the acting user from the X-User-ID header.

    Raises 422 if header missing, 404 if user not found.
    """
    user = await users.find_user_by_id(x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {x_user_id} not found",
        )
    return user


async def get_team(team_id: str, teams: TeamStore = Depends(get_team_store)) -> Team:
    """Resolve the team from the route. Raises 404 if unknown."""
    team = await teams.find_team_by_id(team_id)
    if not team:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
    return team
