"""Projects router - team projects, branch overview and prebuilds."""

from fastapi import APIRouter, Depends, HTTPException, status
import structlog

from shared.contracts.dto.project import (
    BranchDetails,
    CreateProjectParams,
    PrebuildInfo,
    ProjectCreateBody,
    ProjectDTO,
    ProjectInfo,
    ProjectOverview,
)
from shared.models import Team, User

from ..dependencies import get_current_user, get_projects_service, get_team
from ..services import OverviewNotFound, OverviewProviderUnavailable, ProjectsService

logger = structlog.get_logger()

router = APIRouter(prefix="/teams/{team_id}/projects", tags=["projects"])


@router.get("/", response_model=list[ProjectInfo])
async def list_projects(
    team: Team = Depends(get_team),
    service: ProjectsService = Depends(get_projects_service),
) -> list[ProjectInfo]:
    """List the team's projects with their last prebuild."""
    return await service.get_projects(team.id)


@router.post("/", response_model=ProjectDTO, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreateBody,
    team: Team = Depends(get_team),
    service: ProjectsService = Depends(get_projects_service),
) -> ProjectDTO:
    """Create a new project in the team."""
    logger.info("creating_project", team_id=team.id, name=project_in.name)

    if await service.project_store.find_project(team.id, project_in.name):
        logger.warning("project_creation_failed_duplicate", team_id=team.id, name=project_in.name)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Project with this name already exists",
        )

    params = CreateProjectParams(team_id=team.id, **project_in.model_dump())
    return await service.create_project(params)


@router.get("/{project_name}/overview", response_model=dict[str, BranchDetails])
async def get_project_overview(
    project_name: str,
    team: Team = Depends(get_team),
    user: User = Depends(get_current_user),
    service: ProjectsService = Depends(get_projects_service),
) -> ProjectOverview:
    """Branch name -> branch details with the last prebuild of each branch."""
    result = await service.resolve_project_overview(user, team.id, project_name)

    if isinstance(result, OverviewNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if isinstance(result, OverviewProviderUnavailable):
        raise HTTPException(
            status_code=status.HTTP_424_FAILED_DEPENDENCY,
            detail={"reason": result.reason, "host": result.host},
        )
    return result.overview


@router.get("/{project_name}/prebuilds", response_model=list[PrebuildInfo])
async def list_prebuilds(
    project_name: str,
    team: Team = Depends(get_team),
    service: ProjectsService = Depends(get_projects_service),
) -> list[PrebuildInfo]:
    """All prebuilds of the project, oldest first."""
    return await service.get_prebuilds(team.id, project_name)
