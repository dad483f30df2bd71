"""Teams router."""

from fastapi import APIRouter, Depends

from shared.contracts.dto.team import TeamDTO
from shared.models import Team

from ..dependencies import get_team, get_team_store
from ..stores import TeamStore

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/", response_model=list[TeamDTO])
async def list_teams(
    slug: str | None = None,
    teams: TeamStore = Depends(get_team_store),
) -> list[Team]:
    """List teams, optionally only the one with the given slug."""
    if slug is not None:
        team = await teams.find_team_by_slug(slug)
        return [team] if team else []
    return await teams.find_teams()


@router.get("/{team_id}", response_model=TeamDTO)
async def get_team_by_id(team: Team = Depends(get_team)) -> Team:
    """Get team by ID."""
    return team
