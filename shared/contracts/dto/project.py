from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shared.models.prebuild import PrebuildState


class CreateProjectParams(BaseModel):
    """Create project request."""

    name: str = Field(..., min_length=1)
    clone_url: str
    team_id: str
    app_installation_id: str


class ProjectCreateBody(BaseModel):
    """Create project request body; the team comes from the route."""

    name: str = Field(..., min_length=1)
    clone_url: str
    app_installation_id: str


class ProjectDTO(BaseModel):
    """Project response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    clone_url: str
    team_id: str
    app_installation_id: str
    creation_time: datetime | None = None


class PrebuildInfo(BaseModel):
    """Read-only projection of a prebuilt workspace row.

    started_by and the change_* fields other than change_hash are not stored
    with the prebuild and stay None.
    """

    id: str
    started_at: datetime
    started_by: str | None = None
    team_id: str
    project: str
    branch: str
    clone_url: str
    status: PrebuildState
    change_author: str | None = None
    change_date: datetime | None = None
    change_title: str | None = None
    change_hash: str
    branch_prebuild_number: int


class ProjectInfo(ProjectDTO):
    """Project plus the summary of its latest prebuild."""

    last_prebuild: PrebuildInfo | None = None


class RepositoryBranch(BaseModel):
    """Branch as reported by a repository hosting provider."""

    name: str
    author: str | None = None
    author_date: datetime | None = None
    sha: str
    commit_message: str | None = None
    author_avatar_url: str | None = None
    html_url: str | None = None
    commit_url: str | None = None
    is_default: bool = False


class BranchDetails(BaseModel):
    """One row of the project overview."""

    name: str
    branch_url: str | None = None
    change_author: str | None = None
    change_author_avatar: str | None = None
    change_date: datetime | None = None
    change_hash: str
    change_title: str | None = None
    is_default: bool = False
    # Pull request lookup is not implemented by any provider yet
    change_pr: str | None = None
    change_url: str | None = None
    last_prebuild: PrebuildInfo | None = None


# Branch name -> branch details
ProjectOverview = dict[str, BranchDetails]
