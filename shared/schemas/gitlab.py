"""Pydantic schemas for GitLab API responses.

GitLab API Documentation: https://docs.gitlab.com/ee/api/branches.html
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitLabCommit(BaseModel):
    """Commit embedded in a branch listing."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Commit SHA")
    title: str | None = Field(None, description="First line of the commit message")
    message: str | None = Field(None, description="Full commit message")
    author_name: str | None = Field(None, description="Git author name")
    authored_date: datetime | None = Field(None, description="Authored timestamp")
    web_url: str | None = Field(None, description="Web URL for the commit")


class GitLabBranch(BaseModel):
    """Branch from GET /projects/{id}/repository/branches."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Branch name")
    default: bool = Field(False, description="Whether this is the default branch")
    web_url: str | None = Field(None, description="Web URL for the branch")
    commit: GitLabCommit = Field(..., description="Head commit")
