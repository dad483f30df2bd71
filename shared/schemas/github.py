"""Pydantic schemas for GitHub API responses.

These schemas document the structure of GitHub API responses used by the
repository provider, providing type safety for data received from the REST API.

GitHub API Documentation: https://docs.github.com/en/rest
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitHubAccount(BaseModel):
    """GitHub account (user or organization)."""

    model_config = ConfigDict(extra="allow")

    login: str = Field(..., description="Account username/org name")
    id: int = Field(..., description="Numeric account ID")
    type: str | None = Field(None, description="Account type: 'User' or 'Organization'")
    avatar_url: str | None = Field(None, description="Avatar URL")
    html_url: str | None = Field(None, description="Profile page URL")


class GitHubRepository(BaseModel):
    """GitHub repository info.

    Returned from GET /repos/{owner}/{repo}.
    """

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="Repository ID")
    name: str = Field(..., description="Repository name")
    full_name: str = Field(..., description="Full name: owner/repo")
    private: bool = Field(True, description="Whether repo is private")
    html_url: str = Field(..., description="Web URL for the repository")
    clone_url: str | None = Field(None, description="HTTPS clone URL")
    default_branch: str = Field("main", description="Default branch name")


class GitHubBranchCommit(BaseModel):
    """Commit reference embedded in a branch listing."""

    model_config = ConfigDict(extra="allow")

    sha: str = Field(..., description="Head commit SHA")
    url: str | None = Field(None, description="API URL of the commit")


class GitHubBranch(BaseModel):
    """Branch from GET /repos/{owner}/{repo}/branches."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Branch name")
    commit: GitHubBranchCommit = Field(..., description="Head commit reference")
    protected: bool = Field(False, description="Whether branch protection is enabled")


class GitHubGitActor(BaseModel):
    """Author or committer recorded in the git object."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(None, description="Git author name")
    email: str | None = Field(None, description="Git author email")
    date: datetime | None = Field(None, description="Authored/committed timestamp")


class GitHubGitCommit(BaseModel):
    """The git-level part of a commit response."""

    model_config = ConfigDict(extra="allow")

    message: str = Field("", description="Full commit message")
    author: GitHubGitActor | None = Field(None, description="Git author")


class GitHubCommit(BaseModel):
    """Commit from GET /repos/{owner}/{repo}/commits/{ref}."""

    model_config = ConfigDict(extra="allow")

    sha: str = Field(..., description="Commit SHA")
    html_url: str | None = Field(None, description="Web URL for the commit")
    commit: GitHubGitCommit = Field(..., description="Git commit data")
    author: GitHubAccount | None = Field(
        None, description="GitHub account of the author (null if not linked)"
    )
